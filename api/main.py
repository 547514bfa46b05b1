"""Bookstore API — FastAPI entry point.

Registers middleware, error handlers, routers, and lifecycle hooks. The
storage backend (in-memory or MongoDB) is chosen from configuration when
the app starts.

Run with: bookstore-api  (or: uvicorn api.main:app --port 3000)
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI

from api.error_handlers import register_error_handlers
from api.middleware import RequestIdMiddleware
from core.observability.logging_setup import setup_logging
from patterns.domain_config import BookstoreConfig
from patterns.repository import BaseRepository
from verticals.bookstore.config import get_config
from verticals.bookstore.models.schemas import HealthResponse
from verticals.bookstore.repository import build_book_repository
from verticals.bookstore.router import router as bookstore_router

logger = logging.getLogger(__name__)

VERSION = "0.1.0"


# ---------------------------------------------------------------------------
# Lifespan
# ---------------------------------------------------------------------------

@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application startup/shutdown hooks."""
    config: BookstoreConfig = app.state.config
    repo: BaseRepository = app.state.book_repository
    # Connection failures are logged, never raised: the listener still starts
    await repo.connect()
    logger.info(
        "Server is running on http://localhost:%s (storage=%s)",
        config.server.port, repo.backend,
    )
    try:
        yield
    finally:
        await repo.close()
        logger.info("Bookstore API shutting down")


# ---------------------------------------------------------------------------
# App
# ---------------------------------------------------------------------------

def create_app(
    config: BookstoreConfig | None = None,
    repository: BaseRepository | None = None,
) -> FastAPI:
    """Build the application for a config and optional prebuilt repository."""
    config = config or get_config()
    setup_logging(config.server.log_level, config.server.log_format)

    app = FastAPI(
        title="Bookstore API",
        description="Minimal bookstore inventory API with swappable storage",
        version=VERSION,
        lifespan=lifespan,
    )
    app.state.config = config
    if repository is None:
        repository = build_book_repository(config.storage)
    app.state.book_repository = repository

    app.add_middleware(RequestIdMiddleware)
    register_error_handlers(app)

    # ---------------------------------------------------------------------
    # Routers
    # ---------------------------------------------------------------------

    app.include_router(bookstore_router, tags=["Bookstore"])

    # ---------------------------------------------------------------------
    # Health & root
    # ---------------------------------------------------------------------

    @app.get("/health", response_model=HealthResponse)
    async def health():
        return {
            "status": "healthy",
            "version": VERSION,
            "storage": app.state.book_repository.backend,
        }

    @app.get("/")
    async def root():
        return {
            "name": "Bookstore API",
            "version": VERSION,
            "docs": "/docs",
            "storage": app.state.book_repository.backend,
        }

    return app


def serve() -> None:
    """Console entry point: run the API under uvicorn."""
    import uvicorn

    config = get_config()
    uvicorn.run(
        "api.main:app",
        host=config.server.host,
        port=config.server.port,
        log_config=None,
    )


app = create_app()
