"""Global exception handlers for the bookstore API.

Every failure leaves the API as a JSON object with a single ``message``
field:
- BookstoreError → its own status and message
- RequestValidationError → 400 "Invalid request data"
- HTTPException (routing 404/405, malformed form bodies) → its status/detail
- Exception (catch-all) → 500, internal details only in the server log
"""

import logging

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from core.errors import (
    INTERNAL_ERROR_MESSAGE,
    BookNotFoundError,
    BookstoreError,
    StorageError,
)

logger = logging.getLogger(__name__)


def register_error_handlers(app: FastAPI) -> None:
    """Register all global error handlers on the FastAPI app."""
    _register_bookstore_error_handler(app)
    _register_validation_error_handler(app)
    _register_http_error_handler(app)
    _register_generic_error_handler(app)


def _register_bookstore_error_handler(app: FastAPI) -> None:

    @app.exception_handler(BookstoreError)
    async def bookstore_error_handler(request: Request, exc: BookstoreError):
        extra = {"error_code": exc.code, "path": request.url.path}
        if isinstance(exc, BookNotFoundError):
            extra["book_id"] = exc.book_id
        if isinstance(exc, StorageError):
            logger.error(
                f"Storage operation {exc.operation} failed: {exc.detail}",
                exc_info=exc,
                extra=extra,
            )
        else:
            logger.info(f"{exc.code}: {exc.message}", extra=extra)
        return JSONResponse(
            status_code=exc.http_status, content=exc.to_response(),
        )


def _register_validation_error_handler(app: FastAPI) -> None:

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(
        request: Request, exc: RequestValidationError,
    ):
        logger.warning(
            f"Validation error on {request.url.path}: {exc.errors()}",
        )
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content={"message": "Invalid request data"},
        )


def _register_http_error_handler(app: FastAPI) -> None:

    @app.exception_handler(StarletteHTTPException)
    async def http_error_handler(request: Request, exc: StarletteHTTPException):
        return JSONResponse(
            status_code=exc.status_code,
            content={"message": str(exc.detail)},
            headers=getattr(exc, "headers", None),
        )


def _register_generic_error_handler(app: FastAPI) -> None:

    @app.exception_handler(Exception)
    async def generic_error_handler(request: Request, exc: Exception):
        """Catch-all — never leaks internal details."""
        logger.error(
            f"Unhandled exception on {request.url.path}: {exc}",
            exc_info=True,
        )
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"message": INTERNAL_ERROR_MESSAGE},
        )
