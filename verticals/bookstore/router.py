"""Bookstore API router — list, create, fetch and delete books.

Follows the standard router pattern:
- Repository injection via FastAPI Depends
- Handlers raise typed errors from core.errors; the global handlers in
  api/error_handlers.py turn them into ``{"message": ...}`` responses
- Create accepts JSON and form-encoded bodies alike
"""

import logging
from typing import Any

from fastapi import APIRouter, Depends, Request
from pydantic import ValidationError

from core.errors import BookNotFoundError, BookValidationError
from patterns.domain_config import BookstoreConfig
from patterns.repository import BaseRepository
from verticals.bookstore.models.db_models import Book
from verticals.bookstore.models.schemas import (
    BookCreate,
    BookResponse,
    MessageResponse,
)
from verticals.bookstore.repository import get_book_repository

logger = logging.getLogger(__name__)

router = APIRouter()

FORM_CONTENT_TYPES = ("application/x-www-form-urlencoded", "multipart/form-data")


# ============================================================================
# Dependencies
# ============================================================================

def get_app_config(request: Request) -> BookstoreConfig:
    """FastAPI dependency returning the config the app was built with."""
    return request.app.state.config


async def read_book_payload(request: Request) -> BookCreate:
    """Parse a create request from a JSON or form body.

    Anything that does not yield non-empty string ``title`` and ``author``
    fields is rejected with BookValidationError.
    """
    content_type = request.headers.get("content-type", "").lower()
    raw: Any = {}
    try:
        if content_type.startswith("application/json"):
            raw = await request.json()
        elif content_type.startswith(FORM_CONTENT_TYPES):
            raw = dict(await request.form())
    except ValueError:
        raise BookValidationError()

    if not isinstance(raw, dict):
        raise BookValidationError()
    try:
        return BookCreate.model_validate(raw)
    except ValidationError:
        raise BookValidationError()


# ============================================================================
# Book Endpoints
# ============================================================================

@router.get("/books", response_model=list[BookResponse])
async def list_books(
    repo: BaseRepository[Book] = Depends(get_book_repository),
):
    """Return every book in storage order."""
    books = await repo.list()
    return [book.to_dict() for book in books]


@router.post("/books", status_code=201, response_model=BookResponse)
async def create_book(
    payload: BookCreate = Depends(read_book_payload),
    repo: BaseRepository[Book] = Depends(get_book_repository),
):
    """Add a new book and return it with its assigned id."""
    book = await repo.insert(payload.model_dump())
    logger.info("Created book %s", book.id, extra={"book_id": book.id})
    return book.to_dict()


@router.get("/books/{book_id}", response_model=BookResponse)
async def get_book(
    book_id: str,
    repo: BaseRepository[Book] = Depends(get_book_repository),
):
    """Get a single book by id."""
    book = await repo.find_by_id(book_id)
    if book is None:
        raise BookNotFoundError(book_id)
    return book.to_dict()


@router.delete("/books/{book_id}", response_model=MessageResponse)
async def delete_book(
    book_id: str,
    repo: BaseRepository[Book] = Depends(get_book_repository),
    config: BookstoreConfig = Depends(get_app_config),
):
    """Remove a book from the inventory."""
    deleted = await repo.delete_by_id(book_id)
    if not deleted and not config.idempotent_delete:
        raise BookNotFoundError(book_id)
    if deleted:
        logger.info("Deleted book %s", book_id, extra={"book_id": book_id})
    return {"message": "Book deleted successfully"}
