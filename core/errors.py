"""Error hierarchy for the bookstore API.

Every failure raised by a repository or handler is a BookstoreError
subclass. The global exception handler in api/error_handlers.py turns it
into a JSON body with a single ``message`` field and the error's status.

- BookValidationError: request input missing or malformed (400)
- BookNotFoundError: no record for the given id (404)
- StorageError: the storage backend itself failed (500)
"""

from typing import Any

INTERNAL_ERROR_MESSAGE = "Internal server error"


class BookstoreError(Exception):
    """Base exception for all bookstore errors."""

    def __init__(self, message: str, code: str, http_status: int = 500):
        super().__init__(message)
        self.message = message
        self.code = code
        self.http_status = http_status

    def to_response(self) -> dict[str, Any]:
        """Body returned to the client."""
        return {"message": self.message}


# ---------------------------------------------------------------------------
# Request errors (400-level)
# ---------------------------------------------------------------------------

class BookValidationError(BookstoreError):
    """Required fields are missing from a create request."""

    def __init__(self, message: str = "Title and author are required"):
        super().__init__(message, "VALIDATION_ERROR", 400)


class BookNotFoundError(BookstoreError):
    """No book matches the requested id."""

    def __init__(self, book_id: str | int | None = None):
        super().__init__("Book not found", "BOOK_NOT_FOUND", 404)
        self.book_id = book_id


# ---------------------------------------------------------------------------
# Infrastructure errors (500-level)
# ---------------------------------------------------------------------------

class StorageError(BookstoreError):
    """The storage backend failed to execute an operation.

    The driver's error text stays in ``detail`` for server-side logging;
    clients only ever see the opaque message.
    """

    def __init__(self, operation: str, detail: str = ""):
        super().__init__(INTERNAL_ERROR_MESSAGE, "STORAGE_ERROR", 500)
        self.operation = operation
        self.detail = detail
