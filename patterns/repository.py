"""Async repository pattern for storage access.

Provides a generic base repository describing the storage capability the
handlers rely on: list, insert, find by id, delete by id. Each backend
subclasses it, and the application picks one at startup, so the handlers
never know where records live.

Example: InMemoryBookRepository and MongoBookRepository extending
BaseRepository.
"""

from abc import ABC, abstractmethod
from typing import Any, Generic, TypeVar

# ---------------------------------------------------------------------------
# Type variable for record classes
# ---------------------------------------------------------------------------

RecordT = TypeVar("RecordT")


# ---------------------------------------------------------------------------
# Base repository
# ---------------------------------------------------------------------------

class BaseRepository(ABC, Generic[RecordT]):
    """Generic async repository with the four storage operations.

    Ids arrive as the raw path segment; each backend parses them into its own
    identifier type and treats an unparsable id as "no such record"::

        class BookRepository(BaseRepository[Book]):
            backend = "memory"

            async def find_by_id(self, item_id: str) -> Book | None:
                ...

    Backend failures must surface as core.errors.StorageError.
    """

    backend: str = "base"

    # -- List --

    @abstractmethod
    async def list(self) -> list[RecordT]:
        """Return every record in stable storage order."""

    # -- Create --

    @abstractmethod
    async def insert(self, data: dict[str, Any]) -> RecordT:
        """Store a new record and return it with its assigned id."""

    # -- Get by ID --

    @abstractmethod
    async def find_by_id(self, item_id: str) -> RecordT | None:
        """Return the record with this id, or None if there is none."""

    # -- Delete --

    @abstractmethod
    async def delete_by_id(self, item_id: str) -> bool:
        """Delete the record. Returns True if deleted, False if not found."""

    # -- Lifecycle --

    async def connect(self) -> None:
        """Open backend resources. No-op by default."""

    async def close(self) -> None:
        """Release backend resources. No-op by default."""
