"""Bookstore repositories: in-memory and MongoDB storage for books.

Both extend BaseRepository so the router can work against either. The
backend is chosen once at startup by build_book_repository() and exposed to
handlers through the get_book_repository dependency.
"""

import logging
import re
import threading
from typing import Any, Iterable

from bson import ObjectId
from bson.errors import InvalidId
from fastapi import Request
from pymongo import ASCENDING
from pymongo.errors import PyMongoError

from core.database import close_client, create_mongo_client, get_collection, ping
from core.errors import StorageError
from patterns.domain_config import StorageConfig
from patterns.repository import BaseRepository
from verticals.bookstore.models.db_models import Book

logger = logging.getLogger(__name__)

# In-memory ids are plain ASCII digits; "1_0", " 1", "+1" and "1.0" never match
INT_ID_PATTERN = re.compile(r"[0-9]+")

SEED_BOOKS: tuple[dict[str, str], ...] = (
    {"title": "1984", "author": "George Orwell"},
    {"title": "To Kill a Mockingbird", "author": "Harper Lee"},
)


# ---------------------------------------------------------------------------
# In-memory repository
# ---------------------------------------------------------------------------

class InMemoryBookRepository(BaseRepository[Book]):
    """Process-local ordered store.

    Ids come from a counter owned by the store and are never reused, even
    after deletions. The lock makes each operation atomic when handlers run
    on several threads.
    """

    backend = "memory"

    def __init__(self, seed: Iterable[dict[str, Any]] = ()):
        self._lock = threading.Lock()
        self._books: list[Book] = []
        self._next_id = 1
        for data in seed:
            self._append(data)

    def _append(self, data: dict[str, Any]) -> Book:
        book = Book(id=self._next_id, title=data["title"], author=data["author"])
        self._next_id += 1
        self._books.append(book)
        return book

    @staticmethod
    def _parse_id(item_id: str) -> int | None:
        if not isinstance(item_id, str) or not INT_ID_PATTERN.fullmatch(item_id):
            return None
        return int(item_id)

    async def list(self) -> list[Book]:
        with self._lock:
            return list(self._books)

    async def insert(self, data: dict[str, Any]) -> Book:
        with self._lock:
            return self._append(data)

    async def find_by_id(self, item_id: str) -> Book | None:
        book_id = self._parse_id(item_id)
        if book_id is None:
            return None
        with self._lock:
            return next((b for b in self._books if b.id == book_id), None)

    async def delete_by_id(self, item_id: str) -> bool:
        book_id = self._parse_id(item_id)
        if book_id is None:
            return False
        with self._lock:
            remaining = [b for b in self._books if b.id != book_id]
            removed = len(remaining) != len(self._books)
            self._books = remaining
        return removed


# ---------------------------------------------------------------------------
# MongoDB repository
# ---------------------------------------------------------------------------

class MongoBookRepository(BaseRepository[Book]):
    """Books stored as documents in a MongoDB collection.

    Ids are ObjectIds rendered as 24-character hex strings. A malformed id is
    reported the same way as an unknown one. Driver failures become
    StorageError.
    """

    backend = "mongo"

    def __init__(self, collection: Any, client: Any = None):
        self.collection = collection
        self.client = client

    @classmethod
    def from_config(cls, config: StorageConfig) -> "MongoBookRepository":
        client = create_mongo_client(config)
        return cls(get_collection(client, config), client=client)

    @staticmethod
    def _parse_id(item_id: str) -> ObjectId | None:
        try:
            return ObjectId(item_id)
        except (InvalidId, TypeError):
            return None

    async def connect(self) -> None:
        if self.client is not None:
            await ping(self.client)

    async def close(self) -> None:
        if self.client is not None:
            await close_client(self.client)

    async def list(self) -> list[Book]:
        try:
            cursor = self.collection.find({}, sort=[("_id", ASCENDING)])
            docs = await cursor.to_list(None)
        except PyMongoError as exc:
            raise StorageError("list", str(exc)) from exc
        return [Book.from_document(doc) for doc in docs]

    async def insert(self, data: dict[str, Any]) -> Book:
        doc = {"title": data["title"], "author": data["author"]}
        try:
            result = await self.collection.insert_one(doc)
        except PyMongoError as exc:
            raise StorageError("insert", str(exc)) from exc
        return Book(id=str(result.inserted_id), title=doc["title"], author=doc["author"])

    async def find_by_id(self, item_id: str) -> Book | None:
        oid = self._parse_id(item_id)
        if oid is None:
            return None
        try:
            doc = await self.collection.find_one({"_id": oid})
        except PyMongoError as exc:
            raise StorageError("find_by_id", str(exc)) from exc
        return Book.from_document(doc) if doc else None

    async def delete_by_id(self, item_id: str) -> bool:
        oid = self._parse_id(item_id)
        if oid is None:
            return False
        try:
            doc = await self.collection.find_one_and_delete({"_id": oid})
        except PyMongoError as exc:
            raise StorageError("delete_by_id", str(exc)) from exc
        return doc is not None


# ---------------------------------------------------------------------------
# Factory & FastAPI dependency
# ---------------------------------------------------------------------------

def build_book_repository(config: StorageConfig) -> BaseRepository[Book]:
    """Create the repository for the configured backend."""
    if config.backend == "mongo":
        logger.info(
            "Using MongoDB storage at %s/%s.%s",
            config.mongo_url, config.mongo_database, config.mongo_collection,
        )
        return MongoBookRepository.from_config(config)

    logger.info("Using in-memory storage (seeded=%s)", config.seed_books)
    return InMemoryBookRepository(seed=SEED_BOOKS if config.seed_books else ())


def get_book_repository(request: Request) -> BaseRepository[Book]:
    """FastAPI dependency returning the repository built at startup."""
    return request.app.state.book_repository
