"""Shared fixtures: app clients for both storage backends and a fake collection."""
import os
from typing import Any

import pytest
from fastapi.testclient import TestClient
from pymongo.errors import ServerSelectionTimeoutError

# Keep the module-level app in api.main on the in-memory backend
os.environ.setdefault("BOOKSTORE_STORAGE", "memory")

from api.main import create_app  # noqa: E402
from patterns.domain_config import BookstoreConfig, StorageConfig  # noqa: E402
from verticals.bookstore.repository import MongoBookRepository  # noqa: E402


class _InsertResult:
    def __init__(self, inserted_id: Any):
        self.inserted_id = inserted_id


class _Cursor:
    def __init__(self, docs: list[dict]):
        self._docs = docs

    async def to_list(self, length: int | None = None) -> list[dict]:
        return list(self._docs if length is None else self._docs[:length])


class FakeCollection:
    """The subset of pymongo's async collection API the repository uses."""

    def __init__(self):
        self.docs: list[dict] = []

    def find(self, filter: dict, sort: list | None = None) -> _Cursor:
        docs = [dict(d) for d in self.docs]
        for key, direction in reversed(sort or []):
            docs.sort(key=lambda d: d[key], reverse=direction < 0)
        return _Cursor(docs)

    async def insert_one(self, doc: dict) -> _InsertResult:
        from bson import ObjectId

        doc.setdefault("_id", ObjectId())
        self.docs.append(dict(doc))
        return _InsertResult(doc["_id"])

    async def find_one(self, filter: dict) -> dict | None:
        return next((dict(d) for d in self.docs if d["_id"] == filter["_id"]), None)

    async def find_one_and_delete(self, filter: dict) -> dict | None:
        for i, d in enumerate(self.docs):
            if d["_id"] == filter["_id"]:
                return self.docs.pop(i)
        return None


class BrokenCollection:
    """Every call fails the way an unreachable server does."""

    def _fail(self, *args, **kwargs):
        raise ServerSelectionTimeoutError("127.0.0.1:27017: connection refused")

    find = _fail

    async def insert_one(self, *args, **kwargs):
        self._fail()

    async def find_one(self, *args, **kwargs):
        self._fail()

    async def find_one_and_delete(self, *args, **kwargs):
        self._fail()


@pytest.fixture
def memory_config():
    return BookstoreConfig()


@pytest.fixture
def client(memory_config):
    with TestClient(create_app(memory_config)) as c:
        yield c


@pytest.fixture
def empty_client():
    config = BookstoreConfig(storage=StorageConfig(seed_books=False))
    with TestClient(create_app(config)) as c:
        yield c


@pytest.fixture
def fake_collection():
    return FakeCollection()


@pytest.fixture
def mongo_client(fake_collection):
    config = BookstoreConfig(storage=StorageConfig(backend="mongo"))
    app = create_app(config, repository=MongoBookRepository(fake_collection))
    with TestClient(app) as c:
        yield c


@pytest.fixture
def broken_collection():
    return BrokenCollection()


@pytest.fixture
def broken_mongo_client(broken_collection):
    config = BookstoreConfig(storage=StorageConfig(backend="mongo"))
    app = create_app(config, repository=MongoBookRepository(broken_collection))
    with TestClient(app) as c:
        yield c
