"""Test MongoDB connectivity checks and the app lifespan around them."""
import logging

import pytest
from fastapi.testclient import TestClient
from pymongo.errors import ServerSelectionTimeoutError

from api.main import create_app
from core.database import close_client, ping
from patterns.domain_config import BookstoreConfig, StorageConfig
from verticals.bookstore.repository import MongoBookRepository


class _Admin:
    def __init__(self, fail: bool):
        self.fail = fail
        self.commands: list[str] = []

    async def command(self, name: str):
        self.commands.append(name)
        if self.fail:
            raise ServerSelectionTimeoutError("127.0.0.1:27017: connection refused")
        return {"ok": 1.0}


class FakeMongoClient:
    """Stands in for AsyncMongoClient: an ``admin`` database and ``close``."""

    def __init__(self, fail: bool = False):
        self.admin = _Admin(fail)
        self.closed = False

    async def close(self):
        self.closed = True


@pytest.mark.asyncio
async def test_ping_success_logged(caplog):
    client = FakeMongoClient()
    with caplog.at_level(logging.INFO, logger="core.database"):
        assert await ping(client) is True
    assert client.admin.commands == ["ping"]
    assert "Connected to MongoDB" in caplog.text


@pytest.mark.asyncio
async def test_ping_failure_logged_not_raised(caplog):
    client = FakeMongoClient(fail=True)
    with caplog.at_level(logging.ERROR, logger="core.database"):
        assert await ping(client) is False
    assert "MongoDB connection error" in caplog.text
    assert "connection refused" in caplog.text


@pytest.mark.asyncio
async def test_close_client():
    client = FakeMongoClient()
    await close_client(client)
    assert client.closed


@pytest.mark.asyncio
async def test_repository_connect_and_close_use_client(fake_collection):
    client = FakeMongoClient()
    repo = MongoBookRepository(fake_collection, client=client)
    await repo.connect()
    await repo.close()
    assert client.admin.commands == ["ping"]
    assert client.closed


def test_app_starts_when_database_unreachable(fake_collection):
    client = FakeMongoClient(fail=True)
    config = BookstoreConfig(storage=StorageConfig(backend="mongo"))
    app = create_app(config, repository=MongoBookRepository(fake_collection, client=client))
    with TestClient(app) as c:
        assert client.admin.commands == ["ping"]
        resp = c.get("/health")
        assert resp.status_code == 200
        assert resp.json()["storage"] == "mongo"
        assert not client.closed
    assert client.closed


def test_app_serves_requests_after_successful_ping(fake_collection):
    client = FakeMongoClient()
    config = BookstoreConfig(storage=StorageConfig(backend="mongo"))
    app = create_app(config, repository=MongoBookRepository(fake_collection, client=client))
    with TestClient(app) as c:
        assert c.post("/books", json={"title": "Emma", "author": "Jane Austen"}).status_code == 201
        assert len(c.get("/books").json()) == 1
    assert client.closed
