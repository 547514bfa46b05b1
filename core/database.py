"""Async MongoDB client management.

Provides the document-database layer used by the persistent storage
backend:
- Client construction from StorageConfig (URL, timeouts)
- Startup connectivity check that logs the outcome but never raises, so the
  HTTP listener comes up even when the database is down
- Collection lookup and client shutdown
"""

import logging

from pymongo import AsyncMongoClient
from pymongo.asynchronous.collection import AsyncCollection
from pymongo.errors import PyMongoError

from patterns.domain_config import StorageConfig

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Client & collection factory
# ---------------------------------------------------------------------------

def create_mongo_client(config: StorageConfig) -> AsyncMongoClient:
    """Build a client. No network I/O happens until the first operation."""
    return AsyncMongoClient(
        config.mongo_url,
        serverSelectionTimeoutMS=config.mongo_timeout_ms,
    )


def get_collection(client: AsyncMongoClient, config: StorageConfig) -> AsyncCollection:
    """Return the books collection named in the config."""
    return client[config.mongo_database][config.mongo_collection]


# ---------------------------------------------------------------------------
# Lifecycle hooks
# ---------------------------------------------------------------------------

async def ping(client: AsyncMongoClient) -> bool:
    """Check connectivity and log the outcome. Returns True when reachable."""
    try:
        await client.admin.command("ping")
    except PyMongoError as exc:
        logger.error("MongoDB connection error: %s", exc)
        return False
    logger.info("Connected to MongoDB")
    return True


async def close_client(client: AsyncMongoClient) -> None:
    """Close the connection pool on shutdown."""
    await client.close()
    logger.info("MongoDB client closed")
