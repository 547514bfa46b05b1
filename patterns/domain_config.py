"""Dataclass-based domain configuration pattern.

The service defines its runtime settings as frozen dataclasses. This gives you:
- Type safety (IDE autocompletion, mypy checking)
- Default values matching the fixed listener and database address
  (port 3000, local MongoDB on 27017)
- Immutability (frozen=True prevents accidental mutation)
- Easy overrides from BOOKSTORE_* environment variables
"""

import os
from dataclasses import dataclass, field

STORAGE_BACKENDS = ("memory", "mongo")


def _as_bool(val: str | None, default: bool = False) -> bool:
    if val is None:
        return default
    return val.strip().lower() in ("1", "true", "yes", "on")


# ---------------------------------------------------------------------------
# Nested config sections
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class ServerConfig:
    """HTTP listener and logging settings."""

    host: str = "0.0.0.0"
    port: int = 3000
    log_level: str = "INFO"
    log_format: str = "text"  # "text" or "json"


@dataclass(frozen=True)
class StorageConfig:
    """Storage backend selection and connection settings."""

    backend: str = "memory"
    mongo_url: str = "mongodb://127.0.0.1:27017"
    mongo_database: str = "bookstore"
    mongo_collection: str = "books"
    mongo_timeout_ms: int = 5000
    seed_books: bool = True  # memory backend only

    def __post_init__(self) -> None:
        if self.backend not in STORAGE_BACKENDS:
            raise ValueError(
                f"Unknown storage backend {self.backend!r}; "
                f"expected one of {', '.join(STORAGE_BACKENDS)}"
            )


# ---------------------------------------------------------------------------
# Top-level domain config
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class BookstoreConfig:
    """Complete configuration for the bookstore API.

    Usage::

        config = BookstoreConfig.from_env()
        if config.storage.backend == "mongo":
            client = create_mongo_client(config.storage)
    """

    server: ServerConfig = field(default_factory=ServerConfig)
    storage: StorageConfig = field(default_factory=StorageConfig)

    # Legacy contract: DELETE answers 200 even when nothing was removed
    idempotent_delete: bool = False

    @classmethod
    def default(cls) -> "BookstoreConfig":
        """Create config with all defaults."""
        return cls()

    @classmethod
    def from_env(cls, prefix: str = "BOOKSTORE_") -> "BookstoreConfig":
        """Create config from environment variables.

        Example: BOOKSTORE_STORAGE=mongo BOOKSTORE_PORT=8080
        """
        server_defaults = ServerConfig()
        server = ServerConfig(
            host=os.getenv(f"{prefix}HOST", server_defaults.host),
            port=int(os.getenv(f"{prefix}PORT", str(server_defaults.port))),
            log_level=os.getenv(f"{prefix}LOG_LEVEL", server_defaults.log_level),
            log_format=os.getenv(f"{prefix}LOG_FORMAT", server_defaults.log_format),
        )

        storage_defaults = StorageConfig()
        storage = StorageConfig(
            backend=os.getenv(f"{prefix}STORAGE", storage_defaults.backend).strip().lower(),
            mongo_url=os.getenv(f"{prefix}MONGO_URL", storage_defaults.mongo_url),
            mongo_database=os.getenv(
                f"{prefix}MONGO_DATABASE", storage_defaults.mongo_database
            ),
            mongo_collection=os.getenv(
                f"{prefix}MONGO_COLLECTION", storage_defaults.mongo_collection
            ),
            mongo_timeout_ms=int(
                os.getenv(
                    f"{prefix}MONGO_TIMEOUT_MS", str(storage_defaults.mongo_timeout_ms)
                )
            ),
            seed_books=_as_bool(
                os.getenv(f"{prefix}SEED_BOOKS"), storage_defaults.seed_books
            ),
        )

        return cls(
            server=server,
            storage=storage,
            idempotent_delete=_as_bool(os.getenv(f"{prefix}IDEMPOTENT_DELETE"), False),
        )
