"""Bookstore configuration.

Re-exports BookstoreConfig from the patterns module and provides the
process-wide instance read from the environment.
"""

from functools import lru_cache

from patterns.domain_config import BookstoreConfig


@lru_cache
def get_config() -> BookstoreConfig:
    """Config built once per process from BOOKSTORE_* variables."""
    return BookstoreConfig.from_env()
