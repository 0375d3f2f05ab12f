"""Repositories package - durable cache and session state."""

from app.repositories.base import BaseRepository
from app.repositories.common import CacheRepository, SessionLoadState
from app.repositories.db import (
    close_db,
    get_db,
    init_tables,
)
from app.repositories.storage import (
    DuckDBStorage,
    KeyValueStorage,
    MemoryStorage,
)

__all__ = [
    # DB
    "get_db",
    "close_db",
    "init_tables",
    # Storage
    "KeyValueStorage",
    "MemoryStorage",
    "DuckDBStorage",
    # Base
    "BaseRepository",
    # Common
    "CacheRepository",
    "SessionLoadState",
]
