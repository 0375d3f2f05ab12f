"""Key/value storage backends for the durable cache."""

import threading
from datetime import datetime
from typing import Protocol

import duckdb
from loguru import logger

from app.repositories.db import get_db, init_tables


class KeyValueStorage(Protocol):
    """Byte-oriented persistence collaborator."""

    def read(self, key: str) -> bytes | None: ...

    def write(self, key: str, data: bytes) -> None: ...

    def delete(self, key: str) -> None: ...

    def keys(self, prefix: str) -> list[str]: ...


class MemoryStorage:
    """Process-local storage, lost on exit."""

    def __init__(self):
        self._data: dict[str, bytes] = {}
        self._lock = threading.Lock()

    def read(self, key: str) -> bytes | None:
        with self._lock:
            return self._data.get(key)

    def write(self, key: str, data: bytes) -> None:
        with self._lock:
            self._data[key] = data

    def delete(self, key: str) -> None:
        with self._lock:
            self._data.pop(key, None)

    def keys(self, prefix: str) -> list[str]:
        with self._lock:
            return [k for k in self._data if k.startswith(prefix)]


class DuckDBStorage:
    """Storage backed by a DuckDB table; survives restarts."""

    def __init__(self, conn: duckdb.DuckDBPyConnection | None = None):
        if conn is None:
            conn = get_db()
        else:
            init_tables(conn)
        self._db = conn
        self._lock = threading.Lock()
        logger.debug("DuckDBStorage initialized")

    def read(self, key: str) -> bytes | None:
        with self._lock:
            row = self._db.execute("SELECT data FROM insights_cache WHERE key = ?", [key]).fetchone()
        return bytes(row[0]) if row else None

    def write(self, key: str, data: bytes) -> None:
        with self._lock:
            self._db.execute(
                "INSERT OR REPLACE INTO insights_cache (key, data, written_at) VALUES (?, ?, ?)",
                [key, data, datetime.now()],
            )

    def delete(self, key: str) -> None:
        with self._lock:
            self._db.execute("DELETE FROM insights_cache WHERE key = ?", [key])

    def keys(self, prefix: str) -> list[str]:
        with self._lock:
            rows = self._db.execute(
                "SELECT key FROM insights_cache WHERE starts_with(key, ?)",
                [prefix],
            ).fetchall()
        return [r[0] for r in rows]
