"""DuckDB connection management."""

import threading

import duckdb
from loguru import logger

from app.models import ALL_DDL
from settings import CACHE_DB_PATH

_lock = threading.Lock()
_connections: dict[str, duckdb.DuckDBPyConnection] = {}


def init_tables(conn: duckdb.DuckDBPyConnection) -> None:
    """Initialize all tables from DDL statements (idempotent - uses IF NOT EXISTS)."""
    for ddl in ALL_DDL:
        conn.execute(ddl)
    logger.debug("DB tables initialized")


def get_db(path: str = CACHE_DB_PATH) -> duckdb.DuckDBPyConnection:
    """Get the shared connection for a database file, creating tables on first use."""
    with _lock:
        conn = _connections.get(path)
        if conn is None:
            conn = duckdb.connect(path)
            init_tables(conn)
            _connections[path] = conn
            logger.debug("DB connected: {}", path)
        return conn


def close_db(path: str | None = None) -> None:
    """Close one connection, or all of them."""
    with _lock:
        paths = [path] if path else list(_connections)
        for p in paths:
            conn = _connections.pop(p, None)
            if conn is not None:
                conn.close()
                logger.debug("DB connection closed: {}", p)

