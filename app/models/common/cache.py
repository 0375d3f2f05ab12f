"""Durable cache table and entry envelope."""

from dataclasses import dataclass
from typing import Any

from app.models.common.base import BaseEntity

CACHE_DDL = """
CREATE TABLE IF NOT EXISTS insights_cache (
    key VARCHAR PRIMARY KEY,
    data BLOB NOT NULL,
    written_at TIMESTAMP NOT NULL
)
"""


@dataclass
class CacheEntry(BaseEntity):
    """Cached payload with the time (epoch seconds) it was stored."""

    payload: Any
    stored_at: float

    def age(self, now: float) -> float:
        return now - self.stored_at

    def is_valid(self, now: float, ttl: float) -> bool:
        """Valid strictly before the TTL elapses."""
        return self.age(now) < ttl
