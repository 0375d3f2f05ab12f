"""Common repositories - cache and session state."""

from app.repositories.common.cache import CacheRepository
from app.repositories.common.session import SessionLoadState

__all__ = [
    "CacheRepository",
    "SessionLoadState",
]
