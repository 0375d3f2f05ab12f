"""Session load state - domains already loaded in this process."""

import time
from collections.abc import Callable

from loguru import logger

from app.models.common import DomainKey


class SessionLoadState:
    """In-memory record of loaded domains; never persisted.

    With a ``ttl``, a mark older than the ttl no longer counts as loaded,
    so a long-lived process falls through to the cache check again.
    """

    def __init__(self, ttl: float | None = None, clock: Callable[[], float] = time.time):
        self._ttl = ttl
        self._clock = clock
        self._loaded: dict[DomainKey, float] = {}

    def __contains__(self, key: DomainKey) -> bool:
        loaded_at = self._loaded.get(key)
        if loaded_at is None:
            return False
        return self._ttl is None or self._clock() - loaded_at < self._ttl

    def __len__(self) -> int:
        return len(self._loaded)

    def add(self, key: DomainKey) -> None:
        self._loaded[key] = self._clock()

    def discard(self, key: DomainKey) -> None:
        self._loaded.pop(key, None)

    def clear(self) -> None:
        self._loaded.clear()
        logger.debug("Session load state cleared")
