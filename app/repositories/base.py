"""Base repository class."""

from typing import Any

from loguru import logger

from app.repositories.storage import KeyValueStorage


class BaseRepository:
    """Base repository over a key/value storage with an in-memory mirror."""

    def __init__(self, storage: KeyValueStorage):
        self._storage = storage
        self._cache: dict[str, Any] = {}
        logger.debug("{} initialized ({})", self.__class__.__name__, storage.__class__.__name__)

    def clear_cache(self) -> None:
        """Clear in-memory mirror."""
        self._cache.clear()
        logger.debug("Cache mirror cleared")
