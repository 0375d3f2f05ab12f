"""Cache repository - TTL-bounded, subject-scoped view model cache."""

import asyncio
import json
import time
from collections.abc import Callable
from typing import Any

from loguru import logger
from pydantic import BaseModel, ValidationError

from app.errors import MalformedCache
from app.models.common import CacheEntry, DomainKey
from app.repositories.base import BaseRepository
from app.repositories.storage import KeyValueStorage
from settings import CACHE_PREFIX, CACHE_TTL


class CacheRepository(BaseRepository):
    """Durable cache store.

    Reads go to the in-memory mirror first and then to storage. Writes
    update the mirror synchronously and persist in a detached task, so the
    publishing path never waits on storage. Writes and deletes of one key
    are serialized by a per-key lock; a queued write whose entry has since
    been replaced or deleted is dropped. Clearing the mirror does not drop
    queued writes.
    """

    def __init__(
        self,
        storage: KeyValueStorage,
        ttl: float = CACHE_TTL,
        prefix: str = CACHE_PREFIX,
        clock: Callable[[], float] = time.time,
    ):
        super().__init__(storage)
        self._ttl = ttl
        self._prefix = prefix
        self._clock = clock
        self._locks: dict[str, asyncio.Lock] = {}
        self._pending: set[asyncio.Task] = set()
        self._writes: dict[str, CacheEntry] = {}

    @property
    def ttl(self) -> float:
        return self._ttl

    def key(self, domain_key: DomainKey) -> str:
        """Format {prefix}:{domain}:{subject}[:{year}:{month}]."""
        return ":".join([self._prefix, *domain_key.parts()])

    def _lock_for(self, key: str) -> asyncio.Lock:
        lock = self._locks.get(key)
        if lock is None:
            lock = self._locks[key] = asyncio.Lock()
        return lock

    @staticmethod
    def _encode(entry: CacheEntry) -> bytes:
        return json.dumps(entry.to_dict()).encode("utf-8")

    @staticmethod
    def _decode(key: str, raw: bytes) -> CacheEntry:
        try:
            data = json.loads(raw)
        except (UnicodeDecodeError, json.JSONDecodeError) as e:
            raise MalformedCache(key, str(e)) from e
        if not isinstance(data, dict):
            raise MalformedCache(key, "not an object")
        try:
            entry = CacheEntry.from_dict(data)
        except TypeError as e:
            raise MalformedCache(key, str(e)) from e
        if not isinstance(entry.stored_at, (int, float)):
            raise MalformedCache(key, "stored_at is not a timestamp")
        return CacheEntry(payload=entry.payload, stored_at=float(entry.stored_at))

    async def _load(self, key: str) -> CacheEntry | None:
        entry = self._cache.get(key) or self._writes.get(key)
        if entry is not None:
            return entry

        async with self._lock_for(key):
            try:
                raw = await asyncio.to_thread(self._storage.read, key)
            except Exception as e:
                logger.warning("Cache read failed for {}: {}", key, e)
                return None
            if raw is None:
                return None
            try:
                entry = self._decode(key, raw)
            except MalformedCache as e:
                logger.warning("{}", e.message)
                return None
            # A set() that ran while we were reading is newer than storage
            return self._cache.setdefault(key, entry)

    async def get(self, domain_key: DomainKey, model: type[BaseModel] | None = None) -> CacheEntry | None:
        """Return a valid entry, or None on miss, expiry or malformed data.

        With ``model``, the payload is validated into that pydantic model.
        """
        key = self.key(domain_key)
        entry = await self._load(key)
        if entry is None:
            logger.debug("Cache miss: {}", key)
            return None

        if not entry.is_valid(self._clock(), self._ttl):
            logger.debug("Cache expired: {} (age {:.1f}s)", key, entry.age(self._clock()))
            return None

        if model is None:
            logger.debug("Cache hit: {}", key)
            return entry

        try:
            payload = model.model_validate(entry.payload)
        except ValidationError as e:
            logger.warning("{}", MalformedCache(key, f"{e.error_count()} validation errors").message)
            return None
        logger.debug("Cache hit: {}", key)
        return CacheEntry(payload=payload, stored_at=entry.stored_at)

    def set(self, domain_key: DomainKey, payload: Any) -> CacheEntry:
        """Store payload now; persistence completes in the background."""
        key = self.key(domain_key)
        if isinstance(payload, BaseModel):
            payload = payload.model_dump(mode="json")
        entry = CacheEntry(payload=payload, stored_at=self._clock())
        raw = self._encode(entry)
        self._cache[key] = entry
        self._writes[key] = entry

        task = asyncio.get_running_loop().create_task(self._persist(key, entry, raw))
        self._pending.add(task)
        task.add_done_callback(self._pending.discard)
        logger.debug("Cache saved: {}", key)
        return entry

    async def _persist(self, key: str, entry: CacheEntry, raw: bytes) -> None:
        async with self._lock_for(key):
            if self._writes.get(key) is not entry:
                logger.debug("Cache write superseded: {}", key)
                return
            try:
                await asyncio.to_thread(self._storage.write, key, raw)
            except Exception as e:
                logger.warning("Cache write failed for {}: {}", key, e)
            finally:
                if self._writes.get(key) is entry:
                    del self._writes[key]

    async def delete(self, domain_key: DomainKey) -> None:
        """Remove an entry from the mirror and from storage."""
        await self._delete_key(self.key(domain_key))

    async def _delete_key(self, key: str) -> None:
        self._cache.pop(key, None)
        self._writes.pop(key, None)
        async with self._lock_for(key):
            try:
                await asyncio.to_thread(self._storage.delete, key)
            except Exception as e:
                logger.warning("Cache delete failed for {}: {}", key, e)
                return
        logger.debug("Cache deleted: {}", key)

    async def clear(self, subject_id: str | None = None) -> None:
        """Delete every entry under the prefix, optionally for one subject only."""
        root = f"{self._prefix}:"
        try:
            keys = set(await asyncio.to_thread(self._storage.keys, root))
        except Exception as e:
            logger.warning("Cache key listing failed: {}", e)
            keys = set()
        keys.update(k for k in self._cache if k.startswith(root))
        if subject_id is not None:
            keys = {k for k in keys if k[len(root) :].split(":")[1:2] == [subject_id]}

        for key in keys:
            await self._delete_key(key)
        logger.info("Cache cleared: {} entries{}", len(keys), f" for {subject_id}" if subject_id else "")

    def purge_memory(self) -> None:
        """Drop the in-memory mirror; storage is untouched."""
        self.clear_cache()

    async def flush(self) -> None:
        """Wait for pending background writes."""
        while self._pending:
            await asyncio.gather(*list(self._pending))
