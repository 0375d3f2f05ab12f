"""Per-domain fetch pipeline: session check, cache, fetch, publish."""

import asyncio
from collections.abc import Awaitable, Callable
from enum import StrEnum
from typing import Any

from loguru import logger
from pydantic import BaseModel

from app.errors import ProjectionFailure
from app.models.common import Domain, DomainKey, FetchOutcome
from app.repositories.common import CacheRepository, SessionLoadState
from app.services.common.race import race_with_timeout

SubjectProvider = Callable[[], str]


class PipelineState(StrEnum):
    IDLE = "idle"
    LOADING = "loading"
    READY = "ready"


class BasePipeline:
    """Idle -> Loading -> Ready state machine for one domain.

    Every run gets a sequence number. A publish from a run older than the
    last published one is discarded, so a slow non-forced run can never
    overwrite a forced refresh that finished first. ``reset`` and
    ``invalidate`` move a barrier past every run started so far: those runs
    can neither publish nor write the cache (previous subject, stale data).
    Subclasses implement ``_fetch``; it must not raise for upstream
    problems (those become fallbacks), only for projection bugs.
    """

    domain: Domain
    view_model: type[BaseModel]

    def __init__(self, cache: CacheRepository, session: SessionLoadState, subject: SubjectProvider):
        self._cache = cache
        self._session = session
        self._subject = subject
        self._seq = 0
        self._published_seq = 0
        self._inflight: set[int] = set()
        self._background: set[asyncio.Task] = set()
        self._ready = False
        self._barrier = 0
        self.view = self._default_view()
        self.error = ""
        logger.debug("{} initialized", self.__class__.__name__)

    # ----- state -----

    @property
    def loading(self) -> bool:
        """True while a run newer than the published view is in flight."""
        return any(seq > self._published_seq for seq in self._inflight)

    @property
    def state(self) -> PipelineState:
        if self.loading:
            return PipelineState.LOADING
        return PipelineState.READY if self._ready else PipelineState.IDLE

    def reset(self) -> None:
        """Forget the current view; in-flight runs will be discarded."""
        self._published_seq = self._next_seq()
        self._barrier = self._published_seq
        self._inflight.clear()
        self.view = self._default_view()
        self.error = ""
        self._ready = False
        logger.debug("{} reset", self.__class__.__name__)

    def invalidate(self, key: DomainKey | None = None) -> None:
        """Keep the current view, but runs started before now can no longer publish or cache."""
        self._published_seq = self._barrier = self._next_seq()
        self._inflight.clear()
        logger.debug("{} invalidated", self.__class__.__name__)

    # ----- hooks -----

    def _default_view(self, key: DomainKey | None = None) -> BaseModel:
        return self.view_model()

    async def _fetch(self, key: DomainKey) -> BaseModel:
        raise NotImplementedError

    def _after_publish(self, seq: int, key: DomainKey, view: BaseModel) -> None:
        """Fetched view accepted: persist it."""
        self._cache.set(key, view)

    def _on_session_hit(self, key: DomainKey) -> None:
        """Domain already loaded this session; the current view stands."""

    def _on_discarded(self, seq: int, key: DomainKey, view: BaseModel) -> None:
        """Fetched view lost to a newer run."""

    # ----- helpers -----

    def _next_seq(self) -> int:
        self._seq += 1
        return self._seq

    def _is_latest(self, seq: int) -> bool:
        return seq == self._published_seq

    def _publish(self, seq: int, key: DomainKey, view: BaseModel, error: str = "") -> bool:
        if seq < self._published_seq:
            logger.debug("{}: discarding stale publish (run {} < {})", self.domain, seq, self._published_seq)
            return False
        self._published_seq = seq
        self._ready = True
        self.view = view
        self.error = error
        if not error:
            self._session.add(key)
        return True

    def _spawn(self, coro: Awaitable[Any]) -> asyncio.Task:
        """Start a task nobody awaits; kept referenced until it finishes."""
        task = asyncio.ensure_future(coro)
        self._background.add(task)
        task.add_done_callback(self._background.discard)
        return task

    async def _call(
        self,
        name: str,
        fetch: Callable[[], Awaitable[Any]],
        fallback: Any,
        deadline_ms: float,
        parse: Callable[[Any], Any] | None = None,
    ) -> FetchOutcome:
        """One upstream call, parsed and raced against its deadline."""

        async def operation():
            data = await fetch()
            return parse(data) if parse else data

        return await race_with_timeout(operation, deadline_ms, fallback, name=f"{self.domain}.{name}")

    # ----- algorithm -----

    async def _load(self, key: DomainKey, force: bool = False) -> None:
        if not force and key in self._session:
            logger.debug("{}: already loaded this session", self.domain)
            self._on_session_hit(key)
            return

        seq = self._next_seq()
        self._inflight.add(seq)
        try:
            if not force:
                entry = await self._cache.get(key, self.view_model)
                if entry is not None:
                    self._publish(seq, key, entry.payload)
                    logger.info("{}: served from cache", self.domain)
                    return

            try:
                view = await self._fetch(key)
            except Exception as e:
                failure = ProjectionFailure(f"Could not load {self.domain}")
                logger.opt(exception=e).error("{}: {}", self.domain, failure.message)
                self._publish(seq, key, self._default_view(key), error=failure.message)
                return

            if self._publish(seq, key, view):
                logger.info("{}: published fresh data", self.domain)
                self._after_publish(seq, key, view)
            else:
                self._on_discarded(seq, key, view)
        finally:
            self._inflight.discard(seq)
