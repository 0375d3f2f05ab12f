"""Dependency Injection container - initialized at app startup."""

from loguru import logger

from app.repositories.common import CacheRepository, SessionLoadState
from app.repositories.db import close_db
from app.repositories.storage import DuckDBStorage, KeyValueStorage, MemoryStorage
from app.services.analytics.pipeline import AnalyticsPipeline
from app.services.calendar.pipeline import CalendarPipeline
from app.services.refresh import RefreshController
from app.services.workout.pipeline import WorkoutPipeline
from delta_client import CalendarClient, InsightsClient, WorkoutClient
from settings import CACHE_DB_PATH, CACHE_TTL

ANONYMOUS = "anonymous"


class Container:
    """Application DI container - holds all singleton instances."""

    _instance = None
    _initialized = False

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def init(
        self,
        storage: KeyValueStorage | None = None,
        subject_id: str | None = None,
        insights_client: InsightsClient | None = None,
        workout_client: WorkoutClient | None = None,
        calendar_client: CalendarClient | None = None,
    ) -> None:
        """Initialize all dependencies. Call once at app startup."""
        if self._initialized:
            return

        self._subject_id = subject_id or ANONYMOUS

        # Upstream clients
        self._insights_client = insights_client or InsightsClient()
        self._workout_client = workout_client or WorkoutClient()
        self._calendar_client = calendar_client or CalendarClient()

        # Shared state
        self._owns_db = storage is None and CACHE_DB_PATH != ":memory:"
        if storage is None:
            storage = MemoryStorage() if CACHE_DB_PATH == ":memory:" else DuckDBStorage()
        self.cache = CacheRepository(storage)
        self.session = SessionLoadState(ttl=CACHE_TTL)

        # Pipelines (with injected cache/session and the current subject)
        self.analytics = AnalyticsPipeline(
            client=self._insights_client,
            cache=self.cache,
            session=self.session,
            subject=self.subject_id,
        )
        self.workout = WorkoutPipeline(
            client=self._workout_client,
            cache=self.cache,
            session=self.session,
            subject=self.subject_id,
        )
        self.calendar = CalendarPipeline(
            client=self._calendar_client,
            insights_client=self._insights_client,
            cache=self.cache,
            session=self.session,
            subject=self.subject_id,
        )

        self.controller = RefreshController(
            analytics=self.analytics,
            workout=self.workout,
            calendar=self.calendar,
            cache=self.cache,
            session=self.session,
            subject=self.subject_id,
        )

        self._initialized = True
        logger.info("Container initialized for {}", self._subject_id)

    def subject_id(self) -> str:
        """Current authenticated subject, or "anonymous"."""
        return self._subject_id

    def set_subject(self, subject_id: str | None) -> None:
        """Auth change: drop everything that belongs to the previous subject."""
        new_subject = subject_id or ANONYMOUS
        if new_subject == self._subject_id:
            return

        logger.info("Subject changed, resetting session state")
        self._subject_id = new_subject
        self.session.clear()
        self.cache.purge_memory()
        for pipeline in (self.analytics, self.workout, self.calendar):
            pipeline.reset()

    async def close(self) -> None:
        """Flush pending cache writes, close HTTP clients and the cache database."""
        if not self._initialized:
            return
        await self.cache.flush()
        for client in (self._insights_client, self._workout_client, self._calendar_client):
            await client.aclose()
        if self._owns_db:
            close_db()
        self._initialized = False


# Global container instance
container = Container()
