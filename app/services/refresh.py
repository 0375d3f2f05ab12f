"""Invalidation and refresh controller - the UI-facing entry points."""

import asyncio
from collections.abc import Callable
from datetime import date

from loguru import logger

from app.models.common import Domain, DomainKey
from app.repositories.common import CacheRepository, SessionLoadState
from app.services.analytics.pipeline import AnalyticsPipeline
from app.services.calendar.pipeline import CalendarPipeline
from app.services.common.pipeline import BasePipeline
from app.services.workout.pipeline import WorkoutPipeline


class RefreshController:
    """Routes loads, invalidations and refreshes to the domain pipelines.

    Calendar calls default to the current month.
    """

    def __init__(
        self,
        analytics: AnalyticsPipeline,
        workout: WorkoutPipeline,
        calendar: CalendarPipeline,
        cache: CacheRepository,
        session: SessionLoadState,
        subject: Callable[[], str],
        today: Callable[[], date] = date.today,
    ):
        self.analytics = analytics
        self.workout = workout
        self.calendar = calendar
        self._cache = cache
        self._session = session
        self._subject = subject
        self._today = today
        self._last_day = today()

    def _month(self, year: int | None, month: int | None) -> tuple[int, int]:
        if year is None or month is None:
            today = self._today()
            return today.year, today.month
        return year, month

    def _pipeline(self, domain: Domain) -> BasePipeline:
        if domain is Domain.ANALYTICS:
            return self.analytics
        if domain is Domain.WORKOUT:
            return self.workout
        return self.calendar

    def _key(self, domain: Domain, year: int | None = None, month: int | None = None) -> DomainKey:
        subject = self._subject()
        if domain is Domain.CALENDAR:
            return DomainKey.calendar(subject, *self._month(year, month))
        return DomainKey(domain, subject)

    async def load(
        self,
        domain: Domain,
        force: bool = False,
        year: int | None = None,
        month: int | None = None,
    ) -> None:
        """Load one domain; resolves from session or cache unless forced."""
        if domain is Domain.ANALYTICS:
            await self.analytics.load(force)
        elif domain is Domain.WORKOUT:
            await self.workout.load(force)
        else:
            await self.calendar.load(*self._month(year, month), force=force)

    async def refresh(self, domain: Domain, year: int | None = None, month: int | None = None) -> None:
        """Pull-to-refresh or tab refocus; a forced fetch overwrites the cache entry."""
        await self.load(domain, force=True, year=year, month=month)

    async def invalidate(
        self,
        domain: Domain,
        refetch: bool = False,
        year: int | None = None,
        month: int | None = None,
    ) -> None:
        """Drop a domain from the session and the cache, then optionally refetch."""
        key = self._key(domain, year, month)
        self._pipeline(domain).invalidate(key)
        self._session.discard(key)
        await self._cache.delete(key)
        logger.info("Invalidated {}{}", domain, " (refetching)" if refetch else "")

        if refetch:
            await self.load(domain, force=True, year=key.year, month=key.month)

    async def refresh_all(self) -> None:
        """Clear the session and force analytics and workout together."""
        self._session.clear()
        await asyncio.gather(
            self.analytics.load(force=True),
            self.workout.load(force=True),
        )

    async def on_entry_logged(self) -> None:
        """A write elsewhere (chat, quick log) changed analytics and workout."""
        await asyncio.gather(
            self.invalidate(Domain.ANALYTICS, refetch=True),
            self.invalidate(Domain.WORKOUT, refetch=True),
        )

    async def on_foreground(self) -> None:
        """App back from background: everything on a new day, else analytics."""
        today = self._today()
        if today != self._last_day:
            logger.info("Day changed: {} -> {}", self._last_day, today)
            self._last_day = today
            await self.refresh_all()
        else:
            await self.analytics.load(force=True)

    async def prefetch(self) -> None:
        """Warm the cache at startup, including the intelligence phase."""
        await asyncio.gather(
            self.analytics.load(force=True),
            self.workout.load(force=True),
        )
        task = self.analytics.intelligence_task
        if task is not None and not task.done():
            await task
        await self._cache.flush()
        logger.info("Prefetch complete")

    async def clear_all(self) -> None:
        """Forget everything cached for the current subject."""
        for pipeline in (self.analytics, self.workout, self.calendar):
            pipeline.invalidate()
        self._session.clear()
        await self._cache.clear(self._subject())
