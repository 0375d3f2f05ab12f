"""Calendar pipeline - one view per visible month."""

import asyncio
from collections.abc import Callable
from datetime import date

from pydantic import TypeAdapter

from app.models.calendar import CalendarViewModel
from app.models.common import Domain, DomainKey
from app.repositories.common import CacheRepository, SessionLoadState
from app.services.analytics.projection import default_weekly
from app.services.calendar.projection import build_calendar_view, default_month_logs, tracking_enabled
from app.services.common.pipeline import BasePipeline, SubjectProvider
from delta_client.calendar import CalendarClient, CycleLog, CycleSettings, MonthLogsResponse
from delta_client.insights import InsightsClient, WeeklyResponse
from settings import FAST_DEADLINE_MS, MULTI_STEP_DEADLINE_MS

_cycle_logs = TypeAdapter(list[CycleLog])


class CalendarPipeline(BasePipeline):
    """Month logs, cycle settings and weekly aggregate, fetched together.

    Cycle logs are fetched only for users with tracking enabled. The last
    view of every month loaded this session is kept, so revisiting a month
    re-publishes its view without any I/O.
    """

    domain = Domain.CALENDAR
    view_model = CalendarViewModel

    def __init__(
        self,
        client: CalendarClient,
        insights_client: InsightsClient,
        cache: CacheRepository,
        session: SessionLoadState,
        subject: SubjectProvider,
        today: Callable[[], date] = date.today,
        fast_deadline_ms: float = FAST_DEADLINE_MS,
        deadline_ms: float = MULTI_STEP_DEADLINE_MS,
    ):
        self._client = client
        self._insights_client = insights_client
        self._today = today
        self._fast_deadline_ms = fast_deadline_ms
        self._deadline_ms = deadline_ms
        self._views: dict[DomainKey, CalendarViewModel] = {}
        self._view_key: DomainKey | None = None
        super().__init__(cache, session, subject)

    def _default_view(self, key: DomainKey | None = None) -> CalendarViewModel:
        if key is None:
            today = self._today()
            return CalendarViewModel(year=today.year, month=today.month)
        return CalendarViewModel(year=key.year, month=key.month)

    def reset(self) -> None:
        self._views.clear()
        self._view_key = None
        super().reset()

    def invalidate(self, key: DomainKey | None = None) -> None:
        if key is None:
            self._views.clear()
        else:
            self._views.pop(key, None)
        super().invalidate(key)

    async def load(self, year: int, month: int, force: bool = False) -> None:
        await self._load(DomainKey.calendar(self._subject(), year, month), force)

    def _publish(self, seq: int, key: DomainKey, view: CalendarViewModel, error: str = "") -> bool:
        accepted = super()._publish(seq, key, view, error)
        if accepted:
            self._view_key = key
            if not error:
                self._views[key] = view
        return accepted

    def _on_discarded(self, seq: int, key: DomainKey, view: CalendarViewModel) -> None:
        # Another month published first; this month is still fresh, so cache it
        if seq > self._barrier and key != self._view_key:
            self._cache.set(key, view)

    def _on_session_hit(self, key: DomainKey) -> None:
        view = self._views.get(key)
        if view is not None and view is not self.view:
            self._publish(self._next_seq(), key, view)

    async def _fetch(self, key: DomainKey) -> CalendarViewModel:
        user, year, month = key.subject_id, key.year, key.month
        c = self._client

        month_logs, settings, weekly = await asyncio.gather(
            self._call(
                "month_logs",
                lambda: c.month_logs(user, year, month),
                default_month_logs(year, month),
                self._deadline_ms,
                MonthLogsResponse.model_validate,
            ),
            self._call(
                "cycle_settings",
                lambda: c.cycle_settings(user),
                None,
                self._fast_deadline_ms,
                CycleSettings.model_validate,
            ),
            self._call(
                "weekly",
                lambda: self._insights_client.weekly(user),
                default_weekly(),
                self._deadline_ms,
                WeeklyResponse.model_validate,
            ),
        )

        cycle_logs: list[CycleLog] = []
        if tracking_enabled(settings.value):
            outcome = await self._call(
                "cycle_logs",
                lambda: c.cycle_logs(user, year, month),
                [],
                self._fast_deadline_ms,
                _cycle_logs.validate_python,
            )
            cycle_logs = outcome.value

        return build_calendar_view(
            year,
            month,
            month_logs.value,
            settings.value,
            weekly.value,
            cycle_logs,
            self._today(),
        )
