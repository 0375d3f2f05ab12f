"""Analytics pipeline - fast Phase 1 publish, slow Phase 2 intelligence."""

import asyncio
from collections.abc import Callable
from datetime import date

from loguru import logger

from app.models.analytics import AnalyticsViewModel
from app.models.common import Domain, DomainKey
from app.repositories.common import CacheRepository, SessionLoadState
from app.services.analytics.projection import (
    attach_intelligence,
    build_analytics_view,
    default_analytics_view,
    default_cards,
    default_dashboard,
    default_delta_insights,
    default_derivatives,
    default_digestion,
    default_health_state,
    default_insights,
    default_weekly,
)
from app.services.common.pipeline import BasePipeline, SubjectProvider
from delta_client.insights import (
    DashboardResponse,
    DeltaInsights,
    DerivativeCardsResponse,
    DigestionInsights,
    HealthState,
    InsightsClient,
    InsightsSummary,
    WeeklyResponse,
)
from settings import FAST_DEADLINE_MS, LLM_DEADLINE_MS


def _as_dict(data) -> dict:
    if not isinstance(data, dict):
        raise TypeError(f"expected an object, got {type(data).__name__}")
    return data


class AnalyticsPipeline(BasePipeline):
    """Two-phase analytics load.

    Phase 1 races six fast reads, publishes the view and returns. Phase 2
    runs the two LLM-derived reads in a detached task, attaches them to the
    published view in place and only then writes the complete view to the
    cache. ``intelligence_loading`` is true while Phase 2 of the current
    view is outstanding.
    """

    domain = Domain.ANALYTICS
    view_model = AnalyticsViewModel

    def __init__(
        self,
        client: InsightsClient,
        cache: CacheRepository,
        session: SessionLoadState,
        subject: SubjectProvider,
        fast_deadline_ms: float = FAST_DEADLINE_MS,
        llm_deadline_ms: float = LLM_DEADLINE_MS,
        today: Callable[[], date] = date.today,
    ):
        self._client = client
        self._fast_deadline_ms = fast_deadline_ms
        self._llm_deadline_ms = llm_deadline_ms
        self._today = today
        self._intelligence_seq: int | None = None
        self.intelligence_task: asyncio.Task | None = None
        super().__init__(cache, session, subject)

    @property
    def intelligence_loading(self) -> bool:
        return self._intelligence_seq is not None and self._is_latest(self._intelligence_seq)

    def _default_view(self, key: DomainKey | None = None) -> AnalyticsViewModel:
        return default_analytics_view(key.subject_id if key else "")

    async def load(self, force: bool = False) -> None:
        """Resolve from session, cache or network; returns after Phase 1."""
        await self._load(DomainKey.analytics(self._subject()), force)

    async def _fetch(self, key: DomainKey) -> AnalyticsViewModel:
        user = key.subject_id
        deadline = self._fast_deadline_ms
        c = self._client

        calls = [
            ("insights", lambda: c.insights(user), default_insights(user), InsightsSummary.model_validate),
            ("derivatives", lambda: c.derivatives(user, 30), default_derivatives(), _as_dict),
            ("cards", lambda: c.cards(user, 14), default_cards(), DerivativeCardsResponse.model_validate),
            ("weekly", lambda: c.weekly(user), default_weekly(), WeeklyResponse.model_validate),
            ("dashboard", lambda: c.dashboard(user), default_dashboard(), DashboardResponse.model_validate),
            ("health_state", lambda: c.health_state(user), default_health_state(), HealthState.model_validate),
        ]
        outcomes = await asyncio.gather(
            *(self._call(name, fetch, fallback, deadline, parse) for name, fetch, fallback, parse in calls)
        )
        failed = [o for o in outcomes if not o.ok]
        if failed:
            logger.info("analytics: {} of {} fast calls fell back", len(failed), len(outcomes))

        insights, derivatives, cards, weekly, dashboard, health_state = (o.value for o in outcomes)
        # Dashboard fell back: look for today in the weekly aggregate
        today = None if outcomes[4].ok else self._today()
        return build_analytics_view(insights, derivatives, cards, weekly, dashboard, health_state, today)

    def _after_publish(self, seq: int, key: DomainKey, view: AnalyticsViewModel) -> None:
        # Cache write is deferred to the end of Phase 2
        self._intelligence_seq = seq
        self.intelligence_task = self._spawn(self._load_intelligence(seq, key, view))

    async def _load_intelligence(self, seq: int, key: DomainKey, view: AnalyticsViewModel) -> None:
        user = key.subject_id
        deadline = self._llm_deadline_ms
        c = self._client
        try:
            delta, digestion = await asyncio.gather(
                self._call(
                    "delta_insights",
                    lambda: c.delta_insights(user),
                    default_delta_insights(user),
                    deadline,
                    DeltaInsights.model_validate,
                ),
                self._call(
                    "digestion_insights",
                    lambda: c.digestion_insights(user),
                    default_digestion(user),
                    deadline,
                    DigestionInsights.model_validate,
                ),
            )
            attach_intelligence(view, delta.value, digestion.value)

            if self._is_latest(seq):
                self._cache.set(key, view)
                logger.info("analytics: intelligence attached and cached")
            else:
                logger.debug("analytics: intelligence for superseded run {} not cached", seq)
        except Exception as e:
            logger.opt(exception=e).error("analytics: intelligence phase failed, keeping defaults")
        finally:
            if self._intelligence_seq == seq:
                self._intelligence_seq = None
