"""Analytics view model - progressively filled by two fetch phases."""

from pydantic import BaseModel

from delta_client.insights import (
    DailySummary,
    DeltaCommentary,
    DeltaInsights,
    DigestionInsights,
    HealthState,
    InsightsSummary,
    WorkoutDayTargets,
)


class DisplayTargets(BaseModel):
    """Effective daily targets shown to the user."""

    calories: float = 2000
    protein: float = 150
    water_oz: float = 64
    sleep_hours: float = 8
    workouts: int = 1


DEFAULT_TARGETS = DisplayTargets()


class TargetsInfo(BaseModel):
    """How the effective targets were derived."""

    is_workout_day: bool = False
    workout_day_targets: WorkoutDayTargets | None = None
    activity_level: str | None = None
    phase: str | None = None
    bmr: float | None = None
    tdee: float | None = None


class AnalyticsViewModel(BaseModel):
    """UI-ready analytics.

    Phase 1 fills everything except ``delta_insights``, ``delta_commentary``
    and ``digestion_insights``, which Phase 2 attaches in place later.
    """

    insights: InsightsSummary = InsightsSummary()
    derivatives: dict = {}
    derivative_cards: list[dict] = []
    weekly_summaries: list[DailySummary] = []
    today_summary: DailySummary | None = None
    targets: DisplayTargets = DisplayTargets()
    targets_personalized: bool = False
    targets_info: TargetsInfo = TargetsInfo()
    health_state: HealthState = HealthState()
    causal_chains: list[dict] = []
    has_data: bool = False

    delta_insights: DeltaInsights | None = None
    delta_commentary: DeltaCommentary | None = None
    digestion_insights: DigestionInsights | None = None

    @property
    def intelligence_ready(self) -> bool:
        return self.delta_insights is not None
