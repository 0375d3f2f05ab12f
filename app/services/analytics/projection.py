"""Analytics projection - raw upstream payloads to the analytics view model.

Pure functions; the only mutation is ``attach_intelligence``, which fills
the Phase 2 fields of an already published view in place.
"""

from datetime import date

from app.models.analytics import DEFAULT_TARGETS, AnalyticsViewModel, DisplayTargets, TargetsInfo
from delta_client.insights import (
    DailySummary,
    DailyTargets,
    DashboardResponse,
    DeltaInsights,
    DerivativeCardsResponse,
    DigestionInsights,
    HealthState,
    InsightsSummary,
    WeeklyResponse,
)

# ========== Fallbacks ==========


def default_insights(user_id: str) -> InsightsSummary:
    return InsightsSummary(user_id=user_id)


def default_derivatives() -> dict:
    return {
        "has_data": False,
        "days_analyzed": 0,
        "data_points": 0,
        "date_range": {"start": "", "end": ""},
        "metrics": {},
        "composite": {
            "physiological_momentum": {
                "score": 0,
                "label": "insufficient_data",
                "symbol": "→",
                "confidence": 0,
                "signals_analyzed": 0,
            },
        },
        "recovery_patterns": {
            "pattern": "insufficient_data",
            "description": "Continue logging data to see recovery patterns.",
            "insufficient_data": True,
        },
    }


def default_cards() -> DerivativeCardsResponse:
    return DerivativeCardsResponse()


def default_weekly() -> WeeklyResponse:
    return WeeklyResponse()


def default_dashboard() -> DashboardResponse:
    return DashboardResponse(
        targets=DailyTargets(
            calories=DEFAULT_TARGETS.calories,
            protein_g=DEFAULT_TARGETS.protein,
            water_oz=DEFAULT_TARGETS.water_oz,
            sleep_hours=DEFAULT_TARGETS.sleep_hours,
        ),
        targets_calculated=False,
        targets_source="default",
    )


def default_health_state() -> HealthState:
    return HealthState(has_data=False)


def default_delta_insights(user_id: str) -> DeltaInsights:
    return DeltaInsights(user_id=user_id)


def default_digestion(user_id: str) -> DigestionInsights:
    return DigestionInsights(user_id=user_id)


def default_analytics_view(user_id: str = "") -> AnalyticsViewModel:
    return AnalyticsViewModel(insights=default_insights(user_id), derivatives=default_derivatives())


# ========== Weekly ordering ==========


def chronological(summaries: list[DailySummary]) -> list[DailySummary]:
    """Upstream sends newest first; views keep oldest first."""
    return list(reversed(summaries))


def summary_for_date(summaries: list[DailySummary], day: date | str) -> DailySummary | None:
    """Find the summary of a given day by date match."""
    wanted = day.isoformat() if isinstance(day, date) else day
    for summary in summaries:
        if summary.date[:10] == wanted:
            return summary
    return None


# ========== Targets ==========


def _or(value, default):
    return default if value is None else value


def build_targets(dashboard: DashboardResponse) -> DisplayTargets:
    """Effective targets; workout-day targets override calories, protein and water.

    Sleep is never overridden on a workout day.
    """
    base = dashboard.targets or DailyTargets()
    workout = dashboard.workout_day_targets if dashboard.is_workout_day else None

    return DisplayTargets(
        calories=workout.calories if workout else _or(base.calories, DEFAULT_TARGETS.calories),
        protein=workout.protein_g if workout else _or(base.protein_g, DEFAULT_TARGETS.protein),
        water_oz=workout.water_oz if workout else _or(base.water_oz, DEFAULT_TARGETS.water_oz),
        sleep_hours=_or(base.sleep_hours, DEFAULT_TARGETS.sleep_hours),
        workouts=DEFAULT_TARGETS.workouts,
    )


def build_targets_info(dashboard: DashboardResponse) -> TargetsInfo:
    return TargetsInfo(
        is_workout_day=dashboard.is_workout_day,
        workout_day_targets=dashboard.workout_day_targets,
        activity_level=dashboard.activity_level,
        phase=dashboard.phase,
        bmr=dashboard.bmr,
        tdee=dashboard.tdee,
    )


def has_data(today: DailySummary | None, health_state: HealthState) -> bool:
    """Either source is enough: a new user may have one without the other."""
    return today is not None or health_state.has_data


# ========== View ==========


def build_analytics_view(
    insights: InsightsSummary,
    derivatives: dict,
    cards: DerivativeCardsResponse,
    weekly: WeeklyResponse,
    dashboard: DashboardResponse,
    health_state: HealthState,
    today: date | None = None,
) -> AnalyticsViewModel:
    """Phase 1 view; intelligence fields are left empty.

    With ``today`` given (the dashboard call fell back), today's row of the
    weekly aggregate stands in for the missing snapshot.
    """
    weekly_summaries = chronological(weekly.weekly_summaries)
    today_summary = dashboard.today
    if today_summary is None and today is not None:
        today_summary = summary_for_date(weekly_summaries, today)

    return AnalyticsViewModel(
        insights=insights,
        derivatives=derivatives,
        derivative_cards=cards.cards,
        weekly_summaries=weekly_summaries,
        today_summary=today_summary,
        targets=build_targets(dashboard),
        targets_personalized=dashboard.targets_calculated,
        targets_info=build_targets_info(dashboard),
        health_state=health_state,
        causal_chains=health_state.causal_chains,
        has_data=has_data(today_summary, health_state),
    )


def attach_intelligence(
    view: AnalyticsViewModel,
    delta_insights: DeltaInsights,
    digestion: DigestionInsights,
) -> AnalyticsViewModel:
    """Fill the Phase 2 fields in place."""
    view.delta_insights = delta_insights
    view.delta_commentary = delta_insights.commentary
    view.digestion_insights = digestion
    return view
