"""Insights API client."""

from delta_client.insights.client import InsightsClient
from delta_client.insights.schemas import (
    DailySummary,
    DailyTargets,
    DashboardResponse,
    DeltaCommentary,
    DeltaInsights,
    DerivativeCardsResponse,
    DigestionInsights,
    HealthState,
    InsightsSummary,
    Streak,
    WeeklyResponse,
    WorkoutDayTargets,
)

__all__ = [
    "InsightsClient",
    "InsightsSummary",
    "DerivativeCardsResponse",
    "DailyTargets",
    "WorkoutDayTargets",
    "DailySummary",
    "WeeklyResponse",
    "Streak",
    "DashboardResponse",
    "HealthState",
    "DeltaCommentary",
    "DeltaInsights",
    "DigestionInsights",
]
