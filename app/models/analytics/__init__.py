"""Analytics domain models."""

from app.models.analytics.view import (
    DEFAULT_TARGETS,
    AnalyticsViewModel,
    DisplayTargets,
    TargetsInfo,
)

__all__ = [
    "DEFAULT_TARGETS",
    "AnalyticsViewModel",
    "DisplayTargets",
    "TargetsInfo",
]
