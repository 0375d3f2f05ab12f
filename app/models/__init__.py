"""Models package - cache envelope, domains and view models."""

from app.models.analytics import (
    DEFAULT_TARGETS,
    AnalyticsViewModel,
    DisplayTargets,
    TargetsInfo,
)
from app.models.calendar import (
    CalendarViewModel,
    CycleCalendarDay,
    CyclePhase,
    CyclePhaseName,
)
from app.models.common import (
    CACHE_DDL,
    BaseEntity,
    CacheEntry,
    Domain,
    DomainKey,
    FetchOutcome,
    OutcomeStatus,
)
from app.models.workout import WorkoutViewModel

ALL_DDL = [
    CACHE_DDL,
]

__all__ = [
    # Common
    "BaseEntity",
    "CACHE_DDL",
    "CacheEntry",
    "Domain",
    "DomainKey",
    "FetchOutcome",
    "OutcomeStatus",
    # Analytics
    "DEFAULT_TARGETS",
    "AnalyticsViewModel",
    "DisplayTargets",
    "TargetsInfo",
    # Workout
    "WorkoutViewModel",
    # Calendar
    "CalendarViewModel",
    "CycleCalendarDay",
    "CyclePhase",
    "CyclePhaseName",
    # All DDL
    "ALL_DDL",
]
