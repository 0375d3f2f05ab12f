"""Calendar domain models."""

from app.models.calendar.view import (
    CalendarViewModel,
    CycleCalendarDay,
    CyclePhase,
    CyclePhaseName,
)

__all__ = [
    "CalendarViewModel",
    "CycleCalendarDay",
    "CyclePhase",
    "CyclePhaseName",
]
