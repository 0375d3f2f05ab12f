"""Calendar API client."""

from delta_client.calendar.client import CalendarClient
from delta_client.calendar.schemas import (
    CycleEventType,
    CycleLog,
    CycleSettings,
    DailyLog,
    MonthLogsResponse,
)

__all__ = [
    "CalendarClient",
    "CycleEventType",
    "CycleLog",
    "CycleSettings",
    "DailyLog",
    "MonthLogsResponse",
]
