"""Calendar view model - month logs, weekly aggregate and cycle tracking."""

from enum import StrEnum

from pydantic import BaseModel

from delta_client.calendar import CycleSettings, DailyLog
from delta_client.insights import DailySummary


class CyclePhaseName(StrEnum):
    MENSTRUAL = "menstrual"
    FOLLICULAR = "follicular"
    OVULATION = "ovulation"
    LUTEAL = "luteal"


class CyclePhase(BaseModel):
    """Current position in the cycle."""

    phase: CyclePhaseName
    day_in_cycle: int
    days_until_period: int | None = None
    is_fertile_window: bool = False


class CycleCalendarDay(BaseModel):
    """One calendar cell with logged and predicted cycle markers."""

    date: str
    is_period: bool = False
    is_predicted_period: bool = False
    is_fertile: bool = False
    is_ovulation: bool = False
    flow_intensity: str | None = None
    symptoms: list[str] = []
    has_log: bool = False


class CalendarViewModel(BaseModel):
    """UI-ready calendar for one month."""

    year: int
    month: int
    logs: list[DailyLog] = []
    weekly_summaries: list[DailySummary] = []
    cycle_settings: CycleSettings | None = None
    cycle_calendar: list[CycleCalendarDay] = []
    cycle_phase: CyclePhase | None = None
