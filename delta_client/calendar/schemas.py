"""Calendar API schemas - month logs and cycle tracking."""

from enum import StrEnum

from pydantic import BaseModel


class CycleEventType(StrEnum):
    """Cycle log event types."""

    PERIOD_START = "period_start"
    PERIOD_END = "period_end"
    SYMPTOM = "symptom"
    NOTE = "note"


class DailyLog(BaseModel):
    """One day of logged entries."""

    date: str
    log_id: str | None = None
    meals: list[dict] = []
    calories_total: float | None = None
    protein_grams: float | None = None
    hydration_liters: float | None = None
    sleep_hours: float | None = None
    sleep_quality: float | None = None
    energy_level: float | None = None
    stress_level: float | None = None
    notes: str | None = None

    class Config:
        extra = "allow"


class MonthLogsResponse(BaseModel):
    logs: list[DailyLog] = []
    days_count: int = 0
    year: int | None = None
    month: int | None = None


class CycleSettings(BaseModel):
    """Cycle-tracking preferences."""

    user_id: str = ""
    tracking_enabled: bool = False
    average_cycle_length: int = 28
    average_period_length: int = 5
    last_period_start: str | None = None
    notifications_enabled: bool = True

    class Config:
        extra = "allow"


class CycleLog(BaseModel):
    """Single cycle-tracking log entry."""

    date: str
    event_type: str
    id: str | None = None
    flow_intensity: str | None = None
    symptoms: list[str] = []
    notes: str | None = None

    class Config:
        extra = "allow"
