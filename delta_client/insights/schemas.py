"""Insights API schemas - dashboard, weekly aggregate, derivatives, health intelligence."""

from pydantic import BaseModel


class InsightsSummary(BaseModel):
    """Conversation and wellness summary."""

    user_id: str = ""
    total_conversations: int = 0
    topics_discussed: list[str] = []
    wellness_score: float = 0
    streak_days: int = 0

    class Config:
        extra = "allow"


class DerivativeCardsResponse(BaseModel):
    """Derived metric cards over a rolling window."""

    cards: list[dict] = []
    count: int = 0


class DailyTargets(BaseModel):
    """Base nutrition/hydration/sleep targets from the dashboard."""

    calories: float | None = None
    protein_g: float | None = None
    carbs_g: float | None = None
    fat_g: float | None = None
    water_oz: float | None = None
    sleep_hours: float | None = None
    workouts_per_week: int | None = None

    class Config:
        extra = "allow"


class WorkoutDayTargets(BaseModel):
    """Targets that replace the base ones on a workout day."""

    calories: float
    protein_g: float
    water_oz: float
    carbs_g: float | None = None
    fat_g: float | None = None

    class Config:
        extra = "allow"


class DailySummary(BaseModel):
    """One day of aggregated logs."""

    date: str
    meals: int = 0
    calories: float = 0
    protein: float = 0
    carbs: float = 0
    fat: float = 0
    workouts: int = 0
    workout_minutes: int = 0
    sleep_hours: float | None = None
    sleep_quality: float | None = None
    mood_avg: float | None = None
    water_oz: float = 0
    weight: float | None = None

    class Config:
        extra = "allow"


class WeeklyResponse(BaseModel):
    """Weekly aggregate; summaries arrive newest first."""

    weekly_summaries: list[DailySummary] = []
    days_count: int = 0


class Streak(BaseModel):
    current_streak: int = 0
    longest_streak: int = 0
    last_active_date: str | None = None


class DashboardResponse(BaseModel):
    """Today snapshot with targets."""

    today: DailySummary | None = None
    streak: Streak = Streak()
    recent_entries: list[dict] = []
    targets: DailyTargets | None = None
    targets_calculated: bool = False
    targets_source: str = "default"
    is_workout_day: bool = False
    workout_day_targets: WorkoutDayTargets | None = None
    activity_level: str | None = None
    phase: str | None = None
    bmr: float | None = None
    tdee: float | None = None

    class Config:
        extra = "allow"


class HealthState(BaseModel):
    """Inferred health state with causal-chain patterns."""

    has_data: bool = False
    causal_chains: list[dict] = []

    class Config:
        extra = "allow"


class DeltaCommentary(BaseModel):
    headline: str = ""
    body: str = ""
    tone: str = "neutral"


class DeltaInsights(BaseModel):
    """LLM-derived narrative over recent data."""

    user_id: str = ""
    has_data: bool = False
    commentary: DeltaCommentary = DeltaCommentary()
    patterns: list[dict] = []
    factors: list[dict] = []
    interaction: dict | None = None
    readiness: dict | None = None
    cycle_context: dict | None = None

    class Config:
        extra = "allow"


class DigestionInsights(BaseModel):
    """LLM-derived digestion insight."""

    user_id: str = ""
    has_data: bool = False
    summary: str = ""
    factors: list[dict] = []
    suggestions: list[str] = []

    class Config:
        extra = "allow"
