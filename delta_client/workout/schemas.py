"""Workout API schemas."""

from pydantic import BaseModel


class WorkoutPlan(BaseModel):
    """Planned workout for a day."""

    plan_id: str | None = None
    name: str = ""
    workout_type: str | None = None
    scheduled_date: str | None = None
    exercises: list[dict] = []
    status: str = "pending"
    estimated_duration_minutes: int | None = None

    class Config:
        extra = "allow"


class TodayWorkoutResponse(BaseModel):
    """Today's workout, if any."""

    workout: WorkoutPlan | None = None
    message: str | None = None
