"""Workout API client."""

from delta_client.workout.client import WorkoutClient
from delta_client.workout.schemas import TodayWorkoutResponse, WorkoutPlan

__all__ = [
    "WorkoutClient",
    "WorkoutPlan",
    "TodayWorkoutResponse",
]
