"""Workout projection."""

from app.models.workout import WorkoutViewModel
from delta_client.workout import TodayWorkoutResponse


def default_today_workout() -> TodayWorkoutResponse:
    """No workout today."""
    return TodayWorkoutResponse(workout=None)


def build_workout_view(response: TodayWorkoutResponse) -> WorkoutViewModel:
    return WorkoutViewModel(workout=response.workout)
