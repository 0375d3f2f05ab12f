"""Workout domain models."""

from app.models.workout.view import WorkoutViewModel

__all__ = ["WorkoutViewModel"]
