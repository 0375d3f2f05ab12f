"""Workout view model."""

from pydantic import BaseModel

from delta_client.workout import WorkoutPlan


class WorkoutViewModel(BaseModel):
    """Today's workout; ``None`` renders as "No workout today"."""

    workout: WorkoutPlan | None = None

    @property
    def has_workout(self) -> bool:
        return self.workout is not None
