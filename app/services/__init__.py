"""Services package - pipelines and the refresh controller."""

from app.services.analytics.pipeline import AnalyticsPipeline
from app.services.calendar.pipeline import CalendarPipeline
from app.services.common.pipeline import BasePipeline, PipelineState
from app.services.common.race import race_with_timeout
from app.services.refresh import RefreshController
from app.services.workout.pipeline import WorkoutPipeline

__all__ = [
    "BasePipeline",
    "PipelineState",
    "race_with_timeout",
    "AnalyticsPipeline",
    "WorkoutPipeline",
    "CalendarPipeline",
    "RefreshController",
]
