"""Workout pipeline - today's workout plan."""

from app.models.common import Domain, DomainKey
from app.models.workout import WorkoutViewModel
from app.repositories.common import CacheRepository, SessionLoadState
from app.services.common.pipeline import BasePipeline, SubjectProvider
from app.services.workout.projection import build_workout_view, default_today_workout
from delta_client.workout import TodayWorkoutResponse, WorkoutClient
from settings import MULTI_STEP_DEADLINE_MS


class WorkoutPipeline(BasePipeline):
    """Single call; a failed or slow call renders as "no workout today"."""

    domain = Domain.WORKOUT
    view_model = WorkoutViewModel

    def __init__(
        self,
        client: WorkoutClient,
        cache: CacheRepository,
        session: SessionLoadState,
        subject: SubjectProvider,
        deadline_ms: float = MULTI_STEP_DEADLINE_MS,
    ):
        self._client = client
        self._deadline_ms = deadline_ms
        super().__init__(cache, session, subject)

    async def load(self, force: bool = False) -> None:
        await self._load(DomainKey.workout(self._subject()), force)

    async def _fetch(self, key: DomainKey) -> WorkoutViewModel:
        user = key.subject_id
        outcome = await self._call(
            "today",
            lambda: self._client.today(user),
            default_today_workout(),
            self._deadline_ms,
            TodayWorkoutResponse.model_validate,
        )
        return build_workout_view(outcome.value)
