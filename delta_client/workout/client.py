"""Workout API client."""

from delta_client.base import BaseClient


class WorkoutClient(BaseClient):
    """Client for workout endpoints."""

    async def today(self, user_id: str) -> dict:
        """GET /workouts/{user}/today - today's workout plan."""
        return await self._get(f"/workouts/{user_id}/today")
