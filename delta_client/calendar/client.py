"""Calendar API client - month logs and cycle tracking."""

from delta_client.base import BaseClient


class CalendarClient(BaseClient):
    """Client for calendar and cycle-tracking endpoints."""

    async def month_logs(self, user_id: str, year: int, month: int) -> dict:
        """GET /calendar/{user}/month/{year}/{month} - daily logs of a month."""
        return await self._get(f"/calendar/{user_id}/month/{year}/{month}")

    async def cycle_settings(self, user_id: str) -> dict:
        """GET /cycle/{user}/settings - cycle-tracking settings."""
        return await self._get(f"/cycle/{user_id}/settings")

    async def cycle_logs(self, user_id: str, year: int, month: int) -> list[dict]:
        """GET /cycle/{user}/logs/{year}/{month} - cycle logs of a month."""
        return await self._get(f"/cycle/{user_id}/logs/{year}/{month}")
