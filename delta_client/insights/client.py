"""Insights API client - analytics, dashboard, health intelligence."""

from delta_client.base import BaseClient


class InsightsClient(BaseClient):
    """Client for the analytics-facing endpoints."""

    async def insights(self, user_id: str) -> dict:
        """GET /insights/{user} - conversation and wellness summary."""
        return await self._get(f"/insights/{user_id}")

    async def derivatives(self, user_id: str, days: int = 30) -> dict:
        """GET /derivatives/{user}?days= - metric derivatives."""
        return await self._get(f"/derivatives/{user_id}", {"days": days})

    async def cards(self, user_id: str, days: int = 14) -> dict:
        """GET /derivatives/{user}/cards?days= - insight cards."""
        return await self._get(f"/derivatives/{user_id}/cards", {"days": days})

    async def weekly(self, user_id: str) -> dict:
        """GET /dashboard/{user}/weekly - daily summaries, newest first."""
        return await self._get(f"/dashboard/{user_id}/weekly")

    async def dashboard(self, user_id: str) -> dict:
        """GET /dashboard/{user} - today snapshot and targets."""
        return await self._get(f"/dashboard/{user_id}")

    async def health_state(self, user_id: str) -> dict:
        """GET /health-intelligence/{user}/state - health state snapshot."""
        return await self._get(f"/health-intelligence/{user_id}/state")

    async def delta_insights(self, user_id: str) -> dict:
        """GET /health-intelligence/{user}/insights - LLM narrative (slow)."""
        return await self._get(f"/health-intelligence/{user_id}/insights")

    async def digestion_insights(self, user_id: str) -> dict:
        """GET /health-intelligence/{user}/digestion - LLM digestion insight (slow)."""
        return await self._get(f"/health-intelligence/{user_id}/digestion")
