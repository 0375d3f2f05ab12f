"""Tests for the upstream HTTP clients against a mock transport."""

import asyncio

import httpx
import pytest

from delta_client import CalendarClient, InsightsClient, WorkoutClient, set_api_config
from settings import API_BASE_URL, API_TIMEOUT


def run(coro):
    return asyncio.run(coro)


def recording(seen, status=200, body=None):
    def handler(request):
        seen.append(request)
        return httpx.Response(status, json=body if body is not None else {})

    return httpx.MockTransport(handler)


async def call(client, method, *args):
    async with client:
        return await getattr(client, method)(*args)


class TestPaths:
    @pytest.mark.parametrize(
        "method,args,path",
        [
            ("insights", ("u1",), "/insights/u1"),
            ("weekly", ("u1",), "/dashboard/u1/weekly"),
            ("dashboard", ("u1",), "/dashboard/u1"),
            ("health_state", ("u1",), "/health-intelligence/u1/state"),
            ("delta_insights", ("u1",), "/health-intelligence/u1/insights"),
            ("digestion_insights", ("u1",), "/health-intelligence/u1/digestion"),
        ],
    )
    def test_insights_paths(self, method, args, path):
        seen = []
        run(call(InsightsClient(transport=recording(seen)), method, *args))
        assert seen[0].url.path == path

    def test_derivatives_days(self):
        seen = []
        run(call(InsightsClient(transport=recording(seen)), "derivatives", "u1", 30))
        assert seen[0].url.path == "/derivatives/u1"
        assert seen[0].url.params["days"] == "30"

    def test_cards_days(self):
        seen = []
        run(call(InsightsClient(transport=recording(seen)), "cards", "u1", 14))
        assert seen[0].url.path == "/derivatives/u1/cards"
        assert seen[0].url.params["days"] == "14"

    def test_workout_today(self):
        seen = []
        run(call(WorkoutClient(transport=recording(seen)), "today", "u1"))
        assert seen[0].url.path == "/workouts/u1/today"

    def test_calendar_paths(self):
        seen = []
        client = CalendarClient(transport=recording(seen))

        async def scenario():
            async with client:
                await client.month_logs("u1", 2026, 3)
                await client.cycle_settings("u1")
                await client.cycle_logs("u1", 2026, 3)

        run(scenario())
        assert [r.url.path for r in seen] == ["/calendar/u1/month/2026/3", "/cycle/u1/settings", "/cycle/u1/logs/2026/3"]


class TestRetry:
    def test_returns_json(self):
        seen = []
        body = {"today": None, "targets_calculated": False}
        assert run(call(InsightsClient(transport=recording(seen, body=body)), "dashboard", "u1")) == body

    def test_client_error_not_retried(self):
        seen = []
        client = InsightsClient(transport=recording(seen, status=404))
        with pytest.raises(httpx.HTTPStatusError):
            run(call(client, "dashboard", "u1"))
        assert len(seen) == 1

    def test_connect_error_retried(self):
        seen = []

        def handler(request):
            seen.append(request)
            if len(seen) == 1:
                raise httpx.ConnectError("refused", request=request)
            return httpx.Response(200, json={"workout": None})

        client = WorkoutClient(transport=httpx.MockTransport(handler))
        assert run(call(client, "today", "u1")) == {"workout": None}
        assert len(seen) == 2
        assert client.request_count == 2


class TestConfig:
    def test_base_url_override(self):
        seen = []
        set_api_config("https://staging.example.test", 5)
        try:
            run(call(WorkoutClient(transport=recording(seen)), "today", "u1"))
        finally:
            set_api_config(API_BASE_URL, API_TIMEOUT)
        assert seen[0].url.host == "staging.example.test"
