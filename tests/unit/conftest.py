"""Shared fakes: in-process upstream clients, a settable clock, wired pipelines."""

import asyncio
import copy
from collections import Counter
from datetime import date

import pytest

from app.repositories.common import CacheRepository, SessionLoadState
from app.repositories.storage import MemoryStorage
from app.services.analytics.pipeline import AnalyticsPipeline
from app.services.calendar.pipeline import CalendarPipeline
from app.services.refresh import RefreshController
from app.services.workout.pipeline import WorkoutPipeline

HANG = float("inf")
TODAY = date(2026, 10, 19)


class FakeClock:
    def __init__(self, now: float = 1_000.0):
        self.now = now

    def __call__(self) -> float:
        return self.now


class Subject:
    def __init__(self, subject_id: str = "u1"):
        self.id = subject_id

    def __call__(self) -> str:
        return self.id


class FakeClient:
    """Canned responses per endpoint, with optional delays and errors."""

    responses: dict = {}

    def __init__(self):
        self.responses = copy.deepcopy(self.responses)
        self.delays: dict[str, float] = {}
        self.errors: dict[str, Exception] = {}
        self.calls: Counter = Counter()
        self.users: list[str] = []

    async def _respond(self, name: str, user_id: str):
        self.calls[name] += 1
        self.users.append(user_id)
        response = copy.deepcopy(self.responses.get(name))
        delay = self.delays.get(name, 0)
        if delay == HANG:
            await asyncio.Event().wait()
        elif delay:
            await asyncio.sleep(delay)
        if name in self.errors:
            raise self.errors[name]
        return response

    async def aclose(self):
        pass


class FakeInsightsClient(FakeClient):
    responses = {
        "insights": {"user_id": "u1", "total_conversations": 3},
        "derivatives": {"has_data": True, "days_analyzed": 30},
        "cards": {"cards": [{"id": "hrv", "title": "HRV"}], "count": 1},
        "weekly": {
            "weekly_summaries": [{"date": "2026-10-19"}, {"date": "2026-10-18"}, {"date": "2026-10-17"}],
            "days_count": 3,
        },
        "dashboard": {
            "today": {"date": "2026-10-19", "calories": 1800},
            "targets": {"calories": 2200, "protein_g": 160, "water_oz": 80, "sleep_hours": 7.5},
            "targets_calculated": True,
            "is_workout_day": False,
        },
        "health_state": {"has_data": True, "causal_chains": [{"id": "c1"}]},
        "delta_insights": {
            "user_id": "u1",
            "has_data": True,
            "commentary": {"headline": "Steady week", "body": "", "tone": "positive"},
        },
        "digestion_insights": {"user_id": "u1", "has_data": True, "summary": "Regular"},
    }

    async def insights(self, user_id):
        return await self._respond("insights", user_id)

    async def derivatives(self, user_id, days=30):
        return await self._respond("derivatives", user_id)

    async def cards(self, user_id, days=14):
        return await self._respond("cards", user_id)

    async def weekly(self, user_id):
        return await self._respond("weekly", user_id)

    async def dashboard(self, user_id):
        return await self._respond("dashboard", user_id)

    async def health_state(self, user_id):
        return await self._respond("health_state", user_id)

    async def delta_insights(self, user_id):
        return await self._respond("delta_insights", user_id)

    async def digestion_insights(self, user_id):
        return await self._respond("digestion_insights", user_id)


class FakeWorkoutClient(FakeClient):
    responses = {"today": {"workout": {"name": "Push day", "exercises": [{"name": "Bench"}]}}}

    async def today(self, user_id):
        return await self._respond("today", user_id)


class FakeCalendarClient(FakeClient):
    responses = {
        "month_logs": {"logs": [{"date": "2026-10-01", "calories_total": 1800}], "days_count": 1},
        "cycle_settings": {"tracking_enabled": False},
        "cycle_logs": [],
    }

    def __init__(self):
        super().__init__()
        self.months: list[tuple[int, int]] = []

    async def month_logs(self, user_id, year, month):
        self.months.append((year, month))
        return await self._respond("month_logs", user_id)

    async def cycle_settings(self, user_id):
        return await self._respond("cycle_settings", user_id)

    async def cycle_logs(self, user_id, year, month):
        return await self._respond("cycle_logs", user_id)


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def subject():
    return Subject()


@pytest.fixture
def storage():
    return MemoryStorage()


@pytest.fixture
def cache(storage, clock):
    return CacheRepository(storage, ttl=300, clock=clock)


@pytest.fixture
def session(clock):
    return SessionLoadState(ttl=300, clock=clock)


@pytest.fixture
def insights_client():
    return FakeInsightsClient()


@pytest.fixture
def workout_client():
    return FakeWorkoutClient()


@pytest.fixture
def calendar_client():
    return FakeCalendarClient()


@pytest.fixture
def analytics(insights_client, cache, session, subject):
    return AnalyticsPipeline(
        insights_client, cache, session, subject, fast_deadline_ms=200, llm_deadline_ms=500, today=lambda: TODAY
    )


@pytest.fixture
def workout(workout_client, cache, session, subject):
    return WorkoutPipeline(workout_client, cache, session, subject, deadline_ms=1_000)


@pytest.fixture
def calendar(calendar_client, insights_client, cache, session, subject):
    return CalendarPipeline(
        calendar_client,
        insights_client,
        cache,
        session,
        subject,
        today=lambda: TODAY,
        fast_deadline_ms=200,
        deadline_ms=200,
    )


@pytest.fixture
def today():
    """Mutable "today" for day-change tests."""
    return {"day": TODAY}


@pytest.fixture
def controller(analytics, workout, calendar, cache, session, subject, today):
    return RefreshController(analytics, workout, calendar, cache, session, subject, today=lambda: today["day"])
