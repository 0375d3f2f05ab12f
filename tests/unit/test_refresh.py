"""Tests for the refresh controller and the container's subject switching."""

import asyncio
from datetime import timedelta

import pytest

from app.container import Container
from app.models.analytics import AnalyticsViewModel
from app.models.common import Domain, DomainKey
from app.repositories.storage import MemoryStorage
from conftest import TODAY

ANALYTICS = DomainKey.analytics("u1")
WORKOUT = DomainKey.workout("u1")


def run(coro):
    return asyncio.run(coro)


class TestInvalidate:
    def test_without_refetch(self, controller, workout_client, cache):
        async def scenario():
            await controller.load(Domain.WORKOUT)
            await controller.invalidate(Domain.WORKOUT)
            missing = await cache.get(WORKOUT)
            await controller.load(Domain.WORKOUT)
            return missing

        assert run(scenario()) is None
        assert workout_client.calls["today"] == 2

    def test_with_refetch(self, controller, workout_client, cache):
        async def scenario():
            await controller.load(Domain.WORKOUT)
            await controller.invalidate(Domain.WORKOUT, refetch=True)
            return await cache.get(WORKOUT)

        assert run(scenario()) is not None
        assert workout_client.calls["today"] == 2

    def test_calendar_defaults_to_current_month(self, controller, calendar_client):
        async def scenario():
            await controller.load(Domain.CALENDAR)
            await controller.invalidate(Domain.CALENDAR, refetch=True)

        run(scenario())
        assert calendar_client.months == [(2026, 10), (2026, 10)]

    def test_calendar_explicit_month(self, controller, calendar_client):
        run(controller.invalidate(Domain.CALENDAR, refetch=True, year=2026, month=3))
        assert calendar_client.months == [(2026, 3)]

    def test_pending_intelligence_not_cached(self, controller, analytics, insights_client, cache):
        insights_client.delays["delta_insights"] = 0.2

        async def scenario():
            await controller.load(Domain.ANALYTICS)
            await controller.invalidate(Domain.ANALYTICS)
            await analytics.intelligence_task
            return await cache.get(ANALYTICS)

        assert run(scenario()) is None
        assert not analytics.intelligence_loading

    def test_inflight_run_not_cached(self, controller, workout, workout_client, cache):
        workout_client.delays["today"] = 0.1

        async def scenario():
            task = asyncio.create_task(controller.load(Domain.WORKOUT))
            while not workout_client.calls["today"]:
                await asyncio.sleep(0)
            await controller.invalidate(Domain.WORKOUT)
            await task
            return await cache.get(WORKOUT)

        assert run(scenario()) is None
        assert not workout.loading

    def test_storage_failure_is_not_raised(self, controller, workout_client, storage, cache):
        def broken(key):
            raise OSError("disk gone")

        async def scenario():
            await controller.load(Domain.WORKOUT)
            await cache.flush()
            storage.delete = broken
            await controller.invalidate(Domain.WORKOUT, refetch=True)
            return await cache.get(WORKOUT)

        assert run(scenario()) is not None
        assert workout_client.calls["today"] == 2


class TestRefresh:
    def test_refresh_forces(self, controller, workout_client):
        async def scenario():
            await controller.load(Domain.WORKOUT)
            await controller.refresh(Domain.WORKOUT)

        run(scenario())
        assert workout_client.calls["today"] == 2

    def test_refresh_all(self, controller, insights_client, workout_client, session):
        async def scenario():
            await controller.load(Domain.ANALYTICS)
            await controller.load(Domain.WORKOUT)
            await controller.refresh_all()

        run(scenario())
        assert insights_client.calls["dashboard"] == 2
        assert workout_client.calls["today"] == 2
        assert ANALYTICS in session

    def test_entry_logged(self, controller, insights_client, workout_client):
        async def scenario():
            await controller.load(Domain.ANALYTICS)
            await controller.load(Domain.WORKOUT)
            await controller.on_entry_logged()

        run(scenario())
        assert insights_client.calls["dashboard"] == 2
        assert workout_client.calls["today"] == 2


class TestForeground:
    def test_same_day_refreshes_analytics(self, controller, insights_client, workout_client):
        async def scenario():
            await controller.load(Domain.ANALYTICS)
            await controller.load(Domain.WORKOUT)
            await controller.on_foreground()

        run(scenario())
        assert insights_client.calls["dashboard"] == 2
        assert workout_client.calls["today"] == 1

    def test_new_day_refreshes_everything(self, controller, insights_client, workout_client, today):
        async def scenario():
            await controller.load(Domain.ANALYTICS)
            await controller.load(Domain.WORKOUT)
            today["day"] = TODAY + timedelta(days=1)
            await controller.on_foreground()

        run(scenario())
        assert insights_client.calls["dashboard"] == 2
        assert workout_client.calls["today"] == 2


class TestPrefetch:
    def test_warms_cache_with_intelligence(self, controller, cache, storage):
        async def scenario():
            await controller.prefetch()
            return await cache.get(ANALYTICS, AnalyticsViewModel)

        entry = run(scenario())
        assert entry.payload.intelligence_ready
        assert storage.read(cache.key(ANALYTICS)) is not None
        assert storage.read(cache.key(WORKOUT)) is not None


class TestClearAll:
    def test_clears_subject(self, controller, cache, session):
        async def scenario():
            await controller.prefetch()
            await controller.clear_all()
            return await cache.get(ANALYTICS), await cache.get(WORKOUT)

        assert run(scenario()) == (None, None)
        assert len(session) == 0

    def test_pending_intelligence_not_cached(self, controller, analytics, insights_client, cache):
        insights_client.delays["delta_insights"] = 0.2

        async def scenario():
            await controller.load(Domain.ANALYTICS)
            await controller.clear_all()
            await analytics.intelligence_task
            return await cache.get(ANALYTICS)

        assert run(scenario()) is None

    def test_storage_failure_is_not_raised(self, controller, storage, cache, session):
        def broken(*args):
            raise OSError("disk gone")

        async def scenario():
            await controller.prefetch()
            await cache.flush()
            storage.delete = broken
            storage.keys = broken
            await controller.clear_all()

        run(scenario())
        assert len(session) == 0


@pytest.fixture
def container(insights_client, workout_client, calendar_client):
    c = Container()
    c.init(
        storage=MemoryStorage(),
        subject_id="A",
        insights_client=insights_client,
        workout_client=workout_client,
        calendar_client=calendar_client,
    )
    yield c
    Container._instance = None


class TestSubjectSwitch:
    def test_previous_subject_not_served(self, container, insights_client):
        async def scenario():
            await container.controller.load(Domain.ANALYTICS)
            await container.analytics.intelligence_task
            before = container.analytics.view

            container.set_subject("B")
            reset = container.analytics.view
            for name in list(insights_client.responses):
                insights_client.errors[name] = ConnectionError("offline")
            await container.controller.load(Domain.ANALYTICS)
            await container.close()
            return before, reset, container.analytics.view

        before, reset, after = run(scenario())
        assert before.today_summary is not None
        assert reset.today_summary is None
        assert after.today_summary is None
        assert not after.has_data
        assert after.insights.user_id == "B"
        assert insights_client.users[-1] == "B"

    def test_inflight_run_discarded(self, container, insights_client):
        insights_client.delays["dashboard"] = 0.1

        async def scenario():
            task = asyncio.create_task(container.controller.load(Domain.ANALYTICS))
            while not insights_client.calls["dashboard"]:
                await asyncio.sleep(0.001)
            container.set_subject("B")
            await task
            entry = await container.cache.get(DomainKey.analytics("A"))
            await container.close()
            return entry

        assert run(scenario()) is None
        assert container.analytics.view.today_summary is None
        assert not container.analytics.loading

    def test_same_subject_keeps_state(self, container):
        async def scenario():
            await container.controller.load(Domain.WORKOUT)
            container.set_subject("A")
            await container.close()

        run(scenario())
        assert container.workout.view.has_workout
        assert container.subject_id() == "A"
