#!/usr/bin/env python3
"""
Warm the insights cache for a user.

Usage:
    python prefetch.py USER_ID                  # Prefetch analytics and workout
    python prefetch.py USER_ID --force          # Drop the user's cache first
    python prefetch.py USER_ID --clear          # Only drop the user's cache
    python prefetch.py USER_ID 2026-10 2026-09  # Also load calendar months
"""

import asyncio
import sys

from app.container import container
from app.models.common import Domain
from settings import API_BASE_URL, CACHE_DB_PATH
from settings.logging import setup_logging

logger = setup_logging(level="INFO", to_file=True)


def parse_month(value: str) -> tuple[int, int]:
    year, month = value.split("-")
    return int(year), int(month)


async def prefetch(user_id: str, months: list[tuple[int, int]], force: bool = False, clear: bool = False):
    """Load everything for one user into the durable cache."""
    container.init(subject_id=user_id)
    controller = container.controller
    try:
        if force or clear:
            await controller.clear_all()
        if clear:
            logger.info("Cache cleared for {}", user_id)
            return

        await controller.prefetch()
        for year, month in months:
            await controller.load(Domain.CALENDAR, year=year, month=month)

        analytics = container.analytics.view
        logger.info(
            "Analytics: has_data={}, calories target {}, intelligence {}",
            analytics.has_data,
            analytics.targets.calories,
            "ready" if analytics.intelligence_ready else "missing",
        )
        workout = container.workout.view
        logger.info("Workout today: {}", workout.workout.name if workout.has_workout else "none")
        if months:
            logger.info("Calendar months loaded: {}", len(months))
    finally:
        await container.close()


def main():
    args = sys.argv[1:]
    force = "--force" in args or "-f" in args
    clear = "--clear" in args
    args = [a for a in args if a not in ("--force", "-f", "--clear")]

    if not args:
        print(__doc__)
        sys.exit(1)

    user_id, *rest = args
    try:
        months = [parse_month(m) for m in rest]
    except ValueError:
        print(__doc__)
        sys.exit(1)

    logger.info("API: {}", API_BASE_URL)
    logger.info("Cache: {}", CACHE_DB_PATH)
    asyncio.run(prefetch(user_id, months, force=force, clear=clear))


if __name__ == "__main__":
    main()
