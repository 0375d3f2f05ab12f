"""Cycle-tracking calculations - current phase and monthly calendar."""

import calendar
from collections import defaultdict
from datetime import date, timedelta

from app.models.calendar import CycleCalendarDay, CyclePhase, CyclePhaseName
from delta_client.calendar import CycleEventType, CycleLog, CycleSettings

# Ovulation is taken to occur this many days before the next period
LUTEAL_DAYS = 14
FERTILE_BEFORE_OVULATION = 5
FERTILE_AFTER_OVULATION = 1
PREDICTED_CYCLES = 4


def _parse_day(value: str) -> date:
    return date.fromisoformat(value[:10])


def calculate_cycle_phase(
    last_period_start: str | None,
    cycle_length: int,
    period_length: int,
    today: date,
) -> CyclePhase | None:
    """Phase of the cycle on ``today``, or None without a last period start."""
    if last_period_start is None:
        return None

    day_in_cycle = (today - _parse_day(last_period_start)).days + 1
    days_until_period = cycle_length - day_in_cycle

    ovulation_day = cycle_length - LUTEAL_DAYS
    fertile_start = ovulation_day - FERTILE_BEFORE_OVULATION
    fertile_end = ovulation_day + FERTILE_AFTER_OVULATION
    is_fertile = fertile_start <= day_in_cycle <= fertile_end

    if day_in_cycle <= period_length:
        phase = CyclePhaseName.MENSTRUAL
    elif day_in_cycle < fertile_start:
        phase = CyclePhaseName.FOLLICULAR
    elif is_fertile:
        phase = CyclePhaseName.OVULATION
    else:
        phase = CyclePhaseName.LUTEAL

    return CyclePhase(
        phase=phase,
        day_in_cycle=day_in_cycle,
        days_until_period=days_until_period if days_until_period > 0 else None,
        is_fertile_window=is_fertile,
    )


def _predictions(settings: CycleSettings) -> tuple[set[date], set[date], set[date]]:
    """Predicted period, fertile and ovulation days for the next cycles."""
    period: set[date] = set()
    fertile: set[date] = set()
    ovulation: set[date] = set()
    if settings.last_period_start is None:
        return period, fertile, ovulation

    last = _parse_day(settings.last_period_start)
    for n in range(PREDICTED_CYCLES):
        start = last + timedelta(days=n * settings.average_cycle_length)
        period.update(start + timedelta(days=d) for d in range(settings.average_period_length))

        ovulation_day = start + timedelta(days=settings.average_cycle_length - LUTEAL_DAYS)
        ovulation.add(ovulation_day)
        fertile.update(
            ovulation_day + timedelta(days=d) for d in range(-FERTILE_BEFORE_OVULATION, FERTILE_AFTER_OVULATION + 1)
        )
    return period, fertile, ovulation


def generate_cycle_calendar(
    year: int,
    month: int,
    logs: list[CycleLog],
    settings: CycleSettings,
) -> list[CycleCalendarDay]:
    """One entry per day of the month, merging logged and predicted markers."""
    by_day: dict[str, list[CycleLog]] = defaultdict(list)
    for log in logs:
        by_day[log.date[:10]].append(log)

    predicted_period, predicted_fertile, predicted_ovulation = _predictions(settings)

    days = []
    for day_num in range(1, calendar.monthrange(year, month)[1] + 1):
        day = date(year, month, day_num)
        day_logs = by_day.get(day.isoformat(), [])

        period_log = next(
            (entry for entry in day_logs if entry.event_type in (CycleEventType.PERIOD_START, CycleEventType.PERIOD_END)),
            None,
        )
        symptom_log = next((entry for entry in day_logs if entry.event_type == CycleEventType.SYMPTOM), None)
        period_logged = any(entry.event_type == CycleEventType.PERIOD_START for entry in day_logs)

        days.append(
            CycleCalendarDay(
                date=day.isoformat(),
                is_period=period_logged,
                is_predicted_period=not period_logged and day in predicted_period,
                is_fertile=day in predicted_fertile,
                is_ovulation=day in predicted_ovulation,
                flow_intensity=period_log.flow_intensity if period_log else None,
                symptoms=symptom_log.symptoms if symptom_log else [],
                has_log=bool(day_logs),
            )
        )
    return days
