"""Calendar projection."""

from datetime import date

from app.models.calendar import CalendarViewModel
from app.services.analytics.projection import chronological
from app.services.calendar.cycle import calculate_cycle_phase, generate_cycle_calendar
from delta_client.calendar import CycleLog, CycleSettings, MonthLogsResponse
from delta_client.insights import WeeklyResponse


def default_month_logs(year: int, month: int) -> MonthLogsResponse:
    return MonthLogsResponse(logs=[], days_count=0, year=year, month=month)


def tracking_enabled(settings: CycleSettings | None) -> bool:
    return settings is not None and settings.tracking_enabled


def build_calendar_view(
    year: int,
    month: int,
    month_logs: MonthLogsResponse,
    cycle_settings: CycleSettings | None,
    weekly: WeeklyResponse,
    cycle_logs: list[CycleLog],
    today: date,
) -> CalendarViewModel:
    """Cycle markers are only computed when tracking is enabled."""
    view = CalendarViewModel(
        year=year,
        month=month,
        logs=month_logs.logs,
        weekly_summaries=chronological(weekly.weekly_summaries),
        cycle_settings=cycle_settings,
    )
    if tracking_enabled(cycle_settings):
        view.cycle_calendar = generate_cycle_calendar(year, month, cycle_logs, cycle_settings)
        view.cycle_phase = calculate_cycle_phase(
            cycle_settings.last_period_start,
            cycle_settings.average_cycle_length,
            cycle_settings.average_period_length,
            today,
        )
    return view
