"""Delta API client package."""

from delta_client.base import BaseClient, set_api_config
from delta_client.calendar import CalendarClient
from delta_client.insights import InsightsClient
from delta_client.workout import WorkoutClient

__all__ = [
    # Base
    "BaseClient",
    "set_api_config",
    # Clients
    "InsightsClient",
    "WorkoutClient",
    "CalendarClient",
]
