"""Data domains and their cache/session identity."""

from dataclasses import dataclass
from enum import StrEnum


class Domain(StrEnum):
    """Independently cached data areas."""

    ANALYTICS = "analytics"
    WORKOUT = "workout"
    CALENDAR = "calendar"


@dataclass(frozen=True)
class DomainKey:
    """A domain scoped to one subject (and to one month for the calendar)."""

    domain: Domain
    subject_id: str
    year: int | None = None
    month: int | None = None

    def __post_init__(self):
        object.__setattr__(self, "domain", Domain(self.domain))
        if self.domain is Domain.CALENDAR and (self.year is None or self.month is None):
            raise ValueError("Calendar keys need year and month")

    @classmethod
    def analytics(cls, subject_id: str) -> "DomainKey":
        return cls(Domain.ANALYTICS, subject_id)

    @classmethod
    def workout(cls, subject_id: str) -> "DomainKey":
        return cls(Domain.WORKOUT, subject_id)

    @classmethod
    def calendar(cls, subject_id: str, year: int, month: int) -> "DomainKey":
        return cls(Domain.CALENDAR, subject_id, year, month)

    def parts(self) -> list[str]:
        parts = [self.domain.value, self.subject_id]
        if self.domain is Domain.CALENDAR:
            parts += [str(self.year), str(self.month)]
        return parts
