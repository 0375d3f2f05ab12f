"""Outcome of a deadline-bounded upstream call."""

from dataclasses import dataclass
from enum import StrEnum
from typing import Any


class OutcomeStatus(StrEnum):
    SUCCESS = "success"
    TIMED_OUT = "timed_out"
    FAILED = "failed"


@dataclass
class FetchOutcome:
    """Success(value) | TimedOut(fallback) | Failed(fallback).

    ``value`` is always usable: on timeout or failure it holds the fallback.
    """

    status: OutcomeStatus
    value: Any
    error: Exception | None = None

    @classmethod
    def success(cls, value: Any) -> "FetchOutcome":
        return cls(OutcomeStatus.SUCCESS, value)

    @classmethod
    def timed_out(cls, fallback: Any, error: Exception | None = None) -> "FetchOutcome":
        return cls(OutcomeStatus.TIMED_OUT, fallback, error)

    @classmethod
    def failed(cls, fallback: Any, error: Exception | None = None) -> "FetchOutcome":
        return cls(OutcomeStatus.FAILED, fallback, error)

    @property
    def ok(self) -> bool:
        return self.status is OutcomeStatus.SUCCESS
