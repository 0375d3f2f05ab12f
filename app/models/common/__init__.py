"""Common models - base classes, cache envelope, domains, outcomes."""

from app.models.common.base import BaseEntity
from app.models.common.cache import CACHE_DDL, CacheEntry
from app.models.common.domain import Domain, DomainKey
from app.models.common.outcome import FetchOutcome, OutcomeStatus

__all__ = [
    "BaseEntity",
    "CACHE_DDL",
    "CacheEntry",
    "Domain",
    "DomainKey",
    "FetchOutcome",
    "OutcomeStatus",
]
