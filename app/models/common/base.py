"""Base entity for dataclass models stored as JSON."""

from dataclasses import asdict, dataclass, fields
from typing import Any


@dataclass
class BaseEntity:
    """Dataclass entity with a JSON-friendly dict form."""

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)

    @classmethod
    def from_dict(cls, data: dict[str, Any]):
        """Build from a dict; unknown keys are ignored, missing fields raise TypeError."""
        names = {f.name for f in fields(cls)}
        return cls(**{k: v for k, v in data.items() if k in names})
