"""
Exception hierarchy for the capacity planning core.
"""

from dataclasses import dataclass, field
from typing import Any, Dict


@dataclass(eq=False)
class CapacityPlanningError(Exception):
    """Base class for capacity planning errors with a structured payload."""

    message: str
    details: Dict[str, Any] = field(default_factory=dict)

    def __str__(self) -> str:
        if self.details:
            return f"{self.message} :: {self.details}"
        return self.message


class MalformedRecordError(CapacityPlanningError):
    """Raised when a source record lacks an identifier or violates its date invariants."""


class MalformedEngagementError(MalformedRecordError):
    """Raised when an engagement's start, deadline or completion dates are inconsistent."""


class ConfigurationError(CapacityPlanningError):
    """Raised when the service-hours table is given invalid values."""
