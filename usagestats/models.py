"""
Data models for the application.
"""
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Tuple

from .errors import InvalidArgumentError


class PermissionState(Enum):
    """Outcome of a usage-access check."""
    GRANTED = "granted"
    DENIED = "denied"


class OpMode(Enum):
    """Verdict of the permission authority for an operation."""
    ALLOWED = "allowed"
    IGNORED = "ignored"
    ERRORED = "errored"
    DEFAULT = "default"


class Granularity(Enum):
    """Bucket size the provider aggregates samples at."""
    DAILY = "daily"
    BEST = "best"


@dataclass(frozen=True)
class UsageSample:
    """One raw record returned by the provider for one application."""
    application_id: str
    foreground_time_ms: int


@dataclass(frozen=True)
class TimeWindow:
    """Half-open range [start_ms, end_ms) in epoch milliseconds."""
    start_ms: int
    end_ms: int

    def __post_init__(self) -> None:
        if self.start_ms >= self.end_ms:
            raise InvalidArgumentError(
                "end", f"window end {self.end_ms} must be after start {self.start_ms}"
            )


@dataclass
class AggregationResult:
    """Total foreground time and the per-application breakdown."""
    total_time_ms: int = 0
    per_application: List[Tuple[str, int]] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        """Render the channel response shape."""
        return {
            "total": self.total_time_ms,
            "perApp": [
                {"applicationId": app_id, "totalTime": time_ms}
                for app_id, time_ms in self.per_application
            ],
        }


@dataclass
class AppEvent:
    """Represents a single application switch in the database."""
    id: int
    timestamp: str
    app_name: str
    event_type: str
    window_title: str = ""
