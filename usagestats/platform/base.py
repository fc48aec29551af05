"""Base platform abstraction."""
import os
import time
import datetime
from abc import ABC, abstractmethod
from typing import Dict, List, Optional, Tuple
from .. import config
from ..db.usage_repository import UsageRepository
from ..debug import debug_log
from ..errors import ProviderUnavailableError
from ..models import Granularity, OpMode, UsageSample
from .access import load_access_table, lookup_mode

# (application, interval start, interval end), epoch seconds
Interval = Tuple[str, float, float]


def local_datetime(seconds: float) -> datetime.datetime:
    """Convert epoch seconds to a naive local datetime, as stored in the table."""
    return datetime.datetime.fromtimestamp(seconds)


def local_timestamp(stored: str) -> float:
    """Epoch seconds of a stored naive local ISO timestamp."""
    return datetime.datetime.fromisoformat(stored).timestamp()


def next_local_midnight(seconds: float) -> float:
    """Epoch seconds of the first local midnight after `seconds`."""
    day = local_datetime(seconds).date() + datetime.timedelta(days=1)
    return datetime.datetime.combine(day, datetime.time.min).timestamp()


class PlatformBase(ABC):
    """
    Abstract base for platform-specific operations.

    A platform acts as the permission authority (operation modes and the
    remediation surface) and as the usage-sample provider.
    """

    def __init__(self, db_path: Optional[str] = None,
                 access_path: Optional[str] = None) -> None:
        self.db_path = db_path or config.DB_PATH
        self.access_path = access_path or config.ACCESS_PATH
        self.repo = UsageRepository(self.db_path)

    @property
    @abstractmethod
    def name(self) -> str:
        """Platform name for logging."""
        pass

    @abstractmethod
    def start_remediation(self, op: str, package: str) -> bool:
        """
        Show the user a surface where `op` can be granted to `package`.

        Returns as soon as the surface is launched; never waits for the
        user's decision. Returns False if nothing could be launched.
        """
        pass

    # Permission authority

    def check_op(self, op: str, uid: int, package: str) -> OpMode:
        """Return the mode of `op` for the identity, reading the table fresh."""
        try:
            table = load_access_table(self.access_path)
        except (ValueError, OSError) as e:
            debug_log(f"access table unreadable ({self.access_path}): {e}")
            return OpMode.ERRORED
        mode = lookup_mode(table, op, uid, package)
        debug_log(f"check_op {op} uid={uid} package={package}: {mode.value}")
        return mode

    # Usage-sample provider

    def query_usage_stats(self, granularity: Granularity,
                          start_ms: int, end_ms: int) -> List[UsageSample]:
        """
        Return per-application foreground samples within [start_ms, end_ms).

        DAILY yields one sample per application per local-day bucket;
        BEST yields one sample per application over the whole window.
        Durations are elapsed time, so clock transitions are honoured.
        Nothing before the epoch or after 'now' is counted.
        """
        if not os.path.exists(self.db_path):
            raise ProviderUnavailableError(f"Usage database not found at {self.db_path}")

        # Clamp in milliseconds; bounds beyond datetime's range are valid input
        start_ms = max(start_ms, 0)
        end_ms = min(end_ms, int(time.time() * 1000))
        if end_ms <= start_ms:
            return []
        start = start_ms / 1000.0
        end = end_ms / 1000.0

        intervals = self._foreground_intervals(start, end)

        # bucket start -> app -> seconds, apps in first-seen order
        buckets: Dict[float, Dict[str, float]] = {}
        for app_name, since, until in intervals:
            if granularity == Granularity.DAILY:
                pieces = self._split_at_midnights(since, until)
            else:
                pieces = [(start, since, until)]
            for bucket_start, piece_start, piece_end in pieces:
                app_times = buckets.setdefault(bucket_start, {})
                app_times[app_name] = app_times.get(app_name, 0.0) + (piece_end - piece_start)

        samples: List[UsageSample] = []
        for bucket_start in sorted(buckets):
            samples.extend(
                UsageSample(app_name, int(round(seconds * 1000)))
                for app_name, seconds in buckets[bucket_start].items()
            )

        debug_log(
            f"query_usage_stats {granularity.value} [{start_ms}, {end_ms}): "
            f"{len(samples)} samples from {len(intervals)} intervals"
        )
        return samples

    def _foreground_intervals(self, start: float, end: float) -> List[Interval]:
        """Rebuild foreground intervals from switch events, clipped to [start, end)."""
        intervals: List[Interval] = []
        current_app: Optional[str] = None
        since: Optional[float] = None

        def close(until: float) -> None:
            if current_app and since is not None and until > since:
                intervals.append((current_app, since, until))

        # An app switched to before the window is still in front when it opens
        previous = self.repo.find_last_event_before(local_datetime(start))
        if previous and previous.event_type == UsageRepository.SWITCH_TO:
            current_app = previous.app_name
            since = start

        events = self.repo.find_events_in_period(local_datetime(start), local_datetime(end))
        for event in events:
            timestamp = min(max(local_timestamp(event.timestamp), start), end)

            if event.event_type == UsageRepository.SWITCH_TO:
                close(timestamp)
                current_app = event.app_name
                since = timestamp

            elif event.event_type == UsageRepository.SWITCH_FROM:
                if current_app == event.app_name:
                    close(timestamp)
                    current_app = None
                    since = None

        close(end)
        return intervals

    @staticmethod
    def _split_at_midnights(since: float, until: float) -> List[Tuple[float, float, float]]:
        """Split [since, until) into (bucket start, piece start, piece end) per local day."""
        pieces: List[Tuple[float, float, float]] = []
        piece_start = since
        while piece_start < until:
            midnight = next_local_midnight(piece_start)
            bucket_start = datetime.datetime.combine(
                local_datetime(piece_start).date(), datetime.time.min
            ).timestamp()
            piece_end = min(midnight, until)
            pieces.append((bucket_start, piece_start, piece_end))
            piece_start = piece_end
        return pieces

    # Shared helpers

    def _has_display(self) -> bool:
        """Check if a graphical session is available."""
        return bool(os.environ.get("DISPLAY") or os.environ.get("WAYLAND_DISPLAY"))
