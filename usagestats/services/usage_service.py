"""Service for usage aggregation."""
from typing import Optional
from ..debug import debug_log
from ..errors import ProviderUnavailableError
from ..models import AggregationResult, Granularity, TimeWindow
from ..platform import PlatformBase, get_platform
from .day_window import DayWindowCalculator


class UsageAggregator:
    """Reduces provider samples into a total and a per-application breakdown."""

    def __init__(self, provider: Optional[PlatformBase] = None,
                 calculator: Optional[DayWindowCalculator] = None) -> None:
        self.provider = provider or get_platform()
        self.calculator = calculator or DayWindowCalculator()

    def aggregate(self, window: TimeWindow, granularity: Granularity) -> AggregationResult:
        """
        Query the provider for `window` and reduce the samples.

        Samples with no foreground time are dropped; the rest keep the
        provider's order and are not merged by application. An empty or
        absent response is a zero result.

        Raises:
            ProviderUnavailableError: the provider could not be read
        """
        try:
            samples = self.provider.query_usage_stats(granularity, window.start_ms, window.end_ms)
        except ProviderUnavailableError:
            raise
        except Exception as e:
            raise ProviderUnavailableError(f"Usage provider failed: {e}") from e

        result = AggregationResult()
        for sample in samples or []:
            time_ms = sample.foreground_time_ms
            if time_ms > 0:
                result.total_time_ms += time_ms
                result.per_application.append((sample.application_id, time_ms))

        debug_log(
            f"aggregate {granularity.value} [{window.start_ms}, {window.end_ms}): "
            f"total={result.total_time_ms}ms apps={len(result.per_application)}"
        )
        return result

    def stats_for_range(self, start_ms: int, end_ms: int) -> AggregationResult:
        """Aggregate an arbitrary range from daily buckets."""
        return self.aggregate(TimeWindow(start_ms, end_ms), Granularity.DAILY)

    def stats_for_day(self, year: Optional[int] = None, month: Optional[int] = None,
                      day: Optional[int] = None) -> AggregationResult:
        """Aggregate one calendar day at the finest granularity."""
        window = self.calculator.day_window(year, month, day)
        return self.aggregate(window, Granularity.BEST)
