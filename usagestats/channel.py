"""
Method channel dispatching usage requests to the services.
"""
from typing import Any, Callable, Dict, Optional
from .errors import InvalidArgumentError, MethodNotImplementedError
from .services import PermissionGate, UsageAggregator

Handler = Callable[[Dict[str, Any]], Any]


def _int_argument(arguments: Dict[str, Any], name: str) -> Optional[int]:
    """Read an optional integer argument."""
    value = arguments.get(name)
    if value is None:
        return None
    if isinstance(value, bool) or not isinstance(value, int):
        raise InvalidArgumentError(name, f"expected an integer, got {value!r}")
    return value


class UsageChannel:
    """
    Dispatches method calls by name.

    The channel does not enforce the usage permission itself; callers
    are expected to call checkUsagePermission first.
    """

    def __init__(self, permissions: Optional[PermissionGate] = None,
                 aggregator: Optional[UsageAggregator] = None) -> None:
        self.permissions = permissions or PermissionGate()
        self.aggregator = aggregator or UsageAggregator()
        self._handlers: Dict[str, Handler] = {
            "checkUsagePermission": self._check_usage_permission,
            "requestUsagePermission": self._request_usage_permission,
            "getUsageStats": self._get_usage_stats,
            "getUsageStatsForDay": self._get_usage_stats_for_day,
        }

    @property
    def methods(self) -> list[str]:
        return list(self._handlers)

    def handle(self, method: str, arguments: Optional[Dict[str, Any]] = None) -> Any:
        """
        Run `method` and return its result.

        Raises:
            MethodNotImplementedError: unknown method
            InvalidArgumentError: malformed arguments
            ProviderUnavailableError: usage could not be read
        """
        handler = self._handlers.get(method)
        if handler is None:
            raise MethodNotImplementedError(method)
        return handler(arguments or {})

    def _check_usage_permission(self, arguments: Dict[str, Any]) -> bool:
        return self.permissions.is_granted()

    def _request_usage_permission(self, arguments: Dict[str, Any]) -> None:
        self.permissions.request_permission()
        return None

    def _get_usage_stats(self, arguments: Dict[str, Any]) -> Dict[str, Any]:
        # Absent bounds read as 0
        start = _int_argument(arguments, "start") or 0
        end = _int_argument(arguments, "end") or 0
        return self.aggregator.stats_for_range(start, end).to_dict()

    def _get_usage_stats_for_day(self, arguments: Dict[str, Any]) -> Dict[str, Any]:
        result = self.aggregator.stats_for_day(
            _int_argument(arguments, "year"),
            _int_argument(arguments, "month"),
            _int_argument(arguments, "day"),
        )
        return result.to_dict()
