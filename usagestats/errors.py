"""Exceptions raised by usagestats."""


class UsageStatsError(Exception):
    """Base class for all usagestats errors."""


class InvalidArgumentError(UsageStatsError, ValueError):
    """A caller-supplied argument was rejected."""

    def __init__(self, field: str, message: str) -> None:
        super().__init__(f"{field}: {message}")
        self.field = field
        self.message = message


class ProviderUnavailableError(UsageStatsError):
    """The usage-sample provider could not be read."""


class MethodNotImplementedError(UsageStatsError):
    """The channel received a method it does not handle."""

    def __init__(self, method: str) -> None:
        super().__init__(f"Method not implemented: {method}")
        self.method = method
