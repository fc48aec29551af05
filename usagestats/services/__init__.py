"""Business logic services."""
from .permission_service import PermissionGate
from .day_window import DayWindowCalculator
from .usage_service import UsageAggregator

__all__ = ['PermissionGate', 'DayWindowCalculator', 'UsageAggregator']
