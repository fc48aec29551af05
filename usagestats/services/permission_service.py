"""Service for the usage-access permission."""
import os
from typing import Optional
from ..config import OPSTR_GET_USAGE_STATS, settings
from ..debug import debug_log
from ..models import OpMode, PermissionState
from ..platform import PlatformBase, get_platform


class PermissionGate:
    """
    Checks and requests the permission to read usage statistics.

    The state is asked from the platform on every check and never cached.
    Requesting only opens the platform's remediation surface: the user's
    decision is never reported back, so callers check again later.
    """

    def __init__(self, platform: Optional[PlatformBase] = None,
                 package: Optional[str] = None, uid: Optional[int] = None) -> None:
        self.platform = platform or get_platform()
        self.package = package or settings.package_name
        self.uid = os.getuid() if uid is None else uid

    def check_permission(self) -> PermissionState:
        """Return GRANTED only if the platform reports the operation allowed."""
        try:
            mode = self.platform.check_op(OPSTR_GET_USAGE_STATS, self.uid, self.package)
        except Exception as e:
            print(f"Usage permission check failed: {e}")
            return PermissionState.DENIED

        if mode == OpMode.ALLOWED:
            return PermissionState.GRANTED
        return PermissionState.DENIED

    def is_granted(self) -> bool:
        return self.check_permission() == PermissionState.GRANTED

    def request_permission(self) -> None:
        """Open the remediation surface and return immediately."""
        try:
            launched = self.platform.start_remediation(OPSTR_GET_USAGE_STATS, self.package)
        except Exception as e:
            print(f"Usage permission request failed: {e}")
            return

        if not launched:
            debug_log(f"no remediation surface on {self.platform.name}")
