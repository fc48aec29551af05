"""Desktop (X11/Wayland) platform implementation."""
import sys
import subprocess
from typing import List
from .base import PlatformBase
from ..debug import debug_log


class DesktopPlatform(PlatformBase):
    """Grants usage access through the Qt access dialog."""

    @property
    def name(self) -> str:
        return "Desktop"

    def remediation_command(self, op: str, package: str) -> List[str]:
        """Command line of the access dialog process."""
        return [
            sys.executable, "-m", "usagestats.ui.access_dialog",
            "--op", op,
            "--package", package,
            "--access-file", self.access_path,
        ]

    def start_remediation(self, op: str, package: str) -> bool:
        """Launch the access dialog detached; do not wait for it."""
        if not self._has_display():
            print("No display available for the usage access dialog")
            return False

        cmd = self.remediation_command(op, package)
        try:
            subprocess.Popen(
                cmd,
                stdin=subprocess.DEVNULL,
                stdout=subprocess.DEVNULL,
                stderr=subprocess.DEVNULL,
                start_new_session=True
            )
        except OSError as e:
            print(f"Failed to open usage access dialog: {e}")
            return False

        debug_log(f"remediation launched: {' '.join(cmd)}")
        return True
