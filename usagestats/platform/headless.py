"""Fallback for sessions without a display."""
import json
from .base import PlatformBase
from ..debug import debug_log


class HeadlessPlatform(PlatformBase):
    """Explains how to grant usage access by editing the access table."""

    @property
    def name(self) -> str:
        return "Headless"

    def start_remediation(self, op: str, package: str) -> bool:
        """Print instructions; there is no surface to open."""
        entry = json.dumps({op: {package: "allowed"}})
        print(f"Usage access is required for '{package}'.")
        print(f"Grant it by adding {entry} to {self.access_path}")
        debug_log(f"remediation instructions printed for {op}/{package}")
        return True
