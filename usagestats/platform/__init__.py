"""Platform detection and factory."""
import os
from typing import Optional
from .base import PlatformBase
from .desktop import DesktopPlatform
from .headless import HeadlessPlatform


_platform_instance: Optional[PlatformBase] = None


def detect_platform() -> PlatformBase:
    """
    Detect the session type and return the appropriate platform instance.

    A session with DISPLAY or WAYLAND_DISPLAY set gets the desktop
    platform (Qt access dialog), anything else the headless one.
    """
    global _platform_instance

    if _platform_instance is not None:
        return _platform_instance

    if os.environ.get("DISPLAY") or os.environ.get("WAYLAND_DISPLAY"):
        _platform_instance = DesktopPlatform()
    else:
        _platform_instance = HeadlessPlatform()

    print(f"Detected platform: {_platform_instance.name}")
    return _platform_instance


def get_platform() -> PlatformBase:
    """Get current platform instance (cached)."""
    return detect_platform()


__all__ = ["PlatformBase", "DesktopPlatform", "HeadlessPlatform", "get_platform", "detect_platform"]
