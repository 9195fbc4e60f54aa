"""Platform path conventions."""

from __future__ import annotations

import sys
from enum import StrEnum


class OperatingSystem(StrEnum):
    """Path convention of the platform a workspace file is read or written on."""

    WINDOWS = "windows"
    MACOS = "macos"
    LINUX = "linux"

    @property
    def is_windows(self) -> bool:
        return self is OperatingSystem.WINDOWS

    @property
    def eol(self) -> str:
        return "\r\n" if self is OperatingSystem.WINDOWS else "\n"


def host_os() -> OperatingSystem:
    """Return the path convention of the running interpreter."""
    if sys.platform.startswith("win"):
        return OperatingSystem.WINDOWS
    if sys.platform == "darwin":
        return OperatingSystem.MACOS
    return OperatingSystem.LINUX
