"""Shared enumerations used across the workspaces core."""

from __future__ import annotations

from enum import IntEnum

# -- Workbench ---------------------------------------------------------------


class WorkbenchState(IntEnum):
    """What kind of workspace a window was opened with."""

    EMPTY = 1
    FOLDER = 2
    WORKSPACE = 3
