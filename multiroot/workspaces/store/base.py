"""Recents store interface.

The store owns the persisted recently opened list.  Every mutation is
persisted immediately; the list is read back once at startup with ``read``.
The interface is async so that file I/O never blocks the caller's event loop.
"""

from __future__ import annotations

from typing import Protocol, runtime_checkable

from multiroot.workspaces.base.uri import Uri
from multiroot.workspaces.models.recent import Recent, RecentlyOpened


@runtime_checkable
class RecentsStore(Protocol):
    """Async protocol for reading and updating the recently opened list."""

    async def read(self) -> RecentlyOpened:
        """Restore the stored list.  Empty if nothing was stored yet."""
        ...

    async def write(self, recents: RecentlyOpened) -> None:
        """Replace the stored list."""
        ...

    async def add(self, recents: list[Recent]) -> RecentlyOpened:
        """Put entries at the front of the list and persist it."""
        ...

    async def remove(self, locations: list[Uri]) -> RecentlyOpened:
        """Drop entries for the given locations and persist the list."""
        ...

    async def clear(self) -> None:
        """Forget all recently opened entries."""
        ...
