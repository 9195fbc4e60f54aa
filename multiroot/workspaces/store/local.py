"""Local filesystem recents store.

Stores the recently opened list as JSON under a unified data root with
optional namespace prefix::

    {data_root}/{prefix}/recently_opened.json

When prefix is None, the path collapses to::

    {data_root}/recently_opened.json

Uses ``anyio.to_thread.run_sync`` for non-blocking file I/O.  Writes are
atomic (temp file + rename), so a crash mid-write never leaves a truncated
file behind.  The file always holds the current ``entries`` schema; older
layouts are migrated on the next write.
"""

from __future__ import annotations

import contextlib
import json
import os
import tempfile
from functools import partial
from pathlib import Path

from anyio import to_thread
from loguru import logger

from multiroot.workspaces.base.uri import Uri
from multiroot.workspaces.managers.history import (
    DEFAULT_MAX_ENTRIES,
    add_recently_opened,
    remove_recently_opened,
)
from multiroot.workspaces.managers.recents import restore_recently_opened, to_store_data
from multiroot.workspaces.models.recent import Recent, RecentlyOpened

RECENTLY_OPENED_FILE = "recently_opened.json"


class LocalRecentsStore:
    """Local filesystem implementation of the RecentsStore protocol."""

    def __init__(
        self,
        data_root: str | Path,
        prefix: str | None = None,
        max_entries: int = DEFAULT_MAX_ENTRIES,
    ) -> None:
        base = Path(data_root)
        if prefix:
            base = base / prefix
        self._path = base / RECENTLY_OPENED_FILE
        self._max_entries = max_entries

    @property
    def path(self) -> Path:
        return self._path

    # -- Read ------------------------------------------------------------------

    async def read(self) -> RecentlyOpened:
        raw = await to_thread.run_sync(partial(_read_file, self._path))
        if raw is None:
            return RecentlyOpened()
        try:
            data = json.loads(raw)
        except json.JSONDecodeError as exc:
            logger.warning("Ignoring unreadable recently opened file {}: {}", self._path, exc)
            return RecentlyOpened()
        return restore_recently_opened(data)

    # -- Write -----------------------------------------------------------------

    async def write(self, recents: RecentlyOpened) -> None:
        data = json.dumps(to_store_data(recents), indent=2)
        await to_thread.run_sync(partial(_atomic_write, self._path, data))
        logger.debug(
            "Stored {} recent workspaces/folders and {} files in {}",
            len(recents.workspaces),
            len(recents.files),
            self._path,
        )

    async def add(self, recents: list[Recent]) -> RecentlyOpened:
        updated = add_recently_opened(await self.read(), recents, self._max_entries)
        await self.write(updated)
        return updated

    async def remove(self, locations: list[Uri]) -> RecentlyOpened:
        updated = remove_recently_opened(await self.read(), locations)
        await self.write(updated)
        return updated

    async def clear(self) -> None:
        await self.write(RecentlyOpened())


# -- Sync helpers (run in thread pool) -----------------------------------------


def _atomic_write(path: Path, data: str) -> None:
    """Write data atomically: temp file + rename.

    The temp file is created in the same directory so ``os.replace`` is
    atomic on POSIX.
    """
    path.parent.mkdir(parents=True, exist_ok=True)
    fd, tmp_path = tempfile.mkstemp(dir=path.parent, suffix=".tmp")
    try:
        with os.fdopen(fd, "w", encoding="utf-8") as f:
            f.write(data)
        os.replace(tmp_path, path)
    except BaseException:
        # Clean up temp file on any failure.
        with contextlib.suppress(OSError):
            os.unlink(tmp_path)
        raise


def _read_file(path: Path) -> str | None:
    """Read file contents, ``None`` if the file does not exist."""
    try:
        return path.read_text(encoding="utf-8")
    except FileNotFoundError:
        return None
