"""Recently opened history operations.

Pure functions over ``RecentlyOpened``: they return a new value and never
touch storage.  A recent is identified by its location (workspace file,
folder or file URI), compared through ``ExtUri.get_comparison_key``.
"""

from __future__ import annotations

from collections.abc import Iterable
from typing import TypeVar

from multiroot.workspaces.base.resources import ExtUri, ext_uri_biased_ignore_path_case
from multiroot.workspaces.base.uri import Uri
from multiroot.workspaces.models.recent import (
    Recent,
    RecentFile,
    RecentFolder,
    RecentlyOpened,
    RecentWorkspace,
)

R = TypeVar("R", bound=Recent)

DEFAULT_MAX_ENTRIES = 500


def recent_location(recent: Recent) -> Uri:
    """The URI that identifies a recent entry."""
    if isinstance(recent, RecentWorkspace):
        return recent.workspace.config_path
    if isinstance(recent, RecentFolder):
        return recent.folder_uri
    return recent.file_uri


def add_recently_opened(
    current: RecentlyOpened,
    recents: Iterable[Recent],
    max_entries: int = DEFAULT_MAX_ENTRIES,
    ext: ExtUri = ext_uri_biased_ignore_path_case,
) -> RecentlyOpened:
    """Put ``recents`` at the front of the history, most recent first.

    An existing entry for the same location is replaced by the new one.  Both
    lists are capped at ``max_entries``.
    """
    new_workspaces: list[RecentWorkspace | RecentFolder] = []
    new_files: list[RecentFile] = []
    for recent in recents:
        if isinstance(recent, RecentFile):
            new_files.append(recent)
        else:
            new_workspaces.append(recent)

    def merge(added: list[R], existing: list[R]) -> list[R]:
        merged: list[R] = []
        seen: set[str] = set()
        for recent in [*added, *existing]:
            key = ext.get_comparison_key(recent_location(recent))
            if key in seen:
                continue
            seen.add(key)
            merged.append(recent)
        return merged[:max_entries]

    return RecentlyOpened(
        workspaces=merge(new_workspaces, current.workspaces),
        files=merge(new_files, current.files),
    )


def remove_recently_opened(
    current: RecentlyOpened,
    locations: Iterable[Uri],
    ext: ExtUri = ext_uri_biased_ignore_path_case,
) -> RecentlyOpened:
    """Drop every entry whose location is one of ``locations``."""
    keys = {ext.get_comparison_key(location) for location in locations}
    return RecentlyOpened(
        workspaces=[r for r in current.workspaces if ext.get_comparison_key(recent_location(r)) not in keys],
        files=[r for r in current.files if ext.get_comparison_key(recent_location(r)) not in keys],
    )
