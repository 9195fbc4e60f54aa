"""Recently opened list <-> persisted storage data.

Three generations of the storage format exist:

- current (``entries``): one object per recent, kind given by which of
  ``workspace`` / ``folderUri`` / ``fileUri`` is present, checked in that
  order.
- legacy (``workspaces3`` + ``files2``, with optional parallel
  ``workspaceLabels`` / ``fileLabels``): workspaces are
  ``{id, configURIPath}`` objects, folders and files plain URI strings.

``restore_recently_opened`` reads all of them; ``to_store_data`` always writes
the current one.  Every stored entry is interpreted on its own: one that
fails (bad URI, wrong shape) is logged and dropped, the rest still restore.
"""

from __future__ import annotations

import json
from collections.abc import Callable, Sequence
from typing import TYPE_CHECKING, Any, TypeVar

from loguru import logger
from pydantic import BaseModel, ConfigDict, Field

from multiroot.workspaces.base.uri import Uri
from multiroot.workspaces.models.identifiers import WorkspaceIdentifier
from multiroot.workspaces.models.recent import (
    Recent,
    RecentFile,
    RecentFolder,
    RecentlyOpened,
    RecentWorkspace,
)

T = TypeVar("T")

if TYPE_CHECKING:
    from loguru import Logger

# ---------------------------------------------------------------------------
# Serialized shapes (current schema)
# ---------------------------------------------------------------------------


class _SerializedRecent(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    label: str | None = None
    remote_authority: str | None = Field(default=None, alias="remoteAuthority")


class SerializedWorkspaceRef(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    id: str
    config_path: str = Field(alias="configPath")


class SerializedRecentWorkspace(_SerializedRecent):
    workspace: SerializedWorkspaceRef


class SerializedRecentFolder(_SerializedRecent):
    folder_uri: str = Field(alias="folderUri")


class SerializedRecentFile(_SerializedRecent):
    file_uri: str = Field(alias="fileUri")


class SerializedLegacyWorkspace(BaseModel):
    id: str
    configURIPath: str  # noqa: N815


# ---------------------------------------------------------------------------
# Restore
# ---------------------------------------------------------------------------


def _restore_gracefully(
    entries: Sequence[T],
    interpret: Callable[[T, int], Recent],
    log: Logger,
) -> list[Recent]:
    """Interpret each entry independently, logging and skipping the ones that fail."""
    restored: list[Recent] = []
    for index, entry in enumerate(entries):
        try:
            restored.append(interpret(entry, index))
        except (ValueError, TypeError) as exc:
            log.warning("Error restoring recent entry {}: {}. Skip entry.", json.dumps(entry, default=str), exc)
    return restored


def _restore_entry(entry: Any, _index: int) -> Recent:
    if not isinstance(entry, dict):
        raise TypeError(f"Recent entry must be an object, got {type(entry).__name__}")

    # key presence decides the kind: workspace > folderUri > fileUri
    if "workspace" in entry:
        ws = SerializedRecentWorkspace.model_validate(entry)
        return RecentWorkspace(
            workspace=WorkspaceIdentifier(id=ws.workspace.id, config_path=Uri.parse(ws.workspace.config_path)),
            label=ws.label,
            remote_authority=ws.remote_authority,
        )
    if "folderUri" in entry:
        folder = SerializedRecentFolder.model_validate(entry)
        return RecentFolder(
            folder_uri=Uri.parse(folder.folder_uri), label=folder.label, remote_authority=folder.remote_authority
        )
    if "fileUri" in entry:
        file = SerializedRecentFile.model_validate(entry)
        return RecentFile(file_uri=Uri.parse(file.file_uri), label=file.label, remote_authority=file.remote_authority)

    raise ValueError("Recent entry has neither 'workspace', 'folderUri' nor 'fileUri'")


def _legacy_label(labels: Any, index: int) -> str | None:
    if isinstance(labels, list) and index < len(labels):
        label = labels[index]
        if isinstance(label, str) and label:
            return label
    return None


def _restore_legacy(data: dict[str, Any], log: Logger) -> list[Recent]:
    restored: list[Recent] = []

    workspace_labels = data.get("workspaceLabels")
    file_labels = data.get("fileLabels")

    def interpret_workspace(entry: Any, index: int) -> Recent:
        label = _legacy_label(workspace_labels, index)
        if isinstance(entry, dict):
            legacy = SerializedLegacyWorkspace.model_validate(entry)
            return RecentWorkspace(
                workspace=WorkspaceIdentifier(id=legacy.id, config_path=Uri.parse(legacy.configURIPath)),
                label=label,
            )
        if isinstance(entry, str):
            return RecentFolder(folder_uri=Uri.parse(entry), label=label)
        raise TypeError(f"Legacy workspace entry must be an object or string, got {type(entry).__name__}")

    def interpret_file(entry: Any, index: int) -> Recent:
        if not isinstance(entry, str):
            raise TypeError(f"Legacy file entry must be a string, got {type(entry).__name__}")
        return RecentFile(file_uri=Uri.parse(entry), label=_legacy_label(file_labels, index))

    if isinstance(data.get("workspaces3"), list):
        restored.extend(_restore_gracefully(data["workspaces3"], interpret_workspace, log))
    if isinstance(data.get("files2"), list):
        restored.extend(_restore_gracefully(data["files2"], interpret_file, log))
    return restored


def restore_recently_opened(data: dict[str, Any] | None, log: Logger = logger) -> RecentlyOpened:
    """Restore the recently opened list from storage data of any generation.

    ``None`` (nothing stored yet) restores to an empty list.  Never raises
    because of an individual entry.
    """
    result = RecentlyOpened()
    if not data or not isinstance(data, dict):
        return result

    if isinstance(data.get("entries"), list):
        restored = _restore_gracefully(data["entries"], _restore_entry, log)
    else:
        restored = _restore_legacy(data, log)

    for recent in restored:
        if isinstance(recent, RecentFile):
            result.files.append(recent)
        else:
            result.workspaces.append(recent)
    return result


# ---------------------------------------------------------------------------
# Store
# ---------------------------------------------------------------------------


def _with_metadata(entry: dict[str, Any], recent: Recent) -> dict[str, Any]:
    if recent.label is not None:
        entry["label"] = recent.label
    if recent.remote_authority is not None:
        entry["remoteAuthority"] = recent.remote_authority
    return entry


def to_store_data(recents: RecentlyOpened) -> dict[str, Any]:
    """Serialize to the current ``entries`` schema: workspaces and folders first, then files."""
    entries: list[dict[str, Any]] = []

    for recent in recents.workspaces:
        if isinstance(recent, RecentFolder):
            entry: dict[str, Any] = {"folderUri": recent.folder_uri.to_string()}
        else:
            entry = {
                "workspace": {"id": recent.workspace.id, "configPath": recent.workspace.config_path.to_string()}
            }
        entries.append(_with_metadata(entry, recent))

    for recent in recents.files:
        entries.append(_with_metadata({"fileUri": recent.file_uri.to_string()}, recent))

    return {"entries": entries}
