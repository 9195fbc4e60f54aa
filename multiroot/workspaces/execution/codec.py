"""Stored-workspace codec -- workspace file text -> workspace folders.

Parsing is tolerant of comments and trailing commas, but a file without a
``folders`` array is not a workspace file and raises ``WorkspaceParseError``.
Individual folder entries are interpreted independently: an entry whose URI
cannot be parsed is logged and skipped.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from loguru import logger

from multiroot.workspaces.base import jsonc
from multiroot.workspaces.base.resources import ExtUri, IgnorePathCasing, ext_uri
from multiroot.workspaces.base.uri import Uri, UriError
from multiroot.workspaces.models.stored import (
    StoredPathFolder,
    StoredWorkspace,
    StoredWorkspaceFolder,
    to_stored_folder,
)
from multiroot.workspaces.models.workspace import Workspace, WorkspaceFolder

if TYPE_CHECKING:
    from loguru import Logger


class WorkspaceParseError(ValueError):
    """Text is not a valid workspace file."""

    def __init__(self, location: Uri | str | None = None, reason: str | None = None) -> None:
        where = str(location) if location is not None else "Content"
        message = f"{where} looks like an invalid workspace file."
        if reason:
            message = f"{message} ({reason})"
        super().__init__(message)


def parse_stored_workspace(raw_text: str, location: Uri | None = None) -> StoredWorkspace:
    """Parse workspace file text.

    Folder entries that are neither path-form nor uri-form are dropped.
    Raises ``WorkspaceParseError`` if the text has no ``folders`` array.
    """
    try:
        data = jsonc.parse(raw_text)
    except jsonc.JsoncSyntaxError as exc:
        raise WorkspaceParseError(location, str(exc)) from exc

    if not isinstance(data, dict) or not isinstance(data.get("folders"), list):
        raise WorkspaceParseError(location)

    folders = [folder for folder in map(to_stored_folder, data["folders"]) if folder is not None]
    remote_authority = data.get("remoteAuthority")
    return StoredWorkspace(
        folders=folders,
        remote_authority=remote_authority if isinstance(remote_authority, str) else None,
        transient=data.get("transient") is True,
    )


def resolve_stored_folder(stored: StoredWorkspaceFolder, relative_to: Uri, ext: ExtUri = ext_uri) -> Uri | None:
    """Absolute location of a stored folder; raises ``UriError`` for a bad uri-form entry."""
    if isinstance(stored, StoredPathFolder):
        if not stored.path:
            return None
        return ext.resolve_path(relative_to, stored.path)

    uri = Uri.parse(stored.uri)
    if not uri.path.startswith("/"):
        # workspace folders are always absolute
        uri = uri.with_(path="/" + uri.path)
    return uri


def to_workspace_folders(
    configured_folders: list[StoredWorkspaceFolder],
    workspace_config_file: Uri,
    ext: ExtUri = ext_uri,
    *,
    log: Logger = logger,
) -> list[WorkspaceFolder]:
    """Resolve stored folders against the directory of ``workspace_config_file``.

    The result is de-duplicated by comparison key (first occurrence wins) and
    indexed in order.  Entries with a malformed URI are skipped with a warning.
    """
    result: list[WorkspaceFolder] = []
    seen: set[str] = set()

    relative_to = ext.dirname(workspace_config_file)
    for configured in configured_folders:
        try:
            uri = resolve_stored_folder(configured, relative_to, ext)
        except UriError as exc:
            log.warning("Skipping workspace folder {}: {}", configured.to_json(), exc)
            continue
        if uri is None:
            continue

        comparison_key = ext.get_comparison_key(uri)
        if comparison_key in seen:
            continue
        seen.add(comparison_key)

        name = configured.name or ext.basename_or_authority(uri)
        result.append(WorkspaceFolder(uri, name, len(result), raw=configured))

    return result


def to_workspace(
    workspace_id: str,
    raw_text: str,
    workspace_config_file: Uri,
    ext: ExtUri = ext_uri,
    ignore_path_casing: IgnorePathCasing | None = None,
    *,
    log: Logger = logger,
) -> Workspace:
    """Build a ``Workspace`` from the text of its configuration file."""
    stored = parse_stored_workspace(raw_text, workspace_config_file)
    folders = to_workspace_folders(stored.folders, workspace_config_file, ext, log=log)
    return Workspace(
        workspace_id,
        folders,
        transient=stored.transient,
        configuration=workspace_config_file,
        ignore_path_casing=ignore_path_casing or ext.ignore_path_casing,
    )
