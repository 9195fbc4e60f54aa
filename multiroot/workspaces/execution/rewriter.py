"""Relocation rewriter -- rewrite a workspace file for a new save location.

Only the ``folders`` property (and a now redundant ``remoteAuthority``) is
touched; settings, comments and formatting elsewhere in the file survive
byte for byte.  The text is parsed before any edit is computed, so an invalid
workspace file raises ``WorkspaceParseError`` and nothing is produced.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from loguru import logger

from multiroot.workspaces.base import jsonc
from multiroot.workspaces.base.platform import OperatingSystem
from multiroot.workspaces.base.resources import ExtUri, ext_uri, is_equal_authority
from multiroot.workspaces.base.uri import Uri, UriError, get_remote_authority
from multiroot.workspaces.execution.codec import parse_stored_workspace
from multiroot.workspaces.execution.resolver import get_stored_workspace_folder, use_slash_for_path
from multiroot.workspaces.models.stored import StoredPathFolder, StoredWorkspaceFolder

if TYPE_CHECKING:
    from loguru import Logger


def _is_absolute_path(path: str, os: OperatingSystem) -> bool:
    if os.is_windows:
        return path.startswith(("/", "\\")) or (len(path) >= 3 and path[0].isalpha() and path[1:3] in (":/", ":\\"))
    return path.startswith("/")


def rewrite_workspace_file_for_new_location(
    raw_workspace_contents: str,
    config_path: Uri,
    is_from_untitled_workspace: bool,
    target_config_path: Uri,
    ext: ExtUri = ext_uri,
    formatting: jsonc.FormattingOptions | None = None,
    os: OperatingSystem | None = None,
    *,
    log: Logger = logger,
) -> str:
    """Return the workspace file content as it should be saved at ``target_config_path``.

    Folders are resolved against the directory of ``config_path`` and
    re-encoded against the directory of ``target_config_path``.  Untitled
    workspaces prefer relative paths; saved workspaces keep each entry's
    form (absolute path, relative path or uri).

    Raises ``WorkspaceParseError`` if the content is not a workspace file.
    """
    os = os or ext.os
    formatting = formatting or jsonc.FormattingOptions(eol=os.eol)
    stored_workspace = parse_stored_workspace(raw_workspace_contents, config_path)

    source_config_folder = ext.dirname(config_path)
    target_config_folder = ext.dirname(target_config_path)
    slash_for_path = use_slash_for_path(stored_workspace.folders, os)

    rewritten: list[StoredWorkspaceFolder] = []
    for folder in stored_workspace.folders:
        if isinstance(folder, StoredPathFolder):
            folder_uri = ext.resolve_path(source_config_folder, folder.path)
        else:
            try:
                folder_uri = Uri.parse(folder.uri)
            except UriError as exc:
                log.warning("Keeping unparsable workspace folder {} as is: {}", folder.to_json(), exc)
                rewritten.append(folder)
                continue

        if is_from_untitled_workspace:
            absolute = False
        else:
            absolute = not isinstance(folder, StoredPathFolder) or _is_absolute_path(folder.path, os)

        rewritten.append(
            get_stored_workspace_folder(
                folder_uri, absolute, folder.name, target_config_folder, slash_for_path, ext, os
            )
        )

    edits = jsonc.set_property(
        raw_workspace_contents, ["folders"], [folder.to_json() for folder in rewritten], formatting
    )
    new_content = jsonc.apply_edits(raw_workspace_contents, edits)

    # unsaved remote workspaces carry the authority, drop it once the file location implies it
    if is_equal_authority(stored_workspace.remote_authority, get_remote_authority(target_config_path)):
        edits = jsonc.remove_property(new_content, ["remoteAuthority"], formatting)
        new_content = jsonc.apply_edits(new_content, edits)

    return new_content
