"""Folder path resolver -- absolute folder location -> stored folder entry.

Given a folder and the directory of the workspace file it is stored in,
``get_stored_workspace_folder`` picks the most portable representation:

1. Different scheme than the workspace file: uri-form, always.
2. Unless absolute paths are forced: a path relative to the workspace
   file's directory (``.`` for the directory itself).
3. Otherwise (or when no relative form exists): an absolute path -- the
   native filesystem path for ``file`` folders, the raw URI path for other
   schemes on the same authority, and uri-form across authorities.

Windows gets special treatment for ``file`` folders: drive letters are
normalized to upper case and backslashes are used unless the workspace file
already uses forward slashes (see ``use_slash_for_path``).
"""

from __future__ import annotations

from multiroot.workspaces.base.platform import OperatingSystem, host_os
from multiroot.workspaces.base.resources import ExtUri, ext_uri
from multiroot.workspaces.base.uri import Schemas, Uri, normalize_drive_letter, to_slashes
from multiroot.workspaces.models.stored import (
    StoredPathFolder,
    StoredUriFolder,
    StoredWorkspaceFolder,
)


def get_stored_workspace_folder(
    folder_uri: Uri,
    force_absolute: bool,
    folder_name: str | None,
    target_config_folder_uri: Uri,
    use_slash_for_path: bool | None = None,
    ext: ExtUri = ext_uri,
    os: OperatingSystem | None = None,
) -> StoredWorkspaceFolder:
    """Compute the stored entry for ``folder_uri`` in a workspace file living in
    ``target_config_folder_uri``.

    Parameters
    ----------
    folder_uri:
        Absolute location of the workspace folder.
    force_absolute:
        Keep the path absolute even if a relative one could be computed.
    folder_name:
        Display name to store alongside the location (``None`` to omit).
    target_config_folder_uri:
        Directory of the workspace file the entry is written to.
    use_slash_for_path:
        Use ``/`` for file paths on Windows.  Defaults to ``True`` everywhere
        except Windows.
    ext:
        URI operations (case policy) used for the relative path computation.
    os:
        Path convention; defaults to the one of ``ext``.
    """
    os = os or ext.os
    if use_slash_for_path is None:
        use_slash_for_path = not os.is_windows

    if folder_uri.scheme != target_config_folder_uri.scheme:
        return StoredUriFolder(name=folder_name, uri=folder_uri.to_string(skip_encoding=True))

    folder_path = None if force_absolute else ext.relative_path(target_config_folder_uri, folder_uri)
    if folder_path is not None:
        if not folder_path:
            folder_path = "."
        elif os.is_windows and folder_uri.scheme == Schemas.FILE and not use_slash_for_path:
            folder_path = folder_path.replace("/", "\\")
        return StoredPathFolder(name=folder_name, path=folder_path)

    if folder_uri.scheme == Schemas.FILE:
        folder_path = folder_uri.fs_path(os=os)
        if os.is_windows:
            folder_path = normalize_drive_letter(folder_path, os)
            if use_slash_for_path:
                folder_path = to_slashes(folder_path)
    else:
        if not ext.is_equal_authority(folder_uri.authority, target_config_folder_uri.authority):
            return StoredUriFolder(name=folder_name, uri=folder_uri.to_string(skip_encoding=True))
        folder_path = folder_uri.path

    return StoredPathFolder(name=folder_name, path=folder_path or ".")


def use_slash_for_path(stored_folders: list[StoredWorkspaceFolder], os: OperatingSystem | None = None) -> bool:
    """Whether rewritten paths should use ``/``.

    Always on POSIX platforms; on Windows only if an existing path entry
    already does.
    """
    os = os or host_os()
    if os.is_windows:
        return any(isinstance(folder, StoredPathFolder) and "/" in folder.path for folder in stored_folders)
    return True
