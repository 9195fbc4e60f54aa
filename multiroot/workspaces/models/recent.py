"""Recently opened workspaces, folders and files, and backup descriptors."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

from multiroot.workspaces.base.uri import Uri
from multiroot.workspaces.models.identifiers import WorkspaceIdentifier

# -- Recents -----------------------------------------------------------------


class _Recent(BaseModel):
    model_config = ConfigDict(arbitrary_types_allowed=True, frozen=True)

    label: str | None = None
    remote_authority: str | None = None


class RecentWorkspace(_Recent):
    workspace: WorkspaceIdentifier


class RecentFolder(_Recent):
    folder_uri: Uri


class RecentFile(_Recent):
    file_uri: Uri


Recent = RecentWorkspace | RecentFolder | RecentFile


class RecentlyOpened(BaseModel):
    """Most recent first.  Workspaces and folders share one list."""

    workspaces: list[RecentWorkspace | RecentFolder] = Field(default_factory=list)
    files: list[RecentFile] = Field(default_factory=list)


def is_recent_workspace(recent: object) -> bool:
    return isinstance(recent, RecentWorkspace)


def is_recent_folder(recent: object) -> bool:
    return isinstance(recent, RecentFolder)


def is_recent_file(recent: object) -> bool:
    return isinstance(recent, RecentFile)


# -- Backups -----------------------------------------------------------------


class WorkspaceBackupInfo(BaseModel):
    model_config = ConfigDict(frozen=True)

    workspace: WorkspaceIdentifier
    remote_authority: str | None = None


class FolderBackupInfo(BaseModel):
    model_config = ConfigDict(arbitrary_types_allowed=True, frozen=True)

    folder_uri: Uri
    remote_authority: str | None = None


def is_workspace_backup_info(info: object) -> bool:
    return isinstance(info, WorkspaceBackupInfo)


def is_folder_backup_info(info: object) -> bool:
    return isinstance(info, FolderBackupInfo)
