"""Data models for the workspaces core."""

from multiroot.workspaces.models.enums import WorkbenchState
from multiroot.workspaces.models.identifiers import (
    AnyWorkspaceIdentifier,
    EmptyWorkspaceIdentifier,
    SingleFolderWorkspaceIdentifier,
    WorkspaceIdentifier,
)
from multiroot.workspaces.models.recent import (
    FolderBackupInfo,
    Recent,
    RecentFile,
    RecentFolder,
    RecentlyOpened,
    RecentWorkspace,
    WorkspaceBackupInfo,
)
from multiroot.workspaces.models.stored import (
    StoredPathFolder,
    StoredUriFolder,
    StoredWorkspace,
    StoredWorkspaceFolder,
)
from multiroot.workspaces.models.workspace import (
    Workspace,
    WorkspaceFolder,
    WorkspaceFolderCreationData,
)

__all__ = [
    # Identifiers
    "AnyWorkspaceIdentifier",
    "EmptyWorkspaceIdentifier",
    # Recents
    "FolderBackupInfo",
    "Recent",
    "RecentFile",
    "RecentFolder",
    "RecentWorkspace",
    "RecentlyOpened",
    "SingleFolderWorkspaceIdentifier",
    # Stored
    "StoredPathFolder",
    "StoredUriFolder",
    "StoredWorkspace",
    "StoredWorkspaceFolder",
    "WorkbenchState",
    # Workspace
    "Workspace",
    "WorkspaceBackupInfo",
    "WorkspaceFolder",
    "WorkspaceFolderCreationData",
    "WorkspaceIdentifier",
]
