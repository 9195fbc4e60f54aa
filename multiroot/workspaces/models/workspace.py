"""Workspace and workspace folder model.

A ``Workspace`` owns an ordered, de-duplicated list of ``WorkspaceFolder``s
together with a prefix index used to find the folder containing a resource.
The two are always swapped together: ``replace_folders`` builds the new index
first and publishes folders and index in one assignment, so a reader never
sees one without the other.  The model is single-writer; callers serialize
``replace_folders``/``update``.
"""

from __future__ import annotations

import posixpath
from typing import Any, NamedTuple

from pydantic import BaseModel, ConfigDict

from multiroot.workspaces.base.prefix_tree import UriPrefixTree
from multiroot.workspaces.base.resources import (
    IgnorePathCasing,
    ext_uri,
    ext_uri_biased_ignore_path_case,
)
from multiroot.workspaces.base.uri import Uri, to_slashes
from multiroot.workspaces.models.enums import WorkbenchState
from multiroot.workspaces.models.stored import StoredUriFolder, StoredWorkspaceFolder

WORKSPACE_EXTENSION = "code-workspace"
WORKSPACE_SUFFIX = f".{WORKSPACE_EXTENSION}"
UNTITLED_WORKSPACE_NAME = "workspace.json"


class WorkspaceFolderCreationData(BaseModel):
    """A folder to add to a new or existing workspace."""

    model_config = ConfigDict(arbitrary_types_allowed=True)

    uri: Uri
    name: str | None = None


class WorkspaceFolder:
    """One root of a workspace.

    ``uri`` and ``index`` are fixed at construction; ``name`` may be renamed.
    ``raw`` keeps the stored entry the folder was resolved from, if any.
    """

    def __init__(self, uri: Uri, name: str, index: int, raw: StoredWorkspaceFolder | None = None) -> None:
        self._uri = uri
        self._index = index
        self.name = name
        self.raw = raw

    @property
    def uri(self) -> Uri:
        return self._uri

    @property
    def index(self) -> int:
        return self._index

    def to_resource(self, relative_path: str) -> Uri:
        """Absolute location of ``relative_path`` inside this folder (no existence check)."""
        return ext_uri.join_path(self._uri, relative_path)

    def to_json(self) -> dict[str, Any]:
        return {"uri": self._uri.to_json(), "name": self.name, "index": self._index}

    def __repr__(self) -> str:
        return f"WorkspaceFolder(uri={self._uri.to_string()!r}, name={self.name!r}, index={self._index})"


class _FolderSet(NamedTuple):
    folders: tuple[WorkspaceFolder, ...]
    index: UriPrefixTree[WorkspaceFolder]


def _build_folder_set(
    folders: list[WorkspaceFolder] | tuple[WorkspaceFolder, ...],
    ignore_path_casing: IgnorePathCasing,
) -> _FolderSet:
    index: UriPrefixTree[WorkspaceFolder] = UriPrefixTree(ignore_path_casing)
    for folder in folders:
        index.set(folder.uri, folder)
    return _FolderSet(tuple(folders), index)


class Workspace:
    """An opened workspace: id, folders, optional configuration file."""

    def __init__(
        self,
        id: str,
        folders: list[WorkspaceFolder] | None = None,
        transient: bool = False,
        configuration: Uri | None = None,
        ignore_path_casing: IgnorePathCasing = ext_uri_biased_ignore_path_case.ignore_path_casing,
    ) -> None:
        self._id = id
        self._transient = transient
        self._configuration = configuration
        self._ignore_path_casing = ignore_path_casing
        self._folder_set = _build_folder_set(folders or [], ignore_path_casing)

    # -- Properties ------------------------------------------------------------

    @property
    def id(self) -> str:
        return self._id

    @property
    def transient(self) -> bool:
        return self._transient

    @property
    def configuration(self) -> Uri | None:
        return self._configuration

    @configuration.setter
    def configuration(self, configuration: Uri | None) -> None:
        self._configuration = configuration

    @property
    def folders(self) -> list[WorkspaceFolder]:
        return list(self._folder_set.folders)

    @folders.setter
    def folders(self, folders: list[WorkspaceFolder]) -> None:
        self.replace_folders(folders)

    @property
    def workbench_state(self) -> WorkbenchState:
        if self._configuration is not None:
            return WorkbenchState.WORKSPACE
        if len(self._folder_set.folders) == 1:
            return WorkbenchState.FOLDER
        return WorkbenchState.EMPTY

    # -- Mutation --------------------------------------------------------------

    def replace_folders(self, folders: list[WorkspaceFolder]) -> None:
        """Swap in a new folder list and its containment index together."""
        self._folder_set = _build_folder_set(folders, self._ignore_path_casing)

    def update(self, workspace: Workspace) -> None:
        """Take over the state of ``workspace`` while keeping this object's identity."""
        self._id = workspace.id
        self._configuration = workspace.configuration
        self._transient = workspace.transient
        self._ignore_path_casing = workspace._ignore_path_casing
        self.replace_folders(list(workspace._folder_set.folders))

    # -- Query -----------------------------------------------------------------

    def get_folder(self, resource: Uri | None) -> WorkspaceFolder | None:
        """Folder that is the closest ancestor of (or equal to) ``resource``."""
        if resource is None:
            return None
        return self._folder_set.index.find_substr(resource)

    def is_inside(self, resource: Uri | None) -> bool:
        return self.get_folder(resource) is not None

    def to_resource(self, folder: WorkspaceFolder, relative_path: str) -> Uri:
        return folder.to_resource(relative_path)

    def to_json(self) -> dict[str, Any]:
        return {
            "id": self._id,
            "folders": [folder.to_json() for folder in self._folder_set.folders],
            "transient": self._transient,
            "configuration": self._configuration.to_json() if self._configuration else None,
        }


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def to_workspace_folder(resource: Uri) -> WorkspaceFolder:
    """Single folder at index 0, named after the resource."""
    return WorkspaceFolder(
        resource,
        ext_uri.basename_or_authority(resource),
        0,
        raw=StoredUriFolder(uri=resource.to_string()),
    )


def is_workspace(thing: object) -> bool:
    return isinstance(thing, Workspace)


def is_workspace_folder(thing: object) -> bool:
    return isinstance(thing, WorkspaceFolder)


def has_workspace_file_extension(path: str | Uri) -> bool:
    if isinstance(path, Uri):
        return ext_uri.extname(path) == WORKSPACE_SUFFIX
    return posixpath.splitext(to_slashes(path))[1] == WORKSPACE_SUFFIX


def is_untitled_workspace(path: Uri, untitled_workspaces_home: Uri) -> bool:
    """Whether ``path`` lives in the home of untitled (never saved) workspaces."""
    return ext_uri_biased_ignore_path_case.is_equal_or_parent(path, untitled_workspaces_home)
