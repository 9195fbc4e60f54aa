"""Workspace identifiers.

Every workspace (multi-root, single folder or empty) has a unique ``id``; it
is not possible to open the same ``id`` in two windows.  The three kinds are
told apart by which location field they carry:

- ``SingleFolderWorkspaceIdentifier`` -- ``uri`` of the folder
- ``WorkspaceIdentifier`` -- ``config_path`` of the ``.code-workspace`` file
- ``EmptyWorkspaceIdentifier`` -- neither
"""

from __future__ import annotations

import hashlib
from typing import TYPE_CHECKING, Any

from pydantic import BaseModel, ConfigDict

from multiroot.workspaces.base.platform import OperatingSystem, host_os
from multiroot.workspaces.base.uri import Schemas, Uri

if TYPE_CHECKING:
    from multiroot.workspaces.models.workspace import Workspace


class _BaseIdentifier(BaseModel):
    model_config = ConfigDict(arbitrary_types_allowed=True, frozen=True)

    id: str


class SingleFolderWorkspaceIdentifier(_BaseIdentifier):
    """A single folder workspace: folder location + id."""

    uri: Uri

    def to_json(self) -> dict[str, Any]:
        return {"id": self.id, "uri": self.uri.to_json()}


class WorkspaceIdentifier(_BaseIdentifier):
    """A multi-root workspace: workspace file location + id."""

    config_path: Uri

    def to_json(self) -> dict[str, Any]:
        return {"id": self.id, "configPath": self.config_path.to_json()}


class EmptyWorkspaceIdentifier(_BaseIdentifier):
    """A window without folders."""

    def to_json(self) -> dict[str, Any]:
        return {"id": self.id}


AnyWorkspaceIdentifier = WorkspaceIdentifier | SingleFolderWorkspaceIdentifier | EmptyWorkspaceIdentifier


def is_single_folder_workspace_identifier(obj: object) -> bool:
    return isinstance(obj, SingleFolderWorkspaceIdentifier)


def is_workspace_identifier(obj: object) -> bool:
    return isinstance(obj, WorkspaceIdentifier)


def revive_identifier(identifier: dict[str, Any] | None) -> AnyWorkspaceIdentifier | None:
    """Turn a serialized identifier (URIs as components) back into a live one.

    ``uri`` wins over ``configPath``; an identifier with only an ``id`` is
    empty; anything else revives to ``None``.
    """
    if not identifier:
        return None

    if identifier.get("uri"):
        return SingleFolderWorkspaceIdentifier(id=identifier["id"], uri=Uri.from_components(identifier["uri"]))

    if identifier.get("configPath"):
        return WorkspaceIdentifier(id=identifier["id"], config_path=Uri.from_components(identifier["configPath"]))

    if identifier.get("id"):
        return EmptyWorkspaceIdentifier(id=identifier["id"])

    return None


def to_workspace_identifier(workspace: Workspace) -> WorkspaceIdentifier | SingleFolderWorkspaceIdentifier | None:
    """Identifier of an opened workspace, ``None`` for an empty window."""
    if workspace.configuration is not None:
        return WorkspaceIdentifier(id=workspace.id, config_path=workspace.configuration)

    if len(workspace.folders) == 1:
        return SingleFolderWorkspaceIdentifier(id=workspace.id, uri=workspace.folders[0].uri)

    return None


def get_workspace_identifier(config_path: Uri, os: OperatingSystem | None = None) -> WorkspaceIdentifier:
    """Identifier for a workspace file; the id is stable for a given location.

    Local paths are hashed case-insensitively except on Linux.
    """
    os = os or host_os()
    if config_path.scheme == Schemas.FILE:
        key = config_path.fs_path(os=os)
        if os != OperatingSystem.LINUX:
            key = key.lower()
    else:
        key = config_path.to_string()
    return WorkspaceIdentifier(id=hashlib.md5(key.encode("utf-8")).hexdigest(), config_path=config_path)  # noqa: S324
