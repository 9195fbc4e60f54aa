"""On-disk shapes of a ``.code-workspace`` file.

A stored folder is either path-form (``{"path": ..., "name"?: ...}``,
relative to the workspace file or absolute) or uri-form
(``{"uri": ..., "name"?: ...}``).  The raw dicts are turned into
``StoredPathFolder`` / ``StoredUriFolder`` once, at the parse boundary.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field


class StoredPathFolder(BaseModel):
    path: str
    name: str | None = None

    def to_json(self) -> dict[str, str]:
        data = {"path": self.path}
        if self.name:
            data["name"] = self.name
        return data


class StoredUriFolder(BaseModel):
    uri: str
    name: str | None = None

    def to_json(self) -> dict[str, str]:
        data = {"uri": self.uri}
        if self.name:
            data["name"] = self.name
        return data


StoredWorkspaceFolder = StoredPathFolder | StoredUriFolder


class StoredWorkspace(BaseModel):
    """Parsed workspace file, only the parts this package interprets."""

    folders: list[StoredWorkspaceFolder] = Field(default_factory=list)
    remote_authority: str | None = None
    transient: bool = False


def _valid_name(raw: dict[str, Any]) -> bool:
    name = raw.get("name")
    return not name or isinstance(name, str)


def to_stored_folder(raw: object) -> StoredWorkspaceFolder | None:
    """Classify a raw ``folders`` entry; ``None`` if it is neither form.

    An entry carrying both ``path`` and ``uri`` is path-form.
    """
    if not isinstance(raw, dict) or not _valid_name(raw):
        return None

    name = raw.get("name") or None
    if isinstance(raw.get("path"), str):
        return StoredPathFolder(path=raw["path"], name=name)
    if isinstance(raw.get("uri"), str):
        return StoredUriFolder(uri=raw["uri"], name=name)
    return None
