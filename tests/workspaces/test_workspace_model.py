"""Unit tests for Workspace, WorkspaceFolder and workspace identifiers."""

from __future__ import annotations

import pytest

from multiroot.workspaces.base.platform import OperatingSystem
from multiroot.workspaces.base.uri import Uri
from multiroot.workspaces.models.enums import WorkbenchState
from multiroot.workspaces.models.identifiers import (
    EmptyWorkspaceIdentifier,
    SingleFolderWorkspaceIdentifier,
    WorkspaceIdentifier,
    get_workspace_identifier,
    revive_identifier,
    to_workspace_identifier,
)
from multiroot.workspaces.models.stored import StoredPathFolder, StoredUriFolder, to_stored_folder
from multiroot.workspaces.models.workspace import (
    Workspace,
    WorkspaceFolder,
    has_workspace_file_extension,
    is_untitled_workspace,
    to_workspace_folder,
)

# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _folder(path: str, index: int = 0, name: str | None = None) -> WorkspaceFolder:
    uri = Uri.parse(f"file://{path}")
    return WorkspaceFolder(uri, name or path.rsplit("/", 1)[-1], index)


def _workspace(*paths: str, ignore_case: bool = False) -> Workspace:
    folders = [_folder(path, i) for i, path in enumerate(paths)]
    return Workspace("ws-1", folders, ignore_path_casing=lambda _: ignore_case)


# ---------------------------------------------------------------------------
# Workspace
# ---------------------------------------------------------------------------


def test_get_folder_longest_ancestor() -> None:
    ws = _workspace("/ws", "/ws/nested")

    folder = ws.get_folder(Uri.parse("file:///ws/nested/src/main.py"))
    assert folder is not None
    assert folder.index == 1

    folder = ws.get_folder(Uri.parse("file:///ws/README.md"))
    assert folder is not None
    assert folder.index == 0


def test_get_folder_none() -> None:
    ws = _workspace("/ws")
    assert ws.get_folder(None) is None
    assert ws.get_folder(Uri.parse("file:///elsewhere/x")) is None
    assert ws.is_inside(Uri.parse("file:///ws/x"))
    assert not ws.is_inside(Uri.parse("file:///elsewhere/x"))


def test_get_folder_honours_case_policy() -> None:
    assert _workspace("/WS").get_folder(Uri.parse("file:///ws/x")) is None
    assert _workspace("/WS", ignore_case=True).get_folder(Uri.parse("file:///ws/x")) is not None


def test_replace_folders_rebuilds_index() -> None:
    ws = _workspace("/a")
    ws.replace_folders([_folder("/b")])

    assert [f.uri.path for f in ws.folders] == ["/b"]
    assert ws.get_folder(Uri.parse("file:///a/x")) is None
    assert ws.get_folder(Uri.parse("file:///b/x")) is not None


def test_folders_setter_replaces_folders() -> None:
    ws = _workspace("/a")
    ws.folders = [_folder("/c")]
    assert ws.get_folder(Uri.parse("file:///c/x")) is not None


def test_folders_returns_a_copy() -> None:
    ws = _workspace("/a")
    ws.folders.clear()
    assert len(ws.folders) == 1


def test_update_keeps_identity() -> None:
    ws = _workspace("/a")
    other = Workspace("ws-2", [_folder("/b")], transient=True, configuration=Uri.parse("file:///b/b.code-workspace"))

    same = ws
    ws.update(other)

    assert ws is same
    assert ws.id == "ws-2"
    assert ws.transient is True
    assert ws.configuration == Uri.parse("file:///b/b.code-workspace")
    assert ws.get_folder(Uri.parse("file:///b/x")) is not None
    assert ws.get_folder(Uri.parse("file:///a/x")) is None


def test_workbench_state() -> None:
    assert Workspace("e").workbench_state == WorkbenchState.EMPTY
    assert _workspace("/a").workbench_state == WorkbenchState.FOLDER
    assert _workspace("/a", "/b").workbench_state == WorkbenchState.EMPTY
    configured = Workspace("w", configuration=Uri.parse("file:///w.code-workspace"))
    assert configured.workbench_state == WorkbenchState.WORKSPACE


def test_to_resource() -> None:
    ws = _workspace("/ws")
    folder = ws.folders[0]
    assert ws.to_resource(folder, "src/../lib/x.py") == Uri.parse("file:///ws/lib/x.py")
    assert ws.to_resource(folder, "/etc/passwd") == Uri.parse("file:///ws/etc/passwd")


def test_workspace_to_json() -> None:
    ws = _workspace("/ws")
    assert ws.to_json() == {
        "id": "ws-1",
        "folders": [{"uri": {"scheme": "file", "path": "/ws"}, "name": "ws", "index": 0}],
        "transient": False,
        "configuration": None,
    }


def test_folder_uri_and_index_are_read_only() -> None:
    folder = _folder("/ws")
    with pytest.raises(AttributeError):
        folder.index = 3  # type: ignore[misc]
    folder.name = "renamed"
    assert folder.name == "renamed"


def test_to_workspace_folder() -> None:
    folder = to_workspace_folder(Uri.parse("vscode-remote://box/"))
    assert folder.name == "box"
    assert folder.index == 0
    assert isinstance(folder.raw, StoredUriFolder)


# ---------------------------------------------------------------------------
# Workspace file helpers
# ---------------------------------------------------------------------------


def test_has_workspace_file_extension() -> None:
    assert has_workspace_file_extension("/ws/project.code-workspace")
    assert has_workspace_file_extension(Uri.parse("file:///ws/project.code-workspace"))
    assert not has_workspace_file_extension("/ws/.code-workspace")
    assert not has_workspace_file_extension("/ws/project.json")


def test_is_untitled_workspace() -> None:
    home = Uri.parse("file:///data/Workspaces")
    assert is_untitled_workspace(Uri.parse("file:///data/Workspaces/123/workspace.json"), home)
    assert not is_untitled_workspace(Uri.parse("file:///ws/project.code-workspace"), home)


def test_to_stored_folder() -> None:
    assert to_stored_folder({"path": "src", "name": "Source"}) == StoredPathFolder(path="src", name="Source")
    assert to_stored_folder({"uri": "file:///x"}) == StoredUriFolder(uri="file:///x")
    # path wins over uri
    assert isinstance(to_stored_folder({"path": "a", "uri": "file:///b"}), StoredPathFolder)
    assert to_stored_folder({"name": "nothing"}) is None
    assert to_stored_folder({"path": "a", "name": 5}) is None
    assert to_stored_folder("src") is None


# ---------------------------------------------------------------------------
# Identifiers
# ---------------------------------------------------------------------------


def test_get_workspace_identifier_is_stable() -> None:
    config = Uri.parse("file:///ws/project.code-workspace")
    a = get_workspace_identifier(config, OperatingSystem.LINUX)
    b = get_workspace_identifier(config, OperatingSystem.LINUX)
    assert a.id == b.id
    assert a.config_path == config


def test_get_workspace_identifier_case() -> None:
    upper = Uri.file("C:\\WS\\p.code-workspace", os=OperatingSystem.WINDOWS)
    lower = Uri.file("c:\\ws\\p.code-workspace", os=OperatingSystem.WINDOWS)
    assert (
        get_workspace_identifier(upper, OperatingSystem.WINDOWS).id
        == get_workspace_identifier(lower, OperatingSystem.WINDOWS).id
    )

    upper = Uri.parse("file:///WS/p.code-workspace")
    lower = Uri.parse("file:///ws/p.code-workspace")
    assert (
        get_workspace_identifier(upper, OperatingSystem.LINUX).id
        != get_workspace_identifier(lower, OperatingSystem.LINUX).id
    )


def test_revive_identifier() -> None:
    folder = revive_identifier({"id": "1", "uri": {"scheme": "file", "path": "/ws"}})
    assert folder == SingleFolderWorkspaceIdentifier(id="1", uri=Uri.parse("file:///ws"))

    workspace = revive_identifier({"id": "2", "configPath": {"scheme": "file", "path": "/w.code-workspace"}})
    assert workspace == WorkspaceIdentifier(id="2", config_path=Uri.parse("file:///w.code-workspace"))

    assert revive_identifier({"id": "3"}) == EmptyWorkspaceIdentifier(id="3")
    assert revive_identifier(None) is None
    assert revive_identifier({}) is None


def test_identifier_json_roundtrip() -> None:
    identifier = WorkspaceIdentifier(id="2", config_path=Uri.parse("file:///w.code-workspace"))
    assert revive_identifier(identifier.to_json()) == identifier


def test_to_workspace_identifier() -> None:
    assert to_workspace_identifier(Workspace("e")) is None
    single = to_workspace_identifier(_workspace("/a"))
    assert isinstance(single, SingleFolderWorkspaceIdentifier)
    assert single.uri == Uri.parse("file:///a")

    configured = Workspace("w", configuration=Uri.parse("file:///w.code-workspace"))
    assert isinstance(to_workspace_identifier(configured), WorkspaceIdentifier)


# ---------------------------------------------------------------------------
# Predicates and descriptors
# ---------------------------------------------------------------------------


def test_type_predicates() -> None:
    from multiroot.workspaces.base.uri import is_uri
    from multiroot.workspaces.models.recent import (
        FolderBackupInfo,
        RecentFile,
        RecentFolder,
        WorkspaceBackupInfo,
        is_folder_backup_info,
        is_recent_file,
        is_recent_folder,
        is_recent_workspace,
        is_workspace_backup_info,
    )
    from multiroot.workspaces.models.workspace import WorkspaceFolderCreationData, is_workspace, is_workspace_folder

    uri = Uri.parse("file:///ws")
    identifier = WorkspaceIdentifier(id="w", config_path=Uri.parse("file:///w.code-workspace"))

    assert is_uri(uri) and not is_uri("file:///ws")
    assert is_workspace(_workspace("/ws")) and not is_workspace(uri)
    assert is_workspace_folder(_folder("/ws")) and not is_workspace_folder(uri)
    assert is_recent_folder(RecentFolder(folder_uri=uri))
    assert is_recent_file(RecentFile(file_uri=uri))
    assert not is_recent_workspace(RecentFile(file_uri=uri))

    assert is_workspace_backup_info(WorkspaceBackupInfo(workspace=identifier, remote_authority="box"))
    assert is_folder_backup_info(FolderBackupInfo(folder_uri=uri))
    assert not is_folder_backup_info(WorkspaceBackupInfo(workspace=identifier))

    assert WorkspaceFolderCreationData(uri=uri).name is None
