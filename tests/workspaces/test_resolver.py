"""Unit tests for the folder path resolver (folder location -> stored entry)."""

from __future__ import annotations

import pytest

from multiroot.workspaces.base.platform import OperatingSystem
from multiroot.workspaces.base.resources import ext_uri_for
from multiroot.workspaces.base.uri import Uri
from multiroot.workspaces.execution.resolver import get_stored_workspace_folder, use_slash_for_path
from multiroot.workspaces.models.stored import StoredPathFolder, StoredUriFolder

LINUX = OperatingSystem.LINUX
WINDOWS = OperatingSystem.WINDOWS
MACOS = OperatingSystem.MACOS

posix = ext_uri_for(LINUX)
windows = ext_uri_for(WINDOWS)
macos = ext_uri_for(MACOS)

TARGET = Uri.file("/ws", os=LINUX)


def _resolve(folder: Uri, force_absolute: bool = False, name: str | None = None, target: Uri = TARGET):
    return get_stored_workspace_folder(folder, force_absolute, name, target, ext=posix)


# ---------------------------------------------------------------------------
# Relative paths
# ---------------------------------------------------------------------------


def test_same_directory_is_dot() -> None:
    assert _resolve(Uri.file("/ws", os=LINUX)) == StoredPathFolder(path=".")


def test_child_and_sibling_paths() -> None:
    assert _resolve(Uri.file("/ws/src", os=LINUX)) == StoredPathFolder(path="src")
    assert _resolve(Uri.file("/other/lib", os=LINUX)) == StoredPathFolder(path="../other/lib")


def test_case_insensitive_paths_stay_relative() -> None:
    target = Uri.file("/Users/Me/ws", os=MACOS)

    def resolve(path: str):
        return get_stored_workspace_folder(Uri.file(path, os=MACOS), False, None, target, ext=macos)

    assert resolve("/Users/Me/WS") == StoredPathFolder(path=".")
    assert resolve("/users/me/ws/src") == StoredPathFolder(path="src")


def test_name_is_kept() -> None:
    assert _resolve(Uri.file("/ws/src", os=LINUX), name="Source") == StoredPathFolder(path="src", name="Source")


def test_windows_backslashes_when_slashes_disabled() -> None:
    stored = get_stored_workspace_folder(
        Uri.file("C:\\ws\\a\\b", os=WINDOWS),
        False,
        None,
        Uri.file("C:\\ws", os=WINDOWS),
        use_slash_for_path=False,
        ext=windows,
    )
    assert stored == StoredPathFolder(path="a\\b")


def test_windows_forward_slashes_when_enabled() -> None:
    stored = get_stored_workspace_folder(
        Uri.file("C:\\ws\\a\\b", os=WINDOWS),
        False,
        None,
        Uri.file("C:\\ws", os=WINDOWS),
        use_slash_for_path=True,
        ext=windows,
    )
    assert stored == StoredPathFolder(path="a/b")


# ---------------------------------------------------------------------------
# Absolute paths
# ---------------------------------------------------------------------------


def test_force_absolute_file() -> None:
    assert _resolve(Uri.file("/ws/src", os=LINUX), force_absolute=True) == StoredPathFolder(path="/ws/src")


def test_force_absolute_windows_normalizes_drive() -> None:
    folder = Uri.file("c:\\ws\\src", os=WINDOWS)
    target = Uri.file("C:\\other", os=WINDOWS)

    backslashes = get_stored_workspace_folder(folder, True, None, target, use_slash_for_path=False, ext=windows)
    assert backslashes == StoredPathFolder(path="C:\\ws\\src")

    slashes = get_stored_workspace_folder(folder, True, None, target, use_slash_for_path=True, ext=windows)
    assert slashes == StoredPathFolder(path="C:/ws/src")


def test_windows_other_drive_falls_back_to_absolute() -> None:
    stored = get_stored_workspace_folder(
        Uri.file("D:\\data", os=WINDOWS),
        False,
        None,
        Uri.file("C:\\ws", os=WINDOWS),
        ext=windows,
    )
    assert stored == StoredPathFolder(path="D:\\data")


def test_remote_same_authority_uses_raw_path() -> None:
    target = Uri.parse("vscode-remote://ssh-remote+box/home/u")
    folder = Uri.parse("vscode-remote://SSH-Remote+Box/srv/data")
    assert _resolve(folder, force_absolute=True, target=target) == StoredPathFolder(path="/srv/data")


def test_remote_other_authority_uses_uri() -> None:
    target = Uri.parse("vscode-remote://ssh-remote+box/home/u")
    folder = Uri.parse("vscode-remote://wsl+ubuntu/home/u/p")
    stored = _resolve(folder, target=target, name="p")
    assert stored == StoredUriFolder(uri="vscode-remote://wsl+ubuntu/home/u/p", name="p")


# ---------------------------------------------------------------------------
# Different scheme
# ---------------------------------------------------------------------------


@pytest.mark.parametrize("force_absolute", [True, False])
def test_different_scheme_is_uri_form(force_absolute: bool) -> None:
    folder = Uri.parse("vscode-remote://ssh-remote+box/home/u/my project")
    stored = _resolve(folder, force_absolute=force_absolute)
    assert stored == StoredUriFolder(uri="vscode-remote://ssh-remote+box/home/u/my project")


# ---------------------------------------------------------------------------
# Slash convention
# ---------------------------------------------------------------------------


def test_use_slash_for_path() -> None:
    assert use_slash_for_path([], LINUX) is True
    assert use_slash_for_path([StoredPathFolder(path="a\\b")], WINDOWS) is False
    assert use_slash_for_path([StoredPathFolder(path="a\\b"), StoredPathFolder(path="c/d")], WINDOWS) is True
    assert use_slash_for_path([StoredUriFolder(uri="file:///c:/x")], WINDOWS) is False
