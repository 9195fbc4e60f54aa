"""Path operations on URIs that honour a case-sensitivity policy.

``ExtUri`` bundles comparison, containment and path arithmetic for URIs.
Whether a URI's path is compared case-insensitively is decided per URI by
the injected ``ignore_path_casing`` callable, so the same code serves
case-sensitive (Linux), case-preserving (macOS, Windows) and remote file
systems.

``file`` URIs are handled through the native path module of the configured
path convention (``ntpath`` for Windows, ``posixpath`` otherwise); every
other scheme uses POSIX path semantics on the URI path.
"""

from __future__ import annotations

import ntpath
import posixpath
from collections.abc import Callable

from multiroot.workspaces.base.platform import OperatingSystem, host_os
from multiroot.workspaces.base.uri import Schemas, Uri, to_slashes

IgnorePathCasing = Callable[[Uri], bool]


def is_equal_authority(a1: str | None, a2: str | None) -> bool:
    """Authorities compare case-insensitively; two missing authorities are equal."""
    return a1 == a2 or (a1 is not None and a2 is not None and a1.lower() == a2.lower())


def is_equal_or_parent_path(base: str, parent_candidate: str, ignore_case: bool, separator: str = "/") -> bool:
    """Return ``True`` if ``parent_candidate`` equals ``base`` or is one of its ancestors."""
    if base == parent_candidate:
        return True
    if not base or not parent_candidate:
        return False
    if len(parent_candidate) > len(base):
        return False

    if ignore_case:
        if not base.lower().startswith(parent_candidate.lower()):
            return False
        if len(parent_candidate) == len(base):
            return True
        sep_offset = len(parent_candidate)
        if parent_candidate.endswith(separator):
            sep_offset -= 1
        return base[sep_offset] == separator

    if not parent_candidate.endswith(separator):
        parent_candidate += separator
    return base.startswith(parent_candidate)


def _posix_basename(path: str) -> str:
    return posixpath.basename(path.rstrip("/"))


def _posix_dirname(path: str) -> str:
    stripped = path.rstrip("/")
    if not stripped:
        return "/" if path.startswith("/") else "."
    return posixpath.dirname(stripped) or "."


def _adopt_prefix_casing(from_path: str, to_path: str) -> str:
    """Give ``from_path`` the casing of ``to_path`` over their case-insensitive common prefix."""
    i = 0
    for a, b in zip(from_path, to_path):
        if a != b and a.lower() != b.lower():
            break
        i += 1
    return to_path[:i] + from_path[i:]


def _posix_resolve(base: str, path: str) -> str:
    return posixpath.normpath(posixpath.join(base or "/", path))


class ExtUri:
    """URI path operations bound to a case policy and a path convention."""

    def __init__(self, ignore_path_casing: IgnorePathCasing, os: OperatingSystem | None = None) -> None:
        self.ignore_path_casing = ignore_path_casing
        self.os = os or host_os()

    @property
    def _fs(self):
        return ntpath if self.os.is_windows else posixpath

    def _original_fs_path(self, uri: Uri) -> str:
        return uri.fs_path(os=self.os, keep_drive_letter_casing=True)

    def _file_path(self, fs_path: str) -> str:
        return Uri.file(fs_path, os=self.os).path

    # -- Comparison ------------------------------------------------------------

    def get_comparison_key(self, uri: Uri, ignore_fragment: bool = False) -> str:
        changes: dict[str, str] = {}
        if self.ignore_path_casing(uri):
            changes["path"] = uri.path.lower()
        if ignore_fragment:
            changes["fragment"] = ""
        return uri.with_(**changes).to_string()

    def compare(self, uri1: Uri, uri2: Uri, ignore_fragment: bool = False) -> int:
        if uri1 is uri2:
            return 0
        key1 = self.get_comparison_key(uri1, ignore_fragment)
        key2 = self.get_comparison_key(uri2, ignore_fragment)
        return (key1 > key2) - (key1 < key2)

    def is_equal(self, uri1: Uri | None, uri2: Uri | None, ignore_fragment: bool = False) -> bool:
        if uri1 is uri2:
            return True
        if uri1 is None or uri2 is None:
            return False
        return self.get_comparison_key(uri1, ignore_fragment) == self.get_comparison_key(uri2, ignore_fragment)

    def is_equal_authority(self, a1: str | None, a2: str | None) -> bool:
        return is_equal_authority(a1, a2)

    def is_equal_or_parent(self, base: Uri, parent_candidate: Uri, ignore_fragment: bool = False) -> bool:
        """Return ``True`` if ``parent_candidate`` is ``base`` or one of its ancestors."""
        if base.scheme != parent_candidate.scheme:
            return False

        same_tail = base.query == parent_candidate.query and (
            ignore_fragment or base.fragment == parent_candidate.fragment
        )
        if base.scheme == Schemas.FILE:
            return same_tail and is_equal_or_parent_path(
                self._original_fs_path(base),
                self._original_fs_path(parent_candidate),
                self.ignore_path_casing(base),
                "\\" if self.os.is_windows else "/",
            )
        if is_equal_authority(base.authority, parent_candidate.authority):
            return same_tail and is_equal_or_parent_path(
                base.path, parent_candidate.path, self.ignore_path_casing(base), "/"
            )
        return False

    # -- Path parts ------------------------------------------------------------

    def basename(self, uri: Uri) -> str:
        return _posix_basename(uri.path)

    def basename_or_authority(self, uri: Uri) -> str:
        return self.basename(uri) or uri.authority

    def extname(self, uri: Uri) -> str:
        return posixpath.splitext(self.basename(uri))[1]

    def dirname(self, uri: Uri) -> Uri:
        if not uri.path:
            return uri

        if uri.scheme == Schemas.FILE:
            dirname = self._file_path(self._fs.dirname(self._original_fs_path(uri)))
        else:
            dirname = _posix_dirname(uri.path)
            if uri.authority and dirname and not dirname.startswith("/"):
                dirname = "/"
        return uri.with_(path=dirname)

    # -- Path arithmetic -------------------------------------------------------

    def join_path(self, uri: Uri, *fragments: str) -> Uri:
        """Append path fragments to ``uri`` and normalize the result."""
        # fragments always append, a leading slash does not restart at the root
        joined = "/".join([uri.path or "/", *(to_slashes(fragment) for fragment in fragments)])
        normalized = posixpath.normpath(joined)
        if normalized.startswith("//"):
            normalized = "/" + normalized.lstrip("/")
        return uri.with_(path=normalized)

    def normalize_path(self, uri: Uri) -> Uri:
        if not uri.path:
            return uri

        if uri.scheme == Schemas.FILE:
            normalized = self._file_path(self._fs.normpath(self._original_fs_path(uri)))
        else:
            normalized = posixpath.normpath(uri.path)
        return uri.with_(path=normalized)

    def resolve_path(self, base: Uri, path: str) -> Uri:
        """Resolve ``path`` (absolute or relative) against the directory ``base``."""
        if base.scheme == Schemas.FILE:
            fs = self._fs
            resolved = fs.normpath(fs.join(self._original_fs_path(base), path))
            new_uri = Uri.file(resolved, os=self.os)
            return base.with_(authority=new_uri.authority, path=new_uri.path)

        return base.with_(path=_posix_resolve(base.path, to_slashes(path)))

    def relative_path(self, base: Uri, target: Uri) -> str | None:
        """Relative path from ``base`` to ``target`` using ``/`` separators.

        Returns ``""`` when both are equal and ``None`` when no relative form
        exists (different scheme, authority or Windows drive).
        """
        if base.scheme != target.scheme or not is_equal_authority(base.authority, target.authority):
            return None

        if base.scheme == Schemas.FILE:
            fs = self._fs
            from_fs, to_fs = self._original_fs_path(base), self._original_fs_path(target)
            if self.ignore_path_casing(base):
                from_fs = _adopt_prefix_casing(from_fs, to_fs)
            try:
                relative = fs.relpath(to_fs, from_fs)
            except ValueError:
                return None
            if relative == ".":
                return ""
            return to_slashes(relative) if self.os.is_windows else relative

        from_path = base.path or "/"
        to_path = target.path or "/"
        if self.ignore_path_casing(base):
            from_path = _adopt_prefix_casing(from_path, to_path)

        relative = posixpath.relpath(to_path, from_path)
        return "" if relative == "." else relative


ext_uri = ExtUri(lambda _: False)
"""Case-sensitive path comparison for every scheme."""

ext_uri_ignore_path_case = ExtUri(lambda _: True)
"""Case-insensitive path comparison for every scheme."""

ext_uri_biased_ignore_path_case = ExtUri(
    lambda uri: uri.scheme != Schemas.FILE or host_os() != OperatingSystem.LINUX
)
"""Ignores path casing except for ``file`` URIs on Linux."""


def ext_uri_for(os: OperatingSystem) -> ExtUri:
    """ExtUri for ``file`` resources on the given platform.

    File paths are case-sensitive on Linux only; other schemes keep their case.
    """
    return ExtUri(lambda uri: uri.scheme == Schemas.FILE and os != OperatingSystem.LINUX, os=os)
