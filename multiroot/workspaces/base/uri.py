"""Uniform resource identifiers for workspace folders, files and configs.

A ``Uri`` is split into ``scheme://authority/path?query#fragment`` with every
component stored percent-decoded.  Serialization re-encodes components (or,
with ``skip_encoding``, only the characters that would change the meaning of
the string).

Filesystem conversions (``Uri.file`` and ``Uri.fs_path``) take the path
convention as an explicit ``os`` argument so that Windows behaviour can be
exercised on any host.
"""

from __future__ import annotations

import re
from collections.abc import Callable
from dataclasses import dataclass, replace
from typing import Any
from urllib.parse import quote, unquote

from pydantic import GetCoreSchemaHandler
from pydantic_core import CoreSchema, core_schema

from multiroot.workspaces.base.platform import OperatingSystem, host_os


class UriError(ValueError):
    """A location string or component set does not form a valid URI."""


class Schemas:
    """Well-known URI schemes."""

    FILE = "file"
    VSCODE_REMOTE = "vscode-remote"
    UNTITLED = "untitled"
    HTTP = "http"
    HTTPS = "https"


_URI_REGEX = re.compile(r"^(([^:/?#]+?):)?(//([^/?#]*))?([^?#]*)(\?([^#]*))?(#(.*))?")
_SCHEME_PATTERN = re.compile(r"^\w[\w\d+.-]*$")
_DRIVE_LETTER_PATH = re.compile(r"^/[A-Za-z]:")


def _check_component(scheme: str, authority: str, path: str) -> None:
    if scheme and not _SCHEME_PATTERN.match(scheme):
        raise UriError(f"Scheme contains illegal characters: {scheme!r}")

    if path:
        if authority:
            if not path.startswith("/"):
                raise UriError("If a URI contains an authority component, then the path component must begin with '/'")
        elif path.startswith("//"):
            raise UriError("If a URI does not contain an authority component, the path cannot begin with '//'")


def _reference_resolution(scheme: str, path: str) -> str:
    # file, http and https paths are always absolute
    if scheme in (Schemas.FILE, Schemas.HTTP, Schemas.HTTPS):
        if not path:
            return "/"
        if not path.startswith("/"):
            return "/" + path
    return path


# (component, allow_slash) -> encoded component
Encoder = Callable[[str, bool], str]


def _encode(component: str, allow_slash: bool) -> str:
    return quote(component, safe="/" if allow_slash else "")


def _encode_minimal(component: str, allow_slash: bool) -> str:
    # slashes are never escaped here, allow_slash only matches the Encoder shape
    return component.replace("#", "%23").replace("?", "%3F")


def _lower_drive_letter(path: str) -> str:
    if len(path) >= 3 and path[0] == "/" and path[2] == ":" and "A" <= path[1] <= "Z":
        return f"/{path[1].lower()}:{path[3:]}"
    if len(path) >= 2 and path[1] == ":" and "A" <= path[0] <= "Z":
        return f"{path[0].lower()}:{path[2:]}"
    return path


@dataclass(frozen=True)
class Uri:
    """Immutable URI value.  Construct through ``parse``, ``file`` or ``from_components``."""

    scheme: str
    authority: str = ""
    path: str = ""
    query: str = ""
    fragment: str = ""

    def __post_init__(self) -> None:
        _check_component(self.scheme, self.authority, self.path)

    @classmethod
    def __get_pydantic_core_schema__(cls, source: Any, handler: GetCoreSchemaHandler) -> CoreSchema:
        # models hold Uri values as they are, components were checked on construction
        return core_schema.is_instance_schema(cls)

    # -- Construction ----------------------------------------------------------

    @classmethod
    def parse(cls, value: str, *, strict: bool = False) -> Uri:
        """Parse a URI string.  Raises ``UriError`` on an invalid scheme or path."""
        if not isinstance(value, str):
            raise UriError(f"Expected a URI string, got {type(value).__name__}")

        match = _URI_REGEX.match(value)
        if match is None:  # pragma: no cover - the regex matches any string
            raise UriError(f"Cannot parse URI: {value!r}")

        scheme = match.group(2) or ""
        if not scheme:
            if strict:
                raise UriError(f"Scheme is missing: {value!r}")
            scheme = Schemas.FILE

        authority = unquote(match.group(4) or "")
        path = _reference_resolution(scheme, unquote(match.group(5) or ""))
        return cls(
            scheme=scheme,
            authority=authority,
            path=path,
            query=unquote(match.group(7) or ""),
            fragment=unquote(match.group(9) or ""),
        )

    @classmethod
    def file(cls, path: str, *, os: OperatingSystem | None = None) -> Uri:
        """Build a ``file`` URI from a filesystem path.

        On Windows, backslashes become slashes and ``\\\\server\\share`` paths
        turn into a URI with ``server`` as authority.
        """
        os = os or host_os()
        authority = ""

        if os.is_windows:
            path = path.replace("\\", "/")

        # UNC: //server/share
        if path.startswith("//"):
            idx = path.find("/", 2)
            if idx == -1:
                authority = path[2:]
                path = "/"
            else:
                authority = path[2:idx]
                path = path[idx:] or "/"

        return cls(scheme=Schemas.FILE, authority=authority, path=_reference_resolution(Schemas.FILE, path))

    @classmethod
    def from_components(cls, data: Uri | dict[str, Any]) -> Uri:
        """Revive a URI from its serialized components (``to_json`` output)."""
        if isinstance(data, Uri):
            return data
        if not isinstance(data, dict) or not isinstance(data.get("scheme"), str):
            raise UriError(f"Not serialized URI components: {data!r}")
        return cls(
            scheme=data["scheme"],
            authority=data.get("authority") or "",
            path=data.get("path") or "",
            query=data.get("query") or "",
            fragment=data.get("fragment") or "",
        )

    # -- Derivation ------------------------------------------------------------

    def with_(self, **changes: str) -> Uri:
        """Return a copy with the given components replaced."""
        if not changes:
            return self
        return replace(self, **changes)

    def fs_path(self, *, os: OperatingSystem | None = None, keep_drive_letter_casing: bool = False) -> str:
        """Filesystem path for this URI in the given path convention.

        Drive letters are lower-cased unless ``keep_drive_letter_casing``;
        UNC paths are produced when the URI carries an authority.
        """
        os = os or host_os()
        if self.authority and len(self.path) > 1 and self.scheme == Schemas.FILE:
            value = f"//{self.authority}{self.path}"
        elif _DRIVE_LETTER_PATH.match(self.path):
            drive = self.path[1] if keep_drive_letter_casing else self.path[1].lower()
            value = drive + self.path[2:]
        else:
            value = self.path

        if os.is_windows:
            value = value.replace("/", "\\")
        return value

    # -- Serialization ---------------------------------------------------------

    def to_string(self, *, skip_encoding: bool = False) -> str:
        encoder: Encoder = _encode_minimal if skip_encoding else _encode
        parts: list[str] = []

        if self.scheme:
            parts.append(self.scheme + ":")
        if self.authority or self.scheme == Schemas.FILE:
            parts.append("//")

        if self.authority:
            authority = self.authority
            userinfo, sep, rest = authority.partition("@")
            if sep:
                user, colon, password = userinfo.partition(":")
                parts.append(encoder(user, False))
                if colon:
                    parts.append(":" + encoder(password, False))
                parts.append("@")
                authority = rest
            authority = authority.lower()
            host, colon, port = authority.partition(":")
            parts.append(encoder(host, False))
            if colon:
                parts.append(":" + port)

        if self.path:
            parts.append(encoder(_lower_drive_letter(self.path), True))
        if self.query:
            parts.append("?" + encoder(self.query, False))
        if self.fragment:
            parts.append("#" + (self.fragment if skip_encoding else _encode(self.fragment, False)))

        return "".join(parts)

    def to_json(self) -> dict[str, str]:
        data = {"scheme": self.scheme}
        for key in ("authority", "path", "query", "fragment"):
            value = getattr(self, key)
            if value:
                data[key] = value
        return data

    def __str__(self) -> str:
        return self.to_string()


def is_uri(thing: object) -> bool:
    return isinstance(thing, Uri)


# ---------------------------------------------------------------------------
# Path helpers
# ---------------------------------------------------------------------------


def has_drive_letter(path: str, os: OperatingSystem | None = None) -> bool:
    os = os or host_os()
    return os.is_windows and len(path) >= 2 and path[0].isascii() and path[0].isalpha() and path[1] == ":"


def normalize_drive_letter(path: str, os: OperatingSystem | None = None) -> str:
    """Upper-case the drive letter of a Windows path (``c:\\x`` -> ``C:\\x``)."""
    if has_drive_letter(path, os):
        return path[0].upper() + path[1:]
    return path


def to_slashes(path: str) -> str:
    return path.replace("\\", "/")


def get_remote_authority(uri: Uri) -> str | None:
    """Authority of a remote resource, ``None`` for local resources."""
    return uri.authority if uri.scheme == Schemas.VSCODE_REMOTE else None
