"""Segment trie keyed by URI, used to find the folder containing a resource.

Keys are broken into ``scheme``, ``authority`` and the non-empty path
segments.  Authorities always compare case-insensitively; path segments do so
when the injected policy says the URI's path casing is insignificant.
Query and fragment never take part in a key.
"""

from __future__ import annotations

from collections.abc import Iterator
from typing import Generic, TypeVar

from multiroot.workspaces.base.resources import IgnorePathCasing
from multiroot.workspaces.base.uri import Uri

T = TypeVar("T")


class _Node(Generic[T]):
    __slots__ = ("children", "has_value", "value")

    def __init__(self) -> None:
        self.children: dict[str, _Node[T]] = {}
        self.has_value = False
        self.value: T | None = None


class UriPrefixTree(Generic[T]):
    """Maps URIs to values with longest-ancestor lookup (``find_substr``)."""

    def __init__(self, ignore_path_casing: IgnorePathCasing) -> None:
        self._ignore_path_casing = ignore_path_casing
        self._root: _Node[T] = _Node()
        self._size = 0

    def _key(self, uri: Uri) -> list[str]:
        ignore_case = self._ignore_path_casing(uri)
        segments = [segment for segment in uri.path.split("/") if segment]
        if ignore_case:
            segments = [segment.lower() for segment in segments]
        return [uri.scheme, uri.authority.lower(), *segments]

    # -- Mutation --------------------------------------------------------------

    def set(self, uri: Uri, value: T) -> T | None:
        """Store ``value`` under ``uri`` and return the value it replaced, if any."""
        node = self._root
        for segment in self._key(uri):
            node = node.children.setdefault(segment, _Node())

        old = node.value if node.has_value else None
        if not node.has_value:
            self._size += 1
        node.has_value = True
        node.value = value
        return old

    def delete(self, uri: Uri) -> None:
        node = self._root
        for segment in self._key(uri):
            child = node.children.get(segment)
            if child is None:
                return
            node = child
        if node.has_value:
            node.has_value = False
            node.value = None
            self._size -= 1

    # -- Query -----------------------------------------------------------------

    def get(self, uri: Uri) -> T | None:
        node = self._root
        for segment in self._key(uri):
            child = node.children.get(segment)
            if child is None:
                return None
            node = child
        return node.value if node.has_value else None

    def find_substr(self, uri: Uri) -> T | None:
        """Value of the longest stored key that is ``uri`` itself or one of its ancestors."""
        node = self._root
        candidate: T | None = None
        for segment in self._key(uri):
            child = node.children.get(segment)
            if child is None:
                break
            node = child
            if node.has_value:
                candidate = node.value
        return candidate

    def __len__(self) -> int:
        return self._size

    def __iter__(self) -> Iterator[T]:
        stack = [self._root]
        while stack:
            node = stack.pop()
            if node.has_value:
                yield node.value  # type: ignore[misc]
            stack.extend(reversed(list(node.children.values())))
