"""Recents store implementations."""

from multiroot.workspaces.store.base import RecentsStore
from multiroot.workspaces.store.local import LocalRecentsStore

__all__ = ["LocalRecentsStore", "RecentsStore"]
