"""Shared test fixtures.

Everything runs in-process: workspace files and the recently opened store
live under pytest's ``tmp_path``.  Settings are read from ``MULTIROOT_*``
environment variables, so fixtures that change them also reset the settings
cache.
"""

from __future__ import annotations

from collections.abc import Iterator
from pathlib import Path

import pytest
from loguru import logger

from multiroot.workspaces.settings import _get_settings_cached

# ---------------------------------------------------------------------------
# Logging
# ---------------------------------------------------------------------------


@pytest.fixture
def log_messages() -> Iterator[list[str]]:
    """Messages logged through loguru while the test runs."""
    messages: list[str] = []
    handler_id = logger.add(lambda message: messages.append(message.record["message"]), level="DEBUG")
    yield messages
    logger.remove(handler_id)


# ---------------------------------------------------------------------------
# Settings
# ---------------------------------------------------------------------------


@pytest.fixture
def data_root(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Iterator[Path]:
    """Point ``MULTIROOT_DATA_ROOT`` at a fresh directory for the test."""
    root = tmp_path / "data"
    monkeypatch.setenv("MULTIROOT_DATA_ROOT", str(root))
    monkeypatch.delenv("MULTIROOT_DATA_PREFIX", raising=False)
    monkeypatch.delenv("MULTIROOT_UNTITLED_WORKSPACES_HOME", raising=False)
    _get_settings_cached.cache_clear()
    yield root
    _get_settings_cached.cache_clear()
