"""Configuration loaded from MULTIROOT_* environment variables."""

from __future__ import annotations

from functools import lru_cache
from pathlib import Path

from pydantic_settings import BaseSettings, SettingsConfigDict

from multiroot.workspaces.base.jsonc import FormattingOptions
from multiroot.workspaces.base.platform import host_os
from multiroot.workspaces.base.uri import Uri


class MultirootSettings(BaseSettings):
    """multiroot settings.

    All fields are read from environment variables with the ``MULTIROOT_``
    prefix.  For example, ``MULTIROOT_LOG_LEVEL=DEBUG`` maps to ``log_level``.
    """

    model_config = SettingsConfigDict(
        env_prefix="MULTIROOT_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
    )

    # -- Logging ---------------------------------------------------------------
    log_level: str = "INFO"

    # -- Data storage ----------------------------------------------------------
    data_root: str = "./data"
    """Root directory for managed data (recently opened list, untitled workspaces)."""

    data_prefix: str | None = None
    """Optional namespace prefix: data lives in ``{data_root}/{data_prefix}/``."""

    untitled_workspaces_home: str | None = None
    """Where untitled workspaces are kept.  Defaults to ``{data_root}/Workspaces``."""

    # -- Recently opened -------------------------------------------------------
    max_recent_entries: int = 500
    """Upper bound for each of the workspaces/folders and files lists."""

    # -- Workspace file formatting ---------------------------------------------
    insert_spaces: bool = False
    tab_size: int = 4
    eol: str | None = None
    """Line ending for rewritten workspace files.  Follows the platform when unset."""

    # -- Helpers ---------------------------------------------------------------

    def formatting_options(self) -> FormattingOptions:
        return FormattingOptions(
            insert_spaces=self.insert_spaces,
            tab_size=self.tab_size,
            eol=self.eol or host_os().eol,
        )

    def untitled_workspaces_home_uri(self) -> Uri:
        home = self.untitled_workspaces_home or str(Path(self.data_root) / "Workspaces")
        return Uri.file(str(Path(home).resolve()))


def get_settings() -> MultirootSettings:
    """Return a cached settings instance.

    Reads from environment variables and ``.env`` on first call, then returns
    the same object.  Call ``_get_settings_cached.cache_clear()`` in tests to
    force a re-read after overriding env vars.
    """
    return _get_settings_cached()


@lru_cache(maxsize=1)
def _get_settings_cached() -> MultirootSettings:
    return MultirootSettings()
