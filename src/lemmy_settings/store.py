"""Process-wide settings store with validated hot reload.

A SettingsStore owns one immutable SettingsSnapshot: the settings record
plus the webfinger regexes compiled from its hostname. Readers share the
snapshot under a read lock; loading or saving builds a complete new
snapshot first and swaps it in under the write lock, so a failed reload
leaves the previous settings in place.
"""

from __future__ import annotations

import logging
import re
import threading
from dataclasses import dataclass
from functools import lru_cache
from pathlib import Path
from typing import Final

from lemmy_settings.errors import ConfigWriteError
from lemmy_settings.settings.loader import (
    get_config_location,
    load_settings,
    parse_settings,
    read_config_file,
)
from lemmy_settings.settings.models import Settings
from lemmy_settings.settings.regexes import (
    webfinger_community_regex,
    webfinger_username_regex,
)
from lemmy_settings.utils.file import atomic_write_text
from lemmy_settings.utils.rwlock import ReadWriteLock

logger: Final = logging.getLogger(__name__)


@dataclass(frozen=True)
class SettingsSnapshot:
    """Settings plus the values derived from them, swapped as one unit."""

    settings: Settings
    webfinger_community_regex: re.Pattern[str]
    webfinger_username_regex: re.Pattern[str]

    @classmethod
    def build(cls, settings: Settings) -> SettingsSnapshot:
        """Compile every derived regex for the given settings.

        The slur regex is compiled once here only to reject a broken
        `additional_slurs` before the settings are installed.

        Raises:
            RegexCompileError: If any derived pattern does not compile
        """
        settings.slur_regex()
        return cls(
            settings=settings,
            webfinger_community_regex=webfinger_community_regex(settings.hostname),
            webfinger_username_regex=webfinger_username_regex(settings.hostname),
        )


class SettingsStore:
    """Cached, reloadable settings for one config file.

    Construct one at startup and hand it to the components that need
    settings. `get_store()` returns a shared default instance for callers
    that have no store passed in.

    Examples:
        store = SettingsStore()
        settings = store.init()            # fail fast at startup
        url = store.get().get_database_url()
        store.save_config_file(new_text)   # validated, atomic
    """

    def __init__(self, location: Path | None = None) -> None:
        """Initialize an empty store.

        Args:
            location: Config file to use; resolved from the environment
                on every access when omitted
        """
        self._location = location
        self._lock = ReadWriteLock()
        self._init_lock = threading.Lock()
        self._snapshot: SettingsSnapshot | None = None

    @property
    def location(self) -> Path:
        """Config file backing this store."""
        return self._location or get_config_location()

    @property
    def is_initialized(self) -> bool:
        with self._lock.read_locked():
            return self._snapshot is not None

    def init(self) -> Settings:
        """Load the config file and install it, replacing any cached settings.

        Returns:
            Copy of the newly installed settings

        Raises:
            ConfigError: If the file cannot be read, parsed or validated
            RegexCompileError: If a derived regex does not compile
        """
        path = self.location
        snapshot = SettingsSnapshot.build(load_settings(path))
        self._install(snapshot, path)
        return snapshot.settings.model_copy(deep=True)

    def get(self) -> Settings:
        """Return a copy of the cached settings, loading them on first use."""
        return self._current().settings.model_copy(deep=True)

    def read_config_file(self) -> str:
        """Return the current text of the config file."""
        return read_config_file(self.location)

    def save_config_file(self, data: str) -> str:
        """Replace the config file with `data` and reload from it.

        The text is parsed and validated before anything is written. If it
        is rejected, both the file on disk and the cached settings stay as
        they were.

        Args:
            data: Complete new file contents, written verbatim

        Returns:
            The config file contents as re-read after the write

        Raises:
            ConfigError: If `data` is not a valid config or cannot be written
            RegexCompileError: If a derived regex does not compile
        """
        path = self.location
        snapshot = SettingsSnapshot.build(parse_settings(data, path))

        with self._lock.write_locked():
            try:
                atomic_write_text(path, data)
            except OSError as exc:
                raise ConfigWriteError(
                    f"Unable to write config file {path}: {exc}", path=path, original_error=exc
                ) from exc
            self._snapshot = snapshot
        logger.info("Saved config file %s (hostname %s)", path, snapshot.settings.hostname)

        with self._lock.read_locked():
            return read_config_file(path)

    def webfinger_community_regex(self) -> re.Pattern[str]:
        """Matcher for `group:<name>@<hostname>` using the current hostname."""
        return self._current().webfinger_community_regex

    def webfinger_username_regex(self) -> re.Pattern[str]:
        """Matcher for `acct:<name>@<hostname>` using the current hostname."""
        return self._current().webfinger_username_regex

    # ---- passthroughs to the current settings ----
    def get_database_url(self) -> str:
        return self._current().settings.get_database_url()

    def get_protocol_string(self) -> str:
        return self._current().settings.get_protocol_string()

    def get_protocol_and_hostname(self) -> str:
        return self._current().settings.get_protocol_and_hostname()

    def get_hostname_without_port(self) -> str:
        return self._current().settings.get_hostname_without_port()

    def slur_regex(self) -> re.Pattern[str]:
        return self._current().settings.slur_regex()

    # ---- internals ----
    def _install(self, snapshot: SettingsSnapshot, path: Path) -> None:
        with self._lock.write_locked():
            self._snapshot = snapshot
        logger.info("Loaded settings for %s from %s", snapshot.settings.hostname, path)

    def _current(self) -> SettingsSnapshot:
        with self._lock.read_locked():
            snapshot = self._snapshot
        if snapshot is not None:
            return snapshot

        # First access: only one thread loads, the others wait for it
        with self._init_lock:
            with self._lock.read_locked():
                snapshot = self._snapshot
            if snapshot is None:
                path = self.location
                snapshot = SettingsSnapshot.build(load_settings(path))
                self._install(snapshot, path)
        return snapshot


@lru_cache
def get_store() -> SettingsStore:
    """Return the process-wide default store."""
    return SettingsStore()


def get_settings() -> Settings:
    """Return a copy of the settings held by the default store."""
    return get_store().get()
