"""Configuration loading for a Lemmy server.

Reads config/config.hjson (or the file named by LEMMY_CONFIG_LOCATION),
validates it, and serves it from a reloadable SettingsStore.
"""

from lemmy_settings.errors import (
    ConfigError,
    ConfigInvariantError,
    ConfigParseError,
    ConfigReadError,
    ConfigWriteError,
    HostnameFormatError,
    RegexCompileError,
    SettingsError,
)
from lemmy_settings.settings import Settings, get_config_location, load_settings
from lemmy_settings.store import SettingsSnapshot, SettingsStore, get_settings, get_store

__all__ = [
    "ConfigError",
    "ConfigInvariantError",
    "ConfigParseError",
    "ConfigReadError",
    "ConfigWriteError",
    "HostnameFormatError",
    "RegexCompileError",
    "Settings",
    "SettingsError",
    "SettingsSnapshot",
    "SettingsStore",
    "get_config_location",
    "get_settings",
    "get_store",
    "load_settings",
]
