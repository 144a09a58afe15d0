"""Locate, read and decode the config file into a Settings record."""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Any, Final

import hjson
import yaml
from pydantic import ValidationError

from lemmy_settings.constants import (
    CONFIG_LOCATION_ENV,
    DEFAULT_CONFIG_FILE,
    UNSET_HOSTNAME,
    YAML_SUFFIXES,
)
from lemmy_settings.errors import (
    ConfigInvariantError,
    ConfigParseError,
    ConfigReadError,
)
from lemmy_settings.settings.models import Settings

logger: Final = logging.getLogger(__name__)


def get_config_location() -> Path:
    """Resolve the config file path.

    Returns:
        `LEMMY_CONFIG_LOCATION` when set and non-empty, else `config/config.hjson`
    """
    env_path = os.environ.get(CONFIG_LOCATION_ENV)
    if env_path:
        return Path(env_path)
    return DEFAULT_CONFIG_FILE


def read_config_file(location: Path | None = None) -> str:
    """Read the whole config file as text.

    Line endings are returned as stored.

    Args:
        location: File to read (default: `get_config_location()`)

    Raises:
        ConfigReadError: If the file is missing, unreadable or not UTF-8
    """
    path = location or get_config_location()
    try:
        with path.open(encoding="utf-8", newline="") as f:
            return f.read()
    except (OSError, UnicodeDecodeError) as exc:
        raise ConfigReadError(
            f"Unable to read config file {path}: {exc}", path=path, original_error=exc
        ) from exc


def decode_config(text: str, location: Path | None = None) -> dict[str, Any]:
    """Decode config text into a plain mapping.

    YAML is used for `.yaml`/`.yml` files, HJSON for everything else.

    Raises:
        ConfigParseError: On a syntax error or a non-mapping document
    """
    use_yaml = location is not None and location.suffix.lower() in YAML_SUFFIXES
    try:
        data = yaml.safe_load(text) if use_yaml else hjson.loads(text)
    except (yaml.YAMLError, hjson.HjsonDecodeError) as exc:
        kind = "YAML" if use_yaml else "HJSON"
        raise ConfigParseError(
            f"Unable to parse config {kind}: {exc}", path=location, original_error=exc
        ) from exc

    if not isinstance(data, dict):
        raise ConfigParseError(
            f"Config must be a mapping at the top level, got {type(data).__name__}",
            path=location,
        )
    return data


def parse_settings(text: str, location: Path | None = None) -> Settings:
    """Decode and validate config text.

    Args:
        text: Raw HJSON or YAML
        location: Path the text came from, used for format and messages

    Returns:
        Validated Settings

    Raises:
        ConfigParseError: If the text is malformed or fails the schema
        ConfigInvariantError: If `hostname` is still `"unset"`
    """
    data = decode_config(text, location)

    try:
        settings = Settings.model_validate(data)
    except ValidationError as err:
        raise ConfigParseError(
            f"Invalid configuration:\n{err}", path=location, original_error=err
        ) from err

    if settings.hostname == UNSET_HOSTNAME:
        raise ConfigInvariantError("Hostname variable is not set!", path=location)

    return settings


def load_settings(location: Path | None = None) -> Settings:
    """Read and validate the config file.

    The result is independent of any SettingsStore; nothing is cached.

    Raises:
        ConfigError: Read, parse or invariant failure
    """
    path = location or get_config_location()
    settings = parse_settings(read_config_file(path), path)
    logger.debug("Loaded settings for %s from %s", settings.hostname, path)
    return settings


# Startup entry point name
init = load_settings
