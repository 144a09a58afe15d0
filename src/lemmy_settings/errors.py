"""Exception classes for settings loading and derived values.

This module defines a hierarchy of exception classes for the
error conditions met while reading, decoding and validating the
config file, and while building the regexes derived from it.
"""

from __future__ import annotations

from pathlib import Path
from typing import Optional


class SettingsError(Exception):
    """Base class for every error raised by this package.

    Carries a human-readable message and, when the error wraps
    a lower-level failure, the original exception.
    """

    def __init__(
        self, message: str, original_error: Optional[BaseException] = None
    ) -> None:
        """Initialize the exception.

        Args:
            message: Human-readable error message
            original_error: The exception that caused this one, if any
        """
        super().__init__(message)
        self.message: str = message
        self.original_error: Optional[BaseException] = original_error


class ConfigError(SettingsError):
    """Raised when the config file cannot be turned into valid settings.

    Callers that only care whether startup may proceed catch this type;
    the subclasses tell apart read, parse and invariant failures.
    """

    def __init__(
        self,
        message: str,
        path: Optional[Path] = None,
        original_error: Optional[BaseException] = None,
    ) -> None:
        """Initialize with the offending config path.

        Args:
            message: Description of the failure
            path: Config file involved, when known
            original_error: The original exception that was caught
        """
        super().__init__(message, original_error)
        self.path: Optional[Path] = path


class ConfigReadError(ConfigError):
    """Raised when the config file is missing or unreadable."""

    @property
    def errno(self) -> Optional[int]:
        """OS error number of the underlying failure, if any."""
        if isinstance(self.original_error, OSError):
            return self.original_error.errno
        return None


class ConfigWriteError(ConfigError):
    """Raised when a new config file cannot be written to disk."""

    pass


class ConfigParseError(ConfigError):
    """Raised when the file is not valid HJSON/YAML or fails the schema."""

    pass


class ConfigInvariantError(ConfigError):
    """Raised when the file parses but `hostname` was left unset."""

    pass


class RegexCompileError(SettingsError):
    """Raised when a slur or webfinger pattern does not compile."""

    def __init__(
        self, pattern: str, original_error: Optional[BaseException] = None
    ) -> None:
        """Initialize with the pattern that failed.

        Args:
            pattern: Full regex source handed to the compiler
            original_error: The `re.error` raised by the compiler
        """
        detail = f": {original_error}" if original_error else ""
        super().__init__(f"Unable to compile regex{detail}", original_error)
        self.pattern: str = pattern


class HostnameFormatError(SettingsError):
    """Raised when no host part can be split off the configured hostname."""

    def __init__(self, hostname: str) -> None:
        """Initialize with the malformed hostname.

        Args:
            hostname: The configured hostname value
        """
        super().__init__(f"Malformed hostname: {hostname!r}")
        self.hostname: str = hostname
