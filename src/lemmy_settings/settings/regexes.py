"""Regex builders for slur filtering and webfinger address matching."""

from __future__ import annotations

import re
from typing import Optional

from lemmy_settings.constants import (
    SLUR_PATTERN,
    WEBFINGER_COMMUNITY_PREFIX,
    WEBFINGER_USER_PREFIX,
)
from lemmy_settings.errors import RegexCompileError


def _compile(pattern: str, flags: int = 0) -> re.Pattern[str]:
    try:
        return re.compile(pattern, flags)
    except re.error as exc:
        raise RegexCompileError(pattern, exc) from exc


def slur_pattern(additional_slurs: Optional[str] = None) -> str:
    """Return the slur regex source, with operator additions appended.

    The additions are trusted regex syntax and are appended as one more
    alternation branch without escaping.
    """
    if additional_slurs:
        return f"{SLUR_PATTERN}|{additional_slurs}"
    return SLUR_PATTERN


def build_slur_regex(additional_slurs: Optional[str] = None) -> re.Pattern[str]:
    """Compile the case-insensitive slur regex.

    Args:
        additional_slurs: Optional extra alternation fragment

    Returns:
        Compiled pattern

    Raises:
        RegexCompileError: If the combined pattern is not a valid regex
    """
    return _compile(slur_pattern(additional_slurs), re.IGNORECASE)


def build_webfinger_regex(prefix: str, hostname: str) -> re.Pattern[str]:
    """Compile a matcher for `<prefix>:<name>@<hostname>` resources.

    Names are at least three lowercase letters, digits or underscores.
    The name is captured as group 1.
    """
    return _compile(rf"^{prefix}:([a-z0-9_]{{3,}})@{re.escape(hostname)}\Z")


def webfinger_community_regex(hostname: str) -> re.Pattern[str]:
    return build_webfinger_regex(WEBFINGER_COMMUNITY_PREFIX, hostname)


def webfinger_username_regex(hostname: str) -> re.Pattern[str]:
    return build_webfinger_regex(WEBFINGER_USER_PREFIX, hostname)
