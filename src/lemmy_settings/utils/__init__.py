"""Common utility functions and helpers for the lemmy_settings package."""

from lemmy_settings.utils.file import atomic_write_text, ensure_directory_exists
from lemmy_settings.utils.rwlock import ReadWriteLock

__all__ = [
    "ReadWriteLock",
    "atomic_write_text",
    "ensure_directory_exists",
]
