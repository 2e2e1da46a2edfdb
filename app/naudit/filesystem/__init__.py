"""Guarded filesystem operations.

This module provides the deletion allow-list and the safe deleter used
to clean dependency caches, lock files and audit bundles.
"""

from naudit.filesystem.operator import PathNotSafeToDeleteError, SafeDeleter
from naudit.filesystem.protected import (
    DEFAULT_MARKERS,
    SafetyMarkers,
    is_deletable_archive,
    is_deletable_dir,
    is_deletable_file,
)

__all__ = [
    "DEFAULT_MARKERS",
    "PathNotSafeToDeleteError",
    "SafeDeleter",
    "SafetyMarkers",
    "is_deletable_archive",
    "is_deletable_dir",
    "is_deletable_file",
]
