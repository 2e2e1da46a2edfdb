"""Deletion allow-list for guarded filesystem operations.

Cleanup runs programmatically across every package of a repository,
so a path is only ever deleted when its string form contains one of
a few well-known npm or audit markers. Any other path is treated as
protected user data.
"""

from dataclasses import dataclass
from pathlib import Path

from naudit.core.paths import AUDIT_ROOT_DIR_NAME, DEPENDENCY_CACHE_DIR_NAME, LOCK_FILE_MARKER


@dataclass(frozen=True, slots=True)
class SafetyMarkers:
    """Substrings that make a path eligible for deletion.

    Attributes:
        dependency_cache: Installed dependencies directory name.
        audit_root: Audit output root directory name.
        lock_file: Fragment contained in lock file names.
    """

    dependency_cache: str = DEPENDENCY_CACHE_DIR_NAME
    audit_root: str = AUDIT_ROOT_DIR_NAME
    lock_file: str = LOCK_FILE_MARKER

    def __post_init__(self) -> None:
        """Reject empty markers, which would match every path."""
        for name in ("dependency_cache", "audit_root", "lock_file"):
            if not getattr(self, name):
                msg = f"Safety marker '{name}' cannot be empty"
                raise ValueError(msg)


DEFAULT_MARKERS = SafetyMarkers()


def is_deletable_dir(path: Path | str, markers: SafetyMarkers = DEFAULT_MARKERS) -> bool:
    """Check if a directory path may be removed recursively.

    Args:
        path: Directory path to check.
        markers: Allow-list markers to match against.

    Returns:
        True if the path contains the dependency cache or audit root marker.
    """
    path_str = str(path)
    return markers.dependency_cache in path_str or markers.audit_root in path_str


def is_deletable_file(path: Path | str, markers: SafetyMarkers = DEFAULT_MARKERS) -> bool:
    """Check if a file path may be deleted.

    Args:
        path: File path to check.
        markers: Allow-list markers to match against.

    Returns:
        True if the path contains the lock file marker.
    """
    return markers.lock_file in str(path)


def is_deletable_archive(path: Path | str, markers: SafetyMarkers = DEFAULT_MARKERS) -> bool:
    """Check if an audit archive file may be deleted.

    Args:
        path: Archive file path to check.
        markers: Allow-list markers to match against.

    Returns:
        True if the path lies under the audit root marker.
    """
    return markers.audit_root in str(path)
