"""Guarded filesystem deletion.

Handles removal of dependency caches, lock files and stale audit
bundles. Every operation checks the target against the deletion
allow-list before touching the filesystem.
"""

import logging
import shutil
from pathlib import Path

from naudit.filesystem.protected import (
    DEFAULT_MARKERS,
    SafetyMarkers,
    is_deletable_archive,
    is_deletable_dir,
    is_deletable_file,
)
from naudit.models.result import DeletionResult

logger = logging.getLogger(__name__)


class PathNotSafeToDeleteError(Exception):
    """Raised when a deletion target is outside the allow-list."""

    def __init__(self, path: Path | str) -> None:
        self.path = str(path)
        super().__init__(f"Path not safe to delete: {self.path}")


class SafeDeleter:
    """Deletes directories and files restricted to allow-listed paths.

    A rejected path raises :class:`PathNotSafeToDeleteError`; a missing
    path is a no-op reported with ``removed=False``.

    Attributes:
        markers: Substrings a target path must contain.

    Example:
        >>> deleter = SafeDeleter()
        >>> deleter.remove_directory_tree(Path("web/node_modules")).removed
        True
    """

    def __init__(self, markers: SafetyMarkers = DEFAULT_MARKERS) -> None:
        """Initialize the SafeDeleter.

        Args:
            markers: Allow-list markers. Tests inject sandboxed names.
        """
        self._markers = markers

    @property
    def markers(self) -> SafetyMarkers:
        """Return the allow-list markers in use."""
        return self._markers

    def remove_directory_tree(self, path: Path) -> DeletionResult:
        """Recursively delete a dependency cache or audit directory.

        Args:
            path: Directory to remove.

        Returns:
            DeletionResult with ``removed`` True if the directory existed.

        Raises:
            PathNotSafeToDeleteError: If the path carries no allowed marker.
            OSError: If the removal itself fails.
        """
        if not is_deletable_dir(path, self._markers):
            raise PathNotSafeToDeleteError(path)

        if not path.is_dir():
            return DeletionResult(path=path, removed=False)

        shutil.rmtree(path)
        logger.info("Deleted DIR  - %s", path)
        return DeletionResult(path=path, removed=True)

    def remove_file(self, path: Path) -> DeletionResult:
        """Delete a lock file.

        Args:
            path: File to remove.

        Returns:
            DeletionResult with ``removed`` True if the file existed.

        Raises:
            PathNotSafeToDeleteError: If the path carries no lock file marker.
            OSError: If the removal itself fails.
        """
        if not is_deletable_file(path, self._markers):
            raise PathNotSafeToDeleteError(path)
        return self._unlink(path)

    def remove_archive(self, path: Path) -> DeletionResult:
        """Delete an intermediate archive under the audit root."""
        if not is_deletable_archive(path, self._markers):
            raise PathNotSafeToDeleteError(path)
        return self._unlink(path)

    def _unlink(self, path: Path) -> DeletionResult:
        if not path.is_file():
            return DeletionResult(path=path, removed=False)

        path.unlink()
        logger.info("Deleted FILE - %s", path)
        return DeletionResult(path=path, removed=True)
