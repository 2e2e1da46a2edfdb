"""Package directory discovery.

Walks a repository and finds every directory holding a package.json,
skipping installed dependencies and version control metadata.
"""

import logging
import os
from pathlib import Path

from naudit.core.paths import DEPENDENCY_CACHE_DIR_NAME, MANIFEST_FILE_NAME, VCS_DIR_NAMES
from naudit.models.package import ROOT_LABEL, PackageEntry

logger = logging.getLogger(__name__)


class PackageDiscoveryError(Exception):
    """Raised when the repository tree cannot be walked."""


class InvalidRootDirectoryError(PackageDiscoveryError):
    """Raised when the repository root is missing or not a directory."""


class PackageScanner:
    """Discovers npm package directories in a repository.

    The repository root is always returned first with the ``_root_``
    label, followed by every nested directory containing a manifest.
    Directory names are sorted at each level so the order is stable.

    Args:
        manifest_name: File name that marks a package directory.
        excluded_dirs: Directory names whose subtrees are never entered.

    Example:
        >>> for entry in PackageScanner().scan(Path(".")):
        ...     print(entry.label)
        _root_
        packages/web
    """

    def __init__(
        self,
        *,
        manifest_name: str = MANIFEST_FILE_NAME,
        excluded_dirs: frozenset[str] | None = None,
    ) -> None:
        self._manifest_name = manifest_name
        if excluded_dirs is None:
            excluded_dirs = frozenset({DEPENDENCY_CACHE_DIR_NAME, *VCS_DIR_NAMES})
        self._excluded_dirs = excluded_dirs

    def scan(self, root: Path) -> list[PackageEntry]:
        """Return the root and all nested package directories.

        Args:
            root: Repository root directory.

        Returns:
            List of PackageEntry with the root at index 0.

        Raises:
            InvalidRootDirectoryError: If the root cannot be resolved.
            PackageDiscoveryError: If a directory cannot be read.
        """
        resolved = resolve_root(root)
        entries = [PackageEntry(directory=resolved, label=ROOT_LABEL)]

        def _on_error(error: OSError) -> None:
            msg = f"Cannot walk {error.filename}: {error.strerror}"
            raise PackageDiscoveryError(msg) from error

        for dirpath, dirnames, filenames in os.walk(resolved, onerror=_on_error):
            # Prune in place so os.walk never descends into excluded trees
            dirnames[:] = sorted(d for d in dirnames if d not in self._excluded_dirs)

            current = Path(dirpath)
            if current == resolved or self._manifest_name not in filenames:
                continue

            label = current.relative_to(resolved).as_posix()
            logger.debug("Found package %s", label)
            entries.append(PackageEntry(directory=current, label=label))

        return entries


def resolve_root(root: Path) -> Path:
    """Resolve a repository root to an absolute directory path.

    Args:
        root: Path given by the user.

    Returns:
        Absolute path with symlinks resolved.

    Raises:
        InvalidRootDirectoryError: If the path does not exist or is not a directory.
    """
    try:
        resolved = root.resolve(strict=True)
    except (OSError, RuntimeError) as e:
        msg = f"Cannot resolve root directory {root}: {e}"
        raise InvalidRootDirectoryError(msg) from e

    if not resolved.is_dir():
        msg = f"Root is not a directory: {resolved}"
        raise InvalidRootDirectoryError(msg)
    return resolved
