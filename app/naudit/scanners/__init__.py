"""Repository scanners.

This module provides discovery of npm package directories inside a
multi-package repository.
"""

from naudit.scanners.packages import (
    InvalidRootDirectoryError,
    PackageDiscoveryError,
    PackageScanner,
    resolve_root,
)

__all__ = [
    "InvalidRootDirectoryError",
    "PackageDiscoveryError",
    "PackageScanner",
    "resolve_root",
]
