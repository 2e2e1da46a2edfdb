"""Root package.json checks and drop name extraction.

Only the top-level ``__version__`` field is read; it names the audit
bundle and archive. Everything else in the manifest is ignored.
"""

import json
import logging
from pathlib import Path, PureWindowsPath
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from naudit.core.paths import MANIFEST_FILE_NAME
from naudit.scanners.packages import InvalidRootDirectoryError

logger = logging.getLogger(__name__)

# Drop name used when the manifest carries no usable __version__
DROP_NAME_FALLBACK = "DROP-UNKNOWN"


class ManifestError(Exception):
    """Base exception for manifest-related errors."""


class ManifestNotFoundError(ManifestError):
    """Raised when the root directory holds no package.json."""


class ManifestParseError(ManifestError):
    """Raised when package.json is not a valid JSON object."""


class PackageManifest(BaseModel):
    """The subset of package.json naudit cares about."""

    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    drop_version: Any = Field(default=None, alias="__version__")

    @property
    def drop_name(self) -> str:
        """Return ``__version__`` if it is a usable file name, else the fallback."""
        if isinstance(self.drop_version, str) and is_safe_drop_name(self.drop_version):
            return self.drop_version
        if self.drop_version is not None:
            logger.warning("Ignoring unusable __version__ %r", self.drop_version)
        return DROP_NAME_FALLBACK


def is_safe_drop_name(name: str) -> bool:
    """Check if a drop name can be used as a single path component.

    The drop name becomes ``<root>/.audit/<drop>-AUDIT``, so separators,
    parent references and absolute paths are rejected.
    """
    if not name.strip() or ".." in name:
        return False
    if "/" in name or "\\" in name:
        return False
    # A drive ("C:") would make the joined path absolute on Windows
    return not PureWindowsPath(name).drive


def get_manifest_path(root: Path) -> Path:
    """Get the package.json path for a directory."""
    return root / MANIFEST_FILE_NAME


def require_root_manifest(root: Path) -> Path:
    """Ensure a repository root exists and holds a package.json.

    Args:
        root: Repository root given by the user.

    Returns:
        Path to the root package.json.

    Raises:
        InvalidRootDirectoryError: If the root is not an existing directory.
        ManifestNotFoundError: If the root has no package.json.
    """
    if not root.is_dir():
        msg = f"Root is not a directory: {root}"
        raise InvalidRootDirectoryError(msg)

    manifest_path = get_manifest_path(root)
    if not manifest_path.is_file():
        msg = f"Path '{manifest_path}' does not contain a {MANIFEST_FILE_NAME} - abort"
        raise ManifestNotFoundError(msg)
    return manifest_path


def load_package_manifest(path: Path) -> PackageManifest:
    """Load a package.json file.

    Args:
        path: Path to package.json.

    Returns:
        Parsed PackageManifest.

    Raises:
        ManifestNotFoundError: If the file doesn't exist.
        ManifestParseError: If the JSON is malformed or not an object.
        ManifestError: If the file cannot be read.
    """
    try:
        with open(path, encoding="utf-8") as f:
            data = json.load(f)
    except FileNotFoundError as e:
        raise ManifestNotFoundError(f"Manifest not found: {path}") from e
    except json.JSONDecodeError as e:
        raise ManifestParseError(f"Invalid JSON in {path}: {e}") from e
    except OSError as e:
        raise ManifestError(f"Failed to read manifest {path}: {e}") from e

    if not isinstance(data, dict):
        raise ManifestParseError(f"Manifest {path} is not a JSON object")

    try:
        return PackageManifest.model_validate(data)
    except ValidationError as e:
        raise ManifestParseError(f"Invalid manifest content in {path}: {e}") from e


def read_drop_name(root: Path) -> str:
    """Read the drop name from a repository's root package.json.

    Args:
        root: Repository root directory.

    Returns:
        The string ``__version__`` value, or ``DROP-UNKNOWN``.

    Raises:
        ManifestError: If package.json is missing or malformed.
    """
    return load_package_manifest(get_manifest_path(root)).drop_name
