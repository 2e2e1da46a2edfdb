"""Package models for repository discovery.

This module defines the data structure representing one npm package
directory found inside a multi-package repository.
"""

from dataclasses import dataclass
from pathlib import Path

# Label of the top-level package of a repository
ROOT_LABEL = "_root_"


@dataclass(frozen=True, slots=True)
class PackageEntry:
    """Represents a package directory discovered in a repository.

    Attributes:
        directory: Absolute path to the directory holding package.json.
        label: Path relative to the repository root using forward slashes,
            or ``_root_`` for the top-level package.
    """

    directory: Path
    label: str

    def __post_init__(self) -> None:
        """Validate package entry data after initialization."""
        if not self.label:
            msg = "Package label cannot be empty"
            raise ValueError(msg)
        if not self.directory.is_absolute():
            msg = f"Package directory must be absolute, got {self.directory}"
            raise ValueError(msg)

    @property
    def is_root(self) -> bool:
        """Check if this entry is the repository root package."""
        return self.label == ROOT_LABEL
