"""Result models for per-package operations.

This module defines data structures for the outcome of cleaning,
installing and auditing a single package, and for deletions performed
by the safe deleter.
"""

from dataclasses import dataclass
from enum import Enum
from pathlib import Path

from naudit.models.package import PackageEntry


class PhaseType(str, Enum):
    """Pipeline phase a result belongs to.

    Attributes:
        INSTALL: ``npm install`` for one package.
        AUDIT: ``npm audit`` for one package.
    """

    INSTALL = "install"
    AUDIT = "audit"


@dataclass(frozen=True, slots=True)
class PackageResult:
    """Result of running one phase against one package.

    Attributes:
        package: The package that was operated on.
        phase: The phase that produced this result.
        success: Whether the operation completed successfully.
        output: Sanitized audit text (empty for other phases).
        message: Optional success message or additional information.
        error: Optional error message if the operation failed.
    """

    package: PackageEntry
    phase: PhaseType
    success: bool
    output: str = ""
    message: str | None = None
    error: str | None = None

    @property
    def failed(self) -> bool:
        """Check if the operation failed."""
        return not self.success


@dataclass(frozen=True, slots=True)
class DeletionResult:
    """Result of a guarded deletion.

    Attributes:
        path: Path that was targeted.
        removed: True if something was deleted, False for a no-op.
    """

    path: Path
    removed: bool
