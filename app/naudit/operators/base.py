"""Abstract base class for package manager operators.

This module defines the Operator interface the audit pipeline depends
on. Concrete operators wrap a package manager executable; tests plug
in doubles returning canned output.
"""

import logging
from abc import ABC, abstractmethod
from pathlib import Path

from naudit.core.paths import DEPENDENCY_CACHE_DIR_NAME, LOCK_FILE_NAME
from naudit.filesystem.operator import SafeDeleter
from naudit.models.package import PackageEntry
from naudit.models.result import DeletionResult, PackageResult
from naudit.scanners.packages import PackageScanner
from naudit.utils.formatting import print_step

logger = logging.getLogger(__name__)


class CleanError(Exception):
    """Raised when a dependency cache or lock file cannot be removed."""

    def __init__(self, package: PackageEntry, path: Path, cause: OSError) -> None:
        self.package = package
        self.path = path
        super().__init__(f"Cannot clean {package.label}: {path}: {cause}")


class Operator(ABC):
    """Abstract base class for package manager operators.

    Operators install and audit one package directory at a time and
    clean dependency caches through a SafeDeleter. Failures of the
    package manager are returned as failed PackageResult values, never
    raised, so the caller decides whether to continue.

    Example:
        >>> operator = NpmOperator()
        >>> if operator.is_available():
        ...     result = operator.audit(entry)
        ...     print(result.output)
    """

    def __init__(
        self,
        *,
        scanner: PackageScanner | None = None,
        deleter: SafeDeleter | None = None,
    ) -> None:
        """Initialize the operator.

        Args:
            scanner: Package discovery used by clean_all.
            deleter: Guarded deleter used by clean_all.
        """
        self._scanner = scanner or PackageScanner()
        self._deleter = deleter or SafeDeleter()

    @property
    @abstractmethod
    def name(self) -> str:
        """Return the package manager name (e.g. "npm")."""

    @property
    @abstractmethod
    def audit_command(self) -> str:
        """Return the audit command line, as written in report footers."""

    @abstractmethod
    def is_available(self) -> bool:
        """Check if this package manager is available on the system.

        Returns:
            True if the package manager can be used, False otherwise.
        """

    @abstractmethod
    def install(self, package: PackageEntry) -> PackageResult:
        """Install dependencies of one package, streaming output to the user.

        Args:
            package: Package directory to install in.

        Returns:
            PackageResult for the INSTALL phase.
        """

    @abstractmethod
    def audit(self, package: PackageEntry) -> PackageResult:
        """Audit dependencies of one package.

        A non-zero exit is expected when vulnerabilities are found and
        still yields a successful result carrying the sanitized report.

        Args:
            package: Package directory to audit.

        Returns:
            PackageResult for the AUDIT phase with the sanitized report in ``output``.
        """

    def clean_all(
        self,
        root: Path,
        packages: list[PackageEntry] | None = None,
    ) -> list[DeletionResult]:
        """Remove node_modules and package-lock.json from every package.

        Deletions already performed are not rolled back when a later
        one fails.

        Args:
            root: Repository root.
            packages: Previously discovered packages. Discovered if None.

        Returns:
            DeletionResult for every targeted path, in package order.

        Raises:
            PathNotSafeToDeleteError: If a computed path fails the allow-list.
            CleanError: On the first removal that fails with an OSError.
        """
        if packages is None:
            packages = self._scanner.scan(root)

        results: list[DeletionResult] = []
        for package in packages:
            print_step(f"clean {package.label}")

            cache_dir = package.directory / DEPENDENCY_CACHE_DIR_NAME
            lock_file = package.directory / LOCK_FILE_NAME

            try:
                results.append(self._deleter.remove_directory_tree(cache_dir))
            except OSError as e:
                raise CleanError(package, cache_dir, e) from e

            try:
                results.append(self._deleter.remove_file(lock_file))
            except OSError as e:
                raise CleanError(package, lock_file, e) from e

        logger.debug(
            "Cleaned %d package(s), %d path(s) removed",
            len(packages),
            sum(1 for r in results if r.removed),
        )
        return results
