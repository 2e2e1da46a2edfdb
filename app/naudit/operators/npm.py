"""npm package operator implementation.

Runs ``npm install`` and ``npm audit`` inside package directories.
"""

import logging

from naudit.core.config import AuditLevel
from naudit.filesystem.operator import SafeDeleter
from naudit.models.package import PackageEntry
from naudit.models.result import PackageResult, PhaseType
from naudit.operators.base import Operator
from naudit.scanners.packages import PackageScanner
from naudit.utils.shell import command_exists, run_command, run_interactive
from naudit.utils.text import sanitize_audit_output

logger = logging.getLogger(__name__)

# Silences funding and update banners in streamed install output
INSTALL_ENV: dict[str, str] = {"NPM_CONFIG_FUND": "false", "NPM_CONFIG_UPDATE_NOTIFIER": "false"}


class NpmOperator(Operator):
    """Operator for npm packages.

    Install output is streamed to the terminal with colors forced on;
    audit output is captured and sanitized into plain text.

    Attributes:
        command: npm executable name or path.
        audit_level: Minimum severity reported by the audit.
    """

    def __init__(
        self,
        *,
        command: str = "npm",
        audit_level: AuditLevel = "moderate",
        scanner: PackageScanner | None = None,
        deleter: SafeDeleter | None = None,
    ) -> None:
        super().__init__(scanner=scanner, deleter=deleter)
        self._command = command
        self._audit_level = audit_level

    @property
    def name(self) -> str:
        """Return npm as the package manager name."""
        return "npm"

    @property
    def audit_command(self) -> str:
        """Return the audit command line used for every package."""
        return f"{self.name} audit --audit-level={self._audit_level}"

    def is_available(self) -> bool:
        """Check if the npm executable is available."""
        return command_exists(self._command)

    def install(self, package: PackageEntry) -> PackageResult:
        """Run ``npm install`` in the package directory.

        Args:
            package: Package directory to install in.

        Returns:
            PackageResult for the INSTALL phase.
        """
        args = [self._command, "install", "--color=always"]
        logger.info("Executing npm install in %s", package.directory)

        try:
            returncode = run_interactive(args, cwd=package.directory, env=INSTALL_ENV)
        except OSError as e:
            return PackageResult(
                package=package,
                phase=PhaseType.INSTALL,
                success=False,
                error=f"Failed to execute {self._command}: {e}",
            )

        if returncode != 0:
            return PackageResult(
                package=package,
                phase=PhaseType.INSTALL,
                success=False,
                error=f"npm install exited with code {returncode}",
            )

        return PackageResult(
            package=package,
            phase=PhaseType.INSTALL,
            success=True,
            message="Install completed",
        )

    def audit(self, package: PackageEntry) -> PackageResult:
        """Run ``npm audit`` in the package directory.

        Args:
            package: Package directory to audit.

        Returns:
            PackageResult for the AUDIT phase with the sanitized report.
        """
        args = [self._command, "audit", f"--audit-level={self._audit_level}"]
        logger.info("Executing npm audit in %s", package.directory)

        try:
            result = run_command(args, cwd=package.directory)
        except OSError as e:
            return PackageResult(
                package=package,
                phase=PhaseType.AUDIT,
                success=False,
                error=f"Failed to execute {self._command}: {e}",
            )

        # Non-zero means vulnerabilities at or above the level were found
        if result.success:
            message = f"No vulnerabilities at level {self._audit_level} or above"
        else:
            message = f"npm audit exited with code {result.returncode}"
            if result.stderr.strip():
                logger.debug("npm audit stderr for %s: %s", package.label, result.stderr.strip())

        return PackageResult(
            package=package,
            phase=PhaseType.AUDIT,
            success=True,
            output=sanitize_audit_output(result.stdout),
            message=message,
        )
