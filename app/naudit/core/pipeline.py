"""Audit pipeline orchestration.

Sequences the phases of a run against a repository:

    validate -> prepare audit dir -> discover -> clean -> install -> audit -> archive

Each phase can be toggled through RunConfig except validation and
discovery. Per-package install and audit failures are collected into
the RunSummary; the install failure policy decides whether the run
continues. Guard rejections and manifest errors propagate to the caller.
"""

from __future__ import annotations

import logging
import shutil
from typing import TYPE_CHECKING

from naudit.core.archive import ArchiveError, build_audit_archive
from naudit.core.config import InstallFailurePolicy, NauditConfig
from naudit.core.manifest import read_drop_name, require_root_manifest
from naudit.core.paths import (
    AUDIT_REPORT_FILE_NAME,
    LOCK_FILE_NAME,
    get_audit_dir,
    get_audit_name,
    get_audit_root_dir,
    get_lock_copy_name,
)
from naudit.filesystem.operator import PathNotSafeToDeleteError, SafeDeleter
from naudit.models.result import PackageResult
from naudit.models.run import RunConfig, RunSummary
from naudit.operators.npm import NpmOperator
from naudit.scanners.packages import PackageScanner, resolve_root
from naudit.utils.formatting import (
    console,
    print_error,
    print_info,
    print_step,
    print_warning,
)

if TYPE_CHECKING:
    from pathlib import Path

    from naudit.models.package import PackageEntry
    from naudit.operators.base import Operator

logger = logging.getLogger(__name__)


def format_audit_section(label: str, body: str) -> str:
    """Format one package's block of the consolidated report."""
    return f"\n==== AUDIT FOR  {label} ====\n{body}\n"


def format_audit_footer(audit_command: str) -> str:
    """Format the note appended after all package sections."""
    return f"\n\n========= NOTE:\n{audit_command} (for each node directory)\n"


class AuditPipeline:
    """Runs clean, install, audit and archive phases for one repository.

    Args:
        run_config: Root path and selected phases.
        operator: Package manager operator (npm or a test double).
        config: User configuration. Defaults if None.
        scanner: Package discovery. Defaults if None.
        deleter: Guarded deleter. Defaults if None.
    """

    def __init__(
        self,
        run_config: RunConfig,
        operator: Operator,
        *,
        config: NauditConfig | None = None,
        scanner: PackageScanner | None = None,
        deleter: SafeDeleter | None = None,
    ) -> None:
        self._run_config = run_config
        self._operator = operator
        self._config = config or NauditConfig()
        self._scanner = scanner or PackageScanner()
        self._deleter = deleter or SafeDeleter()

    def run(self) -> RunSummary:
        """Execute the pipeline.

        Returns:
            RunSummary describing every phase outcome.

        Raises:
            InvalidRootDirectoryError: If the root is not a directory.
            ManifestError: If the root package.json is missing or malformed.
            PackageDiscoveryError: If the repository cannot be walked.
            PathNotSafeToDeleteError: If a deletion target fails the allow-list.
            CleanError: If the clean phase cannot remove a path.
        """
        # Nothing on disk changes before both checks pass
        require_root_manifest(self._run_config.root)
        drop_name = read_drop_name(self._run_config.root)

        root = resolve_root(self._run_config.root)
        audit_name = get_audit_name(drop_name)
        audit_dir = get_audit_dir(root, drop_name)
        summary = RunSummary(drop_name=drop_name)

        uses_operator = self._run_config.do_install or self._run_config.do_audit
        if uses_operator and not self._operator.is_available():
            print_warning(f"{self._operator.name} not found on PATH - its commands will fail")

        if self._run_config.do_audit:
            self._prepare_audit_dir(root, audit_dir)

        packages = self._scanner.scan(root)
        print_info(f"Found {len(packages)} package(s) under {root}")

        if self._run_config.do_clean:
            summary.deletions = self._operator.clean_all(root, packages)

        failed_installs: set[str] = set()
        if self._run_config.do_install:
            failed_installs = self._install_packages(packages, summary)
            if summary.aborted:
                return summary

        if self._run_config.do_audit:
            self._audit_packages(packages, failed_installs, audit_dir, summary)
            self._copy_lock_files(packages, audit_dir, summary)
            self._archive(audit_dir, audit_name, summary)

        return summary

    def _prepare_audit_dir(self, root: Path, audit_dir: Path) -> None:
        # The bundle must be a direct child of <root>/.audit
        if audit_dir.resolve().parent != get_audit_root_dir(root).resolve():
            raise PathNotSafeToDeleteError(audit_dir)

        self._deleter.remove_directory_tree(audit_dir)
        audit_dir.mkdir(parents=True)
        logger.debug("Prepared audit directory %s", audit_dir)

    def _install_packages(self, packages: list[PackageEntry], summary: RunSummary) -> set[str]:
        """Install packages in discovery order, applying the failure policy.

        Returns:
            Labels of packages whose install failed.
        """
        failed: set[str] = set()
        policy = self._config.install_failure_policy

        for package in packages:
            print_step(f"{self._operator.name} install {package.label}")
            result = self._operator.install(package)
            summary.results.append(result)

            if result.success:
                continue

            failed.add(package.label)
            print_error(f"{package.label}: {result.error}")

            if policy == InstallFailurePolicy.ABORT:
                summary.aborted = True
                print_error("Install failed - aborting run")
                break

        return failed

    def _audit_packages(
        self,
        packages: list[PackageEntry],
        failed_installs: set[str],
        audit_dir: Path,
        summary: RunSummary,
    ) -> None:
        """Audit every package and write the consolidated report."""
        skip_failed = self._config.install_failure_policy == InstallFailurePolicy.SKIP_AUDIT
        sections: list[str] = []

        for package in packages:
            if skip_failed and package.label in failed_installs:
                sections.append(format_audit_section(package.label, "SKIPPED - install failed"))
                logger.info("Skipping audit of %s after failed install", package.label)
                continue

            result = self._operator.audit(package)
            summary.results.append(result)
            sections.append(format_audit_section(package.label, _section_body(result)))
            console.print(sections[-1], markup=False, highlight=False)

        sections.append(format_audit_footer(self._operator.audit_command))

        report_path = audit_dir / AUDIT_REPORT_FILE_NAME
        try:
            report_path.write_text("".join(sections), encoding="utf-8")
        except OSError as e:
            summary.errors.append(f"Cannot write audit report {report_path}: {e}")
            print_error(summary.errors[-1])
            return

        summary.report_path = report_path
        print_step(f"Save audit file {report_path}")

    def _copy_lock_files(
        self,
        packages: list[PackageEntry],
        audit_dir: Path,
        summary: RunSummary,
    ) -> None:
        for package in packages:
            lock_file = package.directory / LOCK_FILE_NAME
            if not lock_file.is_file():
                logger.info("No %s in %s", LOCK_FILE_NAME, package.label)
                continue

            destination = audit_dir / get_lock_copy_name(package.label)
            try:
                shutil.copyfile(lock_file, destination)
            except OSError as e:
                summary.errors.append(f"Cannot copy {lock_file}: {e}")
                print_error(summary.errors[-1])

    def _archive(self, audit_dir: Path, audit_name: str, summary: RunSummary) -> None:
        if summary.errors:
            print_warning("Audit bundle is incomplete - archive not created")
            return

        audit_root = audit_dir.parent
        print_step(f"create tar file {audit_name}.tar")
        try:
            tar_path, gz_path = build_audit_archive(audit_dir, audit_name, audit_root)
        except ArchiveError as e:
            summary.errors.append(str(e))
            print_error(str(e))
            return

        print_step(f"created gz file {gz_path.name}")
        summary.compressed_path = gz_path
        summary.archive_path = tar_path

        if not self._config.keep_tar:
            try:
                self._deleter.remove_archive(tar_path)
            except OSError as e:
                print_warning(f"Cannot remove {tar_path}: {e}")
                return
            summary.archive_path = None


def _section_body(result: PackageResult) -> str:
    if result.failed:
        return f"ERROR - {result.error}"
    return result.output


def create_pipeline(run_config: RunConfig, config: NauditConfig) -> AuditPipeline:
    """Build a pipeline wired to npm with shared scanner and deleter.

    Args:
        run_config: Root path and selected phases.
        config: User configuration.

    Returns:
        AuditPipeline ready to run.
    """
    scanner = PackageScanner()
    deleter = SafeDeleter()
    operator = NpmOperator(
        command=config.npm_command,
        audit_level=config.audit_level,
        scanner=scanner,
        deleter=deleter,
    )
    return AuditPipeline(
        run_config,
        operator,
        config=config,
        scanner=scanner,
        deleter=deleter,
    )
