"""Run models for the audit pipeline.

Defines the immutable per-run configuration built from CLI input and
the summary collected while the pipeline executes.
"""

from dataclasses import dataclass, field
from pathlib import Path

from naudit.models.result import DeletionResult, PackageResult


@dataclass(frozen=True, slots=True)
class RunConfig:
    """Phases selected for a single run.

    Attributes:
        root: Repository root holding the top-level package.json.
        do_clean: Remove node_modules and lock files before other phases.
        do_install: Run ``npm install`` for every package.
        do_audit: Run ``npm audit`` and build the audit archive.
    """

    root: Path
    do_clean: bool = False
    do_install: bool = True
    do_audit: bool = True


@dataclass(slots=True)
class RunSummary:
    """Everything a pipeline run produced.

    Attributes:
        drop_name: Naming token read from the root manifest.
        results: Install and audit results in execution order.
        deletions: Deletions performed by the clean phase.
        report_path: Consolidated audit report, if written.
        archive_path: Uncompressed archive, if written and kept.
        compressed_path: Compressed archive, if written.
        errors: Phase-level failures (report, lock copy, archive).
        aborted: True if the install failure policy stopped the run.
    """

    drop_name: str
    results: list[PackageResult] = field(default_factory=list)
    deletions: list[DeletionResult] = field(default_factory=list)
    report_path: Path | None = None
    archive_path: Path | None = None
    compressed_path: Path | None = None
    errors: list[str] = field(default_factory=list)
    aborted: bool = False

    @property
    def failures(self) -> list[PackageResult]:
        """Return the failed package results."""
        return [r for r in self.results if r.failed]

    @property
    def success(self) -> bool:
        """Check if the run completed without any recorded failure."""
        return not self.aborted and not self.errors and not self.failures
