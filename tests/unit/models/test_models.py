"""Unit tests for package, result and run models."""

from pathlib import Path

import pytest
from naudit.models.package import ROOT_LABEL, PackageEntry
from naudit.models.result import PackageResult, PhaseType
from naudit.models.run import RunConfig, RunSummary


@pytest.fixture
def entry(tmp_path: Path) -> PackageEntry:
    """A nested package entry."""
    return PackageEntry(directory=tmp_path / "pkgA", label="pkgA")


class TestPackageEntry:
    """Tests for PackageEntry."""

    def test_root_label(self, tmp_path: Path) -> None:
        """The _root_ label marks the top-level package."""
        assert PackageEntry(directory=tmp_path, label=ROOT_LABEL).is_root is True

    def test_nested_not_root(self, entry: PackageEntry) -> None:
        """Nested packages are not the root."""
        assert entry.is_root is False

    def test_empty_label(self, tmp_path: Path) -> None:
        """An empty label is rejected."""
        with pytest.raises(ValueError, match="label cannot be empty"):
            PackageEntry(directory=tmp_path, label="")

    def test_relative_directory(self) -> None:
        """Relative directories are rejected."""
        with pytest.raises(ValueError, match="must be absolute"):
            PackageEntry(directory=Path("pkgA"), label="pkgA")

    def test_frozen(self, entry: PackageEntry) -> None:
        """Entries are immutable."""
        with pytest.raises(AttributeError):
            entry.label = "other"  # type: ignore[misc]


class TestRunConfig:
    """Tests for RunConfig defaults."""

    def test_defaults(self) -> None:
        """Install and audit run by default, clean does not."""
        config = RunConfig(root=Path("."))

        assert config.do_clean is False
        assert config.do_install is True
        assert config.do_audit is True


class TestRunSummary:
    """Tests for RunSummary status properties."""

    def test_empty_is_success(self) -> None:
        """A summary without failures is successful."""
        assert RunSummary(drop_name="DROP-UNKNOWN").success is True

    def test_failed_result(self, entry: PackageEntry) -> None:
        """A failed package result fails the run."""
        summary = RunSummary(drop_name="d")
        summary.results.append(PackageResult(package=entry, phase=PhaseType.AUDIT, success=True))
        summary.results.append(
            PackageResult(package=entry, phase=PhaseType.INSTALL, success=False, error="boom")
        )

        assert [r.phase for r in summary.failures] == [PhaseType.INSTALL]
        assert summary.success is False

    def test_phase_error(self) -> None:
        """A recorded phase error fails the run."""
        summary = RunSummary(drop_name="d", errors=["Cannot copy"])

        assert summary.success is False

    def test_aborted(self) -> None:
        """An aborted run is not successful."""
        assert RunSummary(drop_name="d", aborted=True).success is False


class TestPhaseType:
    """Tests for PhaseType."""

    def test_members(self) -> None:
        """Only phases that produce PackageResult values are listed."""
        assert [p.value for p in PhaseType] == ["install", "audit"]
