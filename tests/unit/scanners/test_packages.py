"""Unit tests for PackageScanner.

Tests discovery ordering, labels, exclusion of node_modules and
version control directories, and root validation.
"""

from collections.abc import Callable
from pathlib import Path

import pytest
from naudit.models.package import ROOT_LABEL
from naudit.scanners.packages import (
    InvalidRootDirectoryError,
    PackageDiscoveryError,
    PackageScanner,
    resolve_root,
)


class TestPackageScanner:
    """Tests for PackageScanner.scan()."""

    def test_root_only(self, tmp_path: Path, write_manifest: Callable[..., Path]) -> None:
        """A repository without nested packages yields only the root."""
        write_manifest(tmp_path)

        entries = PackageScanner().scan(tmp_path)

        assert len(entries) == 1
        assert entries[0].label == ROOT_LABEL
        assert entries[0].directory == tmp_path.resolve()

    def test_root_always_first(self, tmp_path: Path, write_manifest: Callable[..., Path]) -> None:
        """The root entry occupies index 0 even when sub-packages sort earlier."""
        write_manifest(tmp_path)
        write_manifest(tmp_path / "aaa")
        write_manifest(tmp_path / "packages" / "web")

        entries = PackageScanner().scan(tmp_path)

        assert entries[0].label == ROOT_LABEL
        assert [e.label for e in entries[1:]] == ["aaa", "packages/web"]

    def test_counts_k_plus_one(self, tmp_path: Path, write_manifest: Callable[..., Path]) -> None:
        """k manifest-bearing subdirectories produce k+1 entries."""
        write_manifest(tmp_path)
        nested = ["a", "b/c", "b/c/d", "e/f/g"]
        for rel in nested:
            write_manifest(tmp_path / rel)
        # Directory without a manifest is not a package
        (tmp_path / "docs").mkdir()

        entries = PackageScanner().scan(tmp_path)

        assert len(entries) == len(nested) + 1
        assert sorted(e.label for e in entries[1:]) == sorted(nested)

    def test_labels_reconstruct_paths(
        self, tmp_path: Path, write_manifest: Callable[..., Path]
    ) -> None:
        """Joining each label to the root gives back the package directory."""
        write_manifest(tmp_path)
        write_manifest(tmp_path / "libs" / "core")
        write_manifest(tmp_path / "apps" / "site")

        root = tmp_path.resolve()
        for entry in PackageScanner().scan(tmp_path)[1:]:
            assert root / entry.label == entry.directory
            assert "\\" not in entry.label

    def test_excludes_node_modules(
        self, tmp_path: Path, write_manifest: Callable[..., Path]
    ) -> None:
        """Manifests inside node_modules at any depth are skipped."""
        write_manifest(tmp_path)
        write_manifest(tmp_path / "node_modules" / "lodash")
        write_manifest(tmp_path / "web")
        write_manifest(tmp_path / "web" / "node_modules" / "react")

        labels = [e.label for e in PackageScanner().scan(tmp_path)]

        assert labels == [ROOT_LABEL, "web"]

    def test_excludes_vcs_directories(
        self, tmp_path: Path, write_manifest: Callable[..., Path]
    ) -> None:
        """Manifests inside .git, .hg or .svn are skipped."""
        write_manifest(tmp_path)
        write_manifest(tmp_path / ".git" / "hooks")
        write_manifest(tmp_path / "sub" / ".svn")

        labels = [e.label for e in PackageScanner().scan(tmp_path)]

        assert labels == [ROOT_LABEL]

    def test_custom_exclusions(self, tmp_path: Path, write_manifest: Callable[..., Path]) -> None:
        """Excluded directory names can be injected."""
        write_manifest(tmp_path)
        write_manifest(tmp_path / "vendor" / "x")
        write_manifest(tmp_path / "node_modules" / "y")

        scanner = PackageScanner(excluded_dirs=frozenset({"vendor"}))
        labels = [e.label for e in scanner.scan(tmp_path)]

        assert labels == [ROOT_LABEL, "node_modules/y"]

    def test_stable_order(self, tmp_path: Path, write_manifest: Callable[..., Path]) -> None:
        """Two scans of the same tree return the same order."""
        write_manifest(tmp_path)
        for name in ("zeta", "alpha", "mid/inner"):
            write_manifest(tmp_path / name)

        scanner = PackageScanner()

        assert scanner.scan(tmp_path) == scanner.scan(tmp_path)

    def test_missing_root_raises(self, tmp_path: Path) -> None:
        """A nonexistent root raises InvalidRootDirectoryError."""
        with pytest.raises(InvalidRootDirectoryError):
            PackageScanner().scan(tmp_path / "missing")

    def test_invalid_root_is_discovery_error(self, tmp_path: Path) -> None:
        """InvalidRootDirectoryError is a PackageDiscoveryError."""
        target = tmp_path / "file.txt"
        target.write_text("x")

        with pytest.raises(PackageDiscoveryError):
            PackageScanner().scan(target)


class TestResolveRoot:
    """Tests for resolve_root()."""

    def test_returns_absolute(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        """Relative roots resolve to absolute paths."""
        monkeypatch.chdir(tmp_path)

        assert resolve_root(Path(".")) == tmp_path.resolve()

    def test_file_rejected(self, tmp_path: Path) -> None:
        """A file is not a valid root."""
        target = tmp_path / "package.json"
        target.write_text("{}")

        with pytest.raises(InvalidRootDirectoryError, match="not a directory"):
            resolve_root(target)
