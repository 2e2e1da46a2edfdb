"""Pytest configuration and shared fixtures.

This module contains fixtures used across all test modules.
"""

import json
from collections.abc import Callable
from pathlib import Path

import pytest
from naudit.filesystem.operator import SafeDeleter
from naudit.models.package import PackageEntry
from naudit.models.result import PackageResult, PhaseType
from naudit.operators.base import Operator
from naudit.scanners.packages import PackageScanner


class FakeOperator(Operator):
    """Operator double returning canned results instead of running npm.

    Args:
        audit_outputs: Sanitized audit text per package label.
        install_failures: Labels whose install fails.
        audit_failures: Labels whose audit cannot be launched.
    """

    def __init__(
        self,
        *,
        audit_outputs: dict[str, str] | None = None,
        install_failures: set[str] | None = None,
        audit_failures: set[str] | None = None,
        scanner: PackageScanner | None = None,
        deleter: SafeDeleter | None = None,
    ) -> None:
        super().__init__(scanner=scanner, deleter=deleter)
        self.audit_outputs = audit_outputs or {}
        self.install_failures = install_failures or set()
        self.audit_failures = audit_failures or set()
        self.installed: list[str] = []
        self.audited: list[str] = []

    @property
    def name(self) -> str:
        return "npm"

    @property
    def audit_command(self) -> str:
        return "npm audit --audit-level=moderate"

    def is_available(self) -> bool:
        return True

    def install(self, package: PackageEntry) -> PackageResult:
        self.installed.append(package.label)
        if package.label in self.install_failures:
            return PackageResult(
                package=package,
                phase=PhaseType.INSTALL,
                success=False,
                error="npm install exited with code 1",
            )
        return PackageResult(package=package, phase=PhaseType.INSTALL, success=True)

    def audit(self, package: PackageEntry) -> PackageResult:
        self.audited.append(package.label)
        if package.label in self.audit_failures:
            return PackageResult(
                package=package,
                phase=PhaseType.AUDIT,
                success=False,
                error="Failed to execute npm",
            )
        return PackageResult(
            package=package,
            phase=PhaseType.AUDIT,
            success=True,
            output=self.audit_outputs.get(package.label, "found 0 vulnerabilities"),
        )


@pytest.fixture
def make_operator() -> Callable[..., FakeOperator]:
    """Factory for FakeOperator instances."""
    return FakeOperator


@pytest.fixture
def write_manifest() -> Callable[..., Path]:
    """Write a package.json (and optionally a lock file) into a directory."""

    def _write(directory: Path, content: dict | None = None, *, lock: bool = False) -> Path:
        directory.mkdir(parents=True, exist_ok=True)
        manifest = directory / "package.json"
        manifest.write_text(json.dumps(content if content is not None else {"name": "x"}))
        if lock:
            (directory / "package-lock.json").write_text(
                json.dumps({"name": directory.name, "lockfileVersion": 3})
            )
        return manifest

    return _write


@pytest.fixture
def repo(tmp_path: Path, write_manifest: Callable[..., Path]) -> Path:
    """Repository with a root package and one nested package, both locked."""
    root = tmp_path / "repo"
    write_manifest(root, {"name": "x"}, lock=True)
    write_manifest(root / "pkgA", {"name": "pkg-a"}, lock=True)
    return root


@pytest.fixture
def mock_audit_output() -> str:
    """Sample colored npm audit output."""
    return (
        "# npm audit report\n"
        "\n"
        "\x1b[90mlodash\x1b[39m  <4.17.21\n"
        "Severity: high\n"
        "Prototype Pollution - https://github.com/advisories/GHSA-p6mc-m468-83gw\n"
        "fix available via `npm audit fix`\n"
        "\n"
        "1 high severity vulnerability\n"
    )
