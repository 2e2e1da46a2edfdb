"""Data models for naudit.

This module exports the core data structures used throughout the
application.
"""

from naudit.models.package import ROOT_LABEL, PackageEntry
from naudit.models.result import DeletionResult, PackageResult, PhaseType
from naudit.models.run import RunConfig, RunSummary

__all__ = [
    "ROOT_LABEL",
    "DeletionResult",
    "PackageEntry",
    "PackageResult",
    "PhaseType",
    "RunConfig",
    "RunSummary",
]
