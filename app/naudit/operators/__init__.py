"""Package manager operators for installing, auditing and cleaning.

This module provides the abstract operator interface and the npm
implementation.
"""

from naudit.operators.base import CleanError, Operator
from naudit.operators.npm import NpmOperator

__all__ = ["CleanError", "NpmOperator", "Operator"]
