"""Utility modules for naudit.

This module exports commonly used utility functions.
"""

from naudit.utils.formatting import (
    console,
    err_console,
    print_error,
    print_info,
    print_step,
    print_success,
    print_warning,
)
from naudit.utils.shell import CommandResult, command_exists, run_command, run_interactive
from naudit.utils.text import sanitize_audit_output

__all__ = [
    "CommandResult",
    "command_exists",
    "console",
    "err_console",
    "print_error",
    "print_info",
    "print_step",
    "print_success",
    "print_warning",
    "run_command",
    "run_interactive",
    "sanitize_audit_output",
]
