"""Subprocess helpers for running the package manager.

Two modes are used: audits capture their output for the report, while
installs inherit the terminal so progress is visible as it happens.
"""

import os
import shutil
import subprocess
from dataclasses import dataclass
from pathlib import Path


@dataclass(frozen=True, slots=True)
class CommandResult:
    """Captured outcome of a finished command.

    Attributes:
        stdout: Decoded standard output.
        stderr: Decoded standard error.
        returncode: Exit status.
    """

    stdout: str
    stderr: str
    returncode: int

    @property
    def success(self) -> bool:
        """Check if the command exited with status 0."""
        return self.returncode == 0


def run_command(args: list[str], *, cwd: Path | str | None = None) -> CommandResult:
    """Run a command to completion and capture its output.

    Undecodable bytes are replaced rather than raising, as npm output
    may carry arbitrary terminal sequences.

    Args:
        args: Executable followed by its arguments.
        cwd: Working directory. Current directory if None.

    Returns:
        CommandResult holding both streams and the exit status.

    Raises:
        OSError: If the executable cannot be launched.
    """
    completed = subprocess.run(
        args,
        capture_output=True,
        text=True,
        encoding="utf-8",
        errors="replace",
        check=False,
        cwd=cwd,
    )
    return CommandResult(completed.stdout, completed.stderr, completed.returncode)


def run_interactive(
    args: list[str],
    *,
    cwd: Path | str | None = None,
    env: dict[str, str] | None = None,
) -> int:
    """Run a command attached to the current terminal.

    Args:
        args: Executable followed by its arguments.
        cwd: Working directory. Current directory if None.
        env: Variables added on top of the current environment.

    Returns:
        Exit status of the command.

    Raises:
        OSError: If the executable cannot be launched.
    """
    return subprocess.run(args, check=False, cwd=cwd, env={**os.environ, **(env or {})}).returncode


def command_exists(name: str) -> bool:
    """Check if an executable can be found on PATH."""
    return shutil.which(name) is not None
