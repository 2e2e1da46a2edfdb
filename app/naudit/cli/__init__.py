"""CLI package for naudit.

This package contains the Typer application and the results display.
"""

from naudit.cli.main import app

__all__ = ["app"]
