"""Main CLI application entry point.

Defines the Typer application: a single command taking the repository
path and phase flags.
"""

import logging
from pathlib import Path
from typing import Annotated

import typer
from rich.logging import RichHandler

from naudit import __version__
from naudit.cli.display import print_run_summary
from naudit.core.config import ConfigError, load_config
from naudit.core.manifest import ManifestError
from naudit.core.pipeline import create_pipeline
from naudit.filesystem.operator import PathNotSafeToDeleteError
from naudit.models.run import RunConfig
from naudit.operators.base import CleanError
from naudit.scanners.packages import PackageDiscoveryError
from naudit.utils.formatting import err_console, print_error

app = typer.Typer(
    name="naudit",
    help="npm multi package audit.",
    add_completion=False,
    rich_markup_mode="rich",
    context_settings={"help_option_names": ["-h", "--help"]},
)


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        typer.echo(f"naudit version {__version__}")
        raise typer.Exit()


def configure_logging(verbose: bool) -> None:
    """Route log records to stderr through Rich.

    Args:
        verbose: Log at DEBUG level instead of WARNING.
    """
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        handlers=[RichHandler(console=err_console, show_path=False)],
        force=True,
    )


@app.command()
def main(
    path: Annotated[
        Path,
        typer.Argument(help="Path to root (must contain a package.json)."),
    ] = Path("."),
    clean: Annotated[
        bool,
        typer.Option("--clean", "-c", help="Clean the node_modules and package-lock.json."),
    ] = False,
    no_install: Annotated[
        bool,
        typer.Option("--no-install", help="Do not do a npm install."),
    ] = False,
    no_audit: Annotated[
        bool,
        typer.Option("--no-audit", help="Do not do a npm audit."),
    ] = False,
    verbose: Annotated[
        bool,
        typer.Option("--verbose", "-v", help="Enable verbose output."),
    ] = False,
    version: Annotated[
        bool | None,
        typer.Option(
            "--version",
            "-V",
            callback=version_callback,
            is_eager=True,
            help="Show version and exit.",
        ),
    ] = None,
) -> None:
    """Clean, install and audit every npm package under PATH.

    The audit report and lock files are bundled into
    [bold].audit/<drop>-AUDIT.tar.gz[/bold].
    """
    configure_logging(verbose)

    try:
        config = load_config()
    except ConfigError as e:
        print_error(str(e))
        raise typer.Exit(code=1) from e

    run_config = RunConfig(
        root=path,
        do_clean=clean,
        do_install=not no_install,
        do_audit=not no_audit,
    )

    try:
        summary = create_pipeline(run_config, config).run()
    except PathNotSafeToDeleteError as e:
        print_error(str(e))
        raise typer.Exit(code=2) from e
    except (ManifestError, PackageDiscoveryError, CleanError) as e:
        print_error(str(e))
        raise typer.Exit(code=1) from e
    except OSError as e:
        print_error(f"Filesystem error: {e}")
        raise typer.Exit(code=1) from e

    print_run_summary(summary)

    if not summary.success:
        raise typer.Exit(code=1)


if __name__ == "__main__":
    app()
