"""Rich display of pipeline results.

Provides the results table and final summary printed at the end of a run.
"""

from rich.markup import escape
from rich.table import Table

from naudit.models.result import PackageResult
from naudit.models.run import RunSummary
from naudit.utils.formatting import console, print_error, print_success


def create_results_table(results: list[PackageResult]) -> Table:
    """Create a Rich table displaying per-package results.

    Successful results show "OK" status; failed results show "FAIL"
    with the error message.

    Args:
        results: List of package results to display.

    Returns:
        Rich Table configured for results display.
    """
    table = Table(
        title="Results",
        show_header=True,
        header_style="bold_header",
        border_style="border",
    )
    table.add_column("Status", width=8, justify="center")
    table.add_column("Phase", width=8)
    table.add_column("Package", no_wrap=True)
    table.add_column("Message")

    for result in results:
        if result.success:
            status = "[success]OK[/success]"
            message = result.message or ""
        else:
            status = "[error]FAIL[/error]"
            message = result.error or "Unknown error"

        table.add_row(
            status,
            result.phase.value,
            f"[label]{escape(result.package.label)}[/label]",
            f"[muted]{escape(message)}[/muted]",
        )

    return table


def print_run_summary(summary: RunSummary) -> None:
    """Print the outcome of a pipeline run.

    Shows the results table when any package was processed, the written
    artifacts, and a closing success or failure line.

    Args:
        summary: Summary returned by the pipeline.
    """
    if summary.results:
        console.print(create_results_table(summary.results))

    removed = sum(1 for d in summary.deletions if d.removed)
    if summary.deletions:
        console.print(f"[muted]Clean removed {removed} path(s)[/muted]")
    if summary.report_path is not None:
        console.print(f"[muted]Report: {escape(str(summary.report_path))}[/muted]")
    if summary.compressed_path is not None:
        console.print(f"[muted]Archive: {escape(str(summary.compressed_path))}[/muted]")

    for error in summary.errors:
        print_error(error)

    failures = summary.failures
    if summary.aborted:
        print_error("Run aborted after install failure.")
    elif failures or summary.errors:
        succeeded = len(summary.results) - len(failures)
        console.print(
            f"\n[success]{succeeded} succeeded[/success], "
            f"[error]{len(failures) + len(summary.errors)} failed[/error]"
        )
    else:
        print_success(f"Audit run for {summary.drop_name} completed successfully.")
