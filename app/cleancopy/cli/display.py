"""Rich display functions for run results.

Provides the summary and failure tables printed at the end of a run.
"""

from rich.markup import escape
from rich.table import Table

from cleancopy.core.config import RunConfig
from cleancopy.core.runner import RunReport
from cleancopy.filesystem.models import CleanFailure
from cleancopy.utils.formatting import console, print_success, print_warning


def create_summary_table(report: RunReport) -> Table:
    """Create a Rich table with the counts of both phases.

    Args:
        report: Result of a completed run.

    Returns:
        Rich Table with one row per counter.
    """
    table = Table(
        title="Summary",
        show_header=True,
        header_style="bold_header",
        border_style="border",
    )
    table.add_column("Phase", width=8)
    table.add_column("Entries")
    table.add_column("Count", justify="right")

    table.add_row("copy", "Files copied", str(report.copy.files))
    table.add_row("copy", "Directories created", str(report.copy.directories))
    if report.copy.ignored:
        table.add_row("copy", "[warning]Entries ignored[/warning]", str(report.copy.ignored))
    table.add_row("clean", "[processed]Files cleaned[/processed]", str(report.stats.processed))
    table.add_row("clean", "[skipped]Files skipped[/skipped]", str(report.stats.skipped))

    return table


def create_failures_table(failures: list[CleanFailure]) -> Table:
    """Create a Rich table listing files that could not be cleaned.

    Args:
        failures: Recoverable failures from the cleaning phase.

    Returns:
        Rich Table with Path and Error columns.
    """
    table = Table(
        title="Not Cleaned",
        show_header=True,
        header_style="bold_header",
        border_style="border",
    )
    table.add_column("Path", no_wrap=True)
    table.add_column("Error")

    for failure in failures:
        table.add_row(
            f"[path]{escape(failure.path)}[/path]",
            f"[muted]{escape(failure.error)}[/muted]",
        )

    return table


def print_run_summary(report: RunReport, config: RunConfig, quiet: bool = False) -> None:
    """Print the outcome of a run.

    Failures are always listed. The counts table is omitted in quiet mode.

    Args:
        report: Result of a completed run.
        config: Configuration the run used.
        quiet: Print only the failures and the final line.
    """
    if not quiet:
        console.print()
        console.print(create_summary_table(report))

    if report.has_failures:
        console.print()
        console.print(create_failures_table(report.stats.failures))
        print_warning(f"{len(report.stats.failures)} file(s) could not be cleaned")

    print_success(
        f"Cleaned copy written to {config.dest_root}: "
        f"{report.stats.processed} processed, {report.stats.skipped} skipped"
    )
