"""Console feedback for the `rbr` commands.

Messages go to stderr through a shared rich console so that JSON written to
stdout stays clean. Each message is mirrored as a debug log event.

    status("Ingested 3 reports", style="success")  # ✓ Ingested 3 reports
    status("coverage.xml failed", style="error")  # ✗ coverage.xml failed
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import structlog
from rich.console import Console
from rich.table import Table

if TYPE_CHECKING:
    from reportbridge.ingest.driver import ReportOutcome

log = structlog.get_logger(__name__)

_console = Console(stderr=True)

# Rich markup put in front of a message, by style name
_MARKS = {
    "success": "[green]✓[/green] ",
    "warning": "[yellow]![/yellow] ",
    "error": "[red]✗[/red] ",
    "info": "  ",
    "none": "",
}


def status(message: str, *, style: str = "info") -> None:
    """Print one marked line to stderr. Unknown styles print unmarked."""
    _console.print(_MARKS.get(style, "") + message, highlight=False)
    log.debug("console_status", message=message, style=style)


def pluralize(count: int, singular: str, plural: str | None = None) -> str:
    """``pluralize(1, "report")`` is ``"1 report"``, with 3 it is ``"3 reports"``."""
    word = singular if count == 1 else (plural or f"{singular}s")
    return f"{count} {word}"


def outcome_table(outcomes: list[ReportOutcome]) -> Table:
    """Build a summary table with one row per processed report."""
    table = Table(title="Reports", title_justify="left", show_edge=False, pad_edge=False)
    table.add_column("Kind", style="cyan", no_wrap=True)
    table.add_column("Report")
    table.add_column("State")
    table.add_column("Files", justify="right")
    table.add_column("Findings", justify="right")
    table.add_column("Unresolved", justify="right")
    table.add_column("Skipped", justify="right")

    for outcome in outcomes:
        state = outcome.state.value
        state_cell = f"[red]{state}[/red]" if outcome.failed else f"[green]{state}[/green]"
        table.add_row(
            outcome.kind.value,
            str(outcome.report_path),
            state_cell,
            str(outcome.files_emitted),
            str(outcome.findings_emitted),
            str(len(outcome.unresolved)),
            str(outcome.skipped),
        )
    return table


def print_outcomes(outcomes: list[ReportOutcome]) -> None:
    """Render the outcome table to the stderr console."""
    if not outcomes:
        return
    _console.print(outcome_table(outcomes))
