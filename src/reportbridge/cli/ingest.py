"""rbr ingest command - parse reports and emit per-file results."""

from __future__ import annotations

import json
from pathlib import Path

import click

from reportbridge.cli.utils import group_reports
from reportbridge.config.loader import load_config, resolve_root_directory
from reportbridge.core.errors import ConfigError
from reportbridge.core.logging import configure_logging, get_logger, set_run_id
from reportbridge.core.progress import pluralize, print_outcomes, status
from reportbridge.ingest.discovery import discover_reports
from reportbridge.ingest.driver import ReportDriver, ReportOutcome
from reportbridge.ingest.kinds import ReportKind
from reportbridge.ingest.sink import MemorySink
from reportbridge.project.index import DirectoryFileIndex


@click.command()
@click.argument("path", default=".", type=click.Path(exists=True, file_okay=False, path_type=Path))
@click.option(
    "--kind",
    "kinds",
    multiple=True,
    type=click.Choice([k.value for k in ReportKind], case_sensitive=False),
    help="Only ingest these report kinds (repeatable). Default: all enabled kinds.",
)
@click.option(
    "--report",
    "reports",
    multiple=True,
    metavar="KIND=FILE",
    help="Ingest FILE as KIND instead of discovering reports of that kind (repeatable).",
)
@click.option(
    "--root-dir",
    type=click.Path(file_okay=False, path_type=Path),
    default=None,
    help="Directory report paths are relative to. Overrides project.root_directory.",
)
@click.option(
    "-o",
    "--output",
    type=click.Path(dir_okay=False, writable=True, allow_dash=True, path_type=Path),
    default=None,
    help="Write normalized results as JSON to this file ('-' for stdout).",
)
@click.pass_context
def ingest_command(
    ctx: click.Context,
    path: Path,
    kinds: tuple[str, ...],
    reports: tuple[str, ...],
    root_dir: Path | None,
    output: Path | None,
) -> None:
    """Ingest coverage and lint reports for a project.

    PATH is the project base directory (default: current directory). Reports
    are discovered with the configured glob pattern for each enabled kind.
    """
    base_dir = path.resolve()
    try:
        config = load_config(base_dir)
    except ConfigError as e:
        raise click.ClickException(e.message) from e

    verbose = bool(ctx.obj and ctx.obj.get("verbose"))
    if verbose:
        config.logging.level = "DEBUG"
    configure_logging(config=config.logging)
    run_id = set_run_id()
    log = get_logger("cli.ingest")

    explicit = group_reports(reports, base_dir)
    selected = {ReportKind(k.lower()) for k in kinds} or set(ReportKind)

    if root_dir is not None:
        root_directory = root_dir if root_dir.is_absolute() else base_dir / root_dir
    else:
        root_directory = resolve_root_directory(config, base_dir)

    sink = MemorySink()
    driver = ReportDriver(DirectoryFileIndex(base_dir), sink, root_directory)
    outcomes: list[ReportOutcome] = []

    for kind in ReportKind:
        if kind in explicit:
            report_paths = explicit[kind]
        elif kind in selected and config.reports.for_key(kind.config_key).enabled:
            pattern = config.reports.for_key(kind.config_key).path
            report_paths = discover_reports(base_dir, pattern)
            if not report_paths:
                log.info("no_reports_found", kind=kind.value, pattern=pattern)
        else:
            continue

        for report_path in report_paths:
            status(f"Processing {kind.display_name} report {report_path.name}")
            outcomes.append(driver.process(kind, report_path))

    log.info("ingest_done", run_id=run_id, reports=len(outcomes))
    print_outcomes(outcomes)
    _print_summary(outcomes, sink)

    if output is not None:
        payload = json.dumps(sink.to_dict(), indent=2)
        if str(output) == "-":
            click.echo(payload)
        else:
            output.parent.mkdir(parents=True, exist_ok=True)
            output.write_text(payload + "\n")
            status(f"Wrote results to {output}", style="success")

    if outcomes and all(o.failed for o in outcomes):
        raise SystemExit(1)


def _print_summary(outcomes: list[ReportOutcome], sink: MemorySink) -> None:
    if not outcomes:
        status("No reports found", style="warning")
        return

    failed = sum(1 for o in outcomes if o.failed)
    unresolved = sum(len(o.unresolved) for o in outcomes)
    summary = sink.coverage_summary()

    status(
        f"Ingested {pluralize(len(outcomes) - failed, 'report')}: "
        f"{pluralize(summary.files, 'covered file')}, "
        f"{pluralize(sink.total_findings, 'finding')}",
        style="success" if failed == 0 else "warning",
    )
    if unresolved:
        status(f"{pluralize(unresolved, 'unresolved path')} skipped", style="warning")
    if failed:
        status(f"{pluralize(failed, 'report')} failed", style="error")
