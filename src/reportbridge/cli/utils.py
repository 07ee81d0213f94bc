"""CLI utilities."""

from __future__ import annotations

from pathlib import Path

import click

from reportbridge.ingest.kinds import ReportKind, parse_kind


def parse_report_option(value: str) -> tuple[ReportKind, Path]:
    """Parse a ``KIND=FILE`` option value.

    Raises:
        click.BadParameter: On a missing ``=``, an unknown kind or an empty path.
    """
    kind_name, sep, file_name = value.partition("=")
    if not sep or not file_name.strip():
        raise click.BadParameter(f"expected KIND=FILE, got {value!r}", param_hint="--report")
    try:
        kind = parse_kind(kind_name)
    except ValueError as e:
        raise click.BadParameter(str(e), param_hint="--report") from e
    return kind, Path(file_name.strip()).expanduser()


def group_reports(values: tuple[str, ...], base_dir: Path) -> dict[ReportKind, list[Path]]:
    """Group explicit ``--report`` values by kind, resolving relative files against base_dir."""
    grouped: dict[ReportKind, list[Path]] = {}
    for value in values:
        kind, path = parse_report_option(value)
        if not path.is_absolute():
            path = base_dir / path
        grouped.setdefault(kind, []).append(path)
    return grouped
