"""Cobertura XML coverage aggregation.

Structure:
<coverage line-rate="0.85" branch-rate="0.50" ...>
  <packages>
    <package name="...">
      <classes>
        <class name="..." filename="Sources/Foo.swift" line-rate="...">
          <methods>...</methods>
          <lines>
            <line number="1" hits="1" branch="false"/>
            <line number="2" hits="0" branch="true" condition-coverage="50% (1/2)"/>
          </lines>
        </class>
      </classes>
    </package>
  </packages>
</coverage>

Line data is collected per ``filename``, not per class: several classes
(extensions, partial types) can live in one file, and the same file can show
up under several packages. Their ``<lines>`` are merged into one table where
a later entry for a line number replaces the earlier one.
"""

from __future__ import annotations

import re
from pathlib import Path
from typing import IO

import structlog

from reportbridge.config.constants import INT_MAX, INT_MIN
from reportbridge.core.errors import ReportParseError
from reportbridge.coverage.models import FileCoverage, LineCoverage
from reportbridge.reports.cursor import StreamCursor, finish_document, open_document

log = structlog.get_logger(__name__)

# English-locale number: optional sign, optional thousands grouping, optional fraction
_NUMBER_RE = re.compile(r"^[+-]?(?:\d{1,3}(?:,\d{3})+|\d+)(?:\.\d+)?$")
_INTEGER_RE = re.compile(r"^[+-]?\d+$")


def parse_number(text: str | None, *, field: str) -> int:
    """Parse a locale-invariant (English) number, truncating any fraction.

    Raises:
        ReportParseError: If text is missing, non-numeric, or outside the
            signed 32-bit range.
    """
    if text is None or not _NUMBER_RE.match(text.strip()):
        raise ReportParseError.not_numeric(field, text)
    value = int(float(text.strip().replace(",", "")))
    if not INT_MIN <= value <= INT_MAX:
        raise ReportParseError.out_of_range(field, text)
    return value


def parse_integer(text: str | None, *, field: str) -> int:
    """Parse a plain decimal integer (no grouping, no fraction)."""
    if text is None or not _INTEGER_RE.match(text.strip()):
        raise ReportParseError.not_numeric(field, text)
    value = int(text.strip())
    if not INT_MIN <= value <= INT_MAX:
        raise ReportParseError.out_of_range(field, text)
    return value


def parse_condition_coverage(text: str) -> tuple[int, int]:
    """Parse ``label(covered/total)`` into ``(covered, total)``.

    The first number is the covered count and the second is the total.

    Raises:
        ReportParseError: If the parenthesized pair is missing or malformed,
            or covered exceeds total.
    """
    start = text.find("(")
    end = text.find(")", start + 1) if start >= 0 else -1
    if start < 0 or end < 0:
        raise ReportParseError.bad_condition_coverage(text, "expected '(covered/total)'")

    parts = [p.strip() for p in text[start + 1 : end].split("/")]
    if len(parts) != 2:
        raise ReportParseError.bad_condition_coverage(text, "expected exactly two numbers")

    try:
        covered = parse_integer(parts[0], field="condition-coverage")
        total = parse_integer(parts[1], field="condition-coverage")
    except ReportParseError as e:
        raise ReportParseError.bad_condition_coverage(text, e.message) from e

    if covered < 0 or total < 0:
        raise ReportParseError.bad_condition_coverage(text, "negative condition count")
    if covered > total:
        raise ReportParseError.bad_condition_coverage(
            text, f"covered ({covered}) exceeds total ({total})"
        )
    return covered, total


def _read_line(line: StreamCursor) -> LineCoverage:
    for required in ("number", "hits"):
        if line.attribute(required) is None:
            raise ReportParseError.missing_attribute(required, line.name)

    number = parse_integer(line.attribute("number"), field="number")
    if number < 1:
        raise ReportParseError.out_of_range("number", str(number))
    hits = parse_number(line.attribute("hits"), field="hits")
    if hits < 0:
        raise ReportParseError.out_of_range("hits", str(hits))

    condition = line.attribute("condition-coverage")
    if line.attribute("branch") == "true" and condition and condition.strip():
        covered, total = parse_condition_coverage(condition)
        return LineCoverage(
            line_number=number,
            hits=hits,
            is_branch=True,
            covered_conditions=covered,
            total_conditions=total,
        )
    return LineCoverage(line_number=number, hits=hits)


def _collect_class(cls: StreamCursor, file_coverage: FileCoverage) -> None:
    for line in cls.child("lines").children("line"):
        file_coverage.record(_read_line(line))


def aggregate_coverage(root: StreamCursor) -> list[FileCoverage]:
    """Merge all class line tables of a report into one FileCoverage per filename.

    Args:
        root: Cursor on the report's root element.

    Returns:
        FileCoverage objects in the order their filenames were first seen.

    Raises:
        StreamError: On malformed markup or a class without ``<lines>``.
        ReportParseError: On a non-numeric or out-of-range line value.
    """
    files: dict[str, FileCoverage] = {}

    for package in root.descendants("package"):
        for cls in package.descendants("class"):
            filename = cls.attribute("filename")
            if not filename:
                log.warning("class_without_filename", class_name=cls.attribute("name"))
                cls.skip()
                continue

            file_coverage = files.get(filename)
            if file_coverage is None:
                file_coverage = files[filename] = FileCoverage(path=filename)
            _collect_class(cls, file_coverage)

    return list(files.values())


def parse_cobertura(source: IO[bytes] | Path | str) -> list[FileCoverage]:
    """Stream a whole Cobertura report and return its per-file aggregates."""
    root = open_document(source)
    files = aggregate_coverage(root)
    finish_document(root)
    log.debug("cobertura_aggregated", files=len(files))
    return files
