"""Report kinds and their parse capabilities.

The caller names the kind of each report; nothing is sniffed from content.
Each kind maps to exactly one parse function in a dispatch table.
"""

from __future__ import annotations

from collections.abc import Callable, Iterator
from enum import Enum
from typing import IO

from reportbridge.coverage.cobertura import parse_cobertura
from reportbridge.coverage.models import FileCoverage
from reportbridge.issues.models import ParseResult
from reportbridge.issues.oclint import parse_oclint
from reportbridge.issues.parsers import parse_swiftlint, parse_tailor

CoverageParser = Callable[[IO[bytes]], list[FileCoverage]]
IssueParser = Callable[[IO[bytes]], ParseResult]


class ReportCategory(Enum):
    """What a report kind produces."""

    COVERAGE = "coverage"
    ISSUES = "issues"


class ReportKind(Enum):
    """Supported report formats. Values double as config keys."""

    COBERTURA = "cobertura"
    OCLINT = "oclint"
    SWIFTLINT = "swiftlint"
    TAILOR = "tailor"

    @property
    def category(self) -> ReportCategory:
        if self is ReportKind.COBERTURA:
            return ReportCategory.COVERAGE
        return ReportCategory.ISSUES

    @property
    def display_name(self) -> str:
        return _DISPLAY_NAMES[self]

    @property
    def config_key(self) -> str:
        return self.value


_DISPLAY_NAMES = {
    ReportKind.COBERTURA: "Cobertura",
    ReportKind.OCLINT: "OCLint",
    ReportKind.SWIFTLINT: "SwiftLint",
    ReportKind.TAILOR: "Tailor",
}


def _decoded_lines(handle: IO[bytes]) -> Iterator[str]:
    for raw in handle:
        yield raw.decode("utf-8-sig", errors="replace")


def _parse_swiftlint_stream(handle: IO[bytes]) -> ParseResult:
    return parse_swiftlint(_decoded_lines(handle))


def _parse_tailor_stream(handle: IO[bytes]) -> ParseResult:
    return parse_tailor(_decoded_lines(handle))


COVERAGE_PARSERS: dict[ReportKind, CoverageParser] = {
    ReportKind.COBERTURA: parse_cobertura,
}

ISSUE_PARSERS: dict[ReportKind, IssueParser] = {
    ReportKind.OCLINT: parse_oclint,
    ReportKind.SWIFTLINT: _parse_swiftlint_stream,
    ReportKind.TAILOR: _parse_tailor_stream,
}


def parse_kind(value: str) -> ReportKind:
    """Look up a kind by its name, case-insensitively.

    Raises:
        ValueError: For unknown names, listing the valid ones.
    """
    try:
        return ReportKind(value.strip().lower())
    except ValueError:
        valid = ", ".join(k.value for k in ReportKind)
        raise ValueError(f"Unknown report kind: {value!r}. Valid kinds: {valid}") from None
