"""Line-oriented parsers for plain-text lint reports.

Each physical line is matched against the producing tool's message grammar.
Blank lines are ignored; other lines that do not match (banners, summaries)
are counted as skipped and never raise.
"""

from __future__ import annotations

import re
from collections.abc import Callable, Iterable

from reportbridge.issues.models import Finding, ParseResult, Severity

LineParser = Callable[[str], Finding | None]


def _severity_from_str(s: str) -> Severity:
    """Map a text-report severity word onto the platform scale."""
    s = s.lower()
    if s == "error":
        return Severity.MAJOR
    if s == "warning":
        return Severity.MINOR
    return Severity.INFO


def _parse_lines(lines: Iterable[str], parse_line: LineParser) -> ParseResult:
    result = ParseResult()
    for raw in lines:
        line = raw.rstrip("\r\n")
        if not line.strip():
            continue
        finding = parse_line(line)
        if finding is None:
            result.skipped += 1
        else:
            result.findings.append(finding)
    return result


# =============================================================================
# SwiftLint
# =============================================================================

# Format: path.swift:line[:col]: warning|error: Description: reason (rule_id)
_SWIFTLINT_RE = re.compile(
    r"^(?P<path>.+?\.swift):(?P<line>\d+)(?::(?P<column>\d+))?: "
    r"(?P<severity>warning|error): (?P<message>.*) \((?P<rule>[^()]+)\)\s*$"
)


def parse_swiftlint_line(line: str) -> Finding | None:
    match = _SWIFTLINT_RE.match(line)
    if not match or int(match.group("line")) < 1:
        return None
    return Finding(
        path=match.group("path"),
        line=int(match.group("line")),
        column=int(match.group("column") or 0),
        rule_key=match.group("rule"),
        severity=_severity_from_str(match.group("severity")),
        message=match.group("message"),
        source="swiftlint",
    )


def parse_swiftlint(lines: Iterable[str]) -> ParseResult:
    """Parse SwiftLint's default (xcode) reporter output."""
    return _parse_lines(lines, parse_swiftlint_line)


# =============================================================================
# Tailor
# =============================================================================

# Format: path.swift:line[:col]: warning|error: [rule-id] message
_TAILOR_RE = re.compile(
    r"^(?P<path>.+?\.swift):(?P<line>\d+)(?::(?P<column>\d+))?: "
    r"(?P<severity>warning|error): \[(?P<rule>[^\]]+)\] (?P<message>.*?)\s*$"
)


def parse_tailor_line(line: str) -> Finding | None:
    match = _TAILOR_RE.match(line)
    if not match or int(match.group("line")) < 1:
        return None
    return Finding(
        path=match.group("path"),
        line=int(match.group("line")),
        column=int(match.group("column") or 0),
        rule_key=match.group("rule"),
        severity=_severity_from_str(match.group("severity")),
        message=match.group("message"),
        source="tailor",
    )


def parse_tailor(lines: Iterable[str]) -> ParseResult:
    """Parse Tailor's xcode-format output."""
    return _parse_lines(lines, parse_tailor_line)
