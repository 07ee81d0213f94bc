"""OCLint XML (PMD layout) report parser.

Structure:
<pmd version="oclint-0.13">
  <file name="/work/App/Sources/Foo.m">
    <violation begincolumn="5" endcolumn="3" beginline="10" endline="20"
               priority="3" rule="long method" ruleset="size">
      Method with 30 lines exceeds limit of 20
    </violation>
  </file>
</pmd>

Each ``<violation>`` yields at most one Finding. A violation may carry its
own ``path`` attribute, which takes precedence over the enclosing file name.
"""

from __future__ import annotations

from pathlib import Path
from typing import IO

import structlog

from reportbridge.issues.models import Finding, ParseResult, Severity
from reportbridge.reports.cursor import StreamCursor, finish_document, open_document

log = structlog.get_logger(__name__)

SOURCE = "oclint"

_PRIORITY_SEVERITY = {
    "1": Severity.CRITICAL,
    "2": Severity.MAJOR,
    "3": Severity.MINOR,
}


def _severity_from_priority(priority: str | None) -> Severity:
    if priority is None:
        return Severity.INFO
    return _PRIORITY_SEVERITY.get(priority.strip(), Severity.INFO)


def _optional_int(value: str | None) -> int | None:
    if value is None:
        return None
    try:
        return int(value.strip())
    except ValueError:
        return None


def _read_violation(violation: StreamCursor, file_name: str | None) -> Finding | None:
    """Build a Finding, or return None when a required field is unusable."""
    path = violation.attribute("path") or file_name
    line = _optional_int(violation.attribute("beginline"))
    rule = violation.attribute("rule")

    message = violation.text().strip() or (violation.attribute("message") or "").strip()

    if not path:
        log.warning("violation_dropped", reason="missing file path", rule=rule)
        return None
    if line is None or line < 1:
        log.warning(
            "violation_dropped",
            reason="missing or invalid beginline",
            path=path,
            rule=rule,
            beginline=violation.attribute("beginline"),
        )
        return None

    column = _optional_int(violation.attribute("begincolumn"))
    return Finding(
        path=path,
        line=line,
        column=column if column is not None and column >= 0 else 0,
        rule_key=rule or "unknown",
        severity=_severity_from_priority(violation.attribute("priority")),
        message=message,
        source=SOURCE,
    )


def read_findings(root: StreamCursor) -> ParseResult:
    """Collect findings from a cursor on the ``<pmd>`` root."""
    result = ParseResult()
    for file_elem in root.children("file"):
        file_name = file_elem.attribute("name")
        for violation in file_elem.children("violation"):
            finding = _read_violation(violation, file_name)
            if finding is None:
                result.skipped += 1
            else:
                result.findings.append(finding)
    return result


def parse_oclint(source: IO[bytes] | Path | str) -> ParseResult:
    """Stream a whole OCLint report.

    Raises:
        StreamError: If the markup is not well-formed.
    """
    root = open_document(source)
    result = read_findings(root)
    finish_document(root)
    log.debug("oclint_parsed", findings=len(result.findings), skipped=result.skipped)
    return result
