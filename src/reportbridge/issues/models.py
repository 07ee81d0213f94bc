"""Issue models - findings and parse results."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any


class Severity(Enum):
    """Finding severity on the host platform's scale."""

    INFO = "info"
    MINOR = "minor"
    MAJOR = "major"
    CRITICAL = "critical"
    BLOCKER = "blocker"


@dataclass(frozen=True, slots=True)
class Finding:
    """A single static-analysis result from a report.

    ``path`` is as written in the report; it has not been resolved.
    """

    path: str
    line: int
    rule_key: str
    severity: Severity
    message: str
    source: str  # tool that produced this
    column: int = 0  # 0 when the tool gives no column

    def __post_init__(self) -> None:
        if self.line < 1:
            raise ValueError(f"line must be >= 1, got {self.line}")
        if self.column < 0:
            raise ValueError(f"column must be >= 0, got {self.column}")

    def to_dict(self) -> dict[str, Any]:
        return {
            "line": self.line,
            "column": self.column,
            "rule": self.rule_key,
            "severity": self.severity.value,
            "message": self.message,
            "source": self.source,
        }


@dataclass
class ParseResult:
    """Findings from one report plus the number of entries that yielded none."""

    findings: list[Finding] = field(default_factory=list)
    skipped: int = 0
