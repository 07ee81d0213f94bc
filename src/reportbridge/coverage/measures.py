"""Coverage measures handed to the sink.

Every measure is derived from a FileCoverage line table:

{
    "line_hits": {line: hits, ...},
    "lines_to_cover": int,
    "covered_lines": int,
    "conditions_to_cover": int,
    "covered_conditions": int,
    "conditions_by_line": {line: total, ...},          # branch lines only
    "covered_conditions_by_line": {line: covered, ...}  # branch lines only
}
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass, field
from typing import Any

from reportbridge.coverage.models import FileCoverage


@dataclass(frozen=True, slots=True)
class CoverageMeasures:
    """Measure set for one resolved file."""

    line_hits: dict[int, int] = field(default_factory=dict)
    lines_to_cover: int = 0
    covered_lines: int = 0
    conditions_to_cover: int = 0
    covered_conditions: int = 0
    conditions_by_line: dict[int, int] = field(default_factory=dict)
    covered_conditions_by_line: dict[int, int] = field(default_factory=dict)

    @classmethod
    def from_file(cls, file_coverage: FileCoverage) -> CoverageMeasures:
        ordered = sorted(file_coverage.lines.values(), key=lambda line: line.line_number)
        branches = [line for line in ordered if line.is_branch]
        return cls(
            line_hits={line.line_number: line.hits for line in ordered},
            lines_to_cover=file_coverage.lines_to_cover,
            covered_lines=file_coverage.covered_lines,
            conditions_to_cover=file_coverage.conditions_to_cover,
            covered_conditions=file_coverage.covered_conditions,
            conditions_by_line={line.line_number: line.total_conditions for line in branches},
            covered_conditions_by_line={
                line.line_number: line.covered_conditions for line in branches
            },
        )

    @property
    def line_rate(self) -> float:
        if self.lines_to_cover == 0:
            return 0.0
        return self.covered_lines / self.lines_to_cover

    @property
    def branch_rate(self) -> float | None:
        if self.conditions_to_cover == 0:
            return None
        return self.covered_conditions / self.conditions_to_cover

    def to_dict(self) -> dict[str, Any]:
        # JSON object keys must be strings
        return {
            "line_hits": {str(k): v for k, v in self.line_hits.items()},
            "lines_to_cover": self.lines_to_cover,
            "covered_lines": self.covered_lines,
            "conditions_to_cover": self.conditions_to_cover,
            "covered_conditions": self.covered_conditions,
            "conditions_by_line": {str(k): v for k, v in self.conditions_by_line.items()},
            "covered_conditions_by_line": {
                str(k): v for k, v in self.covered_conditions_by_line.items()
            },
        }


@dataclass(frozen=True, slots=True)
class CoverageSummary:
    """Aggregate statistics across files."""

    files: int
    lines_to_cover: int
    covered_lines: int
    conditions_to_cover: int
    covered_conditions: int

    @classmethod
    def of(cls, measures: Iterable[CoverageMeasures]) -> CoverageSummary:
        items = list(measures)
        return cls(
            files=len(items),
            lines_to_cover=sum(m.lines_to_cover for m in items),
            covered_lines=sum(m.covered_lines for m in items),
            conditions_to_cover=sum(m.conditions_to_cover for m in items),
            covered_conditions=sum(m.covered_conditions for m in items),
        )

    @property
    def line_rate(self) -> float:
        return self.covered_lines / self.lines_to_cover if self.lines_to_cover > 0 else 0.0

    @property
    def branch_rate(self) -> float | None:
        if self.conditions_to_cover == 0:
            return None
        return self.covered_conditions / self.conditions_to_cover

    def to_dict(self) -> dict[str, Any]:
        branch_rate = self.branch_rate
        return {
            "files": self.files,
            "lines_to_cover": self.lines_to_cover,
            "covered_lines": self.covered_lines,
            "line_coverage_percent": round(self.line_rate * 100.0, 2),
            "conditions_to_cover": self.conditions_to_cover,
            "covered_conditions": self.covered_conditions,
            "branch_coverage_percent": (
                round(branch_rate * 100.0, 2) if branch_rate is not None else None
            ),
        }
