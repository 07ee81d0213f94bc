"""Coverage data model.

File-centric: one FileCoverage per distinct ``filename`` in a report, holding
a line table keyed by line number. Paths are kept exactly as the report
spells them; resolution to project files happens later.
"""

from __future__ import annotations

from dataclasses import dataclass, field


@dataclass(frozen=True, slots=True)
class LineCoverage:
    """Coverage state of one source line.

    Condition counts are only meaningful when ``is_branch`` is set.
    """

    line_number: int
    hits: int
    is_branch: bool = False
    covered_conditions: int = 0
    total_conditions: int = 0

    def __post_init__(self) -> None:
        if self.line_number < 1:
            raise ValueError(f"line_number must be >= 1, got {self.line_number}")
        if self.hits < 0:
            raise ValueError(f"hits must be >= 0, got {self.hits}")
        if not 0 <= self.covered_conditions <= self.total_conditions:
            raise ValueError(
                f"covered_conditions ({self.covered_conditions}) must be within "
                f"0..total_conditions ({self.total_conditions})"
            )

    @property
    def is_covered(self) -> bool:
        return self.hits > 0


@dataclass(slots=True)
class FileCoverage:
    """Coverage accumulator for a single report file path.

    ``record`` overwrites any existing entry for the same line number:
    the last ``<line>`` seen for a number wins.
    """

    path: str  # as written in the report, unresolved
    lines: dict[int, LineCoverage] = field(default_factory=dict)

    def record(self, line: LineCoverage) -> None:
        self.lines[line.line_number] = line

    @property
    def lines_to_cover(self) -> int:
        return len(self.lines)

    @property
    def covered_lines(self) -> int:
        return sum(1 for line in self.lines.values() if line.is_covered)

    @property
    def conditions_to_cover(self) -> int:
        return sum(line.total_conditions for line in self.lines.values() if line.is_branch)

    @property
    def covered_conditions(self) -> int:
        return sum(line.covered_conditions for line in self.lines.values() if line.is_branch)
