"""Destinations for normalized report output.

The driver hands each resolved file's measures, and each resolved finding,
to a sink one at a time. What the sink does with them is its own business:
the return value is ignored.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Protocol

from reportbridge.coverage.measures import CoverageMeasures, CoverageSummary
from reportbridge.issues.models import Finding
from reportbridge.project.index import SourceFile


class ReportSink(Protocol):
    """Host-side store for coverage measures and findings."""

    def save_coverage(self, target: SourceFile, measures: CoverageMeasures) -> None: ...

    def save_finding(self, target: SourceFile, finding: Finding) -> None: ...


@dataclass
class FileRecord:
    """Everything a MemorySink holds for one project file."""

    target: SourceFile
    coverage: CoverageMeasures | None = None
    findings: list[Finding] = field(default_factory=list)


class MemorySink:
    """In-process sink keyed by project-relative path.

    Coverage saved twice for the same file keeps the later measure set, as a
    measure store would. Findings accumulate.
    """

    def __init__(self) -> None:
        self._records: dict[str, FileRecord] = {}

    def _record(self, target: SourceFile) -> FileRecord:
        record = self._records.get(target.relative_path)
        if record is None:
            record = self._records[target.relative_path] = FileRecord(target=target)
        return record

    def save_coverage(self, target: SourceFile, measures: CoverageMeasures) -> None:
        self._record(target).coverage = measures

    def save_finding(self, target: SourceFile, finding: Finding) -> None:
        self._record(target).findings.append(finding)

    @property
    def records(self) -> dict[str, FileRecord]:
        return self._records

    def coverage_for(self, relative_path: str) -> CoverageMeasures | None:
        record = self._records.get(relative_path)
        return record.coverage if record else None

    def findings_for(self, relative_path: str) -> list[Finding]:
        record = self._records.get(relative_path)
        return list(record.findings) if record else []

    @property
    def total_findings(self) -> int:
        return sum(len(r.findings) for r in self._records.values())

    def coverage_summary(self) -> CoverageSummary:
        return CoverageSummary.of(
            r.coverage for r in self._records.values() if r.coverage is not None
        )

    def to_dict(self) -> dict[str, Any]:
        """JSON-ready view, files sorted by path."""
        files: dict[str, Any] = {}
        for path in sorted(self._records):
            record = self._records[path]
            files[path] = {
                "coverage": record.coverage.to_dict() if record.coverage else None,
                "findings": [f.to_dict() for f in record.findings],
            }
        return {
            "summary": {
                "coverage": self.coverage_summary().to_dict(),
                "findings": self.total_findings,
            },
            "files": files,
        }
