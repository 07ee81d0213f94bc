"""Report ingestion driver.

Per report: ``OPENED -> PARSING -> EMITTING -> CLOSED``, or ``FAILED`` when
the report cannot be read or parsed. A failed report is not retried and
does not stop the run; reports are independent of each other.

A report is parsed completely before anything is emitted, because a later
``<class>`` entry can still add lines to a file seen earlier. Emission then
resolves each file path; files that resolve go to the sink, files that do
not are logged once and dropped. Exceptions raised by the sink are not a
report failure and propagate to the caller.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import IO

import structlog

from reportbridge.core.errors import ReportParseError, StreamError
from reportbridge.core.logging import report_context
from reportbridge.coverage.measures import CoverageMeasures
from reportbridge.coverage.models import FileCoverage
from reportbridge.ingest.kinds import COVERAGE_PARSERS, ISSUE_PARSERS, ReportKind
from reportbridge.ingest.sink import ReportSink
from reportbridge.issues.models import Finding, ParseResult
from reportbridge.project.index import FileIndex
from reportbridge.project.resolver import NotFound, Resolution, resolve

log = structlog.get_logger(__name__)


class ReportState(Enum):
    """Lifecycle state of one report."""

    OPENED = "opened"
    PARSING = "parsing"
    EMITTING = "emitting"
    CLOSED = "closed"
    FAILED = "failed"


@dataclass
class ReportOutcome:
    """What happened to one report file."""

    kind: ReportKind
    report_path: Path | str
    state: ReportState = ReportState.OPENED
    files_emitted: int = 0
    findings_emitted: int = 0
    unresolved: list[str] = field(default_factory=list)
    skipped: int = 0
    error: str | None = None

    @property
    def failed(self) -> bool:
        return self.state is ReportState.FAILED


class ReportDriver:
    """Runs reports through their parser, resolves paths, feeds the sink.

    Args:
        index: Project file index used for path resolution.
        sink: Receives measures and findings for resolved files.
        root_directory: Directory relative report paths are joined to.
    """

    def __init__(self, index: FileIndex, sink: ReportSink, root_directory: Path) -> None:
        self._index = index
        self._sink = sink
        self._root_directory = root_directory

    @property
    def root_directory(self) -> Path:
        return self._root_directory

    def process_all(self, kind: ReportKind, report_paths: Iterable[Path]) -> list[ReportOutcome]:
        """Process reports one after another in the given order."""
        return [self.process(kind, path) for path in report_paths]

    def process(self, kind: ReportKind, report_path: Path) -> ReportOutcome:
        """Open, parse and emit a single report file."""
        try:
            handle = report_path.open("rb")
        except OSError as e:
            with report_context(kind.value, str(report_path)):
                log.warning("report_unreadable", error=str(e))
            return ReportOutcome(
                kind=kind,
                report_path=report_path,
                state=ReportState.FAILED,
                error=str(e),
            )
        with handle:
            return self.process_stream(kind, handle, name=report_path)

    def process_stream(
        self, kind: ReportKind, handle: IO[bytes], *, name: Path | str = "<stream>"
    ) -> ReportOutcome:
        """Parse and emit a report that is already open as a byte stream."""
        with report_context(kind.value, str(name)):
            log.info("report_processing")
            return self._run(kind, handle, ReportOutcome(kind=kind, report_path=name))

    def _run(self, kind: ReportKind, handle: IO[bytes], outcome: ReportOutcome) -> ReportOutcome:
        # Only reading and parsing fail the report; sink errors propagate
        outcome.state = ReportState.PARSING
        files: list[FileCoverage] = []
        result: ParseResult | None = None
        try:
            if kind in COVERAGE_PARSERS:
                files = COVERAGE_PARSERS[kind](handle)
            else:
                result = ISSUE_PARSERS[kind](handle)
        except (StreamError, ReportParseError) as e:
            log.error("report_failed", **e.to_dict())
            return self._fail(outcome, str(e))
        except OSError as e:
            log.warning("report_unreadable", error=str(e))
            return self._fail(outcome, str(e))

        outcome.state = ReportState.EMITTING
        if result is None:
            self._emit_coverage(files, outcome)
        else:
            outcome.skipped = result.skipped
            self._emit_findings(result.findings, outcome)

        outcome.state = ReportState.CLOSED
        log.info(
            "report_processed",
            files=outcome.files_emitted,
            findings=outcome.findings_emitted,
            unresolved=len(outcome.unresolved),
            skipped=outcome.skipped,
        )
        return outcome

    @staticmethod
    def _fail(outcome: ReportOutcome, error: str) -> ReportOutcome:
        outcome.state = ReportState.FAILED
        outcome.error = error
        return outcome

    def _resolve(self, report_path: str) -> Resolution:
        return resolve(report_path, self._root_directory, self._index)

    def _unresolved(self, resolution: NotFound, outcome: ReportOutcome) -> None:
        log.warning(
            "path_unresolved",
            path=resolution.report_path,
            candidate=str(resolution.candidate),
        )
        outcome.unresolved.append(resolution.report_path)

    def _emit_coverage(self, files: list[FileCoverage], outcome: ReportOutcome) -> None:
        for file_coverage in files:
            resolution = self._resolve(file_coverage.path)
            if isinstance(resolution, NotFound):
                self._unresolved(resolution, outcome)
                continue
            self._sink.save_coverage(resolution.target, CoverageMeasures.from_file(file_coverage))
            outcome.files_emitted += 1
            log.debug("coverage_saved", path=resolution.target.relative_path)

    def _emit_findings(self, findings: list[Finding], outcome: ReportOutcome) -> None:
        # One resolution per distinct path so each unresolved path warns once
        resolutions: dict[str, Resolution] = {}
        emitted_files: set[str] = set()
        for finding in findings:
            resolution = resolutions.get(finding.path)
            if resolution is None:
                resolution = resolutions[finding.path] = self._resolve(finding.path)
                if isinstance(resolution, NotFound):
                    self._unresolved(resolution, outcome)
            if isinstance(resolution, NotFound):
                continue
            self._sink.save_finding(resolution.target, finding)
            outcome.findings_emitted += 1
            emitted_files.add(resolution.target.relative_path)
        outcome.files_emitted = len(emitted_files)
