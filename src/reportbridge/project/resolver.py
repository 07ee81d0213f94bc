"""Resolution of report-supplied file paths to project files.

Reports name files relative to some root directory, or absolutely. The
outcome is an explicit result value rather than an exception, so callers
decide what an unresolved path means for them.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from reportbridge.project.index import FileIndex, SourceFile, normalize


@dataclass(frozen=True, slots=True)
class Resolved:
    """The report path names a project file."""

    report_path: str
    target: SourceFile


@dataclass(frozen=True, slots=True)
class NotFound:
    """No project file exists at the path the report names."""

    report_path: str
    candidate: Path  # absolute path that was looked up


Resolution = Resolved | NotFound


def candidate_path(report_path: str, root_directory: Path) -> Path:
    """Absolute path a report path refers to.

    Absolute report paths are used as they are; relative ones are joined
    to ``root_directory``.
    """
    path = Path(report_path)
    if not path.is_absolute():
        path = root_directory / path
    return normalize(path)


def resolve(report_path: str, root_directory: Path, index: FileIndex) -> Resolution:
    """Resolve ``report_path`` against ``root_directory`` via ``index``."""
    candidate = candidate_path(report_path, root_directory)
    target = index.lookup(candidate)
    if target is None:
        return NotFound(report_path=report_path, candidate=candidate)
    return Resolved(report_path=report_path, target=target)
