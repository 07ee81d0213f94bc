"""Project file index.

Maps an absolute path to the project's canonical handle for that file.
Lookups are exact: no fuzzy matching, no case folding, no extension
substitution.
"""

from __future__ import annotations

import os
from collections.abc import Iterable
from dataclasses import dataclass
from pathlib import Path
from typing import Protocol

import structlog

from reportbridge.core.excludes import is_prunable

log = structlog.get_logger(__name__)


@dataclass(frozen=True, slots=True)
class SourceFile:
    """Canonical identity of a project source file."""

    path: Path  # absolute, normalized
    relative_path: str  # POSIX-style, relative to the project base dir


def normalize(path: Path | str) -> Path:
    """Absolute, lexically normalized path. Symlinks are not followed."""
    return Path(os.path.normpath(os.path.abspath(path)))


class FileIndex(Protocol):
    """Lookup from absolute path to project file."""

    def lookup(self, absolute_path: Path) -> SourceFile | None:
        """Return the project file at exactly this path, or None."""
        ...


class DirectoryFileIndex:
    """Index of regular files under a project base directory.

    The tree is walked once, on first lookup. Tool, VCS and dependency
    directories (see core.excludes) are not traversed.
    """

    def __init__(self, base_dir: Path, *, extra_pruned: Iterable[str] = ()) -> None:
        self._base_dir = normalize(base_dir)
        self._extra_pruned = frozenset(name.lower() for name in extra_pruned)
        self._files: dict[Path, SourceFile] | None = None

    @property
    def base_dir(self) -> Path:
        return self._base_dir

    def __len__(self) -> int:
        return len(self._load())

    def lookup(self, absolute_path: Path) -> SourceFile | None:
        return self._load().get(normalize(absolute_path))

    def _load(self) -> dict[Path, SourceFile]:
        if self._files is None:
            self._files = self._walk()
            log.debug("file_index_built", base_dir=str(self._base_dir), files=len(self._files))
        return self._files

    def _walk(self) -> dict[Path, SourceFile]:
        files: dict[Path, SourceFile] = {}
        for dirpath, dirnames, filenames in os.walk(self._base_dir):
            dirnames[:] = sorted(d for d in dirnames if not is_prunable(d, self._extra_pruned))
            current = Path(dirpath)
            for filename in sorted(filenames):
                path = current / filename
                if not path.is_file():
                    continue
                files[path] = SourceFile(
                    path=path,
                    relative_path=path.relative_to(self._base_dir).as_posix(),
                )
        return files


class StaticFileIndex:
    """Index over an explicit set of files, for embedding hosts and tests."""

    def __init__(self, base_dir: Path, paths: Iterable[Path | str]) -> None:
        self._base_dir = normalize(base_dir)
        self._files: dict[Path, SourceFile] = {}
        for raw in paths:
            path = normalize(raw if Path(raw).is_absolute() else self._base_dir / raw)
            try:
                relative = path.relative_to(self._base_dir).as_posix()
            except ValueError:
                relative = path.as_posix()
            self._files[path] = SourceFile(path=path, relative_path=relative)

    def __len__(self) -> int:
        return len(self._files)

    def lookup(self, absolute_path: Path) -> SourceFile | None:
        return self._files.get(normalize(absolute_path))
