"""Report file discovery by Ant-style glob pattern.

Patterns are relative to the project base dir (absolute patterns are
allowed) and support ``*`` (within one path segment), ``?`` (one character)
and ``**`` (any number of segments). Matching is case-insensitive.
"""

from __future__ import annotations

import os
import re
from pathlib import Path, PurePosixPath

import structlog

from reportbridge.core.excludes import is_hardcoded_dir

log = structlog.get_logger(__name__)

_WILDCARD_CHARS = frozenset("*?")


def pattern_to_regex(pattern: str) -> re.Pattern[str]:
    """Compile an Ant-style pattern into a case-insensitive full-match regex."""
    parts: list[str] = []
    i = 0
    while i < len(pattern):
        if pattern.startswith("**/", i):
            parts.append("(?:.*/)?")
            i += 3
        elif pattern.startswith("**", i):
            parts.append(".*")
            i += 2
        elif pattern[i] == "*":
            parts.append("[^/]*")
            i += 1
        elif pattern[i] == "?":
            parts.append("[^/]")
            i += 1
        else:
            parts.append(re.escape(pattern[i]))
            i += 1
    return re.compile("".join(parts), re.IGNORECASE)


def _split_literal_prefix(pattern: str) -> tuple[str, str]:
    """Split off the leading directory segments that contain no wildcards."""
    segments = pattern.split("/")
    literal: list[str] = []
    for segment in segments[:-1]:
        if any(ch in _WILDCARD_CHARS for ch in segment):
            break
        literal.append(segment)
    rest = segments[len(literal) :]
    return "/".join(literal), "/".join(rest)


def discover_reports(base_dir: Path, pattern: str) -> list[Path]:
    """Find report files under base_dir matching ``pattern``.

    Returns:
        Absolute paths sorted by their path relative to the search root.
    """
    pattern = pattern.replace("\\", "/")
    if pattern.endswith("/"):
        pattern += "**"

    prefix, rest = _split_literal_prefix(pattern)
    if PurePosixPath(pattern).is_absolute():
        search_root = Path(prefix or "/")
    else:
        search_root = base_dir / prefix if prefix else base_dir
        if prefix and not search_root.is_dir():
            # The literal prefix may differ in case from the directory on disk
            search_root, rest = base_dir, pattern

    if not search_root.is_dir():
        log.debug("report_root_missing", pattern=pattern, search_root=str(search_root))
        return []

    matcher = pattern_to_regex(rest)
    recursive = "**" in rest or "/" in rest
    found: list[tuple[str, Path]] = []

    for dirpath, dirnames, filenames in os.walk(search_root):
        current = Path(dirpath)
        if recursive:
            dirnames[:] = [d for d in dirnames if not is_hardcoded_dir(d)]
        else:
            dirnames[:] = []
        for filename in filenames:
            path = current / filename
            relative = path.relative_to(search_root).as_posix()
            if matcher.fullmatch(relative) and path.is_file():
                found.append((relative, path))

    found.sort(key=lambda item: item[0])
    log.debug("reports_discovered", pattern=pattern, count=len(found))
    return [path.resolve() for _, path in found]
