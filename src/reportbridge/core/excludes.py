"""Directory exclusion for the project file index.

Tier 0 (HARDCODED_DIRS): Never traversed.
    - VCS internals and ReportBridge's own data directory

Tier 1 (DEFAULT_PRUNABLE_DIRS): Dependencies and build outputs.
    - Sources here are not project files, so findings against them are
      reported as unresolved rather than attributed to the project.

Names are compared case-insensitively: Xcode projects usually live on
case-insensitive filesystems.
"""

from __future__ import annotations

HARDCODED_DIRS: frozenset[str] = frozenset(
    (
        ".git",
        ".svn",
        ".hg",
        ".bzr",
        ".reportbridge",
    )
)

DEFAULT_PRUNABLE_DIRS: frozenset[str] = frozenset(
    (
        # iOS/macOS ecosystem
        "pods",  # CocoaPods
        "carthage",
        "deriveddata",  # Xcode build
        ".build",  # Swift Package Manager build
        ".swiftpm",
        "xcuserdata",
        # Report output
        "sonar-reports",
        # Generic tooling
        "node_modules",
        "__pycache__",
        ".venv",
    )
)

PRUNABLE_DIRS: frozenset[str] = HARDCODED_DIRS | DEFAULT_PRUNABLE_DIRS


def is_hardcoded_dir(dirname: str) -> bool:
    """Check if a directory name is always excluded."""
    return dirname.lower() in HARDCODED_DIRS


def is_prunable(dirname: str, extra: frozenset[str] = frozenset()) -> bool:
    """Check if a directory name should not be traversed."""
    name = dirname.lower()
    return name in PRUNABLE_DIRS or name in extra
