"""Project files and report path resolution."""

from reportbridge.project.index import (
    DirectoryFileIndex,
    FileIndex,
    SourceFile,
    StaticFileIndex,
)
from reportbridge.project.resolver import NotFound, Resolution, Resolved, resolve

__all__ = [
    "DirectoryFileIndex",
    "FileIndex",
    "NotFound",
    "Resolution",
    "Resolved",
    "SourceFile",
    "StaticFileIndex",
    "resolve",
]
