"""Report ingestion - discovery, dispatch by kind, resolution and emission."""

from reportbridge.ingest.discovery import discover_reports
from reportbridge.ingest.driver import ReportDriver, ReportOutcome, ReportState
from reportbridge.ingest.kinds import ReportCategory, ReportKind, parse_kind
from reportbridge.ingest.sink import MemorySink, ReportSink

__all__ = [
    "MemorySink",
    "ReportCategory",
    "ReportDriver",
    "ReportKind",
    "ReportOutcome",
    "ReportSink",
    "ReportState",
    "discover_reports",
    "parse_kind",
]
