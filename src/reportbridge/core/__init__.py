"""Core module exports."""

from reportbridge.core.errors import (
    ConfigError,
    ErrorCode,
    ReportBridgeError,
    ReportParseError,
    StreamError,
)
from reportbridge.core.logging import (
    clear_run_id,
    configure_logging,
    get_logger,
    get_run_id,
    report_context,
    set_run_id,
)
from reportbridge.core.progress import pluralize, status

__all__ = [
    # Errors
    "ConfigError",
    "ErrorCode",
    "ReportBridgeError",
    "ReportParseError",
    "StreamError",
    # Logging
    "clear_run_id",
    "configure_logging",
    "get_logger",
    "get_run_id",
    "report_context",
    "set_run_id",
    # Console
    "pluralize",
    "status",
]
