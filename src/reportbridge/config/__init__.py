"""Config module exports."""

from reportbridge.config.loader import load_config, resolve_root_directory
from reportbridge.config.models import (
    LoggingConfig,
    ProjectConfig,
    ReportBridgeConfig,
    ReportsConfig,
    ReportSourceConfig,
)

__all__ = [
    "load_config",
    "resolve_root_directory",
    "LoggingConfig",
    "ProjectConfig",
    "ReportBridgeConfig",
    "ReportsConfig",
    "ReportSourceConfig",
]
