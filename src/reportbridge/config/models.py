"""Configuration models for report discovery, path resolution and logging.

See :mod:`reportbridge.config.loader` for how files, environment variables
and overrides are layered. Any field can be set from the environment with
the section and key joined by double underscores:

    REPORTBRIDGE__LOGGING__LEVEL=DEBUG
    REPORTBRIDGE__PROJECT__ROOT_DIRECTORY=/work/app
    REPORTBRIDGE__REPORTS__SWIFTLINT__ENABLED=false
    REPORTBRIDGE__REPORTS__COBERTURA__PATH=build/reports/cobertura.xml
"""

from pathlib import Path
from typing import Any, Literal

from pydantic import BaseModel, Field, field_validator, model_validator

from reportbridge.config.constants import (
    DEFAULT_COBERTURA_PATTERN,
    DEFAULT_OCLINT_PATTERN,
    DEFAULT_SWIFTLINT_PATTERN,
    DEFAULT_TAILOR_PATTERN,
)

LogLevel = Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]

_DEFAULT_PATTERNS = {
    "cobertura": DEFAULT_COBERTURA_PATTERN,
    "oclint": DEFAULT_OCLINT_PATTERN,
    "swiftlint": DEFAULT_SWIFTLINT_PATTERN,
    "tailor": DEFAULT_TAILOR_PATTERN,
}


class LogOutputConfig(BaseModel):
    """One place log events are written to. Lists of outputs are set in YAML."""

    format: Literal["json", "console"] = "console"
    destination: str = "stderr"  # or "stdout", or an absolute file path
    level: LogLevel | None = None  # None: root level

    @field_validator("destination")
    @classmethod
    def validate_destination(cls, v: str) -> str:
        if v in ("stderr", "stdout"):
            return v
        path = Path(v).expanduser()
        if path.is_absolute():
            return str(path)
        raise ValueError(f"Log file destination must be an absolute path, got {v!r}")


class LoggingConfig(BaseModel):
    """Root log level and outputs. Defaults to console output on stderr."""

    level: LogLevel = Field(
        default="INFO",
        description="Root log level. DEBUG logs every emitted file.",
    )
    outputs: list[LogOutputConfig] = Field(default_factory=lambda: [LogOutputConfig()])


class ReportSourceConfig(BaseModel):
    """Where to find one kind of report, and whether to ingest it."""

    path: str = Field(
        description="Glob pattern relative to the project base dir. "
        "Supports *, ** and ?; matching is case-insensitive.",
    )
    enabled: bool = Field(
        default=True,
        description="Disable to skip this report kind entirely.",
    )

    @field_validator("path")
    @classmethod
    def validate_path(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("Report path pattern must not be empty")
        return v.strip()


class ReportsConfig(BaseModel):
    """Report discovery configuration, one entry per report kind.

    Env vars:
        REPORTBRIDGE__REPORTS__<KIND>__PATH: Glob pattern for the kind
        REPORTBRIDGE__REPORTS__<KIND>__ENABLED: Enable/disable the kind
    """

    cobertura: ReportSourceConfig = Field(
        default_factory=lambda: ReportSourceConfig(path=DEFAULT_COBERTURA_PATTERN)
    )
    oclint: ReportSourceConfig = Field(
        default_factory=lambda: ReportSourceConfig(path=DEFAULT_OCLINT_PATTERN)
    )
    swiftlint: ReportSourceConfig = Field(
        default_factory=lambda: ReportSourceConfig(path=DEFAULT_SWIFTLINT_PATTERN)
    )
    tailor: ReportSourceConfig = Field(
        default_factory=lambda: ReportSourceConfig(path=DEFAULT_TAILOR_PATTERN)
    )

    @model_validator(mode="before")
    @classmethod
    def fill_default_paths(cls, data: Any) -> Any:
        # A kind configured without a path (e.g. only `enabled: false`) keeps its default
        if not isinstance(data, dict):
            return data
        filled = dict(data)
        for key, default in _DEFAULT_PATTERNS.items():
            source = filled.get(key)
            if isinstance(source, dict) and "path" not in source:
                filled[key] = {**source, "path": default}
        return filled

    def for_key(self, key: str) -> ReportSourceConfig:
        """Return the source config registered under a report kind's key."""
        source = getattr(self, key, None)
        if not isinstance(source, ReportSourceConfig):
            raise KeyError(key)
        return source


class ProjectConfig(BaseModel):
    """Project layout.

    Env vars:
        REPORTBRIDGE__PROJECT__ROOT_DIRECTORY: Directory report paths are relative to
    """

    root_directory: str | None = Field(
        default=None,
        description="Directory that relative file paths inside reports are joined to. "
        "Defaults to the project base dir.",
    )


class ReportBridgeConfig(BaseModel):
    """Fully resolved configuration of one ingestion run."""

    logging: LoggingConfig = Field(default_factory=LoggingConfig)
    project: ProjectConfig = Field(default_factory=ProjectConfig)
    reports: ReportsConfig = Field(default_factory=ReportsConfig)
