"""Errors raised while loading configuration or reading reports.

Codes are grouped by the thousands digit: 2xxx for configuration, 3xxx for
report content (30xx structure, 31xx values).
"""

from dataclasses import dataclass, field
from enum import IntEnum
from typing import Any


class ErrorCode(IntEnum):
    """Stable numeric identifiers, reported in JSON output and logs."""

    # Config (2xxx)
    CONFIG_PARSE_ERROR = 2001
    CONFIG_INVALID_VALUE = 2002

    # Report ingestion (3xxx)
    REPORT_MALFORMED = 3001
    REPORT_MISSING_ELEMENT = 3002
    REPORT_UNEXPECTED_END = 3003
    REPORT_ELEMENT_PASSED = 3004
    REPORT_NOT_NUMERIC = 3101
    REPORT_OUT_OF_RANGE = 3102
    REPORT_BAD_CONDITION_COVERAGE = 3103
    REPORT_MISSING_ATTRIBUTE = 3104


@dataclass(frozen=True, slots=True)
class ReportBridgeError(Exception):
    """Error carrying a code and the values that caused it."""

    code: ErrorCode
    message: str
    details: dict[str, Any] = field(default_factory=dict)

    @property
    def error_name(self) -> str:
        """Code name used as the ``error`` field of log events."""
        return self.code.name

    def to_dict(self) -> dict[str, Any]:
        """Flat fields for a log event: code, name, message and details."""
        return {
            "code": self.code.value,
            "error": self.error_name,
            "message": self.message,
            **self.details,
        }

    def __str__(self) -> str:
        return f"[{self.code.value}] {self.error_name}: {self.message}"


class ConfigError(ReportBridgeError):
    """A configuration file or override could not be used."""

    @classmethod
    def parse_error(cls, path: str, reason: str) -> "ConfigError":
        return cls(
            code=ErrorCode.CONFIG_PARSE_ERROR,
            message=f"Failed to parse config at {path}: {reason}",
            details={"path": path, "reason": reason},
        )

    @classmethod
    def invalid_value(cls, field: str, value: Any, reason: str) -> "ConfigError":
        return cls(
            code=ErrorCode.CONFIG_INVALID_VALUE,
            message=f"Invalid value for '{field}': {reason}",
            details={"field": field, "value": str(value), "reason": reason},
        )


class StreamError(ReportBridgeError):
    """Markup is not well-formed or a required structural element is absent.

    Aborts the report being streamed; other reports are unaffected.
    """

    @classmethod
    def malformed(cls, reason: str, line: int | None = None, column: int | None = None) -> "StreamError":
        where = f" at line {line}, column {column}" if line is not None else ""
        return cls(
            code=ErrorCode.REPORT_MALFORMED,
            message=f"Malformed report markup{where}: {reason}",
            details={"reason": reason, "line": line, "column": column},
        )

    @classmethod
    def missing_element(cls, name: str, parent: str) -> "StreamError":
        return cls(
            code=ErrorCode.REPORT_MISSING_ELEMENT,
            message=f"Required element <{name}> missing under <{parent}>",
            details={"element": name, "parent": parent},
        )

    @classmethod
    def unexpected_end(cls) -> "StreamError":
        return cls(
            code=ErrorCode.REPORT_UNEXPECTED_END,
            message="Report ended before the document was complete",
        )

    @classmethod
    def element_passed(cls, name: str) -> "StreamError":
        return cls(
            code=ErrorCode.REPORT_ELEMENT_PASSED,
            message=f"Text of <{name}> read after the stream moved past it",
            details={"element": name},
        )


class ReportParseError(ReportBridgeError):
    """A required value inside a report could not be interpreted.

    Raised mid-stream, so it aborts the current report like StreamError.
    """

    @classmethod
    def not_numeric(cls, field: str, value: str | None) -> "ReportParseError":
        return cls(
            code=ErrorCode.REPORT_NOT_NUMERIC,
            message=f"Attribute '{field}' is not numeric: {value!r}",
            details={"field": field, "value": value},
        )

    @classmethod
    def out_of_range(cls, field: str, value: str) -> "ReportParseError":
        return cls(
            code=ErrorCode.REPORT_OUT_OF_RANGE,
            message=f"Attribute '{field}' is out of integer range: {value!r}",
            details={"field": field, "value": value},
        )

    @classmethod
    def bad_condition_coverage(cls, value: str, reason: str) -> "ReportParseError":
        return cls(
            code=ErrorCode.REPORT_BAD_CONDITION_COVERAGE,
            message=f"Malformed condition-coverage {value!r}: {reason}",
            details={"value": value, "reason": reason},
        )

    @classmethod
    def missing_attribute(cls, field: str, element: str) -> "ReportParseError":
        return cls(
            code=ErrorCode.REPORT_MISSING_ATTRIBUTE,
            message=f"Required attribute '{field}' missing on <{element}>",
            details={"field": field, "element": element},
        )
