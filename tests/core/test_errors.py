"""Tests for error types and codes."""

import pytest

from reportbridge.core.errors import (
    ConfigError,
    ErrorCode,
    ReportBridgeError,
    ReportParseError,
    StreamError,
)


class TestErrorCode:
    """Error code value tests."""

    @pytest.mark.parametrize(
        ("code", "expected_range"),
        [
            (ErrorCode.CONFIG_PARSE_ERROR, 2000),
            (ErrorCode.CONFIG_INVALID_VALUE, 2000),
            (ErrorCode.REPORT_MALFORMED, 3000),
            (ErrorCode.REPORT_MISSING_ELEMENT, 3000),
            (ErrorCode.REPORT_NOT_NUMERIC, 3000),
            (ErrorCode.REPORT_BAD_CONDITION_COVERAGE, 3000),
        ],
    )
    def test_given_error_code_when_checked_then_in_correct_range(
        self, code: ErrorCode, expected_range: int
    ) -> None:
        """Error codes fall within their designated numeric range."""
        assert expected_range <= code.value < expected_range + 1000

    def test_codes_are_unique(self) -> None:
        """No two names share a value."""
        values = [code.value for code in ErrorCode]
        assert len(values) == len(set(values))


class TestReportBridgeError:
    """Base error behavior tests."""

    def test_given_error_when_to_dict_then_details_are_flattened(self) -> None:
        """Details sit beside code, name and message so they log as plain fields."""
        error = ReportBridgeError(
            code=ErrorCode.CONFIG_PARSE_ERROR,
            message="Test message",
            details={"path": "config.yaml"},
        )

        assert error.to_dict() == {
            "code": 2001,
            "error": "CONFIG_PARSE_ERROR",
            "message": "Test message",
            "path": "config.yaml",
        }

    def test_str_includes_code_and_name(self) -> None:
        error = ReportBridgeError(code=ErrorCode.REPORT_MALFORMED, message="boom")
        assert str(error) == "[3001] REPORT_MALFORMED: boom"

    def test_is_raisable(self) -> None:
        with pytest.raises(ReportBridgeError) as exc_info:
            raise StreamError.missing_element("lines", "class")
        assert exc_info.value.details == {"element": "lines", "parent": "class"}


class TestConfigError:
    """ConfigError factory tests."""

    def test_parse_error(self) -> None:
        error = ConfigError.parse_error("/tmp/config.yaml", "bad indent")
        assert error.code == ErrorCode.CONFIG_PARSE_ERROR
        assert "/tmp/config.yaml" in error.message
        assert error.details == {"path": "/tmp/config.yaml", "reason": "bad indent"}

    def test_invalid_value_stringifies_value(self) -> None:
        error = ConfigError.invalid_value("logging.level", 42, "not a level")
        assert error.details["value"] == "42"


class TestStreamError:
    """StreamError factory tests."""

    def test_malformed_with_position(self) -> None:
        error = StreamError.malformed("mismatched tag", line=3, column=7)
        assert error.code == ErrorCode.REPORT_MALFORMED
        assert "line 3, column 7" in error.message
        assert error.details == {"reason": "mismatched tag", "line": 3, "column": 7}

    def test_malformed_without_position(self) -> None:
        error = StreamError.malformed("empty")
        assert "line" not in error.message

    def test_missing_element(self) -> None:
        error = StreamError.missing_element("lines", "class")
        assert error.code == ErrorCode.REPORT_MISSING_ELEMENT
        assert error.message == "Required element <lines> missing under <class>"

    def test_unexpected_end(self) -> None:
        assert StreamError.unexpected_end().code == ErrorCode.REPORT_UNEXPECTED_END


class TestReportParseError:
    """ReportParseError factory tests."""

    def test_not_numeric(self) -> None:
        error = ReportParseError.not_numeric("hits", "abc")
        assert error.code == ErrorCode.REPORT_NOT_NUMERIC
        assert error.details == {"field": "hits", "value": "abc"}
        assert "'abc'" in error.message

    def test_bad_condition_coverage(self) -> None:
        error = ReportParseError.bad_condition_coverage("50%", "missing '(covered/total)'")
        assert error.details["value"] == "50%"

    def test_missing_attribute(self) -> None:
        error = ReportParseError.missing_attribute("number", "line")
        assert error.code == ErrorCode.REPORT_MISSING_ATTRIBUTE
        assert error.error_name == "REPORT_MISSING_ATTRIBUTE"

    def test_parse_and_stream_errors_are_distinct(self) -> None:
        assert not issubclass(ReportParseError, StreamError)
        assert not issubclass(StreamError, ReportParseError)
