"""Tests for structured logging."""

import json
import logging
from pathlib import Path

import structlog

from reportbridge.config.models import LoggingConfig, LogOutputConfig
from reportbridge.core.logging import (
    clear_run_id,
    configure_logging,
    get_logger,
    get_run_id,
    report_context,
    set_run_id,
)


class TestRunIdCorrelation:
    """Run ID context variable tests."""

    def setup_method(self) -> None:
        """Clear run ID before each test."""
        clear_run_id()

    def test_given_run_id_when_set_then_can_retrieve(self) -> None:
        """Run ID can be set and retrieved."""
        result = set_run_id("run-123")

        assert result == "run-123"
        assert get_run_id() == "run-123"

    def test_given_no_id_when_set_then_generates_uuid(self) -> None:
        """Set generates UUID-based ID when none provided."""
        rid = set_run_id()

        assert len(rid) == 12  # uuid4().hex[:12]
        assert get_run_id() == rid

    def test_given_set_id_when_clear_then_removes_id(self) -> None:
        """Clear removes the current run ID."""
        set_run_id("to-clear")

        clear_run_id()

        assert get_run_id() is None


class TestLoggingConfiguration:
    """Logging configuration tests."""

    def setup_method(self) -> None:
        """Reset structlog and stdlib logging before each test."""
        structlog.reset_defaults()
        logging.getLogger().handlers.clear()
        clear_run_id()

    def teardown_method(self) -> None:
        for handler in logging.getLogger().handlers:
            handler.close()
        logging.getLogger().handlers.clear()
        clear_run_id()

    def test_given_json_file_output_when_log_then_valid_json(self, tmp_path: Path) -> None:
        """JSON output carries event, context, level and timestamp."""
        log_file = tmp_path / "run.log"
        configure_logging(
            config=LoggingConfig(
                level="INFO",
                outputs=[LogOutputConfig(format="json", destination=str(log_file))],
            )
        )

        get_logger("test").info("report_processed", kind="cobertura", files=3)

        data = json.loads(log_file.read_text().strip().splitlines()[-1])
        assert data["event"] == "report_processed"
        assert data["kind"] == "cobertura"
        assert data["files"] == 3
        assert data["level"] == "info"
        assert data["logger"] == "test"
        assert "timestamp" in data

    def test_given_run_id_when_log_then_run_id_attached(self, tmp_path: Path) -> None:
        """The current run ID is added to every event."""
        log_file = tmp_path / "run.log"
        configure_logging(
            config=LoggingConfig(
                outputs=[LogOutputConfig(format="json", destination=str(log_file))],
            )
        )
        set_run_id("abc123")

        structlog.get_logger("reportbridge.ingest").warning("path_unresolved", path="Gone.swift")

        data = json.loads(log_file.read_text().strip().splitlines()[-1])
        assert data["run_id"] == "abc123"
        assert data["path"] == "Gone.swift"

    def test_given_config_object_when_configure_then_takes_precedence(self, tmp_path: Path) -> None:
        """LoggingConfig object takes precedence over simple params."""
        log_file = tmp_path / "test.log"
        config = LoggingConfig(
            level="DEBUG",
            outputs=[LogOutputConfig(format="json", destination=str(log_file))],
        )

        # config's DEBUG should override the level="ERROR" param
        configure_logging(config=config, json_format=False, level="ERROR")
        get_logger().debug("debug msg")

        assert "debug msg" in log_file.read_text()

    def test_given_multi_output_config_when_configure_then_logs_to_all(
        self, tmp_path: Path
    ) -> None:
        """Multiple outputs receive logs according to their levels."""
        debug_file = tmp_path / "debug.log"
        info_file = tmp_path / "info.log"
        config = LoggingConfig(
            level="DEBUG",
            outputs=[
                LogOutputConfig(format="json", destination=str(info_file), level="INFO"),
                LogOutputConfig(format="json", destination=str(debug_file)),
            ],
        )

        configure_logging(config=config)
        logger = get_logger()
        logger.debug("debug only")
        logger.info("info msg")

        info_content = info_file.read_text()
        assert "info msg" in info_content
        assert "debug only" not in info_content

        debug_content = debug_file.read_text()
        assert "debug only" in debug_content
        assert "info msg" in debug_content

    def test_given_console_output_when_configure_then_handler_added(self) -> None:
        """Simple setup installs one stderr handler."""
        configure_logging(level="WARNING")

        handlers = logging.getLogger().handlers
        assert len(handlers) == 1
        assert logging.getLogger().level == logging.WARNING

    def test_given_report_context_when_log_then_report_fields_attached(
        self, tmp_path: Path
    ) -> None:
        """Events inside a report context carry its kind and path; later ones do not."""
        log_file = tmp_path / "run.log"
        configure_logging(
            config=LoggingConfig(
                outputs=[LogOutputConfig(format="json", destination=str(log_file))],
            )
        )
        logger = get_logger("reportbridge.ingest.driver")

        with report_context("cobertura", "build/coverage.xml"):
            logger.info("report_processing")
        logger.info("run_finished")

        inside, after = (json.loads(line) for line in log_file.read_text().strip().splitlines())
        assert inside["report_kind"] == "cobertura"
        assert inside["report"] == "build/coverage.xml"
        assert inside["logger"] == "reportbridge.ingest.driver"
        assert "report" not in after
