"""Structured logging for ingestion runs.

Every event carries the id of the run it belongs to and, while a report is
being processed, that report's kind and path. Each configured output picks
its own renderer (console or JSON) and level.

Modules log through a module-level logger with snake_case event names::

    log = structlog.get_logger(__name__)
    log.warning("path_unresolved", path=report_path)
"""

from __future__ import annotations

import logging
import sys
from collections.abc import Iterator
from contextlib import contextmanager
from contextvars import ContextVar
from pathlib import Path
from typing import TYPE_CHECKING, Any
from uuid import uuid4

import structlog

if TYPE_CHECKING:
    from reportbridge.config.models import LoggingConfig, LogOutputConfig

_run_id: ContextVar[str | None] = ContextVar("run_id", default=None)


def get_run_id() -> str | None:
    return _run_id.get()


def set_run_id(run_id: str | None = None) -> str:
    """Set or generate the id shared by all events of one ingestion run."""
    rid = run_id or uuid4().hex[:12]
    _run_id.set(rid)
    return rid


def clear_run_id() -> None:
    _run_id.set(None)


@contextmanager
def report_context(kind: str, report: str) -> Iterator[None]:
    """Attach ``report_kind`` and ``report`` to events logged inside the block."""
    with structlog.contextvars.bound_contextvars(report_kind=kind, report=report):
        yield


def _add_run_id(
    _logger: structlog.types.WrappedLogger,
    _method_name: str,
    event_dict: dict[str, Any],
) -> dict[str, Any]:
    if rid := get_run_id():
        event_dict["run_id"] = rid
    return event_dict


def _level_number(name: str | None, default: int) -> int:
    if name is None:
        return default
    return logging.getLevelNamesMapping().get(name.upper(), default)


def _renderer(output: LogOutputConfig) -> structlog.types.Processor:
    if output.format == "json":
        return structlog.processors.JSONRenderer()
    stream = sys.stdout if output.destination == "stdout" else sys.stderr
    colors = output.destination in ("stderr", "stdout") and stream.isatty()
    return structlog.dev.ConsoleRenderer(colors=colors, pad_event_to=0, pad_level=False)


def _create_handler(destination: str) -> logging.Handler:
    """Handler for stderr, stdout, or an absolute file path (appended to)."""
    if destination == "stderr":
        return logging.StreamHandler(sys.stderr)
    if destination == "stdout":
        return logging.StreamHandler(sys.stdout)
    path = Path(destination)
    path.parent.mkdir(parents=True, exist_ok=True)
    return logging.FileHandler(path, mode="a", encoding="utf-8")


def configure_logging(
    *,
    config: LoggingConfig | None = None,
    json_format: bool = False,
    level: str = "INFO",
) -> None:
    """Route structlog through stdlib logging to the configured outputs.

    Args:
        config: Logging configuration. When given, ``json_format`` and
            ``level`` are ignored.
        json_format: Render a single stderr output as JSON.
        level: Level of the single stderr output.
    """
    from reportbridge.config.models import LoggingConfig, LogOutputConfig

    if config is None:
        config = LoggingConfig(
            level=level.upper(),  # type: ignore[arg-type]
            outputs=[LogOutputConfig(format="json" if json_format else "console")],
        )

    root_level = _level_number(config.level, logging.INFO)
    pre_chain: list[structlog.types.Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_logger_name,
        structlog.processors.add_log_level,
        structlog.processors.TimeStamper(fmt="%Y-%m-%d %H:%M:%S", key="timestamp"),
        _add_run_id,  # type: ignore[list-item]
    ]

    structlog.configure(
        processors=[*pre_chain, structlog.stdlib.ProcessorFormatter.wrap_for_formatter],
        wrapper_class=structlog.make_filtering_bound_logger(root_level),
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        # Reconfiguring mid-process (e.g. --verbose) must reach existing loggers
        cache_logger_on_first_use=False,
    )

    root = logging.getLogger()
    root.handlers.clear()
    root.setLevel(root_level)

    for output in config.outputs:
        handler = _create_handler(output.destination)
        handler.setLevel(_level_number(output.level, root_level))
        handler.setFormatter(
            structlog.stdlib.ProcessorFormatter(
                processor=_renderer(output),
                foreign_pre_chain=pre_chain,
            )
        )
        root.addHandler(handler)


def get_logger(name: str | None = None) -> structlog.stdlib.BoundLogger:
    """Logger whose events carry ``logger=name``."""
    return structlog.get_logger(name) if name else structlog.get_logger()  # type: ignore[no-any-return]
