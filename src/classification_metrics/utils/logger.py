"""Structured logging configuration built on structlog."""

from __future__ import annotations

import logging
import sys
from pathlib import Path
from typing import Any

import structlog

LOG_FORMATS = ("console", "json", "plain")


class _StderrHandler(logging.StreamHandler):  # type: ignore[type-arg]
    """Stream handler writing to whatever ``sys.stderr`` is at emit time."""

    def __init__(self, level: int = logging.NOTSET) -> None:
        """Initialise without binding a stream."""
        logging.Handler.__init__(self, level)

    @property
    def stream(self) -> Any:  # type: ignore[override]
        """Return the current standard error stream."""
        return sys.stderr


def _shared_processors() -> list[structlog.types.Processor]:
    """Return processors applied to every log event regardless of format."""
    return [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.processors.TimeStamper(fmt="iso", utc=True),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
    ]


def _select_renderer(log_format: str) -> structlog.types.Processor:
    """Pick the final renderer for the requested output format."""
    if log_format == "json":
        return structlog.processors.JSONRenderer(sort_keys=True)
    if log_format == "plain":
        return structlog.processors.KeyValueRenderer(
            key_order=["timestamp", "level", "event"],
        )
    return structlog.dev.ConsoleRenderer(colors=False)


def configure_logging(
    log_level: str = "INFO",
    log_format: str = "console",
    log_file: str | Path | None = None,
) -> None:
    """Configure structlog and the standard library root logger.

    Args:
        log_level: Minimum level name to emit (``DEBUG``, ``INFO`` ...)
        log_format: One of ``console``, ``json`` or ``plain``
        log_file: Optional path that receives a copy of every log line

    """
    normalized_format = log_format.lower()
    if normalized_format not in LOG_FORMATS:
        msg = f"Unsupported log format: {log_format!r}"
        raise ValueError(msg)

    level = logging.getLevelName(log_level.upper())
    if not isinstance(level, int):
        msg = f"Unsupported log level: {log_level!r}"
        raise ValueError(msg)

    handlers: list[logging.Handler] = [
        _StderrHandler(),
    ]
    if log_file is not None:
        log_path = Path(log_file)
        log_path.parent.mkdir(parents=True, exist_ok=True)
        handlers.append(logging.FileHandler(log_path, encoding="utf-8"))

    formatter = structlog.stdlib.ProcessorFormatter(
        foreign_pre_chain=_shared_processors(),
        processors=[
            structlog.stdlib.ProcessorFormatter.remove_processors_meta,
            _select_renderer(normalized_format),
        ],
    )
    for handler in handlers:
        handler.setFormatter(formatter)

    root_logger = logging.getLogger()
    root_logger.handlers.clear()
    for handler in handlers:
        root_logger.addHandler(handler)
    root_logger.setLevel(level)

    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            *_shared_processors(),
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=False,
    )


def get_logger(name: str | None = None, **initial_values: Any) -> Any:
    """Return a structlog logger bound to ``name`` and optional context.

    Until :func:`configure_logging` runs, events below ``WARNING`` are dropped.
    """
    if not structlog.is_configured():
        structlog.configure(
            wrapper_class=structlog.make_filtering_bound_logger(logging.WARNING),
        )
    return structlog.get_logger(name, **initial_values)


__all__ = ["LOG_FORMATS", "configure_logging", "get_logger"]
