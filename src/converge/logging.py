"""
structlog configuration for the engine.

Level and renderer default to the CONVERGE_LOG_LEVEL and CONVERGE_LOG_FORMAT
settings; drivers may pass explicit values instead.
"""

import logging
from typing import Any

import structlog

from converge.config import get_settings


def _renderer(log_format: str) -> Any:
    if log_format == "console":
        return structlog.dev.ConsoleRenderer()
    return structlog.processors.JSONRenderer()


def configure_logging(level: int | str | None = None, *, log_format: str | None = None) -> None:
    """Configure structlog/standard logging bridge."""

    settings = get_settings()
    if level is None:
        level = settings.log_level
    if log_format is None:
        log_format = settings.log_format

    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.stdlib.filter_by_level,
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="iso", utc=True),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            _renderer(log_format),
        ],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )

    logging.basicConfig(format="%(message)s")
    logging.getLogger().setLevel(level)


def bind_context(**kwargs: Any) -> structlog.stdlib.BoundLogger:
    """Bind contextual fields, e.g. provider and resource, for downstream logs."""

    return structlog.get_logger().bind(**kwargs)
