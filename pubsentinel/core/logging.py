"""Structured logging for the CLI — structlog rendered through stdlib logging."""

from __future__ import annotations

import logging.config
import os

import structlog

DEFAULT_LEVEL = "WARNING"

_SHARED_PROCESSORS: list[structlog.types.Processor] = [
    structlog.contextvars.merge_contextvars,
    structlog.stdlib.add_log_level,
    structlog.stdlib.add_logger_name,
    structlog.processors.TimeStamper(fmt="iso", utc=True),
    structlog.processors.format_exc_info,
]


def _renderer(log_format: str) -> structlog.types.Processor:
    if log_format == "json":
        return structlog.processors.JSONRenderer()
    return structlog.dev.ConsoleRenderer()


def setup_logging(level: str | None = None) -> None:
    """Route pubsentinel's structlog events to stderr.

    *level* (or ``PUBSENTINEL_LOG_LEVEL``) applies to the ``pubsentinel``
    logger only; everything else, httpx included, stays at WARNING.
    ``PUBSENTINEL_LOG_FORMAT`` picks ``console`` (default) or ``json``.
    """
    log_level = (level or os.environ.get("PUBSENTINEL_LOG_LEVEL", DEFAULT_LEVEL)).upper()
    log_format = os.environ.get("PUBSENTINEL_LOG_FORMAT", "console").lower()

    structlog.configure(
        processors=[*_SHARED_PROCESSORS, structlog.stdlib.ProcessorFormatter.wrap_for_formatter],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )

    logging.config.dictConfig(
        {
            "version": 1,
            "disable_existing_loggers": False,
            "formatters": {
                "structlog": {
                    "()": structlog.stdlib.ProcessorFormatter,
                    "foreign_pre_chain": _SHARED_PROCESSORS,
                    "processors": [
                        structlog.stdlib.ProcessorFormatter.remove_processors_meta,
                        _renderer(log_format),
                    ],
                },
            },
            "handlers": {
                "stderr": {
                    "class": "logging.StreamHandler",
                    "stream": "ext://sys.stderr",
                    "formatter": "structlog",
                },
            },
            "root": {"handlers": ["stderr"], "level": DEFAULT_LEVEL},
            "loggers": {"pubsentinel": {"level": log_level}},
        }
    )
