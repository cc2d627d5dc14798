"""Structured logging for grails-build — structlog rendered through stdlib logging on stderr."""

from __future__ import annotations

import logging
import logging.config
import os

import structlog


def _renderer(log_format: str) -> structlog.types.Processor:
    if log_format == "json":
        return structlog.processors.JSONRenderer()
    return structlog.dev.ConsoleRenderer()


def setup_logging(verbose: bool = False) -> None:
    """Configure the ``grails_build`` loggers.

    Stdout stays free for task output; every log line goes to stderr.

    Environment:
        GRAILS_BUILD_LOG_LEVEL  — overrides the level (INFO, or DEBUG with ``-v``)
        GRAILS_BUILD_LOG_FORMAT — console | json (default: console)
    """
    level = os.environ.get("GRAILS_BUILD_LOG_LEVEL", "DEBUG" if verbose else "INFO").upper()
    log_format = os.environ.get("GRAILS_BUILD_LOG_FORMAT", "console").lower()

    pre_chain: list[structlog.types.Processor] = [
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.processors.TimeStamper(fmt="iso", utc=True),
        structlog.processors.format_exc_info,
    ]

    structlog.configure(
        processors=pre_chain + [structlog.stdlib.ProcessorFormatter.wrap_for_formatter],
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
                    "foreign_pre_chain": pre_chain,
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
            "loggers": {
                "grails_build": {"handlers": ["stderr"], "level": level, "propagate": False},
            },
        }
    )
