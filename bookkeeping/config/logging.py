"""Structured logging for the bookkeeping engine.

Engine modules log through ``get_logger(__name__)`` at import time. Until an
application calls ``configure_logging`` the events are filtered at WARNING and
written to stderr, so library callers never see engine output on stdout.
"""

import logging
import sys
from typing import Literal

import structlog

from bookkeeping.config.settings import load_engine_config

LogLevel = Literal["DEBUG", "INFO", "WARNING", "ERROR"]
LogFormat = Literal["json", "console"]


def _renderer(log_format: str) -> structlog.types.Processor:
    if log_format == "json":
        return structlog.processors.JSONRenderer()
    return structlog.dev.ConsoleRenderer(
        colors=False,
        exception_formatter=structlog.dev.plain_traceback,
    )


def _install_library_default() -> None:
    if structlog.is_configured():
        return
    structlog.configure(
        processors=[
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            _renderer("console"),
        ],
        wrapper_class=structlog.make_filtering_bound_logger(logging.WARNING),
        logger_factory=structlog.PrintLoggerFactory(sys.stderr),
    )


def configure_logging(level: LogLevel | None = None, format: LogFormat | None = None) -> None:
    """Route engine events through stdlib logging on stderr.

    Args:
        level: Log level. Defaults to ``log_level`` from the engine config.
        format: ``json`` or ``console``. Defaults to ``log_format`` from the engine config.
    """
    config = load_engine_config()
    log_level = level or config["log_level"]

    # stdout is reserved for JSON output
    logging.basicConfig(format="%(message)s", stream=sys.stderr, level=getattr(logging, log_level))

    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.format_exc_info,
            _renderer(format or config["log_format"]),
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )


def get_logger(name: str) -> structlog.stdlib.BoundLogger:
    return structlog.get_logger(name)


_install_library_default()
