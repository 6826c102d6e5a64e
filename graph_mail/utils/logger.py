"""Logging for graph_mail.

Library modules only ask for a named structlog logger; importing the package
configures nothing, so a host application's logging setup is left as it is.
Entry points (the CLI, scripts/) call setup_logging() to render structlog
events through the stdlib root logger.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any

import structlog

from graph_mail.config import LOG_FILE, LOG_LEVEL, VERBOSE_LOGGING

# httpx logs every request at INFO
QUIET_LOGGERS = ("httpx", "httpcore")

_installed_handlers: list[logging.Handler] = []


def _resolve_level(level: str | None) -> int:
    if level:
        return int(level) if level.isdigit() else getattr(logging, level.upper(), logging.INFO)
    if VERBOSE_LOGGING:
        return logging.DEBUG
    return _resolve_level(LOG_LEVEL or "INFO")


def _shared_processors() -> list:
    return [
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        structlog.processors.TimeStamper(fmt="iso", utc=True),
    ]


def setup_logging(level: str | None = None, log_file: str | None = None) -> None:
    """Send structlog and stdlib records to stderr, plus a JSONL file when one is configured.

    level and log_file default to LOG_LEVEL/VERBOSE_LOGGING and LOG_FILE.
    Calling it again replaces only the handlers a previous call installed.
    """
    effective_level = _resolve_level(level)
    root_logger = logging.getLogger()
    for handler in _installed_handlers:
        root_logger.removeHandler(handler)
    _installed_handlers.clear()

    console_handler = logging.StreamHandler()
    console_handler.setFormatter(
        structlog.stdlib.ProcessorFormatter(
            processor=structlog.dev.ConsoleRenderer(colors=False),
            foreign_pre_chain=_shared_processors(),
        )
    )
    _installed_handlers.append(console_handler)

    path = LOG_FILE if log_file is None else log_file
    if path:
        Path(path).parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(path, encoding="utf-8")
        file_handler.setFormatter(
            structlog.stdlib.ProcessorFormatter(
                processor=structlog.processors.JSONRenderer(),
                foreign_pre_chain=_shared_processors(),
            )
        )
        _installed_handlers.append(file_handler)

    for handler in _installed_handlers:
        handler.setLevel(effective_level)
        root_logger.addHandler(handler)
    root_logger.setLevel(effective_level)

    for name in QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)

    structlog.configure(
        processors=[
            *_shared_processors(),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.make_filtering_bound_logger(effective_level),
        cache_logger_on_first_use=True,
    )


def get_logger(name: str = "graph_mail", **bindings: Any):
    """Named structlog logger; rendering follows whatever the process configured."""
    logger = structlog.get_logger(name)
    return logger.bind(**bindings) if bindings else logger


def bind_context(**context: Any) -> None:
    """Bind context variables to be included with every log entry."""
    structlog.contextvars.bind_contextvars(**context)


def clear_context() -> None:
    structlog.contextvars.clear_contextvars()
