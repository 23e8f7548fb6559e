"""
Logging Configuration - Shared Layer

structlog is layered over the standard logging module: application code
logs key/value events through ``get_logger`` and third-party libraries
keep using stdlib loggers, and both end up in the same handlers.

Console output is rendered for humans in development and as JSON lines in
deployed environments. A log file, when configured, always receives
key/value lines laid out with the configured stdlib format string.
"""

import logging
import os
import sys
from typing import Any, List, Optional

import structlog
from structlog.types import Processor

from fleetview.shared.consts import EnumEnvironment, EnumLogLevel

DEFAULT_LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

# Libraries that log every request at INFO.
QUIET_LOGGERS = ("httpx", "httpcore", "uvicorn.access")


def _renders_json(environment: str) -> bool:
    try:
        return EnumEnvironment(environment.lower()).renders_json
    except ValueError:
        return False


def _level_number(level: str) -> int:
    try:
        return logging.getLevelName(EnumLogLevel(level.upper()).value)
    except ValueError:
        return logging.INFO


def _shared_processors() -> List[Processor]:
    return [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.processors.TimeStamper(fmt="iso", utc=True),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
    ]


def _formatter(renderer: Processor, fmt: Optional[str] = None) -> logging.Formatter:
    return structlog.stdlib.ProcessorFormatter(
        processors=[
            structlog.stdlib.ProcessorFormatter.remove_processors_meta,
            renderer,
        ],
        foreign_pre_chain=_shared_processors(),
        fmt=fmt,
    )


def _build_handlers(
    environment: str, format_string: str, file_path: Optional[str]
) -> List[logging.Handler]:
    console_renderer: Processor = (
        structlog.processors.JSONRenderer()
        if _renders_json(environment)
        else structlog.dev.ConsoleRenderer()
    )
    console = logging.StreamHandler(sys.stdout)
    console.setFormatter(_formatter(console_renderer))
    handlers: List[logging.Handler] = [console]

    if file_path:
        file_handler = logging.FileHandler(file_path)
        file_handler.setFormatter(
            _formatter(
                structlog.processors.KeyValueRenderer(
                    key_order=["event"], drop_missing=True
                ),
                fmt=format_string,
            )
        )
        handlers.append(file_handler)
    return handlers


def configure_logging(
    level: Optional[str] = None,
    format_string: Optional[str] = None,
    file_path: Optional[str] = None,
    environment: str = "development",
) -> None:
    """
    (Re)configure stdlib logging and structlog.

    Unset arguments fall back to the ``LOG_LEVEL``, ``LOG_FORMAT`` and
    ``LOG_FILE_PATH`` environment variables, so logging works before the
    settings object is loaded.
    """
    level = level or os.environ.get("LOG_LEVEL") or EnumLogLevel.INFO.value
    format_string = format_string or os.environ.get("LOG_FORMAT") or DEFAULT_LOG_FORMAT
    file_path = file_path or os.environ.get("LOG_FILE_PATH")

    root_logger = logging.getLogger()
    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)
    for handler in _build_handlers(environment, format_string, file_path):
        root_logger.addHandler(handler)
    root_logger.setLevel(_level_number(level))

    for name in QUIET_LOGGERS:
        logging.getLogger(name).setLevel(max(logging.WARNING, root_logger.level))

    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            *_shared_processors(),
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )

    structlog.get_logger(__name__).debug(
        "logging.configured", level=level.upper(), file_path=file_path
    )


def update_logging_from_settings(settings: Any) -> None:
    """Apply the ``logging`` section and environment of the loaded settings."""
    log_settings = settings.logging
    try:
        configure_logging(
            level=getattr(log_settings.level, "value", log_settings.level),
            format_string=log_settings.format,
            file_path=log_settings.file_path,
            environment=getattr(settings.environment, "value", settings.environment),
        )
    except OSError as exc:
        # An unwritable log file keeps the bootstrap configuration.
        configure_logging()
        structlog.get_logger(__name__).error(
            "logging.file_unavailable", file_path=log_settings.file_path, error=str(exc)
        )


def get_logger(name: str) -> structlog.stdlib.BoundLogger:
    return structlog.get_logger(name)
