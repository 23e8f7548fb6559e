"""
Shared module - Cross-cutting concerns / Shared Layer

This module provides shared utilities, constants, and enums that are used
across multiple layers of the application:
- Environment names and log levels
- Structured logging configuration
- Docker secret resolution for environment variables

It must not depend on Infrastructure or Frameworks.
"""

from .consts import EnumEnvironment, EnumLogLevel
from .logging import configure_logging, get_logger, update_logging_from_settings

__all__ = [
    "EnumEnvironment",
    "EnumLogLevel",
    "configure_logging",
    "get_logger",
    "update_logging_from_settings",
]
