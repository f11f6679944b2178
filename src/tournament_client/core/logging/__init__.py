"""
Logging configuration module for structured logging.

This module configures the client's logging system using structlog.
It provides structured logging capabilities with JSON formatting for production
and human-readable console output for development.

The logging configuration includes:
- Timestamp formatting
- Log level inclusion and filtering
- JSON/Console output based on settings
- Logger caching
"""

import logging
from typing import Optional

import structlog

from tournament_client.core.config.settings import Settings, settings as default_settings


def configure_logging(config: Optional[Settings] = None) -> None:
    """
    Configures the client's logging system.

    This function sets up structlog with:
    1. ISO format timestamps
    2. Log level inclusion
    3. JSON formatting when LOG_JSON is set, console formatting otherwise
    4. Filtering below LOG_LEVEL
    5. Logger caching for performance
    """
    config = config or default_settings
    level = logging.getLevelName(config.LOG_LEVEL.upper())
    if not isinstance(level, int):
        level = logging.INFO

    processors = [
        structlog.contextvars.merge_contextvars,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.add_log_level,
        structlog.processors.JSONRenderer() if config.LOG_JSON else structlog.dev.ConsoleRenderer(),
    ]

    structlog.configure(
        processors=processors,
        context_class=dict,
        wrapper_class=structlog.make_filtering_bound_logger(level),
        logger_factory=structlog.PrintLoggerFactory(),
        cache_logger_on_first_use=True,
    )


def mask_token(token: Optional[str], visible: int = 10) -> str:
    """Return masked token for safe logging (first ``visible`` chars + asterisks)."""
    if not token:
        return ""
    if len(token) <= visible:
        return "*" * len(token)
    return token[:visible] + "*" * (len(token) - visible)


# Create a singleton logger instance for the client
logger = structlog.get_logger()
