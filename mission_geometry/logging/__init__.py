"""Structured logging for mission geometry hosts.

Usage:
    from mission_geometry.logging import setup_logging, get_logger, log_context

    setup_logging()
    logger = get_logger(__name__)
    with log_context(mission_id="m-123"):
        logger.info("Generating coverage path", extra={"pattern": "polygon"})
"""

from mission_geometry.logging.config import LoggingConfig
from mission_geometry.logging.context import (
    clear_context,
    correlation_id,
    generate_correlation_id,
    get_correlation_id,
    get_extra_context,
    log_context,
    set_correlation_id,
    set_extra_context,
)
from mission_geometry.logging.formatters import HumanFormatter, JSONFormatter
from mission_geometry.logging.logger import get_logger, reset_logging, setup_logging

__all__ = [
    "HumanFormatter",
    "JSONFormatter",
    "LoggingConfig",
    "clear_context",
    "correlation_id",
    "generate_correlation_id",
    "get_correlation_id",
    "get_extra_context",
    "get_logger",
    "log_context",
    "reset_logging",
    "set_correlation_id",
    "set_extra_context",
    "setup_logging",
]
