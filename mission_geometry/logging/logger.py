"""Opt-in log output for hosts embedding the planner.

Library modules only create loggers under ``mission_geometry`` and never
install handlers. A CLI, notebook or service calls ``setup_logging`` once to
get JSON or human-readable records, optionally with the planner's own loggers
at a different level from the rest of the process.
"""

import logging
import sys
from dataclasses import dataclass, field
from typing import TextIO

from mission_geometry.logging.config import LogFormat, LoggingConfig, get_logging_config
from mission_geometry.logging.formatters import HumanFormatter, JSONFormatter

PACKAGE_LOGGER: str = "mission_geometry"
_NOISY_LOGGERS: tuple[str, ...] = ("shapely", "shapely.geos")


@dataclass
class LoggingState:
    """Internal state for logging configuration."""

    configured: bool = field(default=False)


_state = LoggingState()


def setup_logging(
    config: LoggingConfig | None = None,
    stream: TextIO | None = None,
    *,
    force: bool = False,
) -> None:
    """Install one stream handler on the root logger.

    Args:
        config: Optional LoggingConfig instance. Loads from environment if not provided.
        stream: Output stream for logs. Defaults to sys.stdout.
        force: If True, reconfigure even if already configured.
    """
    if _state.configured and not force:
        return

    if config is None:
        config = get_logging_config()

    root_logger = logging.getLogger()
    root_logger.setLevel(config.log_level.value)

    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)

    handler = logging.StreamHandler(stream or sys.stdout)

    formatter: logging.Formatter
    if config.log_format == LogFormat.JSON:
        formatter = JSONFormatter(
            service_name=config.service_name,
            include_timestamp=config.include_timestamp,
            include_location=config.include_location,
        )
    else:
        formatter = HumanFormatter(use_colors=config.use_colors)

    handler.setFormatter(formatter)
    root_logger.addHandler(handler)

    package_logger = logging.getLogger(PACKAGE_LOGGER)
    if config.geometry_log_level is not None:
        package_logger.setLevel(config.geometry_log_level.value)
    else:
        package_logger.setLevel(logging.NOTSET)

    for name in _NOISY_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)

    _state.configured = True


def get_logger(name: str) -> logging.Logger:
    """Get a logger instance with the given name.

    Args:
        name: Logger name, typically __name__ of the calling module.

    Returns:
        A logger instance.
    """
    return logging.getLogger(name)


def reset_logging() -> None:
    """Reset logging configuration. Primarily for testing."""
    _state.configured = False
    logging.getLogger(PACKAGE_LOGGER).setLevel(logging.NOTSET)

    root_logger = logging.getLogger()
    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)

    get_logging_config.cache_clear()
