"""How a host application renders this library's log records.

The library only emits records under the ``mission_geometry`` logger tree.
These settings are read by ``setup_logging`` when a host opts in.
"""

from enum import StrEnum
from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class LogLevel(StrEnum):
    """Valid log levels."""

    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"
    CRITICAL = "CRITICAL"


class LogFormat(StrEnum):
    """Valid log formats."""

    JSON = "json"
    HUMAN = "human"


class LoggingConfig(BaseSettings):
    """Logging configuration loaded from environment variables.

    Attributes:
        log_level: Root logger level set by the host.
        geometry_log_level: Level for the ``mission_geometry`` loggers only, so
            clipping and generation details can be enabled without raising
            the root level. Inherits the root level when unset.
        log_format: Output format - json for services, human for notebooks and CLIs.
        service_name: Identifier of the hosting application.
        include_timestamp: Whether to include timestamp.
        include_location: Whether to include file/function/line info.
        use_colors: Whether the human format emits ANSI colors.
    """

    model_config = SettingsConfigDict(
        env_prefix="",
        case_sensitive=False,
        extra="ignore",
    )

    log_level: LogLevel = Field(default=LogLevel.INFO)
    geometry_log_level: LogLevel | None = Field(default=None)
    log_format: LogFormat = Field(default=LogFormat.JSON)
    service_name: str = Field(default="mission-geometry")
    include_timestamp: bool = Field(default=True)
    include_location: bool = Field(default=True)
    use_colors: bool = Field(default=True)


@lru_cache
def get_logging_config() -> LoggingConfig:
    """Get cached logging configuration instance."""
    return LoggingConfig()
