"""Generation limits and mission defaults, read from environment variables.

Usage:
    from mission_geometry.config import get_settings

    limit = get_settings().max_waypoints
"""

from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Library settings loaded from environment variables.

    Attributes:
        max_waypoints: Upper bound on waypoints a single generation may produce.
        min_clipped_segment_meters: Clipped raster pieces shorter than this are dropped.
        default_speed_meters_per_second: Cruise speed for new missions.
    """

    model_config = SettingsConfigDict(
        env_file=None,
        case_sensitive=False,
        extra="ignore",
    )

    # Generation limits
    max_waypoints: int = Field(default=100_000, ge=1, le=10_000_000)
    min_clipped_segment_meters: float = Field(default=1.0, ge=0.0, le=1000.0)

    # Mission defaults
    default_speed_meters_per_second: float = Field(default=5.0, gt=0.0, le=50.0)


@lru_cache
def get_settings() -> Settings:
    """Settings read once from the environment; tests clear the cache."""
    return Settings()
