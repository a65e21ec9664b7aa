"""Shared test fixtures."""

import pytest

from mission_geometry.config import get_settings
from mission_geometry.logging.config import get_logging_config


@pytest.fixture(autouse=True)
def _clear_environment(monkeypatch):
    """Clear environment variables that affect settings."""
    env_vars_to_clear = [
        "SERVICE_NAME",
        "LOG_LEVEL",
        "GEOMETRY_LOG_LEVEL",
        "LOG_FORMAT",
        "INCLUDE_TIMESTAMP",
        "INCLUDE_LOCATION",
        "USE_COLORS",
        "MAX_WAYPOINTS",
        "MIN_CLIPPED_SEGMENT_METERS",
        "DEFAULT_SPEED_METERS_PER_SECOND",
    ]
    for var in env_vars_to_clear:
        monkeypatch.delenv(var, raising=False)
    get_settings.cache_clear()
    get_logging_config.cache_clear()
