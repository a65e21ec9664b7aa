"""Tests for library configuration."""

import pytest

from mission_geometry.config import Settings, get_settings


class TestSettingsDefaults:
    def test_default_max_waypoints(self):
        settings = Settings()
        assert settings.max_waypoints == 100_000

    def test_default_min_clipped_segment(self):
        settings = Settings()
        assert settings.min_clipped_segment_meters == 1.0

    def test_default_speed(self):
        settings = Settings()
        assert settings.default_speed_meters_per_second == 5.0


class TestSettingsFromEnvironment:
    def test_custom_max_waypoints(self, monkeypatch):
        monkeypatch.setenv("MAX_WAYPOINTS", "500")
        settings = Settings()
        assert settings.max_waypoints == 500

    def test_custom_min_clipped_segment(self, monkeypatch):
        monkeypatch.setenv("MIN_CLIPPED_SEGMENT_METERS", "2.5")
        settings = Settings()
        assert settings.min_clipped_segment_meters == 2.5

    def test_custom_default_speed(self, monkeypatch):
        monkeypatch.setenv("default_speed_meters_per_second", "8")
        settings = Settings()
        assert settings.default_speed_meters_per_second == 8.0

    def test_unrelated_variables_ignored(self, monkeypatch):
        monkeypatch.setenv("ENVIRONMENT", "production")
        settings = Settings()
        assert not hasattr(settings, "environment")


class TestSettingsValidation:
    def test_max_waypoints_minimum(self):
        with pytest.raises(ValueError):
            Settings(max_waypoints=0)

    def test_negative_min_clipped_segment(self):
        with pytest.raises(ValueError):
            Settings(min_clipped_segment_meters=-1)

    def test_speed_must_be_positive(self):
        with pytest.raises(ValueError):
            Settings(default_speed_meters_per_second=0)

    def test_invalid_value_from_environment(self, monkeypatch):
        monkeypatch.setenv("MAX_WAYPOINTS", "lots")
        with pytest.raises(ValueError):
            Settings()


class TestGetSettings:
    def test_returns_settings_instance(self):
        get_settings.cache_clear()
        settings = get_settings()
        assert isinstance(settings, Settings)

    def test_cached_returns_same_instance(self):
        get_settings.cache_clear()
        first = get_settings()
        second = get_settings()
        assert first is second
