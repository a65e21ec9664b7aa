"""Tests for coordinate models."""

import math

import pytest

from mission_geometry.exceptions import InvalidCoordinateError
from mission_geometry.geodesy.models import AltitudeReference, GeoPoint, LocalENUPoint


class TestGeoPoint:
    def test_defaults(self):
        point = GeoPoint(latitude=40.0, longitude=-74.0)
        assert point.altitude_meters == 0.0
        assert point.altitude_reference == AltitudeReference.ABSOLUTE

    def test_frozen(self):
        point = GeoPoint(latitude=40.0, longitude=-74.0)
        with pytest.raises(ValueError):
            point.latitude = 41.0

    @pytest.mark.parametrize("latitude", [90.5, -91.0])
    def test_latitude_out_of_range(self, latitude):
        with pytest.raises(InvalidCoordinateError) as exc_info:
            GeoPoint(latitude=latitude, longitude=0.0)
        assert exc_info.value.context["field"] == "latitude"

    @pytest.mark.parametrize("longitude", [180.5, -181.0])
    def test_longitude_out_of_range(self, longitude):
        with pytest.raises(InvalidCoordinateError):
            GeoPoint(latitude=0.0, longitude=longitude)

    def test_poles_are_valid(self):
        assert GeoPoint(latitude=90.0, longitude=0.0).latitude == 90.0

    @pytest.mark.parametrize("field", ["latitude", "longitude", "altitude_meters"])
    def test_rejects_non_finite(self, field):
        values = {"latitude": 1.0, "longitude": 1.0, "altitude_meters": 0.0}
        values[field] = math.nan
        with pytest.raises(InvalidCoordinateError):
            GeoPoint(**values)


class TestLocalENUPoint:
    def test_defaults_to_origin(self):
        assert LocalENUPoint().as_tuple() == (0.0, 0.0, 0.0)

    def test_rejects_infinite(self):
        with pytest.raises(InvalidCoordinateError):
            LocalENUPoint(east=math.inf)

    def test_offset(self):
        point = LocalENUPoint(east=1, north=2, up=3).offset(east=1, up=-3)
        assert point.as_tuple() == (2.0, 2.0, 0.0)

    def test_with_up(self):
        point = LocalENUPoint(east=5, north=6, up=7).with_up(0)
        assert point.as_tuple() == (5.0, 6.0, 0.0)
