"""Tests for Bezier curve generation."""

import pytest

from mission_geometry.geodesy.models import LocalENUPoint
from mission_geometry.mission.models import PathType, WaypointPhase
from mission_geometry.planning.bezier import BezierStrategy, de_casteljau
from mission_geometry.planning.models import BezierParameters

_CONTROL_POINTS = [
    LocalENUPoint(east=0.0, north=0.0, up=10.0),
    LocalENUPoint(east=50.0, north=100.0, up=30.0),
    LocalENUPoint(east=100.0, north=0.0, up=10.0),
]


class TestDeCasteljau:
    def test_endpoints(self):
        assert de_casteljau(_CONTROL_POINTS, 0.0) == _CONTROL_POINTS[0]
        assert de_casteljau(_CONTROL_POINTS, 1.0) == _CONTROL_POINTS[-1]

    def test_quadratic_midpoint(self):
        point = de_casteljau(_CONTROL_POINTS, 0.5)
        assert point.as_tuple() == pytest.approx((50.0, 50.0, 20.0))

    def test_linear(self):
        line = [LocalENUPoint(), LocalENUPoint(east=10.0)]
        assert de_casteljau(line, 0.3).east == pytest.approx(3.0)


class TestBezierStrategy:
    def test_sample_count(self):
        params = BezierParameters(control_points=_CONTROL_POINTS, sample_count=11)
        segment = BezierStrategy(params).build()
        assert len(segment.waypoints) == 11
        assert segment.type == PathType.BEZIER
        assert segment.closed is False

    def test_follows_curve_height(self):
        params = BezierParameters(control_points=_CONTROL_POINTS, sample_count=3)
        segment = BezierStrategy(params).build()
        assert [waypoint.local.up for waypoint in segment.waypoints] == pytest.approx(
            [10.0, 20.0, 10.0]
        )

    def test_fixed_altitude(self):
        params = BezierParameters(
            control_points=_CONTROL_POINTS,
            sample_count=5,
            fixed_altitude=True,
            altitude_meters=45.0,
        )
        segment = BezierStrategy(params).build()
        assert {waypoint.local.up for waypoint in segment.waypoints} == {45.0}

    def test_keeps_control_points(self):
        params = BezierParameters(control_points=_CONTROL_POINTS)
        segment = BezierStrategy(params).build()
        assert segment.control_points == _CONTROL_POINTS

    def test_curve_phase(self):
        params = BezierParameters(control_points=_CONTROL_POINTS, sample_count=4)
        segment = BezierStrategy(params).build()
        assert {waypoint.display.phase for waypoint in segment.waypoints} == {WaypointPhase.CURVE}
