"""Tests for perimeter loop generation."""

import pytest

from mission_geometry.exceptions import InvalidAreaError
from mission_geometry.geodesy.models import LocalENUPoint
from mission_geometry.mission.models import PathType, WaypointPhase
from mission_geometry.planning.models import PerimeterParameters
from mission_geometry.planning.perimeter import PerimeterStrategy, offset_boundary


def _make_vertices(*coordinates):
    return [LocalENUPoint(east=east, north=north) for east, north in coordinates]


_SQUARE_CCW = _make_vertices((0, 0), (100, 0), (100, 100), (0, 100))
_SQUARE_CW = _make_vertices((0, 0), (0, 100), (100, 100), (100, 0))


def _build(vertices=_SQUARE_CCW, **overrides):
    params = PerimeterParameters(vertices=vertices, altitude_meters=25.0, **overrides)
    return PerimeterStrategy(params).build()


def _positions(segment):
    return [
        (round(waypoint.local.east, 6), round(waypoint.local.north, 6))
        for waypoint in segment.waypoints
    ]


class TestPerimeterLoop:
    def test_closed_loop(self):
        segment = _build()
        assert segment.closed is True
        assert segment.type == PathType.PERIMETER
        assert len(segment.waypoints) == 5

    def test_repeats_first_position_with_new_id(self):
        segment = _build()
        first, last = segment.waypoints[0], segment.waypoints[-1]
        assert first.local == last.local
        assert first.id != last.id

    def test_zero_standoff_follows_boundary(self):
        assert _positions(_build()) == [(0, 0), (100, 0), (100, 100), (0, 100), (0, 0)]

    def test_loop_phase_and_altitude(self):
        segment = _build()
        assert {waypoint.display.phase for waypoint in segment.waypoints} == {WaypointPhase.LOOP}
        assert {waypoint.local.up for waypoint in segment.waypoints} == {25.0}

    def test_explicitly_closed_input(self):
        vertices = [*_SQUARE_CCW, LocalENUPoint()]
        assert len(_build(vertices).waypoints) == 5


class TestStandoff:
    def test_outward_counter_clockwise(self):
        segment = _build(standoff_distance_meters=10.0)
        assert _positions(segment)[:4] == [(-10, -10), (110, -10), (110, 110), (-10, 110)]

    def test_outward_clockwise(self):
        segment = _build(_SQUARE_CW, standoff_distance_meters=10.0)
        assert _positions(segment)[:4] == [(-10, -10), (-10, 110), (110, 110), (110, -10)]

    def test_inward(self):
        segment = _build(standoff_distance_meters=-10.0)
        assert _positions(segment)[:4] == [(10, 10), (90, 10), (90, 90), (10, 90)]

    def test_mitred_corner_of_triangle(self):
        triangle = _make_vertices((0, 0), (10, 0), (0, 10))
        segment = _build(triangle, standoff_distance_meters=1.0)
        east, north = _positions(segment)[0]
        assert east == pytest.approx(-1.0)
        assert north == pytest.approx(-1.0)

    @pytest.mark.parametrize("standoff", [-50.0, -60.0])
    def test_collapsing_standoff_rejected(self, standoff):
        with pytest.raises(InvalidAreaError):
            _build(standoff_distance_meters=standoff)


class TestOffsetBoundary:
    def test_hairpin_rejected(self):
        with pytest.raises(InvalidAreaError):
            offset_boundary([(0.0, 0.0), (10.0, 0.0), (5.0, 0.0)], 1.0, True)

    def test_repeated_vertex_rejected(self):
        with pytest.raises(InvalidAreaError):
            offset_boundary([(0.0, 0.0), (0.0, 0.0), (5.0, 5.0)], 1.0, True)


class TestDegenerateBoundary:
    def test_too_few_vertices(self):
        with pytest.raises(InvalidAreaError):
            _build(_make_vertices((0, 0), (10, 0)))

    def test_zero_area(self):
        with pytest.raises(InvalidAreaError):
            _build(_make_vertices((0, 0), (10, 0), (20, 0)))
