"""Tests for raster grid generation."""

import pytest

from mission_geometry.config import Settings
from mission_geometry.exceptions import InvalidCoordinateError, TooManyWaypointsError
from mission_geometry.geodesy.models import AltitudeReference, GeoPoint, LocalENUPoint
from mission_geometry.mission.models import PathType, WaypointPhase
from mission_geometry.planning.models import Orientation, RasterParameters
from mission_geometry.planning.raster import RasterStrategy


def _make_params(**overrides):
    values = {
        "row_length": 50.0,
        "row_spacing": 10.0,
        "number_of_rows": 3,
        "altitude_meters": 20.0,
    }
    values.update(overrides)
    return RasterParameters(**values)


def _positions(segment):
    return [(waypoint.local.east, waypoint.local.north) for waypoint in segment.waypoints]


class TestSnakePattern:
    def test_two_waypoints_per_row(self):
        segment = RasterStrategy(_make_params()).build()
        assert len(segment.waypoints) == 6

    def test_alternating_row_direction(self):
        segment = RasterStrategy(_make_params()).build()
        assert _positions(segment) == [
            (0.0, 0.0),
            (50.0, 0.0),
            (50.0, 10.0),
            (0.0, 10.0),
            (0.0, 20.0),
            (50.0, 20.0),
        ]

    def test_all_waypoints_at_flight_altitude(self):
        segment = RasterStrategy(_make_params()).build()
        assert {waypoint.local.up for waypoint in segment.waypoints} == {20.0}

    def test_row_metadata(self):
        segment = RasterStrategy(_make_params()).build()
        assert [waypoint.display.row_index for waypoint in segment.waypoints] == [0, 0, 1, 1, 2, 2]
        assert [waypoint.display.phase for waypoint in segment.waypoints] == [
            WaypointPhase.PASS_START,
            WaypointPhase.PASS_END,
        ] * 3

    @pytest.mark.parametrize("rows", [1, 2, 7, 40])
    def test_count_matches_estimate(self, rows):
        strategy = RasterStrategy(_make_params(number_of_rows=rows))
        segment = strategy.build()
        assert len(segment.waypoints) == 2 * rows == strategy.estimate_waypoint_count()


class TestWithoutSnake:
    def test_return_transit_before_each_subsequent_row(self):
        segment = RasterStrategy(_make_params(snake_pattern=False)).build()
        assert _positions(segment) == [
            (0.0, 0.0),
            (50.0, 0.0),
            (0.0, 0.0),
            (0.0, 10.0),
            (50.0, 10.0),
            (0.0, 10.0),
            (0.0, 20.0),
            (50.0, 20.0),
        ]

    def test_transit_phase(self):
        segment = RasterStrategy(_make_params(snake_pattern=False)).build()
        transits = [
            waypoint
            for waypoint in segment.waypoints
            if waypoint.display.phase == WaypointPhase.TRANSIT
        ]
        assert len(transits) == 2
        assert [waypoint.display.row_index for waypoint in transits] == [1, 2]

    def test_implicit_transit(self):
        strategy = RasterStrategy(_make_params(snake_pattern=False, include_return_transit=False))
        segment = strategy.build()
        assert _positions(segment) == [
            (0.0, 0.0),
            (50.0, 0.0),
            (0.0, 10.0),
            (50.0, 10.0),
            (0.0, 20.0),
            (50.0, 20.0),
        ]
        assert strategy.estimate_waypoint_count() == 6

    def test_all_rows_flown_start_to_end(self):
        segment = RasterStrategy(_make_params(snake_pattern=False)).build()
        starts = [
            waypoint.local.east
            for waypoint in segment.waypoints
            if waypoint.display.phase == WaypointPhase.PASS_START
        ]
        assert starts == [0.0, 0.0, 0.0]


class TestGeometry:
    def test_vertical_rows_run_north(self):
        segment = RasterStrategy(_make_params(orientation=Orientation.VERTICAL)).build()
        assert _positions(segment)[:4] == [(0.0, 0.0), (0.0, 50.0), (10.0, 50.0), (10.0, 0.0)]

    def test_offset_start_point(self):
        start = LocalENUPoint(east=100.0, north=-20.0, up=99.0)
        segment = RasterStrategy(_make_params(start_point=start, number_of_rows=1)).build()
        assert _positions(segment) == [(100.0, -20.0), (150.0, -20.0)]
        assert segment.waypoints[0].local.up == 20.0

    def test_ground_projections(self):
        segment = RasterStrategy(_make_params()).build()
        assert len(segment.ground_projections) == len(segment.waypoints)
        assert {point.up for point in segment.ground_projections} == {0.0}

    def test_segment_fields(self):
        params = _make_params(
            segment_id="grid-1",
            photo_trigger_interval_meters=12.5,
            speed_override_meters_per_second=8.0,
        )
        segment = RasterStrategy(params).build()
        assert segment.id == "grid-1"
        assert segment.type == PathType.GRID
        assert segment.closed is False
        assert segment.photo_trigger_interval_meters == 12.5
        assert segment.speed_override_meters_per_second == 8.0

    def test_fresh_waypoint_ids(self):
        first = RasterStrategy(_make_params()).build()
        second = RasterStrategy(_make_params()).build()
        assert not set(first.waypoint_ids()) & set(second.waypoint_ids())


class TestAltitudePolicy:
    def test_absolute_needs_origin(self):
        params = _make_params(altitude_reference=AltitudeReference.ABSOLUTE)
        with pytest.raises(InvalidCoordinateError):
            RasterStrategy(params).build()

    def test_absolute_relative_to_origin(self):
        origin = GeoPoint(latitude=40.0, longitude=-74.0, altitude_meters=100.0)
        params = _make_params(altitude_meters=130.0, altitude_reference=AltitudeReference.ABSOLUTE)
        segment = RasterStrategy(params, origin=origin).build()
        assert segment.waypoints[0].local.up == pytest.approx(30.0)
        assert segment.waypoints[0].altitude_reference == AltitudeReference.ABSOLUTE


class TestWaypointBound:
    def test_rejects_over_limit(self):
        strategy = RasterStrategy(_make_params(), settings=Settings(max_waypoints=5))
        with pytest.raises(TooManyWaypointsError) as exc_info:
            strategy.build()
        assert exc_info.value.context == {"requested": 6, "limit": 5}

    def test_accepts_at_limit(self):
        strategy = RasterStrategy(_make_params(), settings=Settings(max_waypoints=6))
        assert len(strategy.build().waypoints) == 6

    def test_huge_request_rejected_without_building(self):
        strategy = RasterStrategy(_make_params(number_of_rows=10**9))
        with pytest.raises(TooManyWaypointsError):
            strategy.build()
