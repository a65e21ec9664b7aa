"""Tests for mission domain models."""

import pytest
from pydantic import ValidationError

from mission_geometry.exceptions import DuplicateSegmentIdError, DuplicateWaypointIdError
from mission_geometry.geodesy.models import AltitudeReference, GeoPoint, LocalENUPoint
from mission_geometry.mission.models import (
    ActionType,
    GroundControlPoint,
    Mission,
    PathSegment,
    PathType,
    Waypoint,
    WaypointAction,
    new_id,
)


def _make_waypoint(waypoint_id: str | None = None, east: float = 0.0) -> Waypoint:
    values = {"local": LocalENUPoint(east=east, north=0.0, up=20.0)}
    if waypoint_id is not None:
        values["id"] = waypoint_id
    return Waypoint(**values)


def _make_origin() -> GeoPoint:
    return GeoPoint(latitude=40.0, longitude=-74.0)


class TestEnums:
    """Tests for mission enums."""

    def test_path_types(self) -> None:
        assert {path_type.value for path_type in PathType} == {
            "grid",
            "perimeter",
            "polygon",
            "manual",
            "bezier",
            "orbit",
        }

    def test_values_are_lowercase(self) -> None:
        for action in ActionType:
            assert action.value == action.value.lower()


class TestWaypoint:
    """Tests for Waypoint model."""

    def test_defaults(self) -> None:
        waypoint = _make_waypoint()
        assert waypoint.altitude_reference == AltitudeReference.RELATIVE_TO_HOME
        assert waypoint.hold_time_seconds == 0.0
        assert waypoint.actions == []
        assert waypoint.display.phase is None

    def test_generates_unique_ids(self) -> None:
        assert _make_waypoint().id != _make_waypoint().id

    def test_negative_hold_time(self) -> None:
        with pytest.raises(ValidationError):
            Waypoint(local=LocalENUPoint(), hold_time_seconds=-1.0)

    def test_has_action(self) -> None:
        waypoint = Waypoint(
            local=LocalENUPoint(),
            actions=[WaypointAction(type=ActionType.TAKE_PHOTO)],
        )
        assert waypoint.has_action(ActionType.TAKE_PHOTO) is True
        assert waypoint.has_action(ActionType.START_VIDEO) is False

    def test_action_parameters(self) -> None:
        action = WaypointAction(type=ActionType.ROTATE_GIMBAL, parameters={"pitch": -90})
        assert action.parameters["pitch"] == -90


class TestPathSegment:
    """Tests for PathSegment model."""

    def test_duplicate_waypoint_ids(self) -> None:
        with pytest.raises(DuplicateWaypointIdError):
            PathSegment(
                type=PathType.MANUAL,
                waypoints=[_make_waypoint("w-1"), _make_waypoint("w-1", east=5.0)],
            )

    def test_projection_length_must_match(self) -> None:
        with pytest.raises(ValidationError):
            PathSegment(
                type=PathType.MANUAL,
                waypoints=[_make_waypoint(), _make_waypoint()],
                ground_projections=[LocalENUPoint()],
            )

    def test_open_segment_well_formed(self) -> None:
        segment = PathSegment(type=PathType.MANUAL, waypoints=[_make_waypoint(), _make_waypoint()])
        assert segment.minimum_waypoints == 2
        assert segment.is_well_formed is True

    def test_closed_segment_needs_three(self) -> None:
        segment = PathSegment(
            type=PathType.PERIMETER,
            closed=True,
            waypoints=[_make_waypoint(), _make_waypoint()],
        )
        assert segment.minimum_waypoints == 3
        assert segment.is_well_formed is False

    def test_non_positive_speed_override(self) -> None:
        with pytest.raises(ValidationError):
            PathSegment(type=PathType.MANUAL, speed_override_meters_per_second=0.0)

    def test_waypoint_ids_in_order(self) -> None:
        segment = PathSegment(
            type=PathType.MANUAL,
            waypoints=[_make_waypoint("b"), _make_waypoint("a")],
        )
        assert segment.waypoint_ids() == ["b", "a"]


class TestGroundControlPoint:
    """Tests for GroundControlPoint model."""

    def test_valid(self) -> None:
        gcp = GroundControlPoint(name="GCP 1", local=LocalENUPoint(east=3.0), accuracy_meters=0.02)
        assert gcp.accuracy_meters == 0.02

    def test_empty_name(self) -> None:
        with pytest.raises(ValidationError):
            GroundControlPoint(name="", local=LocalENUPoint())

    def test_negative_accuracy(self) -> None:
        with pytest.raises(ValidationError):
            GroundControlPoint(name="GCP", local=LocalENUPoint(), accuracy_meters=-0.1)


class TestMission:
    """Tests for Mission model."""

    def test_defaults(self) -> None:
        mission = Mission(name="Survey", local_origin=_make_origin())
        assert mission.path_segments == []
        assert mission.ground_control_points == []
        assert mission.default_speed_meters_per_second == 5.0
        assert mission.created_at

    def test_duplicate_segment_ids(self) -> None:
        with pytest.raises(DuplicateSegmentIdError):
            Mission(
                name="Survey",
                local_origin=_make_origin(),
                path_segments=[
                    PathSegment(id="s-1", type=PathType.MANUAL),
                    PathSegment(id="s-1", type=PathType.MANUAL),
                ],
            )

    def test_waypoint_ids_unique_across_segments(self) -> None:
        with pytest.raises(DuplicateWaypointIdError):
            Mission(
                name="Survey",
                local_origin=_make_origin(),
                path_segments=[
                    PathSegment(type=PathType.MANUAL, waypoints=[_make_waypoint("w-1")]),
                    PathSegment(type=PathType.MANUAL, waypoints=[_make_waypoint("w-1")]),
                ],
            )

    def test_duplicate_gcp_ids(self) -> None:
        with pytest.raises(ValidationError):
            Mission(
                name="Survey",
                local_origin=_make_origin(),
                ground_control_points=[
                    GroundControlPoint(id="g-1", name="A", local=LocalENUPoint()),
                    GroundControlPoint(id="g-1", name="B", local=LocalENUPoint()),
                ],
            )

    def test_iter_waypoints_in_flight_order(self) -> None:
        mission = Mission(
            name="Survey",
            local_origin=_make_origin(),
            path_segments=[
                PathSegment(type=PathType.MANUAL, waypoints=[_make_waypoint("a")]),
                PathSegment(
                    type=PathType.MANUAL, waypoints=[_make_waypoint("b"), _make_waypoint("c")]
                ),
            ],
        )
        assert [waypoint.id for waypoint in mission.iter_waypoints()] == ["a", "b", "c"]

    def test_new_id_is_unique(self) -> None:
        assert new_id() != new_id()
