"""Mutations of the mission entity graph under its invariants.

The Mission aggregate is owned by exactly one writer in the hosting
application; nothing here synchronises access. Every operation either
completes or leaves the mission untouched.
"""

import logging
from collections.abc import Sequence
from enum import StrEnum

from mission_geometry.config import Settings, get_settings
from mission_geometry.exceptions.client_errors import (
    DuplicateSegmentIdError,
    DuplicateWaypointIdError,
    InvalidPermutationError,
    NotFoundError,
)
from mission_geometry.geodesy.converter import to_global, to_local
from mission_geometry.geodesy.models import (
    AltitudeReference,
    GeoPoint,
    LocalENUPoint,
    MissionOrigin,
)
from mission_geometry.mission.models import (
    GroundControlPoint,
    Mission,
    PathSegment,
    Waypoint,
)

logger = logging.getLogger(__name__)


class DeletionOutcome(StrEnum):
    """Result of an idempotent removal."""

    REMOVED = "removed"
    NOT_FOUND = "not_found"


def create_mission(
    name: str,
    origin: MissionOrigin,
    *,
    description: str = "",
    default_speed_meters_per_second: float | None = None,
    settings: Settings | None = None,
) -> Mission:
    """Create an empty mission anchored at ``origin``.

    Args:
        name: Display name.
        origin: Local frame origin, typically the takeoff point.
        description: Optional free text.
        default_speed_meters_per_second: Cruise speed; defaults to the configured one.
        settings: Settings override, mainly for tests.

    Returns:
        The new mission.
    """
    settings = settings or get_settings()
    speed = default_speed_meters_per_second or settings.default_speed_meters_per_second
    mission = Mission(
        name=name,
        description=description,
        local_origin=origin,
        default_speed_meters_per_second=speed,
    )
    logger.info(
        "Created mission %s at origin (%.6f, %.6f)",
        mission.id,
        origin.latitude,
        origin.longitude,
    )
    return mission


def find_path_segment(mission: Mission, segment_id: str) -> PathSegment:
    """Look up a segment by id.

    Raises:
        NotFoundError: If no segment has that id.
    """
    for segment in mission.path_segments:
        if segment.id == segment_id:
            return segment
    raise NotFoundError(
        f"Path segment {segment_id} not found",
        resource_type="PathSegment",
        resource_id=segment_id,
    )


def add_path_segment(mission: Mission, segment: PathSegment) -> PathSegment:
    """Append a segment to the mission.

    Args:
        mission: Mission to modify.
        segment: Segment to append.

    Returns:
        The appended segment.

    Raises:
        DuplicateSegmentIdError: If the segment id is already in the mission.
        DuplicateWaypointIdError: If any of its waypoint ids is already in the mission.
    """
    if any(existing.id == segment.id for existing in mission.path_segments):
        raise DuplicateSegmentIdError(
            f"Path segment {segment.id} already exists in mission {mission.id}",
            context={"mission_id": mission.id, "segment_id": segment.id},
        )

    collisions = sorted(set(mission.waypoint_ids()) & set(segment.waypoint_ids()))
    if collisions:
        raise DuplicateWaypointIdError(
            f"Path segment {segment.id} reuses waypoint ids of mission {mission.id}",
            context={"mission_id": mission.id, "waypoint_ids": collisions},
        )

    mission.path_segments.append(segment)
    mission.touch()
    logger.info(
        "Added %s segment %s with %d waypoints",
        segment.type,
        segment.id,
        len(segment.waypoints),
        extra={"mission_id": mission.id},
    )
    return segment


def delete_path_segment(mission: Mission, segment_id: str) -> DeletionOutcome:
    """Remove a segment by id.

    Idempotent: a missing id is reported, not raised.
    """
    for index, segment in enumerate(mission.path_segments):
        if segment.id == segment_id:
            del mission.path_segments[index]
            mission.touch()
            logger.info("Deleted segment %s", segment_id, extra={"mission_id": mission.id})
            return DeletionOutcome.REMOVED

    logger.debug("Segment %s not in mission %s, nothing deleted", segment_id, mission.id)
    return DeletionOutcome.NOT_FOUND


def move_path_segment(mission: Mission, segment_id: str, new_index: int) -> None:
    """Move a segment to ``new_index`` in flight order.

    Raises:
        NotFoundError: If no segment has that id.
        IndexError: If ``new_index`` is outside the segment list.
    """
    segment = find_path_segment(mission, segment_id)
    if not 0 <= new_index < len(mission.path_segments):
        error_message = f"new_index {new_index} outside 0..{len(mission.path_segments) - 1}"
        raise IndexError(error_message)
    mission.path_segments.remove(segment)
    mission.path_segments.insert(new_index, segment)
    mission.touch()


def reorder_waypoints(segment: PathSegment, new_order: Sequence[str]) -> None:
    """Reorder a segment's waypoints to match ``new_order``.

    Ground projections follow their waypoints.

    Args:
        segment: Segment to reorder.
        new_order: Every current waypoint id exactly once, in the new flight order.

    Raises:
        InvalidPermutationError: If ``new_order`` is not a bijection over the
            segment's waypoint ids.
    """
    current_ids = segment.waypoint_ids()
    requested = list(new_order)
    if len(requested) != len(current_ids) or set(requested) != set(current_ids) or len(
        set(requested)
    ) != len(requested):
        missing = sorted(set(current_ids) - set(requested))
        unexpected = sorted(set(requested) - set(current_ids))
        raise InvalidPermutationError(
            f"New order is not a permutation of segment {segment.id} waypoints",
            context={
                "segment_id": segment.id,
                "missing": missing,
                "unexpected": unexpected,
                "expected_count": len(current_ids),
                "received_count": len(requested),
            },
        )

    position = {waypoint_id: index for index, waypoint_id in enumerate(current_ids)}
    order = [position[waypoint_id] for waypoint_id in requested]
    segment.waypoints = [segment.waypoints[index] for index in order]
    if segment.ground_projections is not None:
        segment.ground_projections = [segment.ground_projections[index] for index in order]


def insert_waypoint(
    mission: Mission,
    segment_id: str,
    waypoint: Waypoint,
    index: int | None = None,
) -> Waypoint:
    """Insert a user-placed waypoint into a segment.

    Args:
        mission: Mission owning the segment.
        segment_id: Target segment.
        waypoint: Waypoint to insert.
        index: Position in flight order; appended when None.

    Returns:
        The inserted waypoint.

    Raises:
        NotFoundError: If the segment does not exist.
        DuplicateWaypointIdError: If the waypoint id is already in the mission.
        IndexError: If ``index`` is outside 0..len(waypoints).
    """
    segment = find_path_segment(mission, segment_id)
    if waypoint.id in set(mission.waypoint_ids()):
        raise DuplicateWaypointIdError(
            f"Waypoint {waypoint.id} already exists in mission {mission.id}",
            context={"mission_id": mission.id, "waypoint_id": waypoint.id},
        )

    position = len(segment.waypoints) if index is None else index
    if not 0 <= position <= len(segment.waypoints):
        error_message = f"index {position} outside 0..{len(segment.waypoints)}"
        raise IndexError(error_message)
    segment.waypoints.insert(position, waypoint)
    if segment.ground_projections is not None:
        segment.ground_projections.insert(position, waypoint.local.with_up(0.0))
    mission.touch()
    return waypoint


def remove_waypoint(mission: Mission, segment_id: str, waypoint_id: str) -> DeletionOutcome:
    """Remove a waypoint from a segment. Idempotent for unknown waypoint ids.

    Raises:
        NotFoundError: If the segment does not exist.
    """
    segment = find_path_segment(mission, segment_id)
    for index, waypoint in enumerate(segment.waypoints):
        if waypoint.id == waypoint_id:
            del segment.waypoints[index]
            if segment.ground_projections is not None:
                del segment.ground_projections[index]
            mission.touch()
            if not segment.is_well_formed:
                logger.warning(
                    "Segment %s now has %d waypoints, below the %d its shape needs",
                    segment.id,
                    len(segment.waypoints),
                    segment.minimum_waypoints,
                )
            return DeletionOutcome.REMOVED
    return DeletionOutcome.NOT_FOUND


def add_ground_control_point(mission: Mission, gcp: GroundControlPoint) -> GroundControlPoint:
    """Add a ground control point. A point with the same id is replaced."""
    mission.ground_control_points = [
        existing for existing in mission.ground_control_points if existing.id != gcp.id
    ]
    mission.ground_control_points.append(gcp)
    mission.touch()
    return gcp


def remove_ground_control_point(mission: Mission, gcp_id: str) -> DeletionOutcome:
    """Remove a ground control point by id. Idempotent."""
    remaining = [gcp for gcp in mission.ground_control_points if gcp.id != gcp_id]
    if len(remaining) == len(mission.ground_control_points):
        return DeletionOutcome.NOT_FOUND
    mission.ground_control_points = remaining
    mission.touch()
    return DeletionOutcome.REMOVED


def waypoint_global_position(mission: Mission, waypoint: Waypoint) -> GeoPoint:
    """Derived global position of a waypoint under its own altitude reference."""
    return to_global(waypoint.local, mission.local_origin, waypoint.altitude_reference)


def ground_control_point_global_position(
    mission: Mission,
    gcp: GroundControlPoint,
    altitude_reference: AltitudeReference = AltitudeReference.ABSOLUTE,
) -> GeoPoint:
    """Derived global position of a ground control point."""
    return to_global(gcp.local, mission.local_origin, altitude_reference)


def _reproject(
    point: LocalENUPoint,
    old_origin: MissionOrigin,
    new_origin: MissionOrigin,
    reference: AltitudeReference,
) -> LocalENUPoint:
    return to_local(to_global(point, old_origin, reference), new_origin)


def recompute_local_frame(mission: Mission, new_origin: MissionOrigin) -> None:
    """Move the mission's local frame to ``new_origin``.

    Every waypoint, ground projection, control point and ground control point
    keeps its global position and gets new local coordinates. All new values
    are computed before anything is assigned, so a conversion failure leaves
    the mission untouched.

    Raises:
        InvalidCoordinateError: If any point cannot be converted.
    """
    old_origin = mission.local_origin
    home = AltitudeReference.RELATIVE_TO_HOME

    segment_updates: list[
        tuple[PathSegment, list[LocalENUPoint], list[LocalENUPoint] | None, list[LocalENUPoint]]
    ] = []
    for segment in mission.path_segments:
        waypoint_locals = [
            _reproject(waypoint.local, old_origin, new_origin, waypoint.altitude_reference)
            for waypoint in segment.waypoints
        ]
        projections = None
        if segment.ground_projections is not None:
            projections = [
                _reproject(point, old_origin, new_origin, home)
                for point in segment.ground_projections
            ]
        control_points = [
            _reproject(point, old_origin, new_origin, home) for point in segment.control_points
        ]
        segment_updates.append((segment, waypoint_locals, projections, control_points))

    gcp_locals = [
        _reproject(gcp.local, old_origin, new_origin, AltitudeReference.ABSOLUTE)
        for gcp in mission.ground_control_points
    ]

    for segment, waypoint_locals, projections, control_points in segment_updates:
        for waypoint, local in zip(segment.waypoints, waypoint_locals, strict=True):
            waypoint.local = local
        segment.ground_projections = projections
        segment.control_points = control_points
    for gcp, local in zip(mission.ground_control_points, gcp_locals, strict=True):
        gcp.local = local

    mission.local_origin = new_origin
    mission.touch()
    logger.info(
        "Recomputed local frame of mission %s: %d waypoints, %d ground control points",
        mission.id,
        sum(len(update[1]) for update in segment_updates),
        len(gcp_locals),
    )
