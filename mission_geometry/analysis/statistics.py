"""Distance, flight time, photo count and battery estimates.

Everything here is computed on demand from the local waypoint positions and
never cached on the mission.
"""

import logging
import math

from mission_geometry.analysis.models import DroneProfile, MissionSummary
from mission_geometry.exceptions.client_errors import InvalidSpeedError
from mission_geometry.geodesy.converter import local_distance
from mission_geometry.mission.models import (
    ActionType,
    Mission,
    PathSegment,
    Waypoint,
    WaypointPhase,
)

logger = logging.getLogger(__name__)

METERS_TO_FEET: float = 3.28084
_SECONDS_PER_MINUTE: float = 60.0


def _path_length(waypoints: list[Waypoint]) -> float:
    points = [waypoint.local for waypoint in waypoints]
    return sum(local_distance(a, b) for a, b in zip(points, points[1:]))


def total_distance(segment: PathSegment) -> float:
    """3D distance in meters along consecutive waypoints."""
    return _path_length(segment.waypoints)


def imaging_runs(segment: PathSegment) -> list[list[Waypoint]]:
    """Waypoint runs flown with the camera on.

    Each run goes from a PASS_START waypoint to the next PASS_END. Transits
    between passes are not imaging. A segment without pass markers is one run.
    """
    phases = [waypoint.display.phase for waypoint in segment.waypoints]
    if WaypointPhase.PASS_START not in phases:
        return [segment.waypoints] if segment.waypoints else []

    runs = []
    current: list[Waypoint] | None = None
    for waypoint in segment.waypoints:
        phase = waypoint.display.phase
        if phase == WaypointPhase.PASS_START:
            current = [waypoint]
        elif current is not None:
            current.append(waypoint)
            if phase == WaypointPhase.PASS_END:
                runs.append(current)
                current = None
    return runs


def estimated_flight_time(segment: PathSegment, speed_meters_per_second: float) -> float:
    """Seconds to fly the segment at a constant speed, including hold times.

    Raises:
        InvalidSpeedError: If the speed is not a positive finite number.
    """
    if not math.isfinite(speed_meters_per_second) or speed_meters_per_second <= 0:
        raise InvalidSpeedError(
            "Speed must be a positive finite number",
            field="speed_meters_per_second",
            value=str(speed_meters_per_second),
        )
    holds = sum(waypoint.hold_time_seconds for waypoint in segment.waypoints)
    return total_distance(segment) / speed_meters_per_second + holds


def segment_speed(mission: Mission, segment: PathSegment) -> float:
    """Speed the segment is flown at: its override, else the mission default."""
    if segment.speed_override_meters_per_second is not None:
        return segment.speed_override_meters_per_second
    return mission.default_speed_meters_per_second


def photo_count(segment: PathSegment) -> int:
    """Photos the segment takes.

    Counts waypoints with a TAKE_PHOTO action plus, for distance-triggered
    segments, one shot at the start of each imaging run and one per full
    trigger interval along it.
    """
    count = sum(1 for waypoint in segment.waypoints if waypoint.has_action(ActionType.TAKE_PHOTO))
    interval = segment.photo_trigger_interval_meters
    if interval is not None:
        for run in imaging_runs(segment):
            count += math.floor(_path_length(run) / interval) + 1
    return count


def mission_distance(mission: Mission) -> float:
    """Sum of segment distances.

    Transfers between segments are not counted.
    """
    return sum(total_distance(segment) for segment in mission.path_segments)


def mission_flight_time(mission: Mission) -> float:
    """Seconds to fly every segment at its own speed."""
    return sum(
        estimated_flight_time(segment, segment_speed(mission, segment))
        for segment in mission.path_segments
    )


def estimated_battery_consumption(mission: Mission, drone_profile: DroneProfile) -> float:
    """Battery use in percent: flight minutes times the average draw.

    A first-order estimate that ignores wind, climb and payload.
    """
    minutes = mission_flight_time(mission) / _SECONDS_PER_MINUTE
    return minutes * drone_profile.average_draw_percent_per_minute


def format_duration(seconds: float) -> str:
    """Render a duration as MM:SS, minutes unbounded."""
    total = max(0, round(seconds))
    minutes, remainder = divmod(total, 60)
    return f"{minutes:02d}:{remainder:02d}"


def summarize_mission(
    mission: Mission,
    drone_profile: DroneProfile | None = None,
) -> MissionSummary:
    """Aggregate statistics for the mission.

    Args:
        mission: Mission to summarize.
        drone_profile: Enables the battery estimate when given.

    Returns:
        MissionSummary for the current mission state.
    """
    distance = mission_distance(mission)
    flight_time = mission_flight_time(mission)

    battery = None
    within_limit = None
    if drone_profile is not None:
        battery = estimated_battery_consumption(mission, drone_profile)
        within_limit = battery <= drone_profile.usable_battery_percent
        if not within_limit:
            logger.warning(
                "Mission %s needs %.1f%% battery, %s allows %.1f%%",
                mission.id,
                battery,
                drone_profile.name,
                drone_profile.usable_battery_percent,
            )

    return MissionSummary(
        mission_id=mission.id,
        segment_count=len(mission.path_segments),
        waypoint_count=sum(len(segment.waypoints) for segment in mission.path_segments),
        ground_control_point_count=len(mission.ground_control_points),
        total_distance_meters=distance,
        total_distance_feet=distance * METERS_TO_FEET,
        flight_time_seconds=flight_time,
        flight_time_display=format_duration(flight_time),
        photo_count=sum(photo_count(segment) for segment in mission.path_segments),
        battery_consumption_percent=battery,
        within_battery_limit=within_limit,
    )
