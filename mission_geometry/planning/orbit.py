"""Circular orbit around a point of interest."""

import math

from mission_geometry.mission.models import PathType, Waypoint, WaypointPhase
from mission_geometry.planning.base import PathStrategy
from mission_geometry.planning.models import OrbitParameters


class OrbitStrategy(PathStrategy[OrbitParameters]):
    """``point_count`` evenly spaced points on the circle, closed by repeating the first.

    Angles are measured counter-clockwise from east.
    """

    path_type = PathType.ORBIT

    @property
    def closed(self) -> bool:
        return True

    def estimate_waypoint_count(self) -> int:
        return self.parameters.point_count + 1

    def _build_waypoints(self) -> list[Waypoint]:
        params = self.parameters
        up = self.flight_up
        step = 2 * math.pi / params.point_count
        if params.clockwise:
            step = -step
        start = math.radians(params.start_angle_degrees)

        waypoints = []
        for index in range(params.point_count + 1):
            angle = start + (index % params.point_count) * step
            waypoints.append(
                self._waypoint(
                    params.center.east + params.radius_meters * math.cos(angle),
                    params.center.north + params.radius_meters * math.sin(angle),
                    up,
                    WaypointPhase.LOOP,
                )
            )
        return waypoints
