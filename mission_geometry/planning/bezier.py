"""Bezier curve paths."""

from mission_geometry.geodesy.models import LocalENUPoint
from mission_geometry.mission.models import PathType, Waypoint, WaypointPhase
from mission_geometry.planning.base import PathStrategy
from mission_geometry.planning.models import BezierParameters


def de_casteljau(control_points: list[LocalENUPoint], t: float) -> LocalENUPoint:
    """Point on the Bezier curve at parameter ``t`` in [0, 1]."""
    points = [point.as_tuple() for point in control_points]
    while len(points) > 1:
        points = [
            tuple(a + (b - a) * t for a, b in zip(first, second, strict=True))
            for first, second in zip(points, points[1:])
        ]
    east, north, up = points[0]
    return LocalENUPoint(east=east, north=north, up=up)


class BezierStrategy(PathStrategy[BezierParameters]):
    """``sample_count`` evenly parameterised samples from the first to the last control point."""

    path_type = PathType.BEZIER

    def estimate_waypoint_count(self) -> int:
        return self.parameters.sample_count

    def _segment_extras(self) -> dict:
        return {"control_points": list(self.parameters.control_points)}

    def _build_waypoints(self) -> list[Waypoint]:
        params = self.parameters
        fixed_up = self.flight_up if params.fixed_altitude else None
        last = params.sample_count - 1

        waypoints = []
        for index in range(params.sample_count):
            point = de_casteljau(params.control_points, index / last)
            up = point.up if fixed_up is None else fixed_up
            waypoints.append(self._waypoint(point.east, point.north, up, WaypointPhase.CURVE))
        return waypoints
