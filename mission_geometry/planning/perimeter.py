"""Closed perimeter loop at a standoff from a boundary."""

import math

from shapely.geometry import Polygon

from mission_geometry.exceptions.client_errors import InvalidAreaError
from mission_geometry.geodesy.models import LocalENUPoint
from mission_geometry.mission.models import PathType, Waypoint, WaypointPhase
from mission_geometry.planning.base import PathStrategy
from mission_geometry.planning.coverage import build_polygon
from mission_geometry.planning.models import PerimeterParameters

# 1 + cos(turn) below this is a hairpin with no finite mitre
_MIN_MITRE_DENOMINATOR: float = 1e-9


def _boundary(vertices: list[LocalENUPoint]) -> list[tuple[float, float]]:
    points = [(vertex.east, vertex.north) for vertex in vertices]
    if len(points) > 3 and points[0] == points[-1]:
        points.pop()
    return points


def offset_boundary(
    points: list[tuple[float, float]],
    standoff: float,
    counter_clockwise: bool,
) -> list[tuple[float, float]]:
    """Offset a closed ring by ``standoff`` meters along its outward normals.

    Each vertex moves to the intersection of its two offset edges, which is
    ``standoff * (n1 + n2) / (1 + n1 . n2)`` from the original vertex.

    Raises:
        InvalidAreaError: On repeated vertices or a hairpin turn.
    """
    count = len(points)
    normals = []
    for index in range(count):
        (x1, y1), (x2, y2) = points[index], points[(index + 1) % count]
        dx, dy = x2 - x1, y2 - y1
        length = math.hypot(dx, dy)
        if length == 0:
            raise InvalidAreaError(
                "Boundary repeats a vertex",
                field="vertices",
                value=index,
            )
        dx, dy = dx / length, dy / length
        normals.append((dy, -dx) if counter_clockwise else (-dy, dx))

    offset = []
    for index in range(count):
        previous_x, previous_y = normals[index - 1]
        next_x, next_y = normals[index]
        denominator = 1 + previous_x * next_x + previous_y * next_y
        if denominator < _MIN_MITRE_DENOMINATOR:
            raise InvalidAreaError(
                "Boundary folds back on itself",
                field="vertices",
                value=index,
            )
        scale = standoff / denominator
        x, y = points[index]
        offset.append((x + scale * (previous_x + next_x), y + scale * (previous_y + next_y)))
    return offset


def _keeps_edge_directions(
    original: list[tuple[float, float]],
    offset: list[tuple[float, float]],
) -> bool:
    """False when an inward offset shrinks some edge to nothing or reverses it."""
    count = len(original)
    for index in range(count):
        following = (index + 1) % count
        original_dx = original[following][0] - original[index][0]
        original_dy = original[following][1] - original[index][1]
        offset_dx = offset[following][0] - offset[index][0]
        offset_dy = offset[following][1] - offset[index][1]
        if original_dx * offset_dx + original_dy * offset_dy <= 0:
            return False
    return True


class PerimeterStrategy(PathStrategy[PerimeterParameters]):
    """Loop around the boundary, offset outward for positive standoffs.

    Offset vertices keep the input order; the loop closes by repeating the
    first position.
    """

    path_type = PathType.PERIMETER

    @property
    def closed(self) -> bool:
        return True

    def estimate_waypoint_count(self) -> int:
        return len(_boundary(self.parameters.vertices)) + 1

    def _build_waypoints(self) -> list[Waypoint]:
        points = _boundary(self.parameters.vertices)
        polygon = build_polygon([LocalENUPoint(east=x, north=y) for x, y in points])
        counter_clockwise = polygon.exterior.is_ccw
        standoff = self.parameters.standoff_distance_meters

        ring = points
        if standoff != 0:
            ring = offset_boundary(points, standoff, counter_clockwise)
            if not _keeps_edge_directions(points, ring) or not Polygon(ring).is_valid:
                raise InvalidAreaError(
                    f"A standoff of {standoff} m collapses the boundary",
                    field="standoff_distance_meters",
                    value=standoff,
                )

        up = self.flight_up
        waypoints = [
            self._waypoint(east, north, up, WaypointPhase.LOOP) for east, north in ring
        ]
        first_east, first_north = ring[0]
        waypoints.append(self._waypoint(first_east, first_north, up, WaypointPhase.LOOP))
        return waypoints
