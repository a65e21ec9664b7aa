"""Raster (lawnmower) grid of parallel rows."""

from mission_geometry.mission.models import PathType, Waypoint, WaypointPhase
from mission_geometry.planning.base import PathStrategy
from mission_geometry.planning.models import Orientation, RasterParameters


class RasterStrategy(PathStrategy[RasterParameters]):
    """Rows of ``row_length`` spaced ``row_spacing`` apart from ``start_point``.

    Each row contributes a start and an end waypoint. With the snake pattern
    odd rows are flown end to start. Without it every row is flown start to
    end, and unless ``include_return_transit`` is off, a transit waypoint at
    the previous row's level brings the drone back to the row start.
    """

    path_type = PathType.GRID

    def estimate_waypoint_count(self) -> int:
        rows = self.parameters.number_of_rows
        if self._has_return_transits:
            return 3 * rows - 1
        return 2 * rows

    @property
    def _has_return_transits(self) -> bool:
        return not self.parameters.snake_pattern and self.parameters.include_return_transit

    def _segment_extras(self) -> dict:
        return {"photo_trigger_interval_meters": self.parameters.photo_trigger_interval_meters}

    def _position(self, along: float, across: float) -> tuple[float, float]:
        """Map row coordinates to (east, north)."""
        start = self.parameters.start_point
        if self.parameters.orientation == Orientation.HORIZONTAL:
            return start.east + along, start.north + across
        return start.east + across, start.north + along

    def _build_waypoints(self) -> list[Waypoint]:
        params = self.parameters
        up = self.flight_up
        waypoints: list[Waypoint] = []

        for row in range(params.number_of_rows):
            across = row * params.row_spacing
            if params.snake_pattern and row % 2 == 1:
                first_along, last_along = params.row_length, 0.0
            else:
                first_along, last_along = 0.0, params.row_length

            if row > 0 and self._has_return_transits:
                east, north = self._position(0.0, across - params.row_spacing)
                waypoints.append(self._waypoint(east, north, up, WaypointPhase.TRANSIT, row))

            east, north = self._position(first_along, across)
            waypoints.append(self._waypoint(east, north, up, WaypointPhase.PASS_START, row))
            east, north = self._position(last_along, across)
            waypoints.append(self._waypoint(east, north, up, WaypointPhase.PASS_END, row))

        return waypoints
