"""Polygon survey coverage.

Raster lines span the polygon's bounding box at the camera's line spacing and
are clipped to the polygon with shapely. Concave polygons can split a line
into several pieces; those are flown in order along the line with a
non-imaging transit between them.
"""

import logging
import math
from dataclasses import dataclass
from functools import cached_property

from shapely.geometry import LineString, Polygon
from shapely.validation import explain_validity

from mission_geometry.exceptions.client_errors import (
    InvalidAreaError,
    InvalidPathParametersError,
    TooManyWaypointsError,
)
from mission_geometry.geodesy.models import LocalENUPoint
from mission_geometry.mission.models import (
    ActionType,
    PathType,
    Waypoint,
    WaypointAction,
    WaypointPhase,
)
from mission_geometry.optics.calculator import overlap_spacing
from mission_geometry.optics.models import OverlapSpacing
from mission_geometry.planning.base import PathStrategy
from mission_geometry.planning.models import (
    CoverageMethod,
    Orientation,
    PolygonCoverageParameters,
)

logger = logging.getLogger(__name__)

# Areas below this (square meters) count as zero
_MIN_AREA: float = 1e-6
# Clip lines extend this far past the bounding box
_LINE_MARGIN: float = 1.0


@dataclass(frozen=True)
class LinePiece:
    """Part of one raster line inside the polygon, as along-line coordinates."""

    line_index: int
    across: float
    start: float
    end: float

    @property
    def length(self) -> float:
        return self.end - self.start


def build_polygon(vertices: list[LocalENUPoint]) -> Polygon:
    """Horizontal polygon through the vertices, implicitly closed.

    Raises:
        InvalidAreaError: For fewer than 3 vertices, zero area or a self-crossing ring.
    """
    if len(vertices) < 3:
        raise InvalidAreaError(
            "A polygon needs at least 3 vertices",
            field="vertices",
            value=len(vertices),
        )
    polygon = Polygon([(vertex.east, vertex.north) for vertex in vertices])
    if polygon.area < _MIN_AREA:
        raise InvalidAreaError("Polygon has zero area", field="vertices", value=len(vertices))
    if not polygon.is_valid:
        raise InvalidAreaError(
            f"Polygon is not simple: {explain_validity(polygon)}",
            field="vertices",
            value=len(vertices),
        )
    return polygon


def line_positions(low: float, high: float, spacing: float) -> list[float]:
    """Positions of lines ``spacing`` apart, centred within [low, high].

    A range narrower than one spacing still gets a single centre line.
    """
    extent = high - low
    count = max(1, math.ceil(extent / spacing))
    margin = (extent - (count - 1) * spacing) / 2
    return [low + margin + index * spacing for index in range(count)]


class PolygonCoverageStrategy(PathStrategy[PolygonCoverageParameters]):
    """Survey lines over a polygon spaced from the camera footprint."""

    path_type = PathType.POLYGON

    @cached_property
    def polygon(self) -> Polygon:
        return build_polygon(self.parameters.vertices)

    @cached_property
    def spacing(self) -> OverlapSpacing:
        up = self.flight_up
        if up <= 0:
            raise InvalidPathParametersError(
                "Coverage altitude must be above the ground",
                field="altitude_meters",
                value=self.parameters.altitude_meters,
            )
        return overlap_spacing(
            self.parameters.hardware,
            up,
            self.parameters.overlap_percent,
            self.parameters.side_overlap_percent,
        )

    @property
    def _horizontal(self) -> bool:
        return self.parameters.orientation == Orientation.HORIZONTAL

    def _line_across_positions(self) -> list[float]:
        min_east, min_north, max_east, max_north = self.polygon.bounds
        spacing = self.spacing.line_spacing_meters
        if self._horizontal:
            count = max(1, math.ceil((max_north - min_north) / spacing))
        else:
            count = max(1, math.ceil((max_east - min_east) / spacing))
        # Two endpoints per line is the least any line can cost
        if 2 * count > self.settings.max_waypoints:
            raise TooManyWaypointsError(
                f"Coverage needs at least {2 * count} waypoints, "
                f"limit is {self.settings.max_waypoints}",
                requested=2 * count,
                limit=self.settings.max_waypoints,
            )
        if self._horizontal:
            # top to bottom
            return line_positions(min_north, max_north, spacing)[::-1]
        return line_positions(min_east, max_east, spacing)

    def _clip_line(self, line_index: int, across: float) -> list[LinePiece]:
        min_east, min_north, max_east, max_north = self.polygon.bounds
        if self._horizontal:
            line = LineString(
                [(min_east - _LINE_MARGIN, across), (max_east + _LINE_MARGIN, across)]
            )
        else:
            line = LineString(
                [(across, min_north - _LINE_MARGIN), (across, max_north + _LINE_MARGIN)]
            )

        clipped = self.polygon.intersection(line)
        parts = getattr(clipped, "geoms", [clipped])
        along_axis = 0 if self._horizontal else 1
        min_length = self.settings.min_clipped_segment_meters

        pieces = []
        for part in parts:
            if not isinstance(part, LineString) or part.is_empty:
                continue
            along = sorted(coord[along_axis] for coord in part.coords)
            piece = LinePiece(line_index, across, along[0], along[-1])
            if piece.length <= 0 or piece.length < min_length:
                logger.debug(
                    "Dropped %.3f m piece of line %d",
                    piece.length,
                    line_index,
                )
                continue
            pieces.append(piece)
        return sorted(pieces, key=lambda piece: piece.start)

    @cached_property
    def pieces(self) -> list[list[LinePiece]]:
        """Surviving pieces per raster line, lines with none omitted.

        Raises:
            InvalidAreaError: If no piece survives clipping.
        """
        lines = []
        for line_index, across in enumerate(self._line_across_positions()):
            line_pieces = self._clip_line(line_index, across)
            if line_pieces:
                lines.append(line_pieces)
        if not lines:
            raise InvalidAreaError(
                "No raster line survives clipping to the polygon",
                field="vertices",
                value=len(self.parameters.vertices),
            )
        return lines

    def _piece_intervals(self, piece: LinePiece) -> int:
        if self.parameters.coverage_method == CoverageMethod.RASTER_LINES:
            return 1
        return max(1, math.ceil(piece.length / self.spacing.along_track_spacing_meters))

    def _piece_stops(self, piece: LinePiece) -> list[float]:
        intervals = self._piece_intervals(piece)
        step = piece.length / intervals
        return [piece.start + index * step for index in range(intervals + 1)]

    def estimate_waypoint_count(self) -> int:
        return sum(self._piece_intervals(piece) + 1 for line in self.pieces for piece in line)

    def _segment_extras(self) -> dict:
        if self.parameters.coverage_method == CoverageMethod.RASTER_LINES:
            return {"photo_trigger_interval_meters": self.spacing.along_track_spacing_meters}
        return {}

    def _build_waypoints(self) -> list[Waypoint]:
        up = self.flight_up
        imaging = self.parameters.coverage_method == CoverageMethod.IMAGE_CENTERS
        waypoints: list[Waypoint] = []

        for flown_index, line in enumerate(self.pieces):
            reverse = self.parameters.snake_pattern and flown_index % 2 == 1
            ordered = list(reversed(line)) if reverse else line
            for piece in ordered:
                stops = self._piece_stops(piece)
                if reverse:
                    stops.reverse()
                for stop_index, along in enumerate(stops):
                    if stop_index == 0:
                        phase = WaypointPhase.PASS_START
                    elif stop_index == len(stops) - 1:
                        phase = WaypointPhase.PASS_END
                    else:
                        phase = WaypointPhase.CAPTURE
                    east, north = (
                        (along, piece.across) if self._horizontal else (piece.across, along)
                    )
                    actions = [WaypointAction(type=ActionType.TAKE_PHOTO)] if imaging else []
                    waypoints.append(
                        self._waypoint(east, north, up, phase, piece.line_index, actions)
                    )

        logger.debug(
            "Coverage of %.1f m2 uses %d lines at %.2f m spacing",
            self.polygon.area,
            len(self.pieces),
            self.spacing.line_spacing_meters,
        )
        return waypoints
