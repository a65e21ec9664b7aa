"""Path generation entry point.

Usage:
    from mission_geometry.planning.generator import PathGenerator
    from mission_geometry.planning.models import RasterParameters

    generator = PathGenerator(origin=mission.local_origin)
    segment = generator.generate(
        RasterParameters(row_length=50, row_spacing=10, number_of_rows=3, altitude_meters=20)
    )
"""

import logging
from collections.abc import Iterable

from mission_geometry.config import Settings, get_settings
from mission_geometry.exceptions.base import MissionGeometryError
from mission_geometry.exceptions.client_errors import InvalidPathParametersError
from mission_geometry.geodesy.converter import to_local_many
from mission_geometry.geodesy.models import GeoPoint, LocalENUPoint, MissionOrigin
from mission_geometry.logging.context import log_context
from mission_geometry.mission.models import PathSegment
from mission_geometry.planning.base import PathStrategy
from mission_geometry.planning.bezier import BezierStrategy
from mission_geometry.planning.coverage import PolygonCoverageStrategy
from mission_geometry.planning.models import (
    BezierParameters,
    OrbitParameters,
    PathParameters,
    PerimeterParameters,
    PolygonCoverageParameters,
    RasterParameters,
)
from mission_geometry.planning.orbit import OrbitStrategy
from mission_geometry.planning.perimeter import PerimeterStrategy
from mission_geometry.planning.raster import RasterStrategy

logger = logging.getLogger(__name__)

STRATEGIES: dict[type[PathParameters], type[PathStrategy]] = {
    RasterParameters: RasterStrategy,
    PolygonCoverageParameters: PolygonCoverageStrategy,
    PerimeterParameters: PerimeterStrategy,
    OrbitParameters: OrbitStrategy,
    BezierParameters: BezierStrategy,
}


class PathGenerator:
    """Turns pattern parameters into path segments.

    The origin is only needed for ``ABSOLUTE`` altitude policies and for
    converting geographic regions.
    """

    def __init__(
        self,
        settings: Settings | None = None,
        origin: MissionOrigin | None = None,
    ) -> None:
        self.settings = settings or get_settings()
        self.origin = origin

    def strategy_for(self, parameters: PathParameters) -> PathStrategy:
        """Strategy instance for a parameter model.

        Raises:
            InvalidPathParametersError: For an unsupported parameter type.
        """
        strategy_class = STRATEGIES.get(type(parameters))
        if strategy_class is None:
            raise InvalidPathParametersError(
                f"No path pattern for {type(parameters).__name__}",
                field="parameters",
                value=type(parameters).__name__,
            )
        return strategy_class(parameters, origin=self.origin, settings=self.settings)

    def generate(self, parameters: PathParameters) -> PathSegment:
        """Generate one path segment.

        Args:
            parameters: Pattern parameters; the model type selects the pattern.

        Returns:
            A new, non-empty segment with fresh ids.

        Raises:
            InvalidPathParametersError: For unsupported parameters or an
                altitude the pattern cannot fly.
            InvalidAreaError: For degenerate regions.
            TooManyWaypointsError: If the pattern would exceed ``max_waypoints``.
            InvalidCoordinateError: For an ABSOLUTE altitude without an origin.
        """
        strategy = self.strategy_for(parameters)
        with log_context(path_type=str(strategy.path_type)):
            try:
                segment = strategy.build()
            except MissionGeometryError as error:
                logger.warning(
                    "Rejected %s request: %s",
                    strategy.path_type,
                    error.message,
                    extra={"error": error.to_log_dict()},
                )
                raise
            logger.info(
                "Generated %s segment %s with %d waypoints",
                segment.type,
                segment.id,
                len(segment.waypoints),
            )
        return segment

    def localize(self, points: Iterable[GeoPoint]) -> list[LocalENUPoint]:
        """Convert a geographic region into this generator's local frame.

        Raises:
            InvalidPathParametersError: If the generator has no origin.
        """
        if self.origin is None:
            raise InvalidPathParametersError(
                "Converting geographic points needs a generator origin",
                field="origin",
                value=None,
            )
        return to_local_many(points, self.origin)
