"""Mission geometry exception hierarchy.

Architecture:
    MissionGeometryError (base)
    └── ClientError
        ├── InvalidCoordinateError
        ├── InvalidLensParametersError
        ├── InvalidPathParametersError
        ├── InvalidAreaError
        ├── InvalidSpeedError
        ├── TooManyWaypointsError
        ├── InvalidPermutationError
        ├── DuplicateSegmentIdError
        ├── DuplicateWaypointIdError
        └── NotFoundError

Usage:
    from mission_geometry.exceptions import InvalidAreaError

    def coverage(vertices: list[LocalENUPoint]) -> PathSegment:
        if len(vertices) < 3:
            raise InvalidAreaError(
                "Polygon needs at least 3 vertices",
                field="vertices",
                value=len(vertices),
            )
        ...
"""

from mission_geometry.exceptions.base import MissionGeometryError
from mission_geometry.exceptions.client_errors import (
    ClientError,
    DuplicateSegmentIdError,
    DuplicateWaypointIdError,
    InvalidAreaError,
    InvalidCoordinateError,
    InvalidLensParametersError,
    InvalidPathParametersError,
    InvalidPermutationError,
    InvalidSpeedError,
    NotFoundError,
    TooManyWaypointsError,
)

__all__ = [
    "ClientError",
    "DuplicateSegmentIdError",
    "DuplicateWaypointIdError",
    "InvalidAreaError",
    "InvalidCoordinateError",
    "InvalidLensParametersError",
    "InvalidPathParametersError",
    "InvalidPermutationError",
    "InvalidSpeedError",
    "MissionGeometryError",
    "NotFoundError",
    "TooManyWaypointsError",
]
