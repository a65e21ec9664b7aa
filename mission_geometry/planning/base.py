"""Base class shared by the path pattern strategies."""

from abc import ABC, abstractmethod
from typing import ClassVar, Generic, TypeVar

from mission_geometry.config import Settings, get_settings
from mission_geometry.exceptions.client_errors import TooManyWaypointsError
from mission_geometry.geodesy.converter import altitude_to_up
from mission_geometry.geodesy.models import LocalENUPoint, MissionOrigin
from mission_geometry.mission.models import (
    DisplayMetadata,
    PathSegment,
    PathType,
    Waypoint,
    WaypointAction,
    WaypointPhase,
)
from mission_geometry.planning.models import PathParameters

P = TypeVar("P", bound=PathParameters)


class PathStrategy(ABC, Generic[P]):
    """One path pattern.

    ``estimate_waypoint_count`` must be cheap and exact enough to enforce the
    waypoint bound; ``build`` checks it before creating any waypoint.
    """

    path_type: ClassVar[PathType]

    def __init__(
        self,
        parameters: P,
        *,
        origin: MissionOrigin | None = None,
        settings: Settings | None = None,
    ) -> None:
        self.parameters = parameters
        self.origin = origin
        self.settings = settings or get_settings()

    @abstractmethod
    def estimate_waypoint_count(self) -> int:
        """Number of waypoints ``build`` will produce."""

    @abstractmethod
    def _build_waypoints(self) -> list[Waypoint]:
        """Create the waypoints in flight order."""

    def build(self) -> PathSegment:
        """Generate the segment.

        Raises:
            TooManyWaypointsError: If the estimate exceeds ``Settings.max_waypoints``.
            InvalidAreaError: For degenerate regions.
        """
        self.check_waypoint_bound()
        waypoints = self._build_waypoints()
        segment_fields = {
            "type": self.path_type,
            "waypoints": waypoints,
            "speed_override_meters_per_second": self.parameters.speed_override_meters_per_second,
            "ground_projections": [waypoint.local.with_up(0.0) for waypoint in waypoints],
            "closed": self.closed,
            **self._segment_extras(),
        }
        if self.parameters.segment_id is not None:
            segment_fields["id"] = self.parameters.segment_id
        return PathSegment(**segment_fields)

    def check_waypoint_bound(self) -> int:
        count = self.estimate_waypoint_count()
        limit = self.settings.max_waypoints
        if count > limit:
            raise TooManyWaypointsError(
                f"{self.path_type} request needs {count} waypoints, limit is {limit}",
                requested=count,
                limit=limit,
            )
        return count

    @property
    def closed(self) -> bool:
        return False

    def _segment_extras(self) -> dict:
        return {}

    @property
    def flight_up(self) -> float:
        """Local ``up`` of the requested altitude."""
        return altitude_to_up(
            self.parameters.altitude_meters,
            self.parameters.altitude_reference,
            self.origin,
        )

    def _waypoint(
        self,
        east: float,
        north: float,
        up: float,
        phase: WaypointPhase,
        row_index: int | None = None,
        actions: list[WaypointAction] | None = None,
    ) -> Waypoint:
        return Waypoint(
            local=LocalENUPoint(east=east, north=north, up=up),
            altitude_reference=self.parameters.altitude_reference,
            actions=actions or [],
            display=DisplayMetadata(phase=phase, row_index=row_index),
        )
