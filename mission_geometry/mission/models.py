"""Mission domain models."""

from collections import Counter
from collections.abc import Iterator
from datetime import UTC, datetime
from enum import StrEnum
from typing import Any, Self
from uuid import uuid4

from pydantic import BaseModel, Field, model_validator

from mission_geometry.exceptions.client_errors import (
    DuplicateSegmentIdError,
    DuplicateWaypointIdError,
)
from mission_geometry.geodesy.models import AltitudeReference, LocalENUPoint, MissionOrigin


def new_id() -> str:
    """Generate an entity id."""
    return str(uuid4())


def _utc_now() -> str:
    return datetime.now(UTC).isoformat()


def _duplicates(ids: list[str]) -> list[str]:
    return sorted(item for item, count in Counter(ids).items() if count > 1)


class ActionType(StrEnum):
    """Actions a drone can perform on arrival at a waypoint."""

    TAKE_PHOTO = "take_photo"
    START_RECORDING = "start_recording"
    STOP_RECORDING = "stop_recording"
    START_VIDEO = "start_video"
    STOP_VIDEO = "stop_video"
    ROTATE_GIMBAL = "rotate_gimbal"
    CUSTOM_PAYLOAD = "custom_payload"


class PathType(StrEnum):
    """How a path segment was produced."""

    GRID = "grid"
    PERIMETER = "perimeter"
    POLYGON = "polygon"
    MANUAL = "manual"
    BEZIER = "bezier"
    ORBIT = "orbit"


class WaypointPhase(StrEnum):
    """Role of a waypoint within its pattern. Presentation only."""

    PASS_START = "pass_start"
    CAPTURE = "capture"
    PASS_END = "pass_end"
    TRANSIT = "transit"
    LOOP = "loop"
    CURVE = "curve"


class WaypointAction(BaseModel):
    """Single action with free-form parameters."""

    type: ActionType
    parameters: dict[str, Any] = Field(default_factory=dict)


class DisplayMetadata(BaseModel):
    """Hints for renderers. Statistics read the phase to find imaging passes."""

    phase: WaypointPhase | None = None
    row_index: int | None = Field(default=None, ge=0)
    color_hint: str | None = None


class Waypoint(BaseModel):
    """Single waypoint in a path segment.

    Only the local position is authoritative; the global position is derived
    from the mission origin on demand.
    """

    id: str = Field(default_factory=new_id, min_length=1)
    local: LocalENUPoint
    altitude_reference: AltitudeReference = Field(default=AltitudeReference.RELATIVE_TO_HOME)
    hold_time_seconds: float = Field(default=0.0, ge=0.0)
    actions: list[WaypointAction] = Field(default_factory=list)
    display: DisplayMetadata = Field(default_factory=DisplayMetadata)

    def has_action(self, action_type: ActionType) -> bool:
        return any(action.type == action_type for action in self.actions)


class PathSegment(BaseModel):
    """Ordered waypoints flown in sequence.

    Waypoint order is flight order. ``ground_projections``, when present, is
    parallel to ``waypoints``.
    """

    id: str = Field(default_factory=new_id, min_length=1)
    type: PathType
    waypoints: list[Waypoint] = Field(default_factory=list)
    speed_override_meters_per_second: float | None = Field(default=None, gt=0.0)
    ground_projections: list[LocalENUPoint] | None = None
    closed: bool = False
    photo_trigger_interval_meters: float | None = Field(default=None, gt=0.0)
    control_points: list[LocalENUPoint] = Field(default_factory=list)

    @model_validator(mode="after")
    def _check_waypoints(self) -> Self:
        duplicates = _duplicates([waypoint.id for waypoint in self.waypoints])
        if duplicates:
            raise DuplicateWaypointIdError(
                f"Segment {self.id} repeats waypoint ids",
                context={"segment_id": self.id, "waypoint_ids": duplicates},
            )
        if self.ground_projections is not None and len(self.ground_projections) != len(
            self.waypoints
        ):
            error_message = "ground_projections must have one entry per waypoint"
            raise ValueError(error_message)
        return self

    @property
    def minimum_waypoints(self) -> int:
        """Fewest waypoints a well-formed segment of this shape needs."""
        return 3 if self.closed else 2

    @property
    def is_well_formed(self) -> bool:
        return len(self.waypoints) >= self.minimum_waypoints

    def waypoint_ids(self) -> list[str]:
        return [waypoint.id for waypoint in self.waypoints]


class GroundControlPoint(BaseModel):
    """Fixed survey reference, independent of any path segment."""

    id: str = Field(default_factory=new_id, min_length=1)
    name: str = Field(min_length=1, max_length=200)
    local: LocalENUPoint
    accuracy_meters: float | None = Field(default=None, ge=0.0)


class Mission(BaseModel):
    """Root aggregate owning path segments and ground control points.

    ``local_origin`` is fixed at creation. Change it only through
    ``mission.editor.recompute_local_frame``, which regenerates every local
    coordinate.
    """

    id: str = Field(default_factory=new_id, min_length=1)
    name: str = Field(min_length=1, max_length=200)
    description: str = Field(default="", max_length=2000)
    local_origin: MissionOrigin
    path_segments: list[PathSegment] = Field(default_factory=list)
    ground_control_points: list[GroundControlPoint] = Field(default_factory=list)
    default_speed_meters_per_second: float = Field(default=5.0, gt=0.0)
    default_altitude_meters: float = Field(default=30.0, ge=0.0)
    created_at: str = Field(default_factory=_utc_now)
    updated_at: str = Field(default_factory=_utc_now)

    @model_validator(mode="after")
    def _check_unique_ids(self) -> Self:
        segment_duplicates = _duplicates([segment.id for segment in self.path_segments])
        if segment_duplicates:
            raise DuplicateSegmentIdError(
                "Mission repeats path segment ids",
                context={"segment_ids": segment_duplicates},
            )
        waypoint_duplicates = _duplicates(list(self.waypoint_ids()))
        if waypoint_duplicates:
            raise DuplicateWaypointIdError(
                "Mission repeats waypoint ids across segments",
                context={"waypoint_ids": waypoint_duplicates},
            )
        gcp_duplicates = _duplicates([gcp.id for gcp in self.ground_control_points])
        if gcp_duplicates:
            error_message = f"Ground control point ids must be unique: {gcp_duplicates}"
            raise ValueError(error_message)
        return self

    def iter_waypoints(self) -> Iterator[Waypoint]:
        """Yield every waypoint in flight order across segments."""
        for segment in self.path_segments:
            yield from segment.waypoints

    def waypoint_ids(self) -> Iterator[str]:
        return (waypoint.id for waypoint in self.iter_waypoints())

    def touch(self) -> None:
        """Record a modification."""
        self.updated_at = _utc_now()
