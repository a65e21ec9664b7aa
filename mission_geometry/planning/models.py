"""Path generation request models.

Non-positive lengths, spacings and counts raise InvalidPathParametersError at
construction. Area checks (vertex counts, zero area, self-crossing) happen in
the strategies and raise InvalidAreaError.
"""

import math
from enum import StrEnum
from typing import Self

from pydantic import BaseModel, Field, model_validator

from mission_geometry.exceptions.client_errors import InvalidPathParametersError
from mission_geometry.geodesy.models import AltitudeReference, LocalENUPoint
from mission_geometry.optics.models import HardwareProfile


class Orientation(StrEnum):
    """Direction of the primary passes.

    HORIZONTAL passes run east and step north; VERTICAL passes run north and
    step east.
    """

    HORIZONTAL = "horizontal"
    VERTICAL = "vertical"


class CoverageMethod(StrEnum):
    """How imagery is captured along coverage lines."""

    IMAGE_CENTERS = "image_centers"
    RASTER_LINES = "raster_lines"


def _require_positive(field: str, value: float) -> None:
    if not math.isfinite(value) or value <= 0:
        raise InvalidPathParametersError(
            f"{field} must be positive",
            field=field,
            value=str(value),
        )


class _PathParameters(BaseModel):
    """Fields shared by every pattern."""

    altitude_meters: float = 30.0
    altitude_reference: AltitudeReference = Field(default=AltitudeReference.RELATIVE_TO_HOME)
    segment_id: str | None = None
    speed_override_meters_per_second: float | None = None

    @model_validator(mode="after")
    def _check_shared(self) -> Self:
        if not math.isfinite(self.altitude_meters):
            raise InvalidPathParametersError(
                "altitude_meters must be finite",
                field="altitude_meters",
                value=str(self.altitude_meters),
            )
        if self.speed_override_meters_per_second is not None:
            _require_positive(
                "speed_override_meters_per_second", self.speed_override_meters_per_second
            )
        return self


class RasterParameters(_PathParameters):
    """Parallel passes of equal length, optionally flown as a snake.

    The start point fixes the horizontal corner of the grid; its ``up`` is
    ignored in favor of the altitude policy.
    """

    start_point: LocalENUPoint = Field(default_factory=LocalENUPoint)
    row_length: float
    row_spacing: float
    number_of_rows: int
    orientation: Orientation = Field(default=Orientation.HORIZONTAL)
    snake_pattern: bool = True
    include_return_transit: bool = True
    photo_trigger_interval_meters: float | None = None

    @model_validator(mode="after")
    def _check_grid(self) -> Self:
        _require_positive("row_length", self.row_length)
        _require_positive("row_spacing", self.row_spacing)
        _require_positive("number_of_rows", self.number_of_rows)
        if self.photo_trigger_interval_meters is not None:
            _require_positive("photo_trigger_interval_meters", self.photo_trigger_interval_meters)
        return self


class PolygonCoverageParameters(_PathParameters):
    """Raster coverage of a user-drawn polygon, spaced from the camera footprint.

    The polygon is implicitly closed (last vertex connects to the first).
    """

    vertices: list[LocalENUPoint]
    hardware: HardwareProfile
    overlap_percent: float = 70.0
    side_overlap_percent: float | None = None
    coverage_method: CoverageMethod = Field(default=CoverageMethod.IMAGE_CENTERS)
    orientation: Orientation = Field(default=Orientation.HORIZONTAL)
    snake_pattern: bool = True

    @model_validator(mode="after")
    def _check_overlap(self) -> Self:
        overlaps = {"overlap_percent": self.overlap_percent}
        if self.side_overlap_percent is not None:
            overlaps["side_overlap_percent"] = self.side_overlap_percent
        for field, value in overlaps.items():
            if not math.isfinite(value) or not 0.0 <= value < 100.0:
                raise InvalidPathParametersError(
                    f"{field} must be within [0, 100)",
                    field=field,
                    value=str(value),
                )
        return self


class PerimeterParameters(_PathParameters):
    """Closed loop around a boundary at a fixed standoff.

    Positive ``standoff_distance_meters`` offsets outward, negative inward.
    """

    vertices: list[LocalENUPoint]
    standoff_distance_meters: float = 0.0

    @model_validator(mode="after")
    def _check_standoff(self) -> Self:
        if not math.isfinite(self.standoff_distance_meters):
            raise InvalidPathParametersError(
                "standoff_distance_meters must be finite",
                field="standoff_distance_meters",
                value=str(self.standoff_distance_meters),
            )
        return self


class OrbitParameters(_PathParameters):
    """Closed circle around a point of interest."""

    center: LocalENUPoint
    radius_meters: float
    point_count: int = 16
    start_angle_degrees: float = 0.0
    clockwise: bool = False

    @model_validator(mode="after")
    def _check_orbit(self) -> Self:
        _require_positive("radius_meters", self.radius_meters)
        if self.point_count < 3:
            raise InvalidPathParametersError(
                "point_count must be at least 3",
                field="point_count",
                value=self.point_count,
            )
        return self


class BezierParameters(_PathParameters):
    """Smooth curve sampled from control points.

    Waypoint heights follow the curve unless ``fixed_altitude`` is set, in
    which case every sample sits at the altitude policy's height.
    """

    control_points: list[LocalENUPoint]
    sample_count: int = 20
    fixed_altitude: bool = False

    @model_validator(mode="after")
    def _check_curve(self) -> Self:
        if len(self.control_points) < 2:
            raise InvalidPathParametersError(
                "A curve needs at least 2 control points",
                field="control_points",
                value=len(self.control_points),
            )
        if self.sample_count < 2:
            raise InvalidPathParametersError(
                "sample_count must be at least 2",
                field="sample_count",
                value=self.sample_count,
            )
        return self


PathParameters = (
    RasterParameters
    | PolygonCoverageParameters
    | PerimeterParameters
    | OrbitParameters
    | BezierParameters
)
