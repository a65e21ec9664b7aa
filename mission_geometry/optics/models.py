"""Camera hardware inputs and optical calculation results."""

import math
from typing import Self

from pydantic import BaseModel, ConfigDict, Field, model_validator

from mission_geometry.exceptions.client_errors import InvalidLensParametersError


class HardwareProfile(BaseModel):
    """Camera and lens configuration supplied by the hardware-selection collaborator.

    Consumed read-only. Non-physical values raise InvalidLensParametersError.
    """

    model_config = ConfigDict(frozen=True)

    sensor_width_mm: float
    sensor_height_mm: float
    focal_length_mm: float
    crop_factor: float = 1.0
    aperture_f_number: float = 5.6
    image_width_px: int | None = None
    image_height_px: int | None = None

    @model_validator(mode="after")
    def _check_physical(self) -> Self:
        for name in (
            "sensor_width_mm",
            "sensor_height_mm",
            "focal_length_mm",
            "crop_factor",
            "aperture_f_number",
        ):
            value = getattr(self, name)
            if not math.isfinite(value) or value <= 0:
                raise InvalidLensParametersError(
                    f"{name} must be a positive finite number",
                    field=name,
                    value=str(value),
                )
        for name in ("image_width_px", "image_height_px"):
            pixels = getattr(self, name)
            if pixels is not None and pixels <= 0:
                raise InvalidLensParametersError(
                    f"{name} must be positive",
                    field=name,
                    value=pixels,
                )
        return self


class GroundFootprint(BaseModel):
    """Ground area covered by one nadir image."""

    width_meters: float = Field(ge=0.0)
    height_meters: float = Field(ge=0.0)

    @property
    def area_square_meters(self) -> float:
        return self.width_meters * self.height_meters


class DepthOfField(BaseModel):
    """Depth of field around a focus distance.

    ``far_limit_meters`` and ``total_depth_meters`` are ``math.inf`` when the
    focus distance is at or beyond the hyperfocal distance.
    """

    near_limit_meters: float = Field(ge=0.0)
    far_limit_meters: float = Field(ge=0.0)
    hyperfocal_meters: float = Field(gt=0.0)
    total_depth_meters: float = Field(ge=0.0)
    circle_of_confusion_mm: float = Field(gt=0.0)

    @property
    def far_is_infinite(self) -> bool:
        return math.isinf(self.far_limit_meters)


class OverlapSpacing(BaseModel):
    """Capture spacing needed for a requested image overlap at one altitude."""

    along_track_spacing_meters: float = Field(gt=0.0)
    line_spacing_meters: float = Field(gt=0.0)
    footprint: GroundFootprint
    horizontal_fov_degrees: float = Field(gt=0.0, lt=180.0)
    vertical_fov_degrees: float = Field(gt=0.0, lt=180.0)
