"""Geographic and local-frame coordinate models."""

import math
from enum import StrEnum
from typing import Self

from pydantic import BaseModel, ConfigDict, Field, model_validator

from mission_geometry.exceptions.client_errors import InvalidCoordinateError


class AltitudeReference(StrEnum):
    """What an altitude value is measured from."""

    ABSOLUTE = "absolute"
    RELATIVE_TO_HOME = "relative_to_home"
    RELATIVE_TO_TERRAIN = "relative_to_terrain"


def _require_finite(field: str, value: float) -> None:
    if not math.isfinite(value):
        raise InvalidCoordinateError(
            f"{field} must be finite",
            field=field,
            value=str(value),
        )


class GeoPoint(BaseModel):
    """Global geographic position.

    Out-of-range or non-finite values raise InvalidCoordinateError at
    construction; nothing is clamped.
    """

    model_config = ConfigDict(frozen=True)

    latitude: float
    longitude: float
    altitude_meters: float = 0.0
    altitude_reference: AltitudeReference = Field(default=AltitudeReference.ABSOLUTE)

    @model_validator(mode="after")
    def _check_range(self) -> Self:
        _require_finite("latitude", self.latitude)
        _require_finite("longitude", self.longitude)
        _require_finite("altitude_meters", self.altitude_meters)
        if not -90.0 <= self.latitude <= 90.0:
            raise InvalidCoordinateError(
                "latitude must be within [-90, 90]",
                field="latitude",
                value=self.latitude,
            )
        if not -180.0 <= self.longitude <= 180.0:
            raise InvalidCoordinateError(
                "longitude must be within [-180, 180]",
                field="longitude",
                value=self.longitude,
            )
        return self


# The (0, 0, 0) of a mission's local frame, usually the takeoff point.
MissionOrigin = GeoPoint


class LocalENUPoint(BaseModel):
    """Right-handed East-North-Up position in meters relative to a mission origin."""

    model_config = ConfigDict(frozen=True)

    east: float = 0.0
    north: float = 0.0
    up: float = 0.0

    @model_validator(mode="after")
    def _check_finite(self) -> Self:
        _require_finite("east", self.east)
        _require_finite("north", self.north)
        _require_finite("up", self.up)
        return self

    def offset(self, east: float = 0.0, north: float = 0.0, up: float = 0.0) -> "LocalENUPoint":
        """Return a new point shifted by the given deltas."""
        return LocalENUPoint(east=self.east + east, north=self.north + north, up=self.up + up)

    def with_up(self, up: float) -> "LocalENUPoint":
        """Return the same horizontal position at a different height."""
        return LocalENUPoint(east=self.east, north=self.north, up=up)

    def as_tuple(self) -> tuple[float, float, float]:
        return (self.east, self.north, self.up)
