"""Conversion between global coordinates and a mission's local ENU frame.

The local frame uses an equirectangular approximation around the mission
origin. It is accurate to well under a centimeter of round-trip error for
mission extents of a few kilometers and makes no attempt at ellipsoidal
(geodesic-exact) projection. The frame is always right-handed East, North,
Up; render engines with another handedness convert at their own boundary.
"""

import math
from collections.abc import Iterable

from mission_geometry.exceptions.client_errors import InvalidCoordinateError
from mission_geometry.geodesy.models import (
    AltitudeReference,
    GeoPoint,
    LocalENUPoint,
    MissionOrigin,
)

EARTH_RADIUS_METERS: float = 6_378_137.0
METERS_PER_DEGREE_LATITUDE: float = math.pi * EARTH_RADIUS_METERS / 180.0

# cos(latitude) below this means the origin sits on a pole
_MIN_LONGITUDE_SCALE: float = 1e-9


def meters_per_degree(origin: MissionOrigin) -> tuple[float, float]:
    """Return (meters per degree latitude, meters per degree longitude) at the origin.

    Raises:
        InvalidCoordinateError: If the origin is at a pole, where east is undefined.
    """
    longitude_scale = math.cos(math.radians(origin.latitude))
    if longitude_scale < _MIN_LONGITUDE_SCALE:
        raise InvalidCoordinateError(
            "Local frame is undefined for an origin at a pole",
            field="origin.latitude",
            value=origin.latitude,
        )
    return METERS_PER_DEGREE_LATITUDE, METERS_PER_DEGREE_LATITUDE * longitude_scale


def _wrap_longitude_delta(delta: float) -> float:
    """Map a longitude difference into [-180, 180)."""
    return (delta + 180.0) % 360.0 - 180.0


def _normalize_longitude(longitude: float) -> float:
    if longitude > 180.0:
        return longitude - 360.0
    if longitude < -180.0:
        return longitude + 360.0
    return longitude


def altitude_to_up(
    altitude_meters: float,
    reference: AltitudeReference,
    origin: MissionOrigin | None = None,
) -> float:
    """Convert an altitude under the given reference to a local ``up`` value.

    Home is the mission origin, so home-relative altitudes map straight to
    ``up``. There is no terrain model: terrain-relative altitudes assume flat
    ground at the origin's level.

    Raises:
        InvalidCoordinateError: For a non-finite altitude, or an absolute
            altitude without an origin to subtract.
    """
    if not math.isfinite(altitude_meters):
        raise InvalidCoordinateError(
            "altitude must be finite",
            field="altitude_meters",
            value=str(altitude_meters),
        )
    if reference != AltitudeReference.ABSOLUTE:
        return altitude_meters
    if origin is None:
        raise InvalidCoordinateError(
            "An absolute altitude needs a mission origin to convert",
            field="altitude_reference",
            value=reference,
        )
    return altitude_meters - origin.altitude_meters


def up_to_altitude(
    up: float,
    reference: AltitudeReference,
    origin: MissionOrigin,
) -> float:
    """Inverse of ``altitude_to_up``."""
    if reference == AltitudeReference.ABSOLUTE:
        return up + origin.altitude_meters
    return up


def to_local(point: GeoPoint, origin: MissionOrigin) -> LocalENUPoint:
    """Project a geographic point into the ENU frame anchored at ``origin``.

    Args:
        point: Point to project.
        origin: Mission origin.

    Returns:
        The point in local meters.

    Raises:
        InvalidCoordinateError: If the origin is at a pole.
    """
    lat_scale, lon_scale = meters_per_degree(origin)
    north = (point.latitude - origin.latitude) * lat_scale
    east = _wrap_longitude_delta(point.longitude - origin.longitude) * lon_scale
    up = altitude_to_up(point.altitude_meters, point.altitude_reference, origin)
    return LocalENUPoint(east=east, north=north, up=up)


def to_global(
    point: LocalENUPoint,
    origin: MissionOrigin,
    altitude_reference: AltitudeReference = AltitudeReference.ABSOLUTE,
) -> GeoPoint:
    """Inverse of ``to_local``.

    The default reference matches ``GeoPoint``, so a point with default
    fields survives ``to_global(to_local(point, origin), origin)``.

    Args:
        point: Local point.
        origin: Mission origin the point is relative to.
        altitude_reference: Reference for the returned altitude.

    Returns:
        The global position.

    Raises:
        InvalidCoordinateError: If the origin is at a pole or the point lies
            beyond a pole.
    """
    lat_scale, lon_scale = meters_per_degree(origin)
    latitude = origin.latitude + point.north / lat_scale
    longitude = _normalize_longitude(origin.longitude + point.east / lon_scale)
    return GeoPoint(
        latitude=latitude,
        longitude=longitude,
        altitude_meters=up_to_altitude(point.up, altitude_reference, origin),
        altitude_reference=altitude_reference,
    )


def to_local_many(points: Iterable[GeoPoint], origin: MissionOrigin) -> list[LocalENUPoint]:
    """Project a sequence of points, e.g. a user-drawn region, preserving order."""
    return [to_local(point, origin) for point in points]


def haversine_distance(a: GeoPoint, b: GeoPoint) -> float:
    """Great-circle distance in meters, ignoring altitude."""
    lat1 = math.radians(a.latitude)
    lat2 = math.radians(b.latitude)
    delta_lat = lat2 - lat1
    delta_lon = math.radians(b.longitude - a.longitude)

    half_chord = (
        math.sin(delta_lat / 2) ** 2
        + math.cos(lat1) * math.cos(lat2) * math.sin(delta_lon / 2) ** 2
    )
    angle = 2 * math.atan2(math.sqrt(half_chord), math.sqrt(1 - half_chord))
    return EARTH_RADIUS_METERS * angle


def local_distance(a: LocalENUPoint, b: LocalENUPoint) -> float:
    """3D Euclidean distance in meters between two points of the same frame."""
    return math.dist(a.as_tuple(), b.as_tuple())


def region_center(north: float, south: float, east: float, west: float) -> GeoPoint:
    """Center of a latitude/longitude bounding box.

    Boxes crossing the antimeridian (west > east) are handled.
    """
    span = east - west
    if span < 0:
        span += 360.0
    longitude = _normalize_longitude(west + span / 2)
    return GeoPoint(latitude=(north + south) / 2, longitude=longitude)
