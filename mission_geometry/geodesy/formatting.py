"""Human-readable rendering of geographic coordinates."""

from enum import StrEnum

from mission_geometry.geodesy.models import GeoPoint


class CoordinateStyle(StrEnum):
    """Supported coordinate notations."""

    DECIMAL_DEGREES = "dd"
    DEGREES_MINUTES_SECONDS = "dms"
    DEGREES_DECIMAL_MINUTES = "ddm"


def _hemisphere(value: float, *, is_latitude: bool) -> str:
    if is_latitude:
        return "N" if value >= 0 else "S"
    return "E" if value >= 0 else "W"


def _format_dms(value: float, *, is_latitude: bool) -> str:
    magnitude = abs(value)
    degrees = int(magnitude)
    minutes_total = (magnitude - degrees) * 60
    minutes = int(minutes_total)
    seconds = (minutes_total - minutes) * 60
    direction = _hemisphere(value, is_latitude=is_latitude)
    return f"{degrees}° {minutes}' {seconds:.2f}\" {direction}"


def _format_ddm(value: float, *, is_latitude: bool) -> str:
    magnitude = abs(value)
    degrees = int(magnitude)
    minutes = (magnitude - degrees) * 60
    direction = _hemisphere(value, is_latitude=is_latitude)
    return f"{degrees}° {minutes:.4f}' {direction}"


def format_coordinates(
    point: GeoPoint,
    style: CoordinateStyle = CoordinateStyle.DECIMAL_DEGREES,
) -> tuple[str, str]:
    """Format a point's latitude and longitude.

    Args:
        point: Point to format.
        style: Notation to use.

    Returns:
        (latitude text, longitude text).
    """
    if style == CoordinateStyle.DEGREES_MINUTES_SECONDS:
        return (
            _format_dms(point.latitude, is_latitude=True),
            _format_dms(point.longitude, is_latitude=False),
        )
    if style == CoordinateStyle.DEGREES_DECIMAL_MINUTES:
        return (
            _format_ddm(point.latitude, is_latitude=True),
            _format_ddm(point.longitude, is_latitude=False),
        )
    return (f"{point.latitude:.6f}°", f"{point.longitude:.6f}°")
