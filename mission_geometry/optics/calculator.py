"""Field of view, ground footprint, GSD and depth-of-field calculations.

All functions are pure and deterministic. Distances are meters and sensor or
lens dimensions millimeters unless a name says otherwise. Invalid inputs raise
InvalidLensParametersError; the only non-finite value ever returned is the
documented infinite far focus limit.
"""

import math
from functools import lru_cache

from mission_geometry.exceptions.client_errors import (
    InvalidLensParametersError,
    InvalidPathParametersError,
)
from mission_geometry.optics.models import (
    DepthOfField,
    GroundFootprint,
    HardwareProfile,
    OverlapSpacing,
)

FULL_FRAME_CIRCLE_OF_CONFUSION_MM: float = 0.03
_MM_PER_METER: float = 1000.0
_CM_PER_METER: float = 100.0


def _require_positive(field: str, value: float) -> None:
    if not math.isfinite(value) or value <= 0:
        raise InvalidLensParametersError(
            f"{field} must be a positive finite number",
            field=field,
            value=str(value),
        )


def _require_overlap(field: str, percent: float) -> None:
    if not math.isfinite(percent) or not 0.0 <= percent < 100.0:
        raise InvalidPathParametersError(
            f"{field} must be within [0, 100)",
            field=field,
            value=str(percent),
        )


@lru_cache(maxsize=1024)
def field_of_view(focal_length_mm: float, sensor_dimension_mm: float) -> float:
    """Angular field of view in degrees along one sensor axis.

    Args:
        focal_length_mm: Effective focal length.
        sensor_dimension_mm: Sensor width or height.

    Returns:
        ``2 * atan(d / 2f)`` in degrees.
    """
    _require_positive("focal_length_mm", focal_length_mm)
    _require_positive("sensor_dimension_mm", sensor_dimension_mm)
    return math.degrees(2 * math.atan(sensor_dimension_mm / (2 * focal_length_mm)))


def ground_footprint(
    distance_meters: float,
    focal_length_mm: float,
    sensor_width_mm: float,
    sensor_height_mm: float,
) -> GroundFootprint:
    """Ground footprint of a nadir image at the given distance.

    Assumes flat ground and no lens distortion. Linear in distance.
    """
    _require_positive("distance_meters", distance_meters)
    horizontal = math.radians(field_of_view(focal_length_mm, sensor_width_mm))
    vertical = math.radians(field_of_view(focal_length_mm, sensor_height_mm))
    return GroundFootprint(
        width_meters=2 * math.tan(horizontal / 2) * distance_meters,
        height_meters=2 * math.tan(vertical / 2) * distance_meters,
    )


def ground_sample_distance(
    distance_meters: float,
    focal_length_mm: float,
    sensor_width_mm: float,
    image_width_px: int,
) -> float:
    """Ground sample distance in centimeters per pixel."""
    _require_positive("distance_meters", distance_meters)
    _require_positive("focal_length_mm", focal_length_mm)
    _require_positive("sensor_width_mm", sensor_width_mm)
    _require_positive("image_width_px", image_width_px)
    return (sensor_width_mm * distance_meters * _CM_PER_METER) / (
        focal_length_mm * image_width_px
    )


def distance_for_gsd(
    target_gsd_cm: float,
    focal_length_mm: float,
    sensor_width_mm: float,
    image_width_px: int,
) -> float:
    """Distance in meters at which one pixel covers ``target_gsd_cm``."""
    _require_positive("target_gsd_cm", target_gsd_cm)
    _require_positive("focal_length_mm", focal_length_mm)
    _require_positive("sensor_width_mm", sensor_width_mm)
    _require_positive("image_width_px", image_width_px)
    return (target_gsd_cm * focal_length_mm * image_width_px) / (
        sensor_width_mm * _CM_PER_METER
    )


def effective_focal_length(
    min_focal_length_mm: float,
    max_focal_length_mm: float | None = None,
    zoom_position: float = 0.5,
) -> float:
    """Focal length of a prime lens, or of a zoom lens at ``zoom_position`` (0 = wide, 1 = tele)."""
    _require_positive("min_focal_length_mm", min_focal_length_mm)
    if max_focal_length_mm is None:
        return min_focal_length_mm
    _require_positive("max_focal_length_mm", max_focal_length_mm)
    if max_focal_length_mm < min_focal_length_mm:
        raise InvalidLensParametersError(
            "max_focal_length_mm must not be below min_focal_length_mm",
            field="max_focal_length_mm",
            value=max_focal_length_mm,
        )
    if not 0.0 <= zoom_position <= 1.0:
        raise InvalidLensParametersError(
            "zoom_position must be within [0, 1]",
            field="zoom_position",
            value=zoom_position,
        )
    return min_focal_length_mm + (max_focal_length_mm - min_focal_length_mm) * zoom_position


def circle_of_confusion(crop_factor: float = 1.0) -> float:
    """Circle of confusion in mm: the full-frame 0.03 mm scaled down by crop factor."""
    _require_positive("crop_factor", crop_factor)
    return FULL_FRAME_CIRCLE_OF_CONFUSION_MM / crop_factor


@lru_cache(maxsize=1024)
def hyperfocal_distance(
    focal_length_mm: float,
    aperture_f_number: float,
    circle_of_confusion_mm: float,
) -> float:
    """Hyperfocal distance in meters: ``f^2 / (N c) + f``."""
    _require_positive("focal_length_mm", focal_length_mm)
    _require_positive("aperture_f_number", aperture_f_number)
    _require_positive("circle_of_confusion_mm", circle_of_confusion_mm)
    hyperfocal_mm = focal_length_mm**2 / (aperture_f_number * circle_of_confusion_mm)
    return (hyperfocal_mm + focal_length_mm) / _MM_PER_METER


def depth_of_field(
    focus_distance_meters: float,
    focal_length_mm: float,
    aperture_f_number: float,
    circle_of_confusion_mm: float,
) -> DepthOfField:
    """Near and far limits of acceptable sharpness around a focus distance.

    With H the hyperfocal distance, s the focus distance and f the focal
    length (all meters)::

        near = s (H - f) / (H + s - 2f)
        far  = s (H - f) / (H - s)      (infinite when H - s <= 0)

    The shorter textbook near limit ``H s / (H + (s - f))`` drops the
    focal-length terms. These exact forms are used instead so that the near
    limit is ``H / 2`` and the far limit turns infinite at ``s = H``.

    Raises:
        InvalidLensParametersError: For non-positive inputs or a focus
            distance inside the focal length.
    """
    _require_positive("focus_distance_meters", focus_distance_meters)
    hyperfocal = hyperfocal_distance(focal_length_mm, aperture_f_number, circle_of_confusion_mm)
    focal_length = focal_length_mm / _MM_PER_METER

    if focus_distance_meters <= focal_length:
        raise InvalidLensParametersError(
            "focus distance must be beyond the focal length",
            field="focus_distance_meters",
            value=focus_distance_meters,
        )

    numerator = focus_distance_meters * (hyperfocal - focal_length)
    near = numerator / (hyperfocal + focus_distance_meters - 2 * focal_length)

    far_denominator = hyperfocal - focus_distance_meters
    if far_denominator <= 0:
        far = math.inf
        total = math.inf
    else:
        far = numerator / far_denominator
        total = far - near

    return DepthOfField(
        near_limit_meters=near,
        far_limit_meters=far,
        hyperfocal_meters=hyperfocal,
        total_depth_meters=total,
        circle_of_confusion_mm=circle_of_confusion_mm,
    )


def depth_of_field_for_profile(
    profile: HardwareProfile,
    focus_distance_meters: float,
    circle_of_confusion_mm: float | None = None,
) -> DepthOfField:
    """Depth of field for a hardware profile at its configured aperture.

    The circle of confusion defaults to one derived from the crop factor.
    """
    if circle_of_confusion_mm is None:
        circle_of_confusion_mm = circle_of_confusion(profile.crop_factor)
    return depth_of_field(
        focus_distance_meters,
        profile.focal_length_mm,
        profile.aperture_f_number,
        circle_of_confusion_mm,
    )


def footprint_for_profile(profile: HardwareProfile, distance_meters: float) -> GroundFootprint:
    """Ground footprint of a hardware profile at the given distance."""
    return ground_footprint(
        distance_meters,
        profile.focal_length_mm,
        profile.sensor_width_mm,
        profile.sensor_height_mm,
    )


def overlap_spacing(
    profile: HardwareProfile,
    altitude_meters: float,
    front_overlap_percent: float,
    side_overlap_percent: float | None = None,
) -> OverlapSpacing:
    """Capture and line spacing for the requested overlap at a flight altitude.

    Assumes a nadir camera over flat ground with the sensor width along the
    flight line. Along-track spacing is the footprint width scaled by
    ``1 - front_overlap/100``; line spacing is the footprint height scaled by
    ``1 - side_overlap/100``. Side overlap defaults to the front overlap.

    Raises:
        InvalidLensParametersError: If altitude is not positive.
        InvalidPathParametersError: If an overlap is outside [0, 100).
    """
    if side_overlap_percent is None:
        side_overlap_percent = front_overlap_percent
    _require_overlap("front_overlap_percent", front_overlap_percent)
    _require_overlap("side_overlap_percent", side_overlap_percent)

    footprint = footprint_for_profile(profile, altitude_meters)
    return OverlapSpacing(
        along_track_spacing_meters=footprint.width_meters * (1 - front_overlap_percent / 100),
        line_spacing_meters=footprint.height_meters * (1 - side_overlap_percent / 100),
        footprint=footprint,
        horizontal_fov_degrees=field_of_view(profile.focal_length_mm, profile.sensor_width_mm),
        vertical_fov_degrees=field_of_view(profile.focal_length_mm, profile.sensor_height_mm),
    )
