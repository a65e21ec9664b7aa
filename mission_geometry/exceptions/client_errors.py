"""Caller errors: invalid inputs and violated model invariants.

Every error here is local and recoverable. The caller decides whether to
surface it, retry with adjusted parameters or abort.
"""

from typing import Any, ClassVar

from mission_geometry.exceptions.base import MissionGeometryError


class ClientError(MissionGeometryError):
    """Base class for all caller errors."""

    error_code: ClassVar[str] = "CLIENT_ERROR"


class _FieldError(ClientError):
    """Client error that records the offending field and value."""

    error_code: ClassVar[str] = "INVALID_FIELD"

    def __init__(
        self,
        message: str,
        *,
        field: str | None = None,
        value: Any = None,
        context: dict[str, Any] | None = None,
    ) -> None:
        """Initialize with optional field info.

        Args:
            message: Description of the failure.
            field: Name of the field that failed validation.
            value: The invalid value.
            context: Additional context information.
        """
        context_dict = context or {}
        if field is not None:
            context_dict["field"] = field
        if value is not None:
            context_dict["value"] = value
        super().__init__(message, context=context_dict)


class InvalidCoordinateError(_FieldError):
    """Malformed, non-finite or out-of-range geographic input."""

    error_code: ClassVar[str] = "INVALID_COORDINATE"


class InvalidLensParametersError(_FieldError):
    """Non-physical camera or lens values."""

    error_code: ClassVar[str] = "INVALID_LENS_PARAMETERS"


class InvalidPathParametersError(_FieldError):
    """Non-positive spacing, row count, length or similar generator input."""

    error_code: ClassVar[str] = "INVALID_PATH_PARAMETERS"


class InvalidAreaError(_FieldError):
    """Degenerate polygon or zero-area region."""

    error_code: ClassVar[str] = "INVALID_AREA"


class InvalidSpeedError(_FieldError):
    """Non-positive speed supplied to a statistics function."""

    error_code: ClassVar[str] = "INVALID_SPEED"


class TooManyWaypointsError(ClientError):
    """Generation would exceed the configured waypoint bound."""

    error_code: ClassVar[str] = "TOO_MANY_WAYPOINTS"

    def __init__(
        self,
        message: str,
        *,
        requested: int | None = None,
        limit: int | None = None,
        context: dict[str, Any] | None = None,
    ) -> None:
        """Initialize with the requested count and the configured limit.

        Args:
            message: Description of the failure.
            requested: Estimated number of waypoints the request would produce.
            limit: Configured maximum.
            context: Additional context information.
        """
        context_dict = context or {}
        if requested is not None:
            context_dict["requested"] = requested
        if limit is not None:
            context_dict["limit"] = limit
        super().__init__(message, context=context_dict)


class DuplicateSegmentIdError(ClientError):
    """A path segment with the same id already exists in the mission."""

    error_code: ClassVar[str] = "DUPLICATE_SEGMENT_ID"


class DuplicateWaypointIdError(ClientError):
    """A waypoint id is already used elsewhere in the mission."""

    error_code: ClassVar[str] = "DUPLICATE_WAYPOINT_ID"


class InvalidPermutationError(ClientError):
    """A reorder request is not a bijection over the current waypoint ids."""

    error_code: ClassVar[str] = "INVALID_PERMUTATION"


class NotFoundError(ClientError):
    """Requested entity not found."""

    error_code: ClassVar[str] = "NOT_FOUND"

    def __init__(
        self,
        message: str,
        *,
        resource_type: str | None = None,
        resource_id: str | None = None,
        context: dict[str, Any] | None = None,
    ) -> None:
        """Initialize not found error with optional resource info.

        Args:
            message: Description of what was not found.
            resource_type: Type of entity (e.g., "PathSegment", "Waypoint").
            resource_id: ID of the entity that was not found.
            context: Additional context information.
        """
        context_dict = context or {}
        if resource_type is not None:
            context_dict["resource_type"] = resource_type
        if resource_id is not None:
            context_dict["resource_id"] = resource_id
        super().__init__(message, context=context_dict)
