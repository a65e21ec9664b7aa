"""Statistics inputs and results."""

from pydantic import BaseModel, Field


class DroneProfile(BaseModel):
    """Airframe figures used by the battery estimate."""

    name: str = Field(min_length=1, max_length=200)
    average_draw_percent_per_minute: float = Field(gt=0.0, le=100.0)
    usable_battery_percent: float = Field(default=80.0, gt=0.0, le=100.0)


class MissionSummary(BaseModel):
    """Aggregated statistics for a whole mission."""

    mission_id: str
    segment_count: int = Field(ge=0)
    waypoint_count: int = Field(ge=0)
    ground_control_point_count: int = Field(ge=0)
    total_distance_meters: float = Field(ge=0.0)
    total_distance_feet: float = Field(ge=0.0)
    flight_time_seconds: float = Field(ge=0.0)
    flight_time_display: str
    photo_count: int = Field(ge=0)
    battery_consumption_percent: float | None = None
    within_battery_limit: bool | None = None
