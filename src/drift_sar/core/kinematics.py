"""Linear wind + current drift: the deterministic step under every simulation."""
from __future__ import annotations

from math import cos, degrees, radians, sin

from drift_sar.core.models import Position

EARTH_RADIUS_KM = 6371.0

# Share of wind speed that becomes surface drift (leeway of a small object)
WIND_DRIFT_FACTOR = 0.035


def compute_drift(
    position: Position,
    wind_speed_kmh: float,
    wind_direction_deg: float,
    current_speed_ms: float,
    current_direction_deg: float,
    duration_hours: float,
) -> Position:
    """
    Advance *position* by wind leeway plus current over *duration_hours*.

    Directions follow the compass convention: 0° = north, clockwise, so the
    east component is ``speed * sin(angle)`` and the north component is
    ``speed * cos(angle)``.  Longitude change is scaled by ``1/cos(lat)``;
    this diverges near the poles, which is outside the maritime use case.
    """
    wind_drift_ms = (wind_speed_kmh / 3.6) * WIND_DRIFT_FACTOR

    wind_angle = radians(wind_direction_deg)
    current_angle = radians(current_direction_deg)

    east_ms = wind_drift_ms * sin(wind_angle) + current_speed_ms * sin(current_angle)
    north_ms = wind_drift_ms * cos(wind_angle) + current_speed_ms * cos(current_angle)

    seconds = duration_hours * 3600.0
    east_km = east_ms * seconds / 1000.0
    north_km = north_ms * seconds / 1000.0

    dlat = degrees(north_km / EARTH_RADIUS_KM)
    dlng = degrees(east_km / EARTH_RADIUS_KM) / cos(radians(position.lat))

    return Position(lat=position.lat + dlat, lng=position.lng + dlng)
