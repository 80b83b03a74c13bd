"""Great-circle helpers for summarising drift relative to the last known position."""
from __future__ import annotations

from dataclasses import dataclass
from math import atan2, cos, degrees, radians, sin, sqrt
from typing import Optional

from drift_sar.core.models import Position, SimulationResult


def haversine_km(lat1: float, lng1: float, lat2: float, lng2: float) -> float:
    """Great-circle distance in kilometres between two WGS-84 points."""
    R = 6371.0
    lat1r, lng1r, lat2r, lng2r = map(radians, [lat1, lng1, lat2, lng2])
    dlat = lat2r - lat1r
    dlng = lng2r - lng1r
    a = sin(dlat / 2) ** 2 + cos(lat1r) * cos(lat2r) * sin(dlng / 2) ** 2
    return R * 2 * atan2(sqrt(a), sqrt(1 - a))


def bearing_deg(lat1: float, lng1: float, lat2: float, lng2: float) -> float:
    """Initial bearing (degrees clockwise from true north)."""
    lat1r, lng1r, lat2r, lng2r = map(radians, [lat1, lng1, lat2, lng2])
    dlng = lng2r - lng1r
    x = sin(dlng) * cos(lat2r)
    y = cos(lat1r) * sin(lat2r) - sin(lat1r) * cos(lat2r) * cos(dlng)
    return (degrees(atan2(x, y)) + 360.0) % 360.0


@dataclass(frozen=True)
class DriftSummary:
    final_position: Position
    distance_km: float
    bearing_deg: float


def summarize_drift(start: Position, result: SimulationResult) -> Optional[DriftSummary]:
    """Net drift from *start* to the last predicted point, or None if there is none."""
    if not result.predicted_points:
        return None
    end = result.predicted_points[-1]
    return DriftSummary(
        final_position=end,
        distance_km=haversine_km(start.lat, start.lng, end.lat, end.lng),
        bearing_deg=bearing_deg(start.lat, start.lng, end.lat, end.lng),
    )
