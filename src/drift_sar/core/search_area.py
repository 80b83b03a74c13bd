"""Single-circle search area derived from the spread of a drift heatmap."""
from __future__ import annotations

from typing import Sequence

from drift_sar.core.models import HeatmapCell

KM_PER_DEG = 111.0

MIN_RADIUS_KM = 2.0
MAX_RADIUS_KM = 50.0
DEFAULT_RADIUS_KM = 5.0


def estimate_radius_km(cells: Sequence[HeatmapCell]) -> float:
    """
    Half the larger bounding-box span of *cells*, in km, clamped to [2, 50].

    Both spans use 111 km/degree (longitude compression is ignored).
    Fewer than two cells is not enough to measure spread: 5 km.
    """
    if len(cells) < 2:
        return DEFAULT_RADIUS_KM

    lats = [c.lat for c in cells]
    lngs = [c.lng for c in cells]
    span_deg = max(max(lats) - min(lats), max(lngs) - min(lngs))
    radius_km = span_deg * KM_PER_DEG / 2.0

    return max(MIN_RADIUS_KM, min(MAX_RADIUS_KM, radius_km))
