"""Redis key naming conventions for the drift-sar cache layer."""
from __future__ import annotations

_PREFIX = "ds"


# ── Weather ──────────────────────────────────────────────────────────────

def weather_cell(lat: float, lng: float, cell_deg: float) -> str:
    """Key for a weather sample, snapped to a ``cell_deg`` grid."""
    ilat = round(lat / cell_deg)
    ilng = round(lng / cell_deg)
    return f"{_PREFIX}:weather:{cell_deg:g}:{ilat},{ilng}"
