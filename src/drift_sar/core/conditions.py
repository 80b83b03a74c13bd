from __future__ import annotations

# (upper bound exclusive, label); anything beyond the last bound gets the tail label
_WIND_BANDS_KMH = [
    (5.0, "Calm"),
    (15.0, "Light breeze"),
    (25.0, "Moderate breeze"),
    (40.0, "Fresh breeze"),
    (55.0, "Strong breeze"),
]

_SEA_BANDS_M = [
    (0.5, "Calm"),
    (1.25, "Smooth"),
    (2.5, "Slight"),
    (4.0, "Moderate"),
    (6.0, "Rough"),
]


def _band(value: float, bands, tail: str) -> str:
    for upper, label in bands:
        if value < upper:
            return label
    return tail


def wind_description(speed_kmh: float) -> str:
    return _band(speed_kmh, _WIND_BANDS_KMH, "Gale")


def sea_state_description(wave_height_m: float) -> str:
    return _band(wave_height_m, _SEA_BANDS_M, "Very rough")
