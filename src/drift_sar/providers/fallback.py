from __future__ import annotations

import random
from typing import Optional

from drift_sar.core.models import WeatherSample
from drift_sar.providers.base import WeatherProvider


class FallbackProvider(WeatherProvider):
    """
    Synthesized conditions for when no live source answers.
    Plausible moderate-sea values so a drift estimate can still be produced:
      wind 12-20 km/h, wave 1-3 m, current 0.2-0.7 m/s, random directions.
    """

    def __init__(self, rng: Optional[random.Random] = None):
        self.rng = rng or random.Random()

    def get_weather(self, lat: float, lng: float) -> WeatherSample:
        r = self.rng
        return WeatherSample(
            wind_speed=12.0 + r.random() * 8.0,
            wind_direction=r.random() * 360.0,
            wave_height=1.0 + r.random() * 2.0,
            current_speed=0.2 + r.random() * 0.5,
            current_direction=r.random() * 360.0,
            source="fallback",
        )
