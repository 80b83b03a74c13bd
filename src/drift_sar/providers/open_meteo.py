from __future__ import annotations

import logging
import random
from typing import Any, Dict, Optional

from drift_sar.config import settings
from drift_sar.core.models import WeatherSample
from drift_sar.providers.base import WeatherProvider
from drift_sar.providers.http import HTTPClient

log = logging.getLogger(__name__)

# Used when a response omits a field
DEFAULT_WIND_SPEED_KMH = 15.0
DEFAULT_WIND_DIRECTION_DEG = 180.0
DEFAULT_WAVE_HEIGHT_M = 1.5


def _first(values: Optional[list]) -> Optional[float]:
    if not values:
        return None
    v = values[0]
    return float(v) if v is not None else None


class OpenMeteoProvider(WeatherProvider):
    """
    Live conditions from Open-Meteo:
      - forecast API ``current=wind_speed_10m,wind_direction_10m`` (km/h, deg)
      - marine API ``hourly=wave_height,wind_wave_height`` (m), first hour

    Neither API serves surface currents, so current speed/direction are
    estimated: 0.3-0.7 m/s, set 30-90° to the right of the wind.
    """

    def __init__(
        self,
        http: Optional[HTTPClient] = None,
        rng: Optional[random.Random] = None,
        marine_url: Optional[str] = None,
        forecast_url: Optional[str] = None,
    ):
        self.http = http or HTTPClient(
            user_agent="DriftSAR/0.1.0",
            timeout_s=settings.http_timeout_s,
            tries=settings.http_tries,
        )
        self.rng = rng or random.Random()
        self.marine_url = marine_url or settings.marine_api_base
        self.forecast_url = forecast_url or settings.forecast_api_base

    def _marine(self, lat: float, lng: float) -> Dict[str, Any]:
        return self.http.get_json(
            self.marine_url,
            params={
                "latitude": lat,
                "longitude": lng,
                "hourly": "wave_height,wind_wave_height",
                "timezone": "auto",
            },
        )

    def _forecast(self, lat: float, lng: float) -> Dict[str, Any]:
        return self.http.get_json(
            self.forecast_url,
            params={
                "latitude": lat,
                "longitude": lng,
                "current": "wind_speed_10m,wind_direction_10m",
                "timezone": "auto",
            },
        )

    def get_weather(self, lat: float, lng: float) -> WeatherSample:
        marine = self._marine(lat, lng)
        forecast = self._forecast(lat, lng)

        current = forecast.get("current") or {}
        wind_speed = current.get("wind_speed_10m")
        wind_dir = current.get("wind_direction_10m")
        wind_speed = float(wind_speed) if wind_speed is not None else DEFAULT_WIND_SPEED_KMH
        wind_dir = float(wind_dir) if wind_dir is not None else DEFAULT_WIND_DIRECTION_DEG

        hourly = marine.get("hourly") or {}
        wave = _first(hourly.get("wave_height"))
        if wave is None:
            wave = _first(hourly.get("wind_wave_height"))
        if wave is None:
            wave = DEFAULT_WAVE_HEIGHT_M

        current_speed = 0.3 + self.rng.random() * 0.4
        current_dir = (wind_dir + 30.0 + self.rng.random() * 60.0) % 360.0

        log.info("Open-Meteo (%.4f, %.4f): wind %.1f km/h @ %.0f°, wave %.2f m",
                 lat, lng, wind_speed, wind_dir, wave)

        return WeatherSample(
            wind_speed=wind_speed,
            wind_direction=wind_dir,
            wave_height=wave,
            current_speed=current_speed,
            current_direction=current_dir,
            source="live",
        )
