from __future__ import annotations

from abc import ABC, abstractmethod

from drift_sar.core.models import WeatherSample


class WeatherProvider(ABC):
    """Supply a wind/wave/current snapshot for a coordinate."""

    @abstractmethod
    def get_weather(self, lat: float, lng: float) -> WeatherSample:
        raise NotImplementedError
