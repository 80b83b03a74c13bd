from __future__ import annotations

import logging
from typing import List, Optional

from drift_sar.core.models import WeatherSample
from drift_sar.providers.base import WeatherProvider

log = logging.getLogger(__name__)


class FallbackChain(WeatherProvider):
    """
    Try each provider in order and return the first sample produced.

    Intended use:
      OpenMeteoProvider() -> live conditions
      FallbackProvider()  -> synthesized conditions, never fails
    """

    def __init__(self, providers: List[WeatherProvider]):
        self.providers = providers

    def get_weather(self, lat: float, lng: float) -> WeatherSample:
        last_err: Optional[Exception] = None
        for prov in self.providers:
            try:
                return prov.get_weather(lat, lng)
            except Exception as e:
                last_err = e
                log.warning(
                    "Weather provider %s failed for (%.4f, %.4f): %s: %s",
                    type(prov).__name__, lat, lng, type(e).__name__, e,
                )
        raise RuntimeError(f"All weather providers failed: {last_err}")


def build_provider(provider_str: str) -> WeatherProvider:
    """
    Build a provider stack from a token string like:
      "open-meteo+fallback"
      "cache+open-meteo+fallback"   (cache wraps everything after it)
      "fallback"
    """
    tokens = [t.strip().lower() for t in provider_str.split("+") if t.strip()]
    if not tokens:
        tokens = ["open-meteo", "fallback"]

    # Local imports keep requests/redis out of engine-only imports
    from drift_sar.providers.cached import CachedWeatherProvider
    from drift_sar.providers.fallback import FallbackProvider
    from drift_sar.providers.open_meteo import OpenMeteoProvider

    cached = False
    providers: List[WeatherProvider] = []
    for t in tokens:
        if t == "cache":
            cached = True
        elif t in ("open-meteo", "openmeteo"):
            providers.append(OpenMeteoProvider())
        elif t in ("fallback", "mock"):
            providers.append(FallbackProvider())
        else:
            raise ValueError(f"Unknown provider token: '{t}' (supported: cache, open-meteo, fallback)")

    if not providers:
        raise ValueError(f"Provider string '{provider_str}' names no weather source")

    chain: WeatherProvider = providers[0] if len(providers) == 1 else FallbackChain(providers)
    return CachedWeatherProvider(chain) if cached else chain
