from __future__ import annotations

import logging
import threading
import time
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Callable, List, Optional

from drift_sar.cache.keys import weather_cell
from drift_sar.cache.redis_client import cache_get_json, cache_set_json
from drift_sar.config import settings
from drift_sar.core.models import WeatherSample
from drift_sar.providers.base import WeatherProvider

log = logging.getLogger(__name__)


@dataclass(frozen=True)
class _Entry:
    lat: float
    lng: float
    sample: WeatherSample
    stored_at: float  # clock() seconds


class CachedWeatherProvider(WeatherProvider):
    """
    Read-through weather cache in front of another provider.

    L1 (in-process): the newest sample stored within ``radius_deg`` of the
    query on both axes and younger than ``ttl_s`` answers the lookup.
    L2 (Redis, optional): same TTL, keyed by the query snapped to a
    ``radius_deg`` grid so other processes can share live fetches.

    Only live samples are stored; synthesized fallbacks are never cached.
    """

    def __init__(
        self,
        inner: WeatherProvider,
        ttl_s: Optional[int] = None,
        radius_deg: Optional[float] = None,
        clock: Callable[[], float] = time.time,
        use_redis: bool = True,
    ):
        self.inner = inner
        self.ttl_s = ttl_s if ttl_s is not None else settings.weather_cache_ttl_s
        self.radius_deg = radius_deg if radius_deg is not None else settings.weather_cache_radius_deg
        self.clock = clock
        self.use_redis = use_redis
        self._entries: List[_Entry] = []
        self._lock = threading.Lock()

    def _lookup_l1(self, lat: float, lng: float, now: float) -> Optional[WeatherSample]:
        with self._lock:
            # Drop expired entries while we're here
            self._entries = [e for e in self._entries if now - e.stored_at < self.ttl_s]
            for e in reversed(self._entries):
                if abs(e.lat - lat) < self.radius_deg and abs(e.lng - lng) < self.radius_deg:
                    return e.sample
        return None

    def _lookup_l2(self, lat: float, lng: float, now: float) -> Optional[WeatherSample]:
        if not self.use_redis:
            return None
        raw = cache_get_json(weather_cell(lat, lng, self.radius_deg))
        if raw is None:
            return None
        try:
            sample = WeatherSample.model_validate(raw)
        except Exception:
            return None
        if now - sample.fetched_at.timestamp() >= self.ttl_s:
            return None
        return sample

    def _store(self, lat: float, lng: float, sample: WeatherSample, now: float) -> None:
        with self._lock:
            self._entries.append(_Entry(lat=lat, lng=lng, sample=sample, stored_at=now))
        if self.use_redis:
            cache_set_json(
                weather_cell(lat, lng, self.radius_deg),
                sample.model_dump(mode="json", by_alias=True),
                self.ttl_s,
            )

    def get_weather(self, lat: float, lng: float) -> WeatherSample:
        now = self.clock()

        hit = self._lookup_l1(lat, lng, now) or self._lookup_l2(lat, lng, now)
        if hit is not None:
            log.info("Weather cache hit for (%.4f, %.4f)", lat, lng)
            return hit.model_copy(update={"source": "cache"})

        sample = self.inner.get_weather(lat, lng)
        if sample.source == "live":
            stamped = sample.model_copy(
                update={"fetched_at": datetime.fromtimestamp(now, tz=timezone.utc)}
            )
            self._store(lat, lng, stamped, now)
            sample = stamped
        return sample
