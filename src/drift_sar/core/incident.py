"""Weather lookup -> drift simulation -> search radius, as one stored record."""
from __future__ import annotations

import logging
import uuid
from datetime import datetime, timezone
from typing import Optional

from drift_sar.core.engine import run_simulation
from drift_sar.core.models import DriftResultRecord, Position, WeatherSample
from drift_sar.core.search_area import estimate_radius_km
from drift_sar.providers.base import WeatherProvider

log = logging.getLogger(__name__)


def simulate_incident(
    subject_id: str,
    start: Position,
    simulation_hours: int,
    num_paths: int,
    *,
    provider: Optional[WeatherProvider] = None,
    weather: Optional[WeatherSample] = None,
    session_id: Optional[str] = None,
    seed: Optional[int] = None,
    group_by_hour: bool = False,
) -> DriftResultRecord:
    """
    Run one drift estimate for *subject_id* from its last known position.

    Weather is fetched once from *provider* before the engine runs, unless an
    explicit *weather* sample is given.
    """
    if weather is None:
        if provider is None:
            raise ValueError("simulate_incident needs a provider or a weather sample")
        weather = provider.get_weather(start.lat, start.lng)

    result = run_simulation(
        start, weather, simulation_hours, num_paths,
        seed=seed, group_by_hour=group_by_hour,
    )
    radius_km = estimate_radius_km(result.heatmap_points)

    log.info(
        "Drift for %s: %d paths x %dh from (%.4f, %.4f), weather=%s, radius %.1f km",
        subject_id, num_paths, simulation_hours, start.lat, start.lng, weather.source, radius_km,
    )

    return DriftResultRecord(
        id=uuid.uuid4().hex,
        subject_id=subject_id,
        session_id=session_id,
        simulation_hours=simulation_hours,
        num_paths=num_paths,
        generated_at=datetime.now(timezone.utc),
        result=result,
        weather=weather,
        search_radius_km=radius_km,
    )
