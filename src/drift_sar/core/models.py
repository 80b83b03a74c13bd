from __future__ import annotations

from datetime import datetime, timezone
from typing import List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class _Wire(BaseModel):
    # camelCase on the wire, snake_case in Python; immutable once built
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, frozen=True)


class Position(_Wire):
    lat: float
    lng: float


class WeatherSample(_Wire):
    """Wind/wave/current snapshot for one simulation run.

    Units: wind speed km/h, current speed m/s, wave height m, directions in
    degrees clockwise from north.  ``wave_height`` is carried for display only;
    the drift engine ignores it.
    """

    wind_speed: float
    wind_direction: float
    wave_height: float
    current_speed: float
    current_direction: float

    # Provenance only; the engine treats every sample identically
    source: Literal["live", "cache", "fallback"] = "live"
    fetched_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))


class HeatmapCell(_Wire):
    lat: float
    lng: float
    intensity: float  # (0, 1]; the modal cell is 1.0


DriftPath = List[Position]


class SimulationResult(_Wire):
    predicted_points: List[Position] = Field(default_factory=list)
    heatmap_points: List[HeatmapCell] = Field(default_factory=list)
    drift_paths: List[DriftPath] = Field(default_factory=list)


class DriftResultRecord(_Wire):
    """A stored simulation run, keyed by subject and optionally by tracking session."""

    id: str
    subject_id: str
    session_id: Optional[str] = None
    simulation_hours: int
    num_paths: int
    generated_at: datetime
    result: SimulationResult
    weather: WeatherSample
    search_radius_km: float
