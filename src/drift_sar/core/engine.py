"""Monte Carlo drift engine: many sampled paths -> heatmap + hourly centroids."""
from __future__ import annotations

import logging
import random
from typing import Dict, List, Optional, Tuple

from drift_sar.core.models import DriftPath, HeatmapCell, Position, SimulationResult, WeatherSample
from drift_sar.core.sampler import sample_path

log = logging.getLogger(__name__)

# Heatmap grid: 3 decimal degrees (~111 m in latitude)
GRID_SCALE = 1000

CellKey = Tuple[int, int]


def _cell_key(p: Position) -> CellKey:
    return round(p.lat * GRID_SCALE), round(p.lng * GRID_SCALE)


def build_heatmap(samples: List[Position]) -> List[HeatmapCell]:
    """Bin *samples* into grid cells; intensity = count / max count."""
    counts: Dict[CellKey, int] = {}
    for p in samples:
        key = _cell_key(p)
        counts[key] = counts.get(key, 0) + 1

    if not counts:
        return []

    max_count = max(counts.values())
    return [
        HeatmapCell(lat=ilat / GRID_SCALE, lng=ilng / GRID_SCALE, intensity=n / max_count)
        for (ilat, ilng), n in counts.items()
    ]


def _mean(points: List[Position]) -> Position:
    n = len(points)
    return Position(
        lat=sum(p.lat for p in points) / n,
        lng=sum(p.lng for p in points) / n,
    )


def chunked_centroids(samples: List[Position], simulation_hours: int) -> List[Position]:
    """
    Split *samples* (generation order) into ``simulation_hours`` equal chunks
    and average each one.  Tail samples beyond ``hours * floor(n / hours)``
    are dropped.

    Samples are ordered path by path, so a chunk mixes hours from adjacent
    paths rather than holding one simulated hour.  See ``hourly_centroids``
    for the per-hour grouping.
    """
    if not samples or simulation_hours <= 0:
        return []

    per_hour = len(samples) // simulation_hours
    if per_hour == 0:
        return []

    return [
        _mean(samples[h * per_hour:(h + 1) * per_hour])
        for h in range(simulation_hours)
    ]


def hourly_centroids(paths: List[DriftPath], simulation_hours: int) -> List[Position]:
    """Mean of every path's hour-h position, for h = 1..simulation_hours."""
    if not paths:
        return []
    return [_mean([path[h] for path in paths]) for h in range(1, simulation_hours + 1)]


def run_simulation(
    start: Position,
    weather: WeatherSample,
    simulation_hours: int,
    num_paths: int = 100,
    *,
    seed: Optional[int] = None,
    rng: Optional[random.Random] = None,
    group_by_hour: bool = False,
) -> SimulationResult:
    """
    Sample ``num_paths`` independent drift paths and aggregate them.

    Range checks on ``simulation_hours`` / ``num_paths`` belong to the caller.
    Zero paths or hours yield an empty heatmap and no predicted points.

    ``seed`` (or an explicit ``rng``) makes a run reproducible; unseeded runs
    draw fresh randomness every call.  ``group_by_hour`` switches predicted
    points from generation-order chunks to exact per-hour centroids.
    """
    if rng is None:
        rng = random.Random(seed)

    drift_paths: List[DriftPath] = []
    samples: List[Position] = []
    for _ in range(num_paths):
        path = sample_path(start, weather, simulation_hours, rng=rng)
        drift_paths.append(path)
        samples.extend(path[1:])

    heatmap = build_heatmap(samples)
    if group_by_hour:
        predicted = hourly_centroids(drift_paths, simulation_hours)
    else:
        predicted = chunked_centroids(samples, simulation_hours)

    log.debug(
        "Simulated %d path(s) x %dh: %d samples, %d heatmap cell(s)",
        num_paths, simulation_hours, len(samples), len(heatmap),
    )

    return SimulationResult(
        predicted_points=predicted,
        heatmap_points=heatmap,
        drift_paths=drift_paths,
    )
