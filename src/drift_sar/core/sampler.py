"""One Monte Carlo drift trajectory with per-hour perturbed forcing."""
from __future__ import annotations

import random
from dataclasses import dataclass
from typing import Optional

from drift_sar.core.kinematics import compute_drift
from drift_sar.core.models import DriftPath, Position, WeatherSample


@dataclass(frozen=True)
class Perturbation:
    """Half-widths of the uniform noise redrawn every simulated hour."""
    wind_speed_frac: float = 0.20
    current_speed_frac: float = 0.15
    wind_direction_deg: float = 15.0
    current_direction_deg: float = 10.0


DEFAULT_PERTURBATION = Perturbation()


def _unit(rng: random.Random) -> float:
    """Uniform draw on [-1, 1)."""
    return rng.random() * 2.0 - 1.0


def vary_speed(value: float, frac: float, rng: random.Random) -> float:
    # A zero base stays zero: calm conditions cannot produce motion
    return value + value * frac * _unit(rng)


def vary_angle(angle: float, max_deg: float, rng: random.Random) -> float:
    return angle + max_deg * _unit(rng)


def sample_path(
    start: Position,
    weather: WeatherSample,
    simulation_hours: int,
    rng: Optional[random.Random] = None,
    perturbation: Perturbation = DEFAULT_PERTURBATION,
) -> DriftPath:
    """
    Returns ``simulation_hours + 1`` positions; index 0 is *start*.

    Each hour redraws wind/current speed and direction independently and
    applies a one-hour drift step from the running position.
    """
    rng = rng if rng is not None else random.Random()

    path: DriftPath = [start]
    pos = start
    for _hour in range(simulation_hours):
        wind_speed = vary_speed(weather.wind_speed, perturbation.wind_speed_frac, rng)
        current_speed = vary_speed(weather.current_speed, perturbation.current_speed_frac, rng)
        wind_dir = vary_angle(weather.wind_direction, perturbation.wind_direction_deg, rng)
        current_dir = vary_angle(weather.current_direction, perturbation.current_direction_deg, rng)

        pos = compute_drift(pos, wind_speed, wind_dir, current_speed, current_dir, 1.0)
        path.append(pos)

    return path
