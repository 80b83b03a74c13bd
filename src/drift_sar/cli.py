from __future__ import annotations

import argparse
import json
import logging
from pathlib import Path
from typing import Optional

from rich.console import Console
from rich.table import Table

from drift_sar.config import settings
from drift_sar.core.conditions import sea_state_description, wind_description
from drift_sar.core.geo import haversine_km, summarize_drift
from drift_sar.core.incident import simulate_incident
from drift_sar.core.models import Position, WeatherSample
from drift_sar.providers.chain import build_provider


def _explicit_weather(args: argparse.Namespace) -> Optional[WeatherSample]:
    fields = (args.wind_speed, args.wind_dir, args.current_speed, args.current_dir)
    if all(v is None for v in fields):
        return None
    if any(v is None for v in fields):
        raise SystemExit("--wind-speed, --wind-dir, --current-speed and --current-dir go together")
    return WeatherSample(
        wind_speed=args.wind_speed,
        wind_direction=args.wind_dir,
        wave_height=args.wave_height,
        current_speed=args.current_speed,
        current_direction=args.current_dir,
        source="live",
    )


def _save_json(path: Path, obj) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(obj, indent=2), encoding="utf-8")


def main() -> None:
    ap = argparse.ArgumentParser(description="Monte Carlo drift estimate from a last known position")
    ap.add_argument("--lat", type=float, required=True)
    ap.add_argument("--lng", type=float, required=True)
    ap.add_argument("--hours", type=int, default=6,
                    help=f"{settings.min_simulation_hours}..{settings.max_simulation_hours}")
    ap.add_argument("--paths", type=int, default=settings.default_num_paths,
                    help=f"{settings.min_num_paths}..{settings.max_num_paths}")
    ap.add_argument("--subject", default="cli")
    ap.add_argument("--provider", default="open-meteo+fallback", help="e.g. open-meteo+fallback")
    ap.add_argument("--wind-speed", type=float, help="km/h (skips the weather lookup)")
    ap.add_argument("--wind-dir", type=float, help="degrees, 0 = north")
    ap.add_argument("--wave-height", type=float, default=1.5, help="m")
    ap.add_argument("--current-speed", type=float, help="m/s")
    ap.add_argument("--current-dir", type=float, help="degrees, 0 = north")
    ap.add_argument("--seed", type=int)
    ap.add_argument("--by-hour", action="store_true", help="exact per-hour centroids")
    ap.add_argument("--out", default="runs/last_run.json")
    ap.add_argument("--debug", action="store_true")
    args = ap.parse_args()

    logging.basicConfig(level=logging.DEBUG if args.debug else logging.WARNING)

    if not settings.min_simulation_hours <= args.hours <= settings.max_simulation_hours:
        ap.error(f"--hours must be in {settings.min_simulation_hours}..{settings.max_simulation_hours}")
    if not settings.min_num_paths <= args.paths <= settings.max_num_paths:
        ap.error(f"--paths must be in {settings.min_num_paths}..{settings.max_num_paths}")

    weather = _explicit_weather(args)
    start = Position(lat=args.lat, lng=args.lng)
    record = simulate_incident(
        args.subject,
        start,
        args.hours,
        args.paths,
        provider=None if weather is not None else build_provider(args.provider),
        weather=weather,
        seed=args.seed,
        group_by_hour=args.by_hour,
    )

    console = Console()
    w = record.weather
    console.print(
        f"Weather ({w.source}): wind {w.wind_speed:.1f} km/h @ {w.wind_direction:.0f}° "
        f"[{wind_description(w.wind_speed)}], waves {w.wave_height:.1f} m "
        f"[{sea_state_description(w.wave_height)}], current {w.current_speed:.2f} m/s @ {w.current_direction:.0f}°"
    )

    table = Table(title=f"Drift estimate: {record.subject_id}")
    table.add_column("Hour")
    table.add_column("Lat")
    table.add_column("Lng")
    table.add_column("From start km")
    for h, p in enumerate(record.result.predicted_points, start=1):
        table.add_row(str(h), f"{p.lat:.5f}", f"{p.lng:.5f}", f"{haversine_km(start.lat, start.lng, p.lat, p.lng):.2f}")
    console.print(table)

    summary = summarize_drift(start, record.result)
    if summary is not None:
        console.print(f"Net drift: {summary.distance_km:.2f} km toward {summary.bearing_deg:.0f}°")
    console.print(
        f"Heatmap cells: {len(record.result.heatmap_points)}  "
        f"Search radius: {record.search_radius_km:.1f} km"
    )

    out_path = Path(args.out)
    _save_json(out_path, record.model_dump(mode="json", by_alias=True))
    console.print(f"Saved: {out_path.resolve()}")


if __name__ == "__main__":
    main()
