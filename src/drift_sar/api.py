"""FastAPI REST backend for the drift-sar engine."""
from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from typing import Any, Dict, Optional

from fastapi import Depends, FastAPI, HTTPException, Query
from fastapi.middleware.cors import CORSMiddleware
from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from drift_sar.cache.redis_client import redis_ok
from drift_sar.config import settings
from drift_sar.core.conditions import sea_state_description, wind_description
from drift_sar.core.geo import summarize_drift
from drift_sar.core.incident import simulate_incident
from drift_sar.core.models import Position
from drift_sar.db import get_supabase
from drift_sar.deps import get_provider, get_registry, get_store
from drift_sar.providers.base import WeatherProvider
from drift_sar.routers import alerts, tracking
from drift_sar.store.base import ResultStore
from drift_sar.tracking import TrackingRegistry
from drift_sar.worker import SignalLossMonitor

log = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    monitor = SignalLossMonitor(get_registry())
    monitor.start()
    try:
        yield
    finally:
        monitor.stop()


app = FastAPI(title="Drift SAR", version="0.1.0", lifespan=lifespan)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_methods=["*"],
    allow_headers=["*"],
)

# ---------------------------------------------------------------------------
# Include routers
# ---------------------------------------------------------------------------
app.include_router(tracking.router)
app.include_router(alerts.router)


# ---------------------------------------------------------------------------
# Request models
# ---------------------------------------------------------------------------

class SimulationRequest(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    subject_id: str = Field(..., min_length=1)
    last_known_lat: float = Field(..., ge=-90, le=90)
    last_known_lng: float = Field(..., ge=-180, le=180)
    simulation_hours: int = Field(
        ..., ge=settings.min_simulation_hours, le=settings.max_simulation_hours
    )
    num_paths: int = Field(
        default=settings.default_num_paths, ge=settings.min_num_paths, le=settings.max_num_paths
    )
    session_id: Optional[str] = None
    seed: Optional[int] = None
    group_by_hour: bool = False


def _dump(model: BaseModel) -> Dict[str, Any]:
    return model.model_dump(mode="json", by_alias=True)


# ---------------------------------------------------------------------------
# Endpoints
# ---------------------------------------------------------------------------

@app.get("/health")
def health():
    return {"status": "ok", "redis": redis_ok(), "supabase": get_supabase() is not None}


@app.get("/marine-weather")
def marine_weather(
    lat: float = Query(..., ge=-90, le=90),
    lng: float = Query(..., ge=-180, le=180),
    provider: WeatherProvider = Depends(get_provider),
):
    try:
        sample = provider.get_weather(lat, lng)
    except Exception as e:
        log.exception("Marine weather lookup failed")
        raise HTTPException(status_code=500, detail=str(e))

    out = _dump(sample)
    out["windDescription"] = wind_description(sample.wind_speed)
    out["seaStateDescription"] = sea_state_description(sample.wave_height)
    return out


@app.post("/simulation/run")
def run_simulation_endpoint(
    req: SimulationRequest,
    provider: WeatherProvider = Depends(get_provider),
    store: ResultStore = Depends(get_store),
    registry: TrackingRegistry = Depends(get_registry),
):
    try:
        start = Position(lat=req.last_known_lat, lng=req.last_known_lng)
        record = simulate_incident(
            req.subject_id,
            start,
            req.simulation_hours,
            req.num_paths,
            provider=provider,
            session_id=req.session_id,
            seed=req.seed,
            group_by_hour=req.group_by_hour,
        )
        record = store.save(record)

        registry.add_alert(
            req.subject_id,
            "drift_complete",
            f"Drift simulation complete. Generated {req.num_paths} paths over "
            f"{req.simulation_hours} hours. Search area calculated.",
        )

        summary = summarize_drift(start, record.result)
        return {
            "success": True,
            "result": _dump(record),
            "weather": _dump(record.weather),
            "summary": None if summary is None else {
                "finalPosition": _dump(summary.final_position),
                "distanceKm": summary.distance_km,
                "bearingDeg": summary.bearing_deg,
            },
        }

    except Exception as e:
        log.exception("Simulation failed for %s", req.subject_id)
        raise HTTPException(status_code=500, detail=str(e))


@app.get("/sessions/{session_id}/drift-result")
def drift_result_for_session(session_id: str, store: ResultStore = Depends(get_store)):
    record = store.for_session(session_id)
    if record is None:
        raise HTTPException(status_code=404, detail="No drift result for session")
    return _dump(record)


@app.get("/drift-result/{subject_id}")
def latest_drift_result(subject_id: str, store: ResultStore = Depends(get_store)):
    record = store.latest_for_subject(subject_id)
    if record is None:
        raise HTTPException(status_code=404, detail="No drift result for subject")
    return _dump(record)


@app.get("/drift-result/{subject_id}/history")
def drift_result_history(
    subject_id: str,
    limit: int = Query(default=20, ge=1, le=100),
    store: ResultStore = Depends(get_store),
):
    return [_dump(r) for r in store.history(subject_id, limit=limit)]
