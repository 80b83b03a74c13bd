"""Position reports and drift-mode switches for tracked subjects."""
from __future__ import annotations

from typing import Optional

from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from drift_sar.deps import get_registry
from drift_sar.tracking import Alert, LocationSource, SubjectState, TrackingRegistry, UnknownSubjectError

router = APIRouter(prefix="/tracking", tags=["tracking"])


class LocationReport(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    lat: float = Field(..., ge=-90, le=90)
    lng: float = Field(..., ge=-180, le=180)
    session_id: Optional[str] = None
    source: LocationSource = "gps"
    accuracy: Optional[float] = Field(default=None, ge=0)


@router.post("/{subject_id}/location", response_model=SubjectState)
def report_location(
    subject_id: str,
    body: LocationReport,
    registry: TrackingRegistry = Depends(get_registry),
):
    return registry.report_location(
        subject_id,
        body.lat,
        body.lng,
        session_id=body.session_id,
        source=body.source,
        accuracy=body.accuracy,
    )


@router.get("/{subject_id}", response_model=SubjectState)
def get_state(subject_id: str, registry: TrackingRegistry = Depends(get_registry)):
    st = registry.state(subject_id)
    if st is None:
        raise HTTPException(status_code=404, detail="Subject not tracked")
    return st


@router.post("/{subject_id}/trigger-drift", response_model=Alert)
def trigger_drift(subject_id: str, registry: TrackingRegistry = Depends(get_registry)):
    try:
        return registry.trigger_drift(subject_id)
    except UnknownSubjectError:
        raise HTTPException(status_code=404, detail="Subject not tracked")


@router.post("/{subject_id}/exit-drift", response_model=Alert)
def exit_drift(subject_id: str, registry: TrackingRegistry = Depends(get_registry)):
    try:
        return registry.exit_drift(subject_id)
    except UnknownSubjectError:
        raise HTTPException(status_code=404, detail="Subject not tracked")
