"""Operator alerts: list and dismiss."""
from __future__ import annotations

from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query

from drift_sar.deps import get_registry
from drift_sar.tracking import Alert, TrackingRegistry

router = APIRouter(prefix="/alerts", tags=["alerts"])


@router.get("", response_model=List[Alert])
def list_alerts(
    subject_id: Optional[str] = Query(default=None, alias="subjectId"),
    registry: TrackingRegistry = Depends(get_registry),
):
    return registry.alerts(subject_id)


@router.patch("/{alert_id}/dismiss")
def dismiss_alert(alert_id: str, registry: TrackingRegistry = Depends(get_registry)):
    if not registry.dismiss_alert(alert_id):
        raise HTTPException(status_code=404, detail="Alert not found")
    return {"success": True}
