"""Position-report tracking, drift mode, and signal-loss alerts.

State lives in an explicit ``TrackingRegistry`` instance; callers get
snapshot copies, never the registry's own objects.
"""
from __future__ import annotations

import logging
import threading
import uuid
from datetime import datetime, timedelta, timezone
from typing import Dict, List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from drift_sar.config import settings
from drift_sar.core.models import Position

log = logging.getLogger(__name__)

TrackingMode = Literal["live", "drift"]
AlertType = Literal["signal_lost", "mode_change", "drift_complete"]
LocationSource = Literal["gps", "pinned"]


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class SubjectState(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    subject_id: str
    status: Literal["online", "offline"] = "offline"
    mode: TrackingMode = "live"
    current_location: Optional[Position] = None
    last_known_location: Optional[Position] = None
    last_update_time: Optional[datetime] = None
    session_id: Optional[str] = None
    location_source: Optional[LocationSource] = None
    accuracy: Optional[float] = None


class Alert(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    id: str = Field(default_factory=lambda: uuid.uuid4().hex)
    subject_id: str
    type: AlertType
    message: str
    read: bool = False
    timestamp: datetime = Field(default_factory=_utcnow)


class UnknownSubjectError(KeyError):
    pass


class TrackingRegistry:
    def __init__(self, signal_lost_threshold_s: Optional[int] = None):
        self.threshold = timedelta(
            seconds=signal_lost_threshold_s
            if signal_lost_threshold_s is not None
            else settings.signal_lost_threshold_s
        )
        self._states: Dict[str, SubjectState] = {}
        self._alerts: List[Alert] = []
        self._lock = threading.Lock()

    # ---- state ----

    def _require(self, subject_id: str) -> SubjectState:
        st = self._states.get(subject_id)
        if st is None:
            raise UnknownSubjectError(subject_id)
        return st

    def state(self, subject_id: str) -> Optional[SubjectState]:
        with self._lock:
            st = self._states.get(subject_id)
            return st.model_copy(deep=True) if st is not None else None

    def states(self) -> List[SubjectState]:
        with self._lock:
            return [st.model_copy(deep=True) for st in self._states.values()]

    def report_location(
        self,
        subject_id: str,
        lat: float,
        lng: float,
        session_id: Optional[str] = None,
        source: LocationSource = "gps",
        accuracy: Optional[float] = None,
        now: Optional[datetime] = None,
    ) -> SubjectState:
        now = now or _utcnow()
        pos = Position(lat=lat, lng=lng)
        with self._lock:
            st = self._states.setdefault(subject_id, SubjectState(subject_id=subject_id))
            st.status = "online"
            st.current_location = pos
            st.last_known_location = pos
            st.last_update_time = now
            st.location_source = source
            st.accuracy = accuracy
            if session_id is not None:
                st.session_id = session_id
            return st.model_copy(deep=True)

    def mark_offline(self, subject_id: str) -> None:
        with self._lock:
            st = self._require(subject_id)
            st.status = "offline"
            st.current_location = None

    def set_mode(self, subject_id: str, mode: TrackingMode) -> None:
        with self._lock:
            self._require(subject_id).mode = mode

    def trigger_drift(self, subject_id: str) -> Alert:
        with self._lock:
            st = self._require(subject_id)
            st.status = "offline"
            st.current_location = None
            st.mode = "drift"
            return self._add_alert(
                subject_id, "signal_lost",
                f"Drift mode triggered manually for {subject_id}. GPS tracking stopped.",
            )

    def exit_drift(self, subject_id: str) -> Alert:
        with self._lock:
            self._require(subject_id).mode = "live"
            return self._add_alert(
                subject_id, "mode_change",
                f"Drift mode exited for {subject_id}. Awaiting GPS signal.",
            )

    def check_signal_loss(self, now: Optional[datetime] = None) -> List[Alert]:
        """Take every online subject silent for longer than the threshold offline."""
        now = now or _utcnow()
        raised: List[Alert] = []
        with self._lock:
            for st in self._states.values():
                if st.status != "online" or st.last_update_time is None:
                    continue
                if now - st.last_update_time <= self.threshold:
                    continue
                st.status = "offline"
                st.current_location = None
                raised.append(self._add_alert(
                    st.subject_id, "signal_lost",
                    f"GPS signal lost for {st.subject_id}. Last known location recorded. "
                    "Drift prediction available.",
                ))
                log.warning("Signal lost: %s (last update %s)", st.subject_id, st.last_update_time)
        return raised

    # ---- alerts ----

    def _add_alert(self, subject_id: str, alert_type: AlertType, message: str) -> Alert:
        alert = Alert(subject_id=subject_id, type=alert_type, message=message)
        self._alerts.append(alert)
        return alert.model_copy()

    def add_alert(self, subject_id: str, alert_type: AlertType, message: str) -> Alert:
        with self._lock:
            return self._add_alert(subject_id, alert_type, message)

    def alerts(self, subject_id: Optional[str] = None, include_read: bool = False) -> List[Alert]:
        """Newest first."""
        with self._lock:
            out = [
                a.model_copy()
                for a in self._alerts
                if (subject_id is None or a.subject_id == subject_id)
                and (include_read or not a.read)
            ]
        return list(reversed(out))

    def dismiss_alert(self, alert_id: str) -> bool:
        with self._lock:
            for a in self._alerts:
                if a.id == alert_id:
                    a.read = True
                    return True
        return False
