from __future__ import annotations

import threading
from typing import Dict, List, Optional

from drift_sar.core.models import DriftResultRecord
from drift_sar.store.base import ResultStore


class MemoryResultStore(ResultStore):
    """Process-local store; records are kept in save order per subject."""

    def __init__(self) -> None:
        self._by_subject: Dict[str, List[DriftResultRecord]] = {}
        self._lock = threading.Lock()

    def save(self, record: DriftResultRecord) -> DriftResultRecord:
        with self._lock:
            self._by_subject.setdefault(record.subject_id, []).append(record)
        return record

    def latest_for_subject(self, subject_id: str) -> Optional[DriftResultRecord]:
        with self._lock:
            records = self._by_subject.get(subject_id)
            return records[-1] if records else None

    def for_session(self, session_id: str) -> Optional[DriftResultRecord]:
        with self._lock:
            matches = [
                r
                for records in self._by_subject.values()
                for r in records
                if r.session_id == session_id
            ]
        if not matches:
            return None
        return max(matches, key=lambda r: r.generated_at)

    def history(self, subject_id: str, limit: int = 20) -> List[DriftResultRecord]:
        with self._lock:
            records = list(self._by_subject.get(subject_id, []))
        return list(reversed(records))[:limit]
