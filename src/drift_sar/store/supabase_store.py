from __future__ import annotations

from typing import Any, List, Optional

from drift_sar.core.models import DriftResultRecord
from drift_sar.store.base import ResultStore

TABLE = "drift_results"


class SupabaseResultStore(ResultStore):
    """Rows in the ``drift_results`` table; result/weather are jsonb columns."""

    def __init__(self, client: Any):
        self.sb = client

    def save(self, record: DriftResultRecord) -> DriftResultRecord:
        row = record.model_dump(mode="json")
        resp = self.sb.table(TABLE).insert(row).execute()
        if not resp.data:
            raise RuntimeError(f"Insert into {TABLE} returned no row")
        return DriftResultRecord.model_validate(resp.data[0])

    def _first(self, column: str, value: str) -> Optional[DriftResultRecord]:
        resp = (
            self.sb.table(TABLE)
            .select("*")
            .eq(column, value)
            .order("generated_at", desc=True)
            .limit(1)
            .execute()
        )
        if not resp.data:
            return None
        return DriftResultRecord.model_validate(resp.data[0])

    def latest_for_subject(self, subject_id: str) -> Optional[DriftResultRecord]:
        return self._first("subject_id", subject_id)

    def for_session(self, session_id: str) -> Optional[DriftResultRecord]:
        return self._first("session_id", session_id)

    def history(self, subject_id: str, limit: int = 20) -> List[DriftResultRecord]:
        resp = (
            self.sb.table(TABLE)
            .select("*")
            .eq("subject_id", subject_id)
            .order("generated_at", desc=True)
            .limit(limit)
            .execute()
        )
        return [DriftResultRecord.model_validate(row) for row in (resp.data or [])]
