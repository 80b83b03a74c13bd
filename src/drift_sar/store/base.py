from __future__ import annotations

from abc import ABC, abstractmethod
from typing import List, Optional

from drift_sar.core.models import DriftResultRecord


class ResultStore(ABC):
    """
    Persist simulation runs.  A later run for a subject supersedes earlier
    ones as the current estimate; earlier runs stay reachable by session
    and through ``history``.
    """

    @abstractmethod
    def save(self, record: DriftResultRecord) -> DriftResultRecord:
        raise NotImplementedError

    @abstractmethod
    def latest_for_subject(self, subject_id: str) -> Optional[DriftResultRecord]:
        raise NotImplementedError

    @abstractmethod
    def for_session(self, session_id: str) -> Optional[DriftResultRecord]:
        raise NotImplementedError

    @abstractmethod
    def history(self, subject_id: str, limit: int = 20) -> List[DriftResultRecord]:
        raise NotImplementedError
