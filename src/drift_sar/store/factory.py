from __future__ import annotations

from drift_sar.db import get_supabase
from drift_sar.store.base import ResultStore
from drift_sar.store.memory import MemoryResultStore
from drift_sar.store.supabase_store import SupabaseResultStore


def build_store() -> ResultStore:
    """Supabase when configured, otherwise an in-memory store."""
    sb = get_supabase()
    if sb is None:
        return MemoryResultStore()
    return SupabaseResultStore(sb)
