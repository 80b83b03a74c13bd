"""Process-wide collaborators, exposed as FastAPI dependencies.

Tests swap them through ``app.dependency_overrides``.
"""
from __future__ import annotations

from typing import Optional

from drift_sar.config import settings
from drift_sar.providers.base import WeatherProvider
from drift_sar.providers.chain import build_provider
from drift_sar.store.base import ResultStore
from drift_sar.store.factory import build_store
from drift_sar.tracking import TrackingRegistry

# Singletons persist across requests (the weather cache lives in the provider)
_provider: Optional[WeatherProvider] = None
_store: Optional[ResultStore] = None
_registry = TrackingRegistry()


def get_provider() -> WeatherProvider:
    global _provider
    if _provider is None:
        _provider = build_provider(settings.weather_provider)
    return _provider


def get_store() -> ResultStore:
    global _store
    if _store is None:
        _store = build_store()
    return _store


def get_registry() -> TrackingRegistry:
    return _registry
