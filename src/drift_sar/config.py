"""Centralized settings for the drift-sar backend."""
from __future__ import annotations

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    model_config = {"env_prefix": "DRIFT_SAR_"}

    # Redis: empty string means disabled
    redis_url: str = ""

    # Supabase: empty strings mean in-memory result storage
    supabase_url: str = ""
    supabase_service_key: str = ""

    # Weather lookups
    marine_api_base: str = "https://marine-api.open-meteo.com/v1/marine"
    forecast_api_base: str = "https://api.open-meteo.com/v1/forecast"
    http_timeout_s: int = 15
    http_tries: int = 3
    weather_provider: str = "cache+open-meteo+fallback"

    # A cached sample answers any lookup within this box for this long
    weather_cache_ttl_s: int = 1800        # 30 min
    weather_cache_radius_deg: float = 0.05

    # Simulation bounds (enforced at the API boundary, not in the engine)
    default_num_paths: int = 100
    min_simulation_hours: int = 1
    max_simulation_hours: int = 12
    min_num_paths: int = 10
    max_num_paths: int = 200

    # Signal-loss monitor
    signal_lost_threshold_s: int = 60
    signal_check_interval_s: int = 10


settings = Settings()
