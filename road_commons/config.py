"""Application configuration loaded from environment variables."""

from __future__ import annotations

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    app_name: str = "road-commons"
    debug: bool = False
    log_level: str = "INFO"

    # Initial filter state
    default_lens: str = "all"
    default_window: str = "30d"

    # Mock corpus
    corpus_size: int = 150
    corpus_seed: int = 12345

    # Map surface (Mumbai)
    map_center_lat: float = 19.076
    map_center_lng: float = 72.8777
    initial_zoom: int = 12

    # Pattern analysis policy
    local_pattern_radius_m: float = 200.0
    zone_grid_scale: int = 100
    trend_rise_factor: float = 1.2
    trend_fall_factor: float = 0.8

    # Cluster sizing
    cluster_medium_above: int = 10
    cluster_large_above: int = 50

    model_config = {"env_prefix": "ROAD_COMMONS_"}


settings = Settings()
