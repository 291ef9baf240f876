"""road-commons — public observatory for road behavior observations.

This is the application entry point.  It loads the corpus, builds the
observatory session, and mounts the HTTP endpoints.
"""

from __future__ import annotations

import logging

from fastapi import FastAPI

from road_commons.api.observatory import create_observatory_router
from road_commons.config import settings
from road_commons.core.cluster_sizer import ClusterThresholds
from road_commons.core.pattern_analyzer import PatternAnalyzer, PatternConfig
from road_commons.core.stats_calculator import TrendThresholds
from road_commons.corpus.provider import MockCorpusProvider
from road_commons.domain.filters import FilterState
from road_commons.domain.geo import LatLng, MapView
from road_commons.services.observatory import ObservatorySession
from road_commons.store.pattern_controller import PatternModeController

# ── Logging ──────────────────────────────────────────────────────────────────

logging.basicConfig(
    level=settings.log_level,
    format="%(asctime)s | %(levelname)-8s | %(name)s | %(message)s",
)

# ── Pattern Analysis ─────────────────────────────────────────────────────────

analyzer = PatternAnalyzer(
    PatternConfig(
        local_radius_meters=settings.local_pattern_radius_m,
        zone_grid_scale=settings.zone_grid_scale,
        trend=TrendThresholds(
            rise_factor=settings.trend_rise_factor,
            fall_factor=settings.trend_fall_factor,
        ),
    )
)

# ── Session ──────────────────────────────────────────────────────────────────

corpus = MockCorpusProvider(count=settings.corpus_size, seed=settings.corpus_seed).load()

session = ObservatorySession(
    corpus,
    initial_view=MapView(
        center=LatLng(lat=settings.map_center_lat, lng=settings.map_center_lng),
        zoom=settings.initial_zoom,
    ),
    filter_state=FilterState(lens=settings.default_lens, window=settings.default_window),
    controller=PatternModeController(analyzer),
    cluster_thresholds=ClusterThresholds(
        medium_above=settings.cluster_medium_above,
        large_above=settings.cluster_large_above,
    ),
)

# ── App ──────────────────────────────────────────────────────────────────────

app = FastAPI(
    title=settings.app_name,
    description="Geospatial filtering, viewport tracking and pattern detection",
    version="0.1.0",
)

app.include_router(create_observatory_router(session))


# ── Health ───────────────────────────────────────────────────────────────────

@app.get("/health")
async def health() -> dict:
    return {
        "status": "ok",
        "corpus_size": len(session.corpus),
        "filtered": len(session.filtered()),
        "pattern_mode": session.pattern.mode.value,
        "filter": session.filter_state.model_dump(mode="json"),
    }
