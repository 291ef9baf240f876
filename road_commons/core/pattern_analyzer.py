"""PatternAnalyzer — city-wide and local statistics around a reference.

Design principles:
    1. Pure: given a reference, a candidate set, a window and "now", the
       result is fully determined.  Nothing is cached, nothing is mutated.
    2. The candidate set is the *filtered* set, so every match is already
       inside the active lens and window.
    3. Policy values (local radius, grid scale, trend factors) live in
       PatternConfig, never inline.

City-wide:
    matched        = filtered observations sharing the reference type
    affected_zones = distinct (floor(lat*scale), floor(lng*scale)) cells
    trend          = recent vs older halves of the window

Local:
    matched        = same-type observations within radius of the reference
    time_span_days = ceil((last - first) / 1 day)
    stats          = None when nothing matched
"""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import Optional, Sequence

from road_commons.core.spatial import distance_meters, zone_key
from road_commons.core.stats_calculator import TrendThresholds, classify_trend, split_window
from road_commons.domain.observation import Observation
from road_commons.domain.stats import CityWideStats, LocalStats
from road_commons.foundation.clock import MS_PER_DAY
from road_commons.foundation.clock import now_ms as clock_now_ms


@dataclass(frozen=True)
class PatternConfig:
    """Configurable policy for pattern analysis."""

    local_radius_meters: float = 200.0
    # Cells per degree for affected-zone binning
    zone_grid_scale: int = 100
    trend: TrendThresholds = field(default_factory=TrendThresholds)


@dataclass(frozen=True)
class CityWideAnalysis:
    matched: tuple[Observation, ...]
    stats: CityWideStats


@dataclass(frozen=True)
class LocalAnalysis:
    matched: tuple[Observation, ...]
    stats: Optional[LocalStats]


class PatternAnalyzer:
    """Stateless pattern analysis over a filtered observation set."""

    def __init__(self, config: PatternConfig | None = None) -> None:
        self._config = config or PatternConfig()

    @property
    def config(self) -> PatternConfig:
        return self._config

    # ── Public API ───────────────────────────────────────────────────────

    def city_wide(
        self,
        reference: Observation,
        filtered: Sequence[Observation],
        window_ms: float,
        now_ms: int | None = None,
    ) -> CityWideAnalysis:
        now = clock_now_ms() if now_ms is None else now_ms
        matched = tuple(obs for obs in filtered if obs.type == reference.type)

        scale = self._config.zone_grid_scale
        zones = {zone_key(obs.lat, obs.lng, scale) for obs in matched}
        recent, older = split_window(matched, window_ms, now)

        return CityWideAnalysis(
            matched=matched,
            stats=CityWideStats(
                total=len(matched),
                affected_zones=len(zones),
                trend=classify_trend(recent, older, self._config.trend),
                recent_count=recent,
                older_count=older,
            ),
        )

    def local(
        self,
        reference: Observation,
        filtered: Sequence[Observation],
        window_ms: float,
        radius_meters: float | None = None,
        now_ms: int | None = None,
    ) -> LocalAnalysis:
        now = clock_now_ms() if now_ms is None else now_ms
        radius = self._config.local_radius_meters if radius_meters is None else radius_meters

        matched = tuple(
            obs
            for obs in filtered
            if obs.type == reference.type
            and distance_meters(reference.lat, reference.lng, obs.lat, obs.lng) <= radius
        )
        if not matched:
            return LocalAnalysis(matched=(), stats=None)

        timestamps = [obs.timestamp for obs in matched]
        span_days = math.ceil((max(timestamps) - min(timestamps)) / MS_PER_DAY)
        recent, older = split_window(matched, window_ms, now)

        return LocalAnalysis(
            matched=matched,
            stats=LocalStats(
                count=len(matched),
                time_span_days=span_days,
                trend=classify_trend(recent, older, self._config.trend),
                recent_count=recent,
                older_count=older,
            ),
        )
