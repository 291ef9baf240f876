"""StatsCalculator — aggregate metrics and window helpers.

Design principles:
    1. Pure functions: accept an observation subset, return a snapshot.
    2. Degenerate input (empty sets, zero totals) is guarded explicitly and
       yields zeros, never NaN or a division error.
    3. Rounding follows half-up semantics so displayed figures do not
       depend on banker's rounding.

Trend detection:
    The window is split at ``now - window / 2``.
    - INCREASING: recent > older * rise_factor
    - DECLINING:  recent < older * fall_factor
    - STABLE:     everything else
    With older == 0 the rise rule reduces to "any recent match".
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Decimal
from typing import Sequence

from road_commons.domain.enums import ObservationStatus, ObservationType, Trend
from road_commons.domain.observation import Observation
from road_commons.domain.stats import ObservationStats


@dataclass(frozen=True)
class TrendThresholds:
    """Policy factors for trend classification."""

    rise_factor: float = 1.2
    fall_factor: float = 0.8


# ── Aggregate ────────────────────────────────────────────────────────────────

def aggregate(observations: Sequence[Observation]) -> ObservationStats:
    total = len(observations)
    by_type = {t: 0 for t in ObservationType}
    reviewed = 0
    response_sum = 0
    response_n = 0

    for obs in observations:
        by_type[obs.type] += 1
        if obs.status is not ObservationStatus.PENDING:
            reviewed += 1
        if obs.response_time:
            response_sum += obs.response_time
            response_n += 1

    avg_response = _round_half_up(response_sum / response_n) if response_n else 0
    review_rate = _one_decimal(reviewed / total * 100) if total else "0.0"

    return ObservationStats(
        total=total,
        by_type=by_type,
        avg_response_time=avg_response,
        review_rate=review_rate,
    )


# ── Windowing ────────────────────────────────────────────────────────────────

def window_midpoint(window_ms: float, now_ms: int) -> float:
    """Instant splitting the window into its older and recent halves."""
    return now_ms - window_ms / 2


def split_window(
    observations: Sequence[Observation],
    window_ms: float,
    now_ms: int,
) -> tuple[int, int]:
    """Count observations in the (recent, older) halves of the window.

    For an unbounded window the midpoint is -inf, so everything is recent.
    """
    midpoint = window_midpoint(window_ms, now_ms)
    recent = sum(1 for obs in observations if obs.timestamp > midpoint)
    return recent, len(observations) - recent


def classify_trend(
    recent_count: int,
    older_count: int,
    thresholds: TrendThresholds | None = None,
) -> Trend:
    t = thresholds or TrendThresholds()
    if recent_count > older_count * t.rise_factor:
        return Trend.INCREASING
    if recent_count < older_count * t.fall_factor:
        return Trend.DECLINING
    return Trend.STABLE


# ── Helpers ──────────────────────────────────────────────────────────────────

def _round_half_up(value: float) -> int:
    return math.floor(value + 0.5)


def _one_decimal(value: float) -> str:
    return str(Decimal(value).quantize(Decimal("0.1"), rounding=ROUND_HALF_UP))
