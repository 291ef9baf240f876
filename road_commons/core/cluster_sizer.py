"""ClusterSizer — maps a cluster's point count to a display tier.

The grouping of markers into clusters belongs to the rendering surface;
it calls ``size_tier`` once for each cluster it forms.
"""

from __future__ import annotations

from dataclasses import dataclass

from road_commons.domain.enums import ClusterTier
from road_commons.domain.stats import ClusterSize

_PRESETS: dict[ClusterTier, ClusterSize] = {
    ClusterTier.SMALL: ClusterSize(tier=ClusterTier.SMALL, width_px=32, height_px=32, font_px=12),
    ClusterTier.MEDIUM: ClusterSize(tier=ClusterTier.MEDIUM, width_px=40, height_px=40, font_px=14),
    ClusterTier.LARGE: ClusterSize(tier=ClusterTier.LARGE, width_px=50, height_px=50, font_px=16),
}


@dataclass(frozen=True)
class ClusterThresholds:
    """Counts strictly above which a cluster moves up a tier."""

    medium_above: int = 10
    large_above: int = 50


def size_tier(count: int, thresholds: ClusterThresholds | None = None) -> ClusterSize:
    t = thresholds or ClusterThresholds()
    if count > t.large_above:
        return _PRESETS[ClusterTier.LARGE]
    if count > t.medium_above:
        return _PRESETS[ClusterTier.MEDIUM]
    return _PRESETS[ClusterTier.SMALL]
