"""Statistics snapshots — immutable aggregate observations.

These are pure data structures.  They contain no thresholds and no
decisions beyond the trend label computed when they were created.
"""

from __future__ import annotations

from pydantic import BaseModel, Field

from road_commons.domain.enums import ClusterTier, ObservationType, Trend


class ObservationStats(BaseModel):
    """Aggregate metrics over an arbitrary observation subset."""

    total: int = Field(..., ge=0)
    by_type: dict[ObservationType, int] = Field(
        ..., description="Count per observation type; always has all three keys"
    )
    avg_response_time: int = Field(..., ge=0, description="Mean days to review, 0 if unknown")
    review_rate: str = Field(..., description="Reviewed share as a percentage, one decimal")

    model_config = {"frozen": True}


class CityWideStats(BaseModel):
    total: int = Field(..., ge=0)
    affected_zones: int = Field(..., ge=0, description="Distinct grid cells touched")
    trend: Trend
    recent_count: int = Field(..., ge=0, description="Matches in the later half of the window")
    older_count: int = Field(..., ge=0, description="Matches in the earlier half of the window")

    model_config = {"frozen": True}


class LocalStats(BaseModel):
    count: int = Field(..., ge=1)
    time_span_days: int = Field(..., ge=0, description="Days between first and last match, rounded up")
    trend: Trend
    recent_count: int = Field(..., ge=0)
    older_count: int = Field(..., ge=0)

    model_config = {"frozen": True}


class ClusterSize(BaseModel):
    """Display tier and pixel dimensions for a cluster glyph."""

    tier: ClusterTier
    width_px: int
    height_px: int
    font_px: int

    model_config = {"frozen": True}
