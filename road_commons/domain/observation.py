"""Canonical Observation model — one geotagged report of road behavior.

An Observation is immutable once created.  It is validated at the boundary
(adapters, generator, API) so the engine never has to re-check field
constraints.  Media attachments are reduced to ``kind`` and ``url``: any
other key an upstream source sends (EXIF blobs, device ids, strip flags)
is discarded during validation, so identifying metadata can never reach
the domain.
"""

from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, Field, model_validator

from road_commons.domain.enums import MediaKind, ObservationStatus, ObservationType


# ── Media ────────────────────────────────────────────────────────────────────

class Media(BaseModel):
    """Attachment descriptor with all identifying metadata stripped."""

    kind: MediaKind
    url: str = Field(..., min_length=1, max_length=2048)

    model_config = {"frozen": True, "extra": "ignore"}


# ── Observation ──────────────────────────────────────────────────────────────

class Observation(BaseModel):
    """A single observation on the map."""

    id: str = Field(..., min_length=1, max_length=128)
    type: ObservationType
    lat: float = Field(..., ge=-90.0, le=90.0)
    lng: float = Field(..., ge=-180.0, le=180.0)
    timestamp: int = Field(..., ge=0, description="Creation instant, epoch milliseconds")
    status: ObservationStatus
    reviewed_at: Optional[int] = Field(
        default=None,
        ge=0,
        description="Review instant, epoch ms; ignored while pending",
    )
    response_time: Optional[int] = Field(
        default=None,
        ge=0,
        description="Days between report and review; only set once reviewed",
    )
    media: Optional[Media] = None
    description: str = Field(default="Observed behavior pattern", max_length=512)
    has_multiple_media: bool = False

    model_config = {"frozen": True}

    # ── Validators ───────────────────────────────────────────────────────

    @model_validator(mode="after")
    def review_fields_consistent(self) -> "Observation":
        if self.status is ObservationStatus.PENDING:
            if self.response_time is not None:
                raise ValueError("pending observation cannot carry a response_time")
            return self
        if self.reviewed_at is not None and self.reviewed_at < self.timestamp:
            raise ValueError(
                f"reviewed_at ({self.reviewed_at}) precedes timestamp ({self.timestamp})"
            )
        return self

    # ── Queries ──────────────────────────────────────────────────────────

    @property
    def is_reviewed(self) -> bool:
        return self.status is not ObservationStatus.PENDING

    def age_ms(self, now_ms: int) -> int:
        """Milliseconds since creation, clamped to zero for future timestamps."""
        return max(0, now_ms - self.timestamp)
