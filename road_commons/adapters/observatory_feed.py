"""ObservatoryFeedAdapter — translates flat observatory feed records.

Expected raw format:
{
    "id": "obs_0042",
    "type": "violation",
    "lat": 19.0761,
    "lng": 72.8774,
    "timestamp": 1767268800000.37,
    "status": "resolved",
    "description": "Observed behavior pattern",
    "reviewed_at": 1767400000000.5,
    "response_time": 3,
    "media": {"type": "image", "url": "https://...", "metadataStripped": true},
    "hasMultipleMedia": false
}
"""

from __future__ import annotations

import math
from typing import Any

from road_commons.adapters.base import ObservationAdapter, media_fields
from road_commons.domain.enums import ObservationStatus, ObservationType
from road_commons.domain.observation import Observation

_TYPES = {t.value for t in ObservationType}


class ObservatoryFeedAdapter(ObservationAdapter):
    """Maps flat feed records to canonical Observations."""

    @property
    def source_name(self) -> str:
        return "observatory_feed"

    def can_handle(self, raw: dict[str, Any]) -> bool:
        return raw.get("type") in _TYPES and "lat" in raw and "lng" in raw

    def adapt(self, raw: dict[str, Any]) -> Observation:
        # ── Required fields ──────────────────────────────────────────────
        obs_id = raw.get("id")
        if not obs_id:
            raise ValueError("observatory_feed record missing 'id'")

        timestamp = raw.get("timestamp")
        if timestamp is None:
            raise ValueError(f"observatory_feed record {obs_id} missing 'timestamp'")

        status = raw.get("status", ObservationStatus.PENDING.value)
        pending = status == ObservationStatus.PENDING.value

        # ── Review fields only survive once reviewed ─────────────────────
        reviewed_at = raw.get("reviewed_at")
        response_time = raw.get("response_time")

        # ── Media: keep kind and url, nothing else ───────────────────────
        media = media_fields(raw.get("media"), self.source_name)

        return Observation.model_validate({
            "id": str(obs_id),
            "type": raw["type"],
            "lat": raw["lat"],
            "lng": raw["lng"],
            "timestamp": _floor_ms(timestamp),
            "status": status,
            "reviewed_at": None if pending or reviewed_at is None else _floor_ms(reviewed_at),
            "response_time": None if pending or response_time is None else int(response_time),
            "media": media,
            "description": raw.get("description") or "Observed behavior pattern",
            "has_multiple_media": bool(raw.get("hasMultipleMedia", False)),
        })


def _floor_ms(value: Any) -> int:
    return math.floor(float(value))
