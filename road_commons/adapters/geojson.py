"""GeoJsonFeatureAdapter — translates GeoJSON Point features.

Expected raw format:
{
    "type": "Feature",
    "geometry": {"type": "Point", "coordinates": [72.8777, 19.076]},
    "properties": {
        "id": "obs_0042",
        "observation_type": "risk",
        "status": "acknowledged",
        "timestamp": "2026-02-13T14:00:00Z",
        "reviewed_at": "2026-02-15T09:30:00Z",
        "response_time": 2
    }
}

Coordinates follow GeoJSON order (longitude first).  Timestamps may be
ISO-8601 strings or epoch milliseconds.
"""

from __future__ import annotations

from datetime import datetime
from typing import Any

from road_commons.adapters.base import ObservationAdapter, media_fields
from road_commons.domain.enums import ObservationStatus
from road_commons.domain.observation import Observation
from road_commons.foundation.clock import to_epoch_ms


class GeoJsonFeatureAdapter(ObservationAdapter):
    """Maps GeoJSON Point features to canonical Observations."""

    @property
    def source_name(self) -> str:
        return "geojson_feature"

    def can_handle(self, raw: dict[str, Any]) -> bool:
        return raw.get("type") == "Feature" and isinstance(raw.get("geometry"), dict)

    def adapt(self, raw: dict[str, Any]) -> Observation:
        geometry = raw["geometry"]
        if geometry.get("type") != "Point":
            raise ValueError(f"geojson_feature geometry must be a Point, got {geometry.get('type')!r}")

        coords = geometry.get("coordinates") or []
        if len(coords) < 2:
            raise ValueError("geojson_feature Point needs [lng, lat] coordinates")
        lng, lat = coords[0], coords[1]

        props = raw.get("properties") or {}
        obs_id = props.get("id") or raw.get("id")
        if not obs_id:
            raise ValueError("geojson_feature missing 'id'")
        if props.get("timestamp") is None:
            raise ValueError(f"geojson_feature {obs_id} missing 'timestamp'")

        status = props.get("status", ObservationStatus.PENDING.value)
        pending = status == ObservationStatus.PENDING.value

        media = media_fields(props.get("media"), self.source_name)

        return Observation.model_validate({
            "id": str(obs_id),
            "type": props.get("observation_type"),
            "lat": lat,
            "lng": lng,
            "timestamp": _to_ms(props["timestamp"]),
            "status": status,
            "reviewed_at": None if pending or props.get("reviewed_at") is None else _to_ms(props["reviewed_at"]),
            "response_time": None if pending else props.get("response_time"),
            "media": media,
            "description": props.get("description") or "Observed behavior pattern",
            "has_multiple_media": bool(props.get("has_multiple_media", False)),
        })


def _to_ms(value: Any) -> int:
    if isinstance(value, (int, float)):
        return int(value)
    return to_epoch_ms(datetime.fromisoformat(str(value).replace("Z", "+00:00")))
