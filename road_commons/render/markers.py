"""Marker descriptors for the rendering sink.

The map surface draws one circle marker per filtered observation.  This
module decides its radius, stroke weight and emphasis; colors and DOM work
stay on the surface side.
"""

from __future__ import annotations

from typing import Optional, Sequence

from pydantic import BaseModel

from road_commons.domain.enums import ObservationStatus
from road_commons.domain.observation import Observation
from road_commons.domain.pattern import CityWidePattern, LocalPattern, NoPattern, PatternState

_STATUS_WEIGHTS: dict[ObservationStatus, int] = {
    ObservationStatus.PENDING: 1,
    ObservationStatus.UNDER_REVIEW: 2,
    ObservationStatus.ACKNOWLEDGED: 2,
    ObservationStatus.RESOLVED: 3,
    ObservationStatus.DISMISSED: 1,
}


class MarkerDescriptor(BaseModel):
    id: str
    lat: float
    lng: float
    radius: int
    stroke_weight: int
    fill_emphasis: bool
    is_selected: bool

    model_config = {"frozen": True}


def marker_radius(zoom: int) -> int:
    if zoom <= 10:
        return 6
    if zoom <= 13:
        return 5
    return 4


def status_weight(status: ObservationStatus) -> int:
    return _STATUS_WEIGHTS.get(status, 1)


def zoom_scale_label(zoom: int) -> str:
    """Administrative scale shown next to the zoom control."""
    if zoom <= 10:
        return "DISTRICT"
    if zoom <= 14:
        return "WARD"
    return "STREET"


def build_markers(
    filtered: Sequence[Observation],
    zoom: int,
    selected_id: Optional[str] = None,
    pattern: Optional[PatternState] = None,
) -> list[MarkerDescriptor]:
    """One descriptor per filtered observation, in input order.

    Outside a pattern every marker is emphasised.  In a city-wide pattern
    markers of the reference type are emphasised; in a local pattern only
    the matched markers are.  Emphasised markers get one extra stroke
    weight, the rest drop to weight 1.
    """
    radius = marker_radius(zoom)
    local_ids: frozenset[str] = frozenset()
    if isinstance(pattern, LocalPattern):
        local_ids = frozenset(obs.id for obs in pattern.matched)

    markers = []
    for obs in filtered:
        weight = status_weight(obs.status)
        emphasised = True
        if isinstance(pattern, CityWidePattern):
            emphasised = obs.type == pattern.reference_type
        elif isinstance(pattern, LocalPattern):
            emphasised = obs.id in local_ids
        if pattern is not None and not isinstance(pattern, NoPattern):
            weight = weight + 1 if emphasised else 1

        markers.append(
            MarkerDescriptor(
                id=obs.id,
                lat=obs.lat,
                lng=obs.lng,
                radius=radius,
                stroke_weight=weight,
                fill_emphasis=emphasised,
                is_selected=obs.id == selected_id,
            )
        )
    return markers
