"""Tests for marker descriptors and zoom-dependent scale."""

from __future__ import annotations

import pytest

from road_commons.domain.enums import ObservationStatus
from road_commons.domain.geo import LatLng, MapView
from road_commons.foundation.clock import MS_PER_DAY
from road_commons.render.markers import (
    build_markers,
    marker_radius,
    status_weight,
    zoom_scale_label,
)
from road_commons.store.pattern_controller import PatternModeController

from tests.test_observation import _NOW, _obs, _pending
from tests.test_pattern_analyzer import _north_of

_VIEW = MapView(center=LatLng(lat=19.0, lng=72.9), zoom=12)


@pytest.fixture
def filtered():
    return [
        _obs(id="ref", lat=19.0, lng=72.9),
        _obs(id="near", lat=_north_of(19.0, 50), lng=72.9, status="acknowledged"),
        _obs(id="far", lat=_north_of(19.0, 3000), lng=72.9),
        _pending(id="risk", type="risk", lat=_north_of(19.0, 20), lng=72.9),
    ]


class TestScale:
    @pytest.mark.parametrize("zoom, radius", [(3, 6), (10, 6), (11, 5), (13, 5), (14, 4), (18, 4)])
    def test_marker_radius(self, zoom: int, radius: int) -> None:
        assert marker_radius(zoom) == radius

    @pytest.mark.parametrize(
        "zoom, label",
        [(10, "DISTRICT"), (11, "WARD"), (14, "WARD"), (15, "STREET")],
    )
    def test_zoom_scale_label(self, zoom: int, label: str) -> None:
        assert zoom_scale_label(zoom) == label

    def test_status_weights(self) -> None:
        assert status_weight(ObservationStatus.RESOLVED) == 3
        assert status_weight(ObservationStatus.UNDER_REVIEW) == 2
        assert status_weight(ObservationStatus.ACKNOWLEDGED) == 2
        assert status_weight(ObservationStatus.PENDING) == 1
        assert status_weight(ObservationStatus.DISMISSED) == 1


class TestBuildMarkers:
    def test_one_marker_per_observation_in_order(self, filtered) -> None:
        markers = build_markers(filtered, zoom=12)
        assert [m.id for m in markers] == ["ref", "near", "far", "risk"]
        assert all(m.radius == 5 for m in markers)
        assert all(m.fill_emphasis for m in markers)

    def test_weights_follow_status_outside_pattern(self, filtered) -> None:
        weights = {m.id: m.stroke_weight for m in build_markers(filtered, zoom=12)}
        assert weights == {"ref": 3, "near": 2, "far": 3, "risk": 1}

    def test_selected_flag(self, filtered) -> None:
        markers = build_markers(filtered, zoom=12, selected_id="near")
        assert [m.id for m in markers if m.is_selected] == ["near"]

    def test_city_wide_emphasises_reference_type(self, filtered) -> None:
        controller = PatternModeController()
        controller.select(filtered[0])
        pattern = controller.enter_city_wide(_VIEW, filtered, 30 * MS_PER_DAY, now_ms=_NOW)

        markers = {m.id: m for m in build_markers(filtered, zoom=12, pattern=pattern)}
        assert markers["far"].fill_emphasis
        assert markers["far"].stroke_weight == 4
        assert not markers["risk"].fill_emphasis
        assert markers["risk"].stroke_weight == 1

    def test_local_emphasises_matched_only(self, filtered) -> None:
        controller = PatternModeController()
        controller.select(filtered[0])
        pattern = controller.enter_local(_VIEW, filtered, 30 * MS_PER_DAY, now_ms=_NOW)

        markers = {m.id: m for m in build_markers(filtered, zoom=12, pattern=pattern)}
        assert markers["ref"].fill_emphasis and markers["near"].fill_emphasis
        assert markers["near"].stroke_weight == 3
        assert not markers["far"].fill_emphasis
        assert markers["far"].stroke_weight == 1
        assert not markers["risk"].fill_emphasis
