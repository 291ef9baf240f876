"""Tests for the ObservatorySession façade.

The session clock is fixed at _NOW so every derived view is deterministic.
"""

from __future__ import annotations

import pytest

from road_commons.domain.enums import ClusterTier, ObservationType, PatternMode, TimeWindowKey
from road_commons.domain.filters import FilterState
from road_commons.domain.geo import LatLng, MapView, Viewport
from road_commons.errors import PatternTransitionError, UnknownObservationError
from road_commons.foundation.clock import MS_PER_DAY
from road_commons.services.observatory import ObservatorySession

from tests.test_observation import _NOW, _obs, _pending

_INITIAL = MapView(center=LatLng(lat=19.076, lng=72.8777), zoom=12)
_BOUNDS = Viewport(south=19.0, west=72.8, north=19.1, east=72.9, zoom=13)


def _corpus():
    return [
        _obs(id="a", type="violation", lat=19.05, lng=72.85, timestamp=_NOW - MS_PER_DAY,
             reviewed_at=_NOW, response_time=1),
        _obs(id="b", type="violation", lat=19.2, lng=72.85, timestamp=_NOW - 10 * MS_PER_DAY,
             reviewed_at=_NOW, response_time=5),
        _pending(id="c", type="risk", lat=19.06, lng=72.86, timestamp=_NOW - 2 * MS_PER_DAY),
        _obs(id="d", type="infrastructure", lat=19.07, lng=72.87, timestamp=_NOW - 40 * MS_PER_DAY,
             reviewed_at=_NOW, response_time=9),
    ]


@pytest.fixture
def session() -> ObservatorySession:
    return ObservatorySession(_corpus(), initial_view=_INITIAL, clock=lambda: _NOW)


def _ids(observations) -> list[str]:
    return [o.id for o in observations]


# ── Filtering ────────────────────────────────────────────────────────────────


class TestFiltering:
    def test_default_filter(self, session: ObservatorySession) -> None:
        assert session.filter_state == FilterState()
        assert _ids(session.filtered()) == ["a", "b", "c"]

    @pytest.mark.parametrize(
        "window, expected",
        [
            (TimeWindowKey.LAST_24H, []),
            (TimeWindowKey.LAST_7D, ["a", "c"]),
            (TimeWindowKey.LAST_30D, ["a", "b", "c"]),
            (TimeWindowKey.PERSISTENT, ["a", "b", "c", "d"]),
        ],
    )
    def test_windows(self, session: ObservatorySession, window, expected) -> None:
        assert _ids(session.set_filter(FilterState(window=window))) == expected

    def test_lens(self, session: ObservatorySession) -> None:
        filtered = session.set_filter(FilterState(lens=ObservationType.RISK))
        assert _ids(filtered) == ["c"]

    def test_filter_change_drops_hidden_selection(self, session: ObservatorySession) -> None:
        session.select_observation("a")
        session.set_filter(FilterState(lens=ObservationType.VIOLATION))
        assert session.selected is not None
        session.set_filter(FilterState(lens=ObservationType.RISK))
        assert session.selected is None


# ── Viewport ─────────────────────────────────────────────────────────────────


class TestViewport:
    def test_visible_is_filtered_before_first_report(self, session: ObservatorySession) -> None:
        assert session.viewport is None
        assert _ids(session.visible()) == _ids(session.filtered())

    def test_set_viewport(self, session: ObservatorySession) -> None:
        shown = session.set_viewport(_BOUNDS)
        assert _ids(shown) == ["a", "c"]
        assert session.view.zoom == 13
        assert session.view.center.lat == pytest.approx(19.05)

    def test_visible_changed_tracks_membership(self, session: ObservatorySession) -> None:
        session.set_viewport(_BOUNDS)
        assert session.visible_changed is True

        session.set_viewport(Viewport(south=19.01, west=72.81, north=19.09, east=72.89, zoom=13))
        assert session.visible_changed is False

        shown = session.set_viewport(Viewport(south=18.0, west=72.0, north=20.0, east=73.0, zoom=9))
        assert session.visible_changed is True
        assert _ids(shown) == ["a", "b", "c"]

    def test_stats_follow_visible_set(self, session: ObservatorySession) -> None:
        session.set_viewport(_BOUNDS)
        stats = session.stats()
        assert stats.total == 2
        assert stats.by_type[ObservationType.VIOLATION] == 1
        assert stats.by_type[ObservationType.RISK] == 1
        assert stats.review_rate == "50.0"
        assert stats.avg_response_time == 1

    def test_empty_viewport_gives_zero_stats(self, session: ObservatorySession) -> None:
        session.set_viewport(Viewport(south=0.0, west=0.0, north=1.0, east=1.0, zoom=8))
        assert session.stats().total == 0

    def test_cluster_size(self, session: ObservatorySession) -> None:
        assert session.cluster_size(51).tier == ClusterTier.LARGE


# ── Selection & pattern mode ─────────────────────────────────────────────────


class TestSelection:
    def test_click_selects(self, session: ObservatorySession) -> None:
        assert session.click("a") is True
        assert session.selected is not None and session.selected.id == "a"
        assert [m.id for m in session.markers() if m.is_selected] == ["a"]

    def test_unknown_id_rejected(self, session: ObservatorySession) -> None:
        with pytest.raises(UnknownObservationError):
            session.select_observation("d")  # outside the 30-day window

    def test_click_ignored_during_pattern(self, session: ObservatorySession) -> None:
        session.click("a")
        session.enter_city_wide_pattern()
        assert session.click("c") is False
        assert session.selected is None
        with pytest.raises(PatternTransitionError):
            session.select_observation("c")


class TestPatternMode:
    def test_city_wide_then_clear_restores_everything(self, session: ObservatorySession) -> None:
        session.select_observation("b")
        before = (session.view, session.selected)

        pattern = session.enter_city_wide_pattern()
        assert session.pattern is pattern
        assert _ids(pattern.matched) == ["a", "b"]

        saved = session.clear_pattern()
        assert saved is not None
        assert (session.view, session.selected) == before
        assert session.pattern.mode == PatternMode.NONE

    def test_local_recenters_and_restores(self, session: ObservatorySession) -> None:
        session.select_observation("a")
        pattern = session.enter_local_pattern()
        assert session.view.center == LatLng(lat=19.05, lng=72.85)
        assert session.view.zoom == _INITIAL.zoom
        assert _ids(pattern.matched) == ["a"]

        session.clear_pattern()
        assert session.view == _INITIAL
        assert session.selected is not None and session.selected.id == "a"

    def test_enter_without_selection(self, session: ObservatorySession) -> None:
        with pytest.raises(PatternTransitionError):
            session.enter_local_pattern()
        assert session.view == _INITIAL

    def test_filter_change_keeps_pattern_snapshot(self, session: ObservatorySession) -> None:
        session.select_observation("a")
        pattern = session.enter_city_wide_pattern()
        session.set_filter(FilterState(lens=ObservationType.RISK))
        assert session.pattern is pattern

    def test_restored_selection_reconciled_against_new_filter(self, session: ObservatorySession) -> None:
        session.select_observation("a")
        session.enter_city_wide_pattern()
        session.set_filter(FilterState(lens=ObservationType.RISK))
        session.clear_pattern()
        assert session.selected is None

    def test_clear_without_pattern(self, session: ObservatorySession) -> None:
        assert session.clear_pattern() is None
        assert session.view == _INITIAL
