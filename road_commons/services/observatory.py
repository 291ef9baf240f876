"""ObservatorySession — one user's view over the observation corpus.

The session owns the four inputs that drive recomputation:

    1. filter state (lens + time window)
    2. viewport (bounds + zoom) reported by the map surface
    3. the selected reference observation
    4. the active pattern mode

Every derived value (filtered set, visible set, stats, markers) is pulled
on demand from the pure engine functions; nothing is cached.  Changing
the filter or leaving a pattern reconciles the selection so it never
points outside the filtered set.
"""

from __future__ import annotations

import logging
from typing import Callable, Sequence

from road_commons.core.cluster_sizer import ClusterThresholds, size_tier
from road_commons.core.filter_engine import FilterEngine
from road_commons.core.stats_calculator import aggregate
from road_commons.core.viewport_tracker import VisibleSetTracker, visible
from road_commons.domain.enums import PatternMode
from road_commons.domain.filters import FilterState
from road_commons.domain.geo import LatLng, MapView, Viewport
from road_commons.domain.observation import Observation
from road_commons.domain.pattern import CityWidePattern, LocalPattern, PatternState, SavedView
from road_commons.domain.stats import ClusterSize, ObservationStats
from road_commons.errors import UnknownObservationError
from road_commons.foundation.clock import now_ms
from road_commons.render.markers import MarkerDescriptor, build_markers
from road_commons.store.pattern_controller import PatternModeController

logger = logging.getLogger(__name__)

Clock = Callable[[], int]


class ObservatorySession:
    """Pull-based façade over the engine for a single map surface.

    Args:
        corpus: Immutable observation corpus; never refreshed.
        initial_view: Map center/zoom used until a viewport is reported.
        filter_state: Starting lens and window.
        controller: Selection / pattern state machine.
        cluster_thresholds: Tier boundaries for cluster glyphs.
        clock: Source of "now" in epoch ms.
    """

    def __init__(
        self,
        corpus: Sequence[Observation],
        initial_view: MapView,
        filter_state: FilterState | None = None,
        controller: PatternModeController | None = None,
        cluster_thresholds: ClusterThresholds | None = None,
        clock: Clock = now_ms,
    ) -> None:
        self._corpus: tuple[Observation, ...] = tuple(corpus)
        self._filter_state = filter_state or FilterState()
        self._controller = controller or PatternModeController()
        self._cluster_thresholds = cluster_thresholds or ClusterThresholds()
        self._clock = clock
        self._engine = FilterEngine()
        self._viewport: Viewport | None = None
        self._tracker = VisibleSetTracker()
        self._visible_changed = False
        self._view = initial_view

    # ── Inputs ───────────────────────────────────────────────────────────

    @property
    def corpus(self) -> tuple[Observation, ...]:
        return self._corpus

    @property
    def filter_state(self) -> FilterState:
        return self._filter_state

    @property
    def viewport(self) -> Viewport | None:
        return self._viewport

    @property
    def view(self) -> MapView:
        return self._view

    def now(self) -> int:
        return self._clock()

    def set_filter(self, state: FilterState) -> list[Observation]:
        """Apply a new lens/window and drop a selection it filtered out."""
        self._filter_state = state
        filtered = self.filtered()
        self._controller.reconcile(filtered)
        logger.debug(
            "Filter set to lens=%s window=%s: %d observation(s)",
            state.lens_value,
            state.window.value,
            len(filtered),
        )
        return filtered

    def set_viewport(self, viewport: Viewport) -> list[Observation]:
        """Record the map's current bounds and return the visible set.

        ``visible_changed`` afterwards tells whether membership differs
        from the previous report, so a pan inside the same set can skip
        the stats redraw.
        """
        self._viewport = viewport
        self._view = MapView(center=viewport.center, zoom=viewport.zoom)
        self._visible_changed = self._tracker.update(self.filtered(), viewport)
        return self._tracker.current

    @property
    def visible_changed(self) -> bool:
        return self._visible_changed

    # ── Derived views ────────────────────────────────────────────────────

    def filtered(self) -> list[Observation]:
        return self._engine.apply(self._corpus, self._filter_state, now_ms=self._clock())

    def visible(self) -> list[Observation]:
        """Filtered observations in the viewport; all of them before one is reported."""
        filtered = self.filtered()
        if self._viewport is None:
            return filtered
        return visible(filtered, self._viewport)

    def stats(self) -> ObservationStats:
        return aggregate(self.visible())

    def markers(self) -> list[MarkerDescriptor]:
        selected = self._controller.selected
        return build_markers(
            self.filtered(),
            zoom=self._view.zoom,
            selected_id=selected.id if selected else None,
            pattern=self._controller.pattern,
        )

    def cluster_size(self, count: int) -> ClusterSize:
        return size_tier(count, self._cluster_thresholds)

    # ── Selection ────────────────────────────────────────────────────────

    @property
    def selected(self) -> Observation | None:
        return self._controller.selected

    def select_observation(self, observation_id: str) -> Observation:
        obs = self._find_filtered(observation_id)
        self._controller.select(obs)
        return obs

    def clear_selection(self) -> None:
        self._controller.clear_selection()

    def click(self, observation_id: str) -> bool:
        """Marker click from the map; ignored while a pattern is displayed."""
        if self._controller.mode is not PatternMode.NONE:
            logger.debug("Ignoring click on %s during pattern mode", observation_id)
            return False
        self.select_observation(observation_id)
        return True

    # ── Pattern mode ─────────────────────────────────────────────────────

    @property
    def pattern(self) -> PatternState:
        return self._controller.pattern

    def enter_city_wide_pattern(self) -> CityWidePattern:
        return self._controller.enter_city_wide(
            self._view,
            self.filtered(),
            self._filter_state.window_ms,
            now_ms=self._clock(),
        )

    def enter_local_pattern(self) -> LocalPattern:
        pattern = self._controller.enter_local(
            self._view,
            self.filtered(),
            self._filter_state.window_ms,
            now_ms=self._clock(),
        )
        self._view = MapView(
            center=LatLng(lat=pattern.center.lat, lng=pattern.center.lng),
            zoom=self._view.zoom,
        )
        return pattern

    def clear_pattern(self) -> SavedView | None:
        saved = self._controller.clear_pattern()
        if saved is None:
            return None
        self._view = saved.view
        self._controller.reconcile(self.filtered())
        return saved

    # ── Internals ────────────────────────────────────────────────────────

    def _find_filtered(self, observation_id: str) -> Observation:
        for obs in self.filtered():
            if obs.id == observation_id:
                return obs
        raise UnknownObservationError(observation_id)
