"""In-memory selection and pattern-mode state.

Design notes:
    - The pattern state is a tagged union (NoPattern | CityWidePattern |
      LocalPattern).  Exactly one value is held at a time.
    - Selection and an active pattern are mutually exclusive: entering a
      pattern clears the selection, leaving it restores the one selection
      that was saved on entry.
    - Entry is only legal from NONE with a selected reference.  Misuse
      raises PatternTransitionError before any field is touched.
    - clear_pattern() is the only cancellation path and is idempotent.
    - Single-threaded by contract; there is no lock.
"""

from __future__ import annotations

import logging
from typing import Sequence

from road_commons.core.pattern_analyzer import PatternAnalyzer
from road_commons.core.spatial import bounding_box
from road_commons.domain.enums import PatternMode
from road_commons.domain.geo import LatLng, MapView
from road_commons.domain.observation import Observation
from road_commons.domain.pattern import (
    ActivePattern,
    CityWidePattern,
    LocalPattern,
    NoPattern,
    PatternState,
    SavedView,
)
from road_commons.errors import PatternTransitionError

logger = logging.getLogger(__name__)

_NO_PATTERN = NoPattern()


class PatternModeController:
    """Three-state machine coordinating selection and pattern snapshots.

    Args:
        analyzer: Pattern analysis engine used to build snapshots.
    """

    __slots__ = ("_analyzer", "_pattern", "_selected")

    def __init__(self, analyzer: PatternAnalyzer | None = None) -> None:
        self._analyzer = analyzer or PatternAnalyzer()
        self._pattern: PatternState = _NO_PATTERN
        self._selected: Observation | None = None

    # ── Queries ──────────────────────────────────────────────────────────

    @property
    def mode(self) -> PatternMode:
        return self._pattern.mode

    @property
    def pattern(self) -> PatternState:
        return self._pattern

    @property
    def active_pattern(self) -> ActivePattern | None:
        if isinstance(self._pattern, NoPattern):
            return None
        return self._pattern

    @property
    def selected(self) -> Observation | None:
        return self._selected

    # ── Selection ────────────────────────────────────────────────────────

    def select(self, observation: Observation) -> None:
        """Make *observation* the current reference."""
        if self.mode is not PatternMode.NONE:
            raise PatternTransitionError(
                f"cannot select an observation while in {self.mode.value} pattern mode"
            )
        self._selected = observation
        logger.debug("Selected observation %s", observation.id)

    def clear_selection(self) -> None:
        self._selected = None

    def reconcile(self, filtered: Sequence[Observation]) -> bool:
        """Drop a selection that no longer appears in *filtered*.

        Returns True if the selection was cleared.
        """
        if self._selected is None:
            return False
        selected_id = self._selected.id
        if any(obs.id == selected_id for obs in filtered):
            return False
        logger.info("Selected observation %s left the filtered set; deselecting", selected_id)
        self._selected = None
        return True

    # ── Transitions ──────────────────────────────────────────────────────

    def enter_city_wide(
        self,
        view: MapView,
        filtered: Sequence[Observation],
        window_ms: float,
        now_ms: int | None = None,
    ) -> CityWidePattern:
        """NONE -> CITY_WIDE around the selected reference."""
        reference = self._require_entry()
        saved = SavedView(view=view, previous_selection=reference)

        analysis = self._analyzer.city_wide(reference, filtered, window_ms, now_ms=now_ms)
        pattern = CityWidePattern(
            reference_type=reference.type,
            matched=analysis.matched,
            stats=analysis.stats,
            focus=bounding_box(analysis.matched),
            saved_view=saved,
        )
        self._activate(pattern)
        return pattern

    def enter_local(
        self,
        view: MapView,
        filtered: Sequence[Observation],
        window_ms: float,
        radius_meters: float | None = None,
        now_ms: int | None = None,
    ) -> LocalPattern:
        """NONE -> LOCAL within the configured radius of the selected reference."""
        reference = self._require_entry()
        saved = SavedView(view=view, previous_selection=reference)
        radius = (
            self._analyzer.config.local_radius_meters
            if radius_meters is None
            else radius_meters
        )

        analysis = self._analyzer.local(
            reference, filtered, window_ms, radius_meters=radius, now_ms=now_ms
        )
        pattern = LocalPattern(
            reference_type=reference.type,
            matched=analysis.matched,
            stats=analysis.stats,
            center=LatLng(lat=reference.lat, lng=reference.lng),
            radius_meters=radius,
            saved_view=saved,
        )
        self._activate(pattern)
        return pattern

    def clear_pattern(self) -> SavedView | None:
        """Leave pattern mode and return the view the map should restore.

        A no-op returning None when no pattern is active.
        """
        active = self.active_pattern
        if active is None:
            return None
        saved = active.saved_view
        self._pattern = _NO_PATTERN
        self._selected = saved.previous_selection
        logger.info("Cleared %s pattern; restored zoom %d", active.mode.value, saved.zoom)
        return saved

    # ── Internals ────────────────────────────────────────────────────────

    def _require_entry(self) -> Observation:
        if self.mode is not PatternMode.NONE:
            raise PatternTransitionError(
                f"already in {self.mode.value} pattern mode; clear it first"
            )
        if self._selected is None:
            raise PatternTransitionError("no reference observation selected")
        return self._selected

    def _activate(self, pattern: ActivePattern) -> None:
        self._pattern = pattern
        self._selected = None
        logger.info(
            "Entered %s pattern for type %s (%d match(es))",
            pattern.mode.value,
            pattern.reference_type.value,
            len(pattern.matched),
        )
