"""ViewportTracker — intersects the filtered set with the map viewport.

Pull-based: the caller invokes ``visible()`` whenever the bounds or the
filtered set change.  Nothing here listens to the map.
"""

from __future__ import annotations

import logging
from typing import Sequence

from road_commons.domain.geo import Viewport
from road_commons.domain.observation import Observation

logger = logging.getLogger(__name__)


def visible(filtered: Sequence[Observation], bounds: Viewport) -> list[Observation]:
    """Observations inside *bounds*, boundary inclusive, in input order."""
    if bounds.is_degenerate:
        return []
    return [obs for obs in filtered if bounds.contains(obs.lat, obs.lng)]


class VisibleSetTracker:
    """Remembers the last visible set so callers can skip redundant redraws.

    The computation is always re-run; only the comparison with the previous
    id sequence is retained.
    """

    __slots__ = ("_last_ids", "_last")

    def __init__(self) -> None:
        self._last_ids: tuple[str, ...] | None = None
        self._last: list[Observation] = []

    @property
    def current(self) -> list[Observation]:
        return list(self._last)

    def update(self, filtered: Sequence[Observation], bounds: Viewport) -> bool:
        """Recompute against *bounds*; return True if the visible ids changed."""
        result = visible(filtered, bounds)
        ids = tuple(obs.id for obs in result)
        if ids == self._last_ids:
            return False
        logger.debug(
            "Visible set changed: %d -> %d observation(s)",
            len(self._last),
            len(result),
        )
        self._last_ids = ids
        self._last = result
        return True
