"""FilterEngine — lens and time-window predicates over the corpus.

Pure function of (corpus, filter state, now).  Corpus order is preserved.
"""

from __future__ import annotations

import math
from typing import Sequence

from road_commons.domain.filters import FilterState
from road_commons.domain.observation import Observation
from road_commons.foundation.clock import now_ms as clock_now_ms


class FilterEngine:
    """Stateless filter over an immutable corpus."""

    def apply(
        self,
        corpus: Sequence[Observation],
        state: FilterState,
        now_ms: int | None = None,
    ) -> list[Observation]:
        """Return the observations that pass both the lens and the window."""
        now = clock_now_ms() if now_ms is None else now_ms
        wanted_type = state.type_filter
        span = state.window_ms

        return [
            obs
            for obs in corpus
            if (wanted_type is None or obs.type == wanted_type)
            and self.within_window(obs, span, now)
        ]

    @staticmethod
    def within_window(obs: Observation, span_ms: float, now_ms: int) -> bool:
        # Future timestamps (clock skew) count as age zero.
        if math.isinf(span_ms):
            return True
        return obs.age_ms(now_ms) < span_ms
