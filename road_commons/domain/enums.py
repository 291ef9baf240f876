"""Controlled enumerations for the road-commons domain.

Every categorical field in the domain MUST reference an enum defined here.
Free-form strings are not acceptable for classification fields.
"""

from __future__ import annotations

import math
from enum import Enum

from road_commons.foundation.clock import MS_PER_DAY


class ObservationType(str, Enum):
    """What kind of road behavior an observation records."""

    VIOLATION = "violation"
    RISK = "risk"
    INFRASTRUCTURE = "infrastructure"


class ObservationStatus(str, Enum):
    """Institutional review state of an observation."""

    PENDING = "pending"
    UNDER_REVIEW = "under_review"
    ACKNOWLEDGED = "acknowledged"
    RESOLVED = "resolved"
    DISMISSED = "dismissed"


class MediaKind(str, Enum):
    IMAGE = "image"
    VIDEO = "video"


class TimeWindowKey(str, Enum):
    """Selectable time windows for the filter."""

    LAST_24H = "24h"
    LAST_7D = "7d"
    LAST_30D = "30d"
    PERSISTENT = "persistent"

    @property
    def span_ms(self) -> float:
        """Width of the window in milliseconds (``math.inf`` for persistent)."""
        return _WINDOW_SPANS[self]

    @property
    def label(self) -> str:
        return "All" if self is TimeWindowKey.PERSISTENT else self.value


_WINDOW_SPANS: dict[TimeWindowKey, float] = {
    TimeWindowKey.LAST_24H: MS_PER_DAY,
    TimeWindowKey.LAST_7D: 7 * MS_PER_DAY,
    TimeWindowKey.LAST_30D: 30 * MS_PER_DAY,
    TimeWindowKey.PERSISTENT: math.inf,
}


class Trend(str, Enum):
    """Coarse trajectory of report frequency across a time window."""

    INCREASING = "increasing"
    STABLE = "stable"
    DECLINING = "declining"


class ClusterTier(str, Enum):
    SMALL = "small"
    MEDIUM = "medium"
    LARGE = "large"


class PatternMode(str, Enum):
    """Which aggregate view, if any, replaces the raw filtered set."""

    NONE = "none"
    CITY_WIDE = "city_wide"
    LOCAL = "local"


ALL_LENS = "all"
