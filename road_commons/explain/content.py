"""Display copy for observations: labels, status notes and relative times."""

from __future__ import annotations

from typing import Optional

from road_commons.domain.enums import ObservationStatus, ObservationType, Trend
from road_commons.foundation.clock import MS_PER_DAY, from_epoch_ms

_TYPE_LABELS = {
    ObservationType.VIOLATION: "Violation",
    ObservationType.RISK: "Risk Behavior",
    ObservationType.INFRASTRUCTURE: "Infrastructure",
}

_STATUS_EXPLANATIONS = {
    ObservationStatus.RESOLVED: "Marked resolved following infrastructure adjustment in this area.",
    ObservationStatus.ACKNOWLEDGED: "Acknowledged and under continued monitoring by traffic management.",
    ObservationStatus.PENDING: "Currently in institutional review queue.",
    ObservationStatus.DISMISSED: "Reviewed and determined non-actionable based on pattern analysis.",
    ObservationStatus.UNDER_REVIEW: "Under evaluation by municipal traffic authority.",
}

_OUTCOMES: dict[ObservationStatus, dict[str, Optional[str]]] = {
    ObservationStatus.RESOLVED: {
        "change": "Road marking restoration",
        "authority": "Municipal roads division",
    },
    ObservationStatus.ACKNOWLEDGED: {
        "change": "Monitoring protocol active",
        "authority": "Traffic management cell",
    },
    ObservationStatus.DISMISSED: {
        "change": "Pattern analysis determined no systemic intervention required at this time.",
        "authority": None,
    },
}

_TREND_LABELS = {
    Trend.INCREASING: "↑ Rising",
    Trend.DECLINING: "↓ Declining",
    Trend.STABLE: "→ Stable",
}


def type_label(obs_type: ObservationType) -> str:
    return _TYPE_LABELS.get(obs_type, "Observation")


def status_explanation(status: ObservationStatus) -> str:
    return _STATUS_EXPLANATIONS.get(status, "Status under review.")


def outcome_details(status: ObservationStatus) -> Optional[dict[str, Optional[str]]]:
    """What changed after review, or None for statuses with no outcome yet."""
    details = _OUTCOMES.get(status)
    return dict(details) if details else None


def trend_label(trend: Trend) -> str:
    return _TREND_LABELS[trend]


def days_ago(timestamp_ms: int, now_ms: int) -> int:
    """Whole days elapsed; future timestamps count as today."""
    diff = now_ms - timestamp_ms
    if diff < 0:
        return 0
    return diff // MS_PER_DAY


def relative_time(timestamp_ms: int, now_ms: int) -> str:
    n = days_ago(timestamp_ms, now_ms)
    if n == 0:
        return "Today"
    if n == 1:
        return "1 day ago"
    return f"{n} days ago"


def time_of_day_bucket(timestamp_ms: int) -> str:
    """Traffic period of the (UTC) hour an observation was made."""
    hour = from_epoch_ms(timestamp_ms).hour
    if hour < 6:
        return "Early morning"
    if hour < 10:
        return "Morning peak"
    if hour < 16:
        return "Midday"
    if hour < 20:
        return "Evening peak"
    return "Night hours"
