"""PatternFormatter — deterministic plain-text summaries of pattern state.

Produces consistent, structured output suitable for logs, API responses
and debugging.  It only restates what the snapshot already contains.
"""

from __future__ import annotations

from road_commons.domain.pattern import CityWidePattern, LocalPattern, PatternState
from road_commons.domain.stats import ObservationStats
from road_commons.explain.content import trend_label, type_label


class PatternFormatter:
    """Plain-text rendering of pattern snapshots and aggregate stats."""

    @staticmethod
    def format_plain(pattern: PatternState) -> str:
        if isinstance(pattern, CityWidePattern):
            return PatternFormatter._city_wide(pattern)
        if isinstance(pattern, LocalPattern):
            return PatternFormatter._local(pattern)
        return "No pattern active"

    @staticmethod
    def format_stats(stats: ObservationStats) -> str:
        return (
            f"OBSERVATIONS: {stats.total} | "
            f"REVIEWED: {stats.review_rate}% | "
            f"AVG RESPONSE: {stats.avg_response_time}d"
        )

    @staticmethod
    def _city_wide(pattern: CityWidePattern) -> str:
        s = pattern.stats
        lines = [f"City-wide pattern: {type_label(pattern.reference_type)}"]
        lines.append("=" * 50)
        lines.append(f"Observations: {s.total}")
        lines.append(f"Affected zones: {s.affected_zones}")
        lines.append(f"Trend: {trend_label(s.trend)} ({s.recent_count} recent / {s.older_count} earlier)")
        return "\n".join(lines)

    @staticmethod
    def _local(pattern: LocalPattern) -> str:
        lines = [f"Local pattern: {type_label(pattern.reference_type)}"]
        lines.append("=" * 50)
        lines.append(
            f"Within {pattern.radius_meters:.0f} m of "
            f"({pattern.center.lat:.4f}, {pattern.center.lng:.4f})"
        )
        s = pattern.stats
        if s is None:
            lines.append("No matching observations nearby")
            return "\n".join(lines)
        lines.append(f"Observations: {s.count}")
        lines.append(f"Time span: {s.time_span_days} day(s)")
        lines.append(f"Trend: {trend_label(s.trend)} ({s.recent_count} recent / {s.older_count} earlier)")
        return "\n".join(lines)
