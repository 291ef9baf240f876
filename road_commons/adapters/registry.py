"""Adapter Registry — routes raw corpus records to the adapter for their format.

Adapters are tried in registration order and the first whose can_handle()
accepts the record translates it.  Every failure inside a matched adapter
surfaces as AdaptationError carrying the source, the record id (when the
record has one) and the reason, so a lenient loader can skip the record
and keep going.
"""

from __future__ import annotations

import logging
from collections import Counter
from typing import Any

from road_commons.adapters.base import ObservationAdapter
from road_commons.adapters.geojson import GeoJsonFeatureAdapter
from road_commons.adapters.observatory_feed import ObservatoryFeedAdapter
from road_commons.domain.observation import Observation
from road_commons.errors import ObservatoryError

logger = logging.getLogger(__name__)

# Failures an adapter can raise while reading an arbitrary record dict.
_RECORD_FAULTS = (ValueError, KeyError, TypeError, AttributeError)


class SourceTally:
    """Accepted/rejected record counts for one feed format."""

    __slots__ = ("source", "accepted", "rejected", "reasons")

    def __init__(self, source: str) -> None:
        self.source = source
        self.accepted = 0
        self.rejected = 0
        self.reasons: Counter[str] = Counter()

    def to_dict(self) -> dict[str, Any]:
        return {
            "source": self.source,
            "accepted": self.accepted,
            "rejected": self.rejected,
            "reasons": dict(self.reasons),
        }


class NoAdapterFoundError(ObservatoryError):
    """No registered adapter recognises the record's format."""


class AdaptationError(ObservatoryError):
    """A recognised record could not be turned into an Observation."""

    def __init__(self, source: str, reason: str, record_id: str | None = None) -> None:
        self.source = source
        self.reason = reason
        self.record_id = record_id
        where = f" record {record_id}" if record_id else " record"
        super().__init__(f"{source}{where} rejected: {reason}")


class AdapterRegistry:
    """Ordered adapters plus per-source ingestion tallies."""

    def __init__(self) -> None:
        self._adapters: list[ObservationAdapter] = []
        self._tallies: dict[str, SourceTally] = {}

    def register(self, adapter: ObservationAdapter) -> None:
        self._adapters.append(adapter)
        self._tallies[adapter.source_name] = SourceTally(adapter.source_name)
        logger.info("Registered corpus adapter: %s", adapter.source_name)

    def adapt(self, raw: dict[str, Any]) -> Observation:
        """Translate *raw* with the first adapter that recognises it.

        Raises:
            NoAdapterFoundError: If no adapter recognises the record.
            AdaptationError: If the recognising adapter cannot translate it.
        """
        adapter = next((a for a in self._adapters if a.can_handle(raw)), None)
        if adapter is None:
            raise NoAdapterFoundError(
                f"No adapter recognises record with keys: {sorted(raw.keys())}"
            )

        tally = self._tallies[adapter.source_name]
        try:
            observation = adapter.adapt(raw)
        except _RECORD_FAULTS as exc:
            tally.rejected += 1
            tally.reasons[type(exc).__name__] += 1
            raise AdaptationError(adapter.source_name, str(exc), _record_id(raw)) from exc

        tally.accepted += 1
        return observation

    @property
    def adapter_names(self) -> list[str]:
        return [a.source_name for a in self._adapters]

    @property
    def stats(self) -> list[dict[str, Any]]:
        return [t.to_dict() for t in self._tallies.values()]

    @property
    def total_accepted(self) -> int:
        return sum(t.accepted for t in self._tallies.values())

    @property
    def total_rejected(self) -> int:
        return sum(t.rejected for t in self._tallies.values())


def default_registry() -> AdapterRegistry:
    """Registry with every built-in adapter, GeoJSON first."""
    registry = AdapterRegistry()
    registry.register(GeoJsonFeatureAdapter())
    registry.register(ObservatoryFeedAdapter())
    return registry


def _record_id(raw: dict[str, Any]) -> str | None:
    props = raw.get("properties")
    value = props.get("id") if isinstance(props, dict) else None
    value = value or raw.get("id")
    return str(value) if value else None
