"""Corpus providers — supply the immutable observation corpus once.

The engine never refreshes or paginates the corpus; a provider is asked
for it a single time when the session is built.
"""

from __future__ import annotations

import logging
from typing import Any, Iterable, Protocol

from road_commons.adapters.registry import (
    AdaptationError,
    AdapterRegistry,
    NoAdapterFoundError,
    default_registry,
)
from road_commons.corpus.generator import DEFAULT_SEED, SeededRandom, generate_observations
from road_commons.domain.observation import Observation
from road_commons.foundation.clock import now_ms as clock_now_ms

logger = logging.getLogger(__name__)


class CorpusProvider(Protocol):
    """Protocol for anything that can hand over the observation corpus."""

    def load(self) -> tuple[Observation, ...]:
        ...


class MockCorpusProvider:
    """Seeded synthetic corpus for demos and tests."""

    def __init__(
        self,
        count: int = 150,
        seed: int = DEFAULT_SEED,
        now_ms: int | None = None,
    ) -> None:
        self._count = count
        self._seed = seed
        self._now_ms = now_ms

    def load(self) -> tuple[Observation, ...]:
        now = clock_now_ms() if self._now_ms is None else self._now_ms
        corpus = generate_observations(self._count, SeededRandom(self._seed), now)
        logger.info("Generated mock corpus: %d observation(s), seed %d", len(corpus), self._seed)
        return tuple(corpus)


class RecordCorpusProvider:
    """Corpus built from raw feed records routed through an AdapterRegistry.

    Args:
        records: Raw record dicts (flat feed rows or GeoJSON features).
        registry: Adapter registry; defaults to every built-in adapter.
        strict: When True the first bad record aborts loading.  When False
                bad records are logged, counted in the registry stats and
                left out.
    """

    def __init__(
        self,
        records: Iterable[dict[str, Any]],
        registry: AdapterRegistry | None = None,
        strict: bool = True,
    ) -> None:
        self._records = list(records)
        self._registry = registry or default_registry()
        self._strict = strict

    @property
    def registry(self) -> AdapterRegistry:
        return self._registry

    def load(self) -> tuple[Observation, ...]:
        corpus: list[Observation] = []
        seen: set[str] = set()
        for raw in self._records:
            try:
                obs = self._registry.adapt(raw)
            except (NoAdapterFoundError, AdaptationError) as exc:
                if self._strict:
                    raise
                logger.warning("Skipping record: %s", exc)
                continue
            if obs.id in seen:
                if self._strict:
                    raise ValueError(f"duplicate observation id {obs.id}")
                logger.warning("Skipping duplicate observation id %s", obs.id)
                continue
            seen.add(obs.id)
            corpus.append(obs)

        logger.info(
            "Loaded corpus from %d record(s): %d accepted, %d rejected",
            len(self._records),
            self._registry.total_accepted,
            self._registry.total_rejected,
        )
        return tuple(corpus)
