"""Abstract base for corpus adapters.

Corpus adapters normalise raw records from heterogeneous upstream feeds
into the canonical Observation model.

Architectural rules:
    1. Adapters must NOT mutate the incoming record dict.
    2. adapt() must return a fully valid Observation or raise ValueError.
    3. Identifying media metadata never survives adaptation.
    4. Adapters map fields; filtering and analysis happen downstream.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any

from road_commons.domain.observation import Observation


class ObservationAdapter(ABC):
    """Base class for converting raw feed records into Observations."""

    @abstractmethod
    def can_handle(self, raw: dict[str, Any]) -> bool:
        """Return True if this adapter knows how to translate *raw*.

        Must be a fast, non-destructive check (e.g. key presence).
        """
        ...

    @abstractmethod
    def adapt(self, raw: dict[str, Any]) -> Observation:
        """Translate a raw record into a validated Observation.

        Raises:
            ValueError: If the record cannot be normalised.
        """
        ...

    @property
    @abstractmethod
    def source_name(self) -> str:
        ...


def media_fields(raw_media: Any, source: str) -> dict[str, Any] | None:
    """Reduce an upstream media object to ``kind`` and ``url``.

    Feeds name the kind either ``type`` or ``kind``.  Anything that is not
    a mapping is rejected rather than guessed at.
    """
    if not raw_media:
        return None
    if not isinstance(raw_media, dict):
        raise ValueError(f"{source} media must be an object, got {type(raw_media).__name__}")
    return {"kind": raw_media.get("type") or raw_media.get("kind"), "url": raw_media.get("url")}
