"""Seeded mock corpus — deterministic observations around Mumbai.

The pseudo-random sequence is held in an explicit SeededRandom object that
callers create and pass in.  Two generators built from the same seed and
the same "now" produce identical corpora.
"""

from __future__ import annotations

import math
from typing import Sequence, TypeVar

from road_commons.domain.enums import MediaKind, ObservationStatus, ObservationType
from road_commons.domain.observation import Media, Observation
from road_commons.foundation.clock import MS_PER_DAY
from road_commons.foundation.identifiers import observation_id

T = TypeVar("T")

DEFAULT_SEED = 12345

BASE_LOCATIONS: tuple[tuple[str, float, float], ...] = (
    ("South Mumbai", 19.076, 72.8777),
    ("Colaba", 19.0176, 72.8561),
    ("Bandra", 19.0896, 72.8656),
    ("Andheri", 19.1136, 72.8697),
    ("Thane", 19.2183, 72.9781),
)

SAMPLE_MEDIA: tuple[Media | None, ...] = (
    Media(kind=MediaKind.IMAGE, url="https://images.unsplash.com/photo-1449824913935-59a10b8d2000?w=400"),
    Media(kind=MediaKind.IMAGE, url="https://images.unsplash.com/photo-1502877338535-766e1452684a?w=400"),
    Media(kind=MediaKind.IMAGE, url="https://images.unsplash.com/photo-1486299267070-83823f5448dd?w=400"),
    Media(kind=MediaKind.VIDEO, url="https://www.w3schools.com/html/mov_bbb.mp4"),
    Media(kind=MediaKind.IMAGE, url="https://images.unsplash.com/photo-1568605117036-5fe5e7bab0b7?w=400"),
    None,
    None,
)

_STATUSES = (
    ObservationStatus.UNDER_REVIEW,
    ObservationStatus.ACKNOWLEDGED,
    ObservationStatus.RESOLVED,
    ObservationStatus.DISMISSED,
    ObservationStatus.PENDING,
)

# Degrees of jitter around a base location (±half on each axis)
_JITTER_DEG = 0.05
_HISTORY_DAYS = 30
_REVIEW_LAG_DAYS = 15
_MAX_RESPONSE_DAYS = 14


class SeededRandom:
    """Deterministic sin-based sequence in [0, 1).

    Each call to ``next()`` consumes one step of the sequence.
    """

    __slots__ = ("seed",)

    def __init__(self, seed: int = DEFAULT_SEED) -> None:
        self.seed = seed

    def next(self) -> float:
        x = math.sin(self.seed) * 10000
        self.seed += 1
        return x - math.floor(x)

    def choice(self, items: Sequence[T]) -> T:
        return items[math.floor(self.next() * len(items))]


def generate_observations(
    count: int,
    rng: SeededRandom,
    now_ms: int,
) -> list[Observation]:
    """Generate *count* observations ending at *now_ms*."""
    types = tuple(ObservationType)
    corpus: list[Observation] = []

    for i in range(count):
        _, base_lat, base_lng = rng.choice(BASE_LOCATIONS)
        media = rng.choice(SAMPLE_MEDIA)
        timestamp = math.floor(now_ms - rng.next() * _HISTORY_DAYS * MS_PER_DAY)
        obs_type = rng.choice(types)
        lat = base_lat + (rng.next() - 0.5) * _JITTER_DEG
        lng = base_lng + (rng.next() - 0.5) * _JITTER_DEG
        status = rng.choice(_STATUSES)
        reviewed_at = math.floor(timestamp + rng.next() * _REVIEW_LAG_DAYS * MS_PER_DAY)
        response_time = math.floor(rng.next() * _MAX_RESPONSE_DAYS) + 1
        has_multiple = rng.next() > 0.7

        pending = status is ObservationStatus.PENDING
        corpus.append(
            Observation(
                id=observation_id(i),
                type=obs_type,
                lat=lat,
                lng=lng,
                timestamp=timestamp,
                status=status,
                reviewed_at=None if pending else reviewed_at,
                response_time=None if pending else response_time,
                media=media,
                has_multiple_media=has_multiple,
            )
        )

    return corpus
