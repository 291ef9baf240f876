"""Tests for the seeded mock corpus."""

from __future__ import annotations

from road_commons.corpus.generator import (
    BASE_LOCATIONS,
    DEFAULT_SEED,
    SeededRandom,
    generate_observations,
)
from road_commons.corpus.provider import MockCorpusProvider
from road_commons.domain.enums import ObservationStatus
from road_commons.foundation.clock import MS_PER_DAY

from tests.test_observation import _NOW


class TestSeededRandom:
    def test_same_seed_same_sequence(self) -> None:
        a, b = SeededRandom(42), SeededRandom(42)
        assert [a.next() for _ in range(20)] == [b.next() for _ in range(20)]

    def test_values_in_unit_interval(self) -> None:
        rng = SeededRandom()
        for _ in range(500):
            value = rng.next()
            assert 0.0 <= value < 1.0

    def test_each_call_advances_seed(self) -> None:
        rng = SeededRandom(7)
        rng.next()
        rng.next()
        assert rng.seed == 9

    def test_choice_picks_member(self) -> None:
        rng = SeededRandom()
        items = ("a", "b", "c")
        assert all(rng.choice(items) in items for _ in range(100))

    def test_default_seed(self) -> None:
        assert SeededRandom().seed == DEFAULT_SEED == 12345


class TestGenerateObservations:
    def test_deterministic_for_seed_and_now(self) -> None:
        first = generate_observations(50, SeededRandom(99), _NOW)
        second = generate_observations(50, SeededRandom(99), _NOW)
        assert first == second

    def test_different_seed_differs(self) -> None:
        first = generate_observations(20, SeededRandom(1), _NOW)
        second = generate_observations(20, SeededRandom(2), _NOW)
        assert first != second

    def test_ids_are_zero_padded_and_unique(self) -> None:
        corpus = generate_observations(150, SeededRandom(), _NOW)
        assert corpus[0].id == "obs_0000"
        assert corpus[-1].id == "obs_0149"
        assert len({o.id for o in corpus}) == 150

    def test_timestamps_within_last_30_days(self) -> None:
        for obs in generate_observations(150, SeededRandom(), _NOW):
            assert _NOW - 30 * MS_PER_DAY <= obs.timestamp <= _NOW

    def test_coordinates_cluster_around_base_locations(self) -> None:
        for obs in generate_observations(150, SeededRandom(), _NOW):
            assert any(
                abs(obs.lat - lat) <= 0.025 and abs(obs.lng - lng) <= 0.025
                for _, lat, lng in BASE_LOCATIONS
            )

    def test_pending_records_carry_no_review_fields(self) -> None:
        corpus = generate_observations(150, SeededRandom(), _NOW)
        pending = [o for o in corpus if o.status is ObservationStatus.PENDING]
        assert pending
        assert all(o.response_time is None and o.reviewed_at is None for o in pending)

    def test_reviewed_records_have_response_time(self) -> None:
        corpus = generate_observations(150, SeededRandom(), _NOW)
        for obs in corpus:
            if obs.is_reviewed:
                assert 1 <= obs.response_time <= 14
                assert obs.reviewed_at >= obs.timestamp

    def test_zero_count(self) -> None:
        assert generate_observations(0, SeededRandom(), _NOW) == []


class TestMockCorpusProvider:
    def test_load_returns_tuple(self) -> None:
        corpus = MockCorpusProvider(count=10, now_ms=_NOW).load()
        assert isinstance(corpus, tuple)
        assert len(corpus) == 10

    def test_repeatable(self) -> None:
        provider = MockCorpusProvider(count=30, seed=5, now_ms=_NOW)
        assert provider.load() == provider.load()
