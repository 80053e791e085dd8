"""Tests for reproducible candidate sampling."""

from __future__ import annotations

from gameshelf.catalog.fetcher import UniverseEntry
from gameshelf.catalog.sampler import sample


UNIVERSE = [UniverseEntry(id=index, name=f"App {index}") for index in range(100)]


def test_same_seed_gives_same_sample():
    first = sample(UNIVERSE, 20, "160")
    second = sample(UNIVERSE, 20, "160")

    assert first == second


def test_different_seeds_give_different_samples():
    assert sample(UNIVERSE, 20, "160") != sample(UNIVERSE, 20, "161")


def test_sample_has_no_duplicates_and_requested_size():
    picked = sample(UNIVERSE, 30, "seed")

    assert len(picked) == 30
    assert len({entry.id for entry in picked}) == 30
    assert all(entry in UNIVERSE for entry in picked)


def test_count_larger_than_universe_is_clamped():
    small = UNIVERSE[:7]

    picked = sample(small, 200, "160")

    assert len(picked) == 7
    assert sorted(entry.id for entry in picked) == [entry.id for entry in small]


def test_full_size_sample_is_a_permutation():
    picked = sample(UNIVERSE, len(UNIVERSE), "160")

    assert sorted(entry.id for entry in picked) == list(range(100))


def test_empty_inputs_return_empty_sample():
    assert sample([], 10, "160") == []
    assert sample(UNIVERSE, 0, "160") == []
    assert sample(UNIVERSE, -3, "160") == []
