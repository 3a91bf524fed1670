"""Tests for src/relic_raider/mechanics/rng.py."""
from __future__ import annotations

import random

import pytest

from relic_raider.mechanics import rng


class TestUniform:
    def test_within_range(self, seeded_rng):
        for _ in range(200):
            value = rng.uniform(3.0, 5.0)
            assert 3.0 <= value < 5.0

    def test_degenerate_range(self, seeded_rng):
        assert rng.uniform(2.0, 2.0) == 2.0


class TestRandint:
    def test_inclusive_bounds(self, seeded_rng):
        seen = {rng.randint(1, 3) for _ in range(200)}
        assert seen == {1, 2, 3}


class TestChance:
    def test_zero_never(self, seeded_rng):
        assert not any(rng.chance(0) for _ in range(100))

    def test_negative_never(self, seeded_rng):
        assert rng.chance(-0.5) is False

    def test_one_always(self, seeded_rng):
        assert all(rng.chance(1.0) for _ in range(100))

    def test_roughly_calibrated(self, seeded_rng):
        hits = sum(rng.chance(0.25) for _ in range(2000))
        assert 400 < hits < 600


class TestPick:
    def test_returns_member(self, seeded_rng):
        items = ["a", "b", "c"]
        assert rng.pick(items) in items

    def test_empty_raises(self):
        with pytest.raises(ValueError):
            rng.pick([])


class TestWeightedChoice:
    def test_zero_weight_never_picked(self, seeded_rng):
        picks = {rng.weighted_choice(["common", "never"], [1.0, 0.0]) for _ in range(200)}
        assert picks == {"common"}

    def test_heavier_weight_wins_more(self, seeded_rng):
        picks = [rng.weighted_choice(["heavy", "light"], [0.9, 0.1]) for _ in range(500)]
        assert picks.count("heavy") > picks.count("light")

    def test_all_zero_weights_still_picks(self, seeded_rng):
        assert rng.weighted_choice(["x", "y"], [0, 0]) in ("x", "y")

    def test_mismatched_lengths(self):
        with pytest.raises(ValueError):
            rng.weighted_choice(["x"], [0.5, 0.5])

    def test_reproducible_with_seed(self, seeded_rng):
        random.seed(7)
        first = [rng.weighted_choice("abcd", [1, 2, 3, 4]) for _ in range(20)]
        random.seed(7)
        second = [rng.weighted_choice("abcd", [1, 2, 3, 4]) for _ in range(20)]
        assert first == second
