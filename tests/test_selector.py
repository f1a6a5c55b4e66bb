"""Tests for gamepick.selector (pick_random)."""

import random
from collections import Counter

import pytest

from gamepick.errors import EmptyLibraryError
from gamepick.models import GameRecord
from gamepick.selector import pick_random


def _library(size: int) -> tuple[GameRecord, ...]:
    return tuple(GameRecord(app_id=i + 1, name=f"Game {i + 1}") for i in range(size))


class TestPickRandom:
    def test_empty_library_raises(self):
        with pytest.raises(EmptyLibraryError):
            pick_random(())

    def test_single_game(self):
        library = _library(1)
        assert pick_random(library) is library[0]

    @pytest.mark.parametrize("size", [1, 2, 3, 7, 50])
    def test_always_within_library(self, size):
        library = _library(size)
        rng = random.Random(size)
        for _ in range(1000):
            assert pick_random(library, rng) in library

    def test_roughly_uniform(self):
        library = _library(5)
        rng = random.Random(20240101)
        trials = 10_000
        counts = Counter(pick_random(library, rng).app_id for _ in range(trials))
        assert set(counts) == {g.app_id for g in library}
        expected = trials / len(library)
        for app_id, count in counts.items():
            # 2000 expected, sd ~40; allow a wide margin
            assert abs(count - expected) < 250, (app_id, count)

    def test_uniform_with_module_random(self):
        library = _library(4)
        counts = Counter(pick_random(library).app_id for _ in range(10_000))
        for count in counts.values():
            assert 2000 < count < 3000

    def test_picks_are_independent(self):
        library = _library(2)
        rng = random.Random(7)
        picks = [pick_random(library, rng).app_id for _ in range(200)]
        repeats = sum(1 for a, b in zip(picks, picks[1:]) if a == b)
        assert repeats > 0

    def test_works_with_list(self):
        library = list(_library(3))
        assert pick_random(library) in library
