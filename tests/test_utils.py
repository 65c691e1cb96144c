from __future__ import annotations

import math
import random

from utils import apply_color_mode, as_color, deep_get, deep_merge, random_in_disk, shuffle


def test_shuffle_is_a_permutation():
    items = list(range(20))
    shuffle(items, random.Random(3))
    assert sorted(items) == list(range(20))


def test_shuffle_is_deterministic_for_a_seed():
    a = list(range(10))
    b = list(range(10))
    shuffle(a, random.Random(42))
    shuffle(b, random.Random(42))
    assert a == b


def test_shuffle_handles_empty_and_single():
    empty: list = []
    shuffle(empty, random.Random(0))
    assert empty == []
    one = ["x"]
    shuffle(one, random.Random(0))
    assert one == ["x"]


def test_shuffle_reaches_every_order_of_three():
    rng = random.Random(7)
    seen = set()
    for _ in range(300):
        items = [0, 1, 2]
        shuffle(items, rng)
        seen.add(tuple(items))
    assert len(seen) == 6


class _FixedRandom:
    """Only randrange is needed by shuffle."""

    def __init__(self) -> None:
        self.calls = []

    def randrange(self, start: int, stop: int) -> int:
        self.calls.append((start, stop))
        return stop - 1


def test_shuffle_only_needs_randrange():
    rng = _FixedRandom()
    items = ["a", "b", "c", "d"]
    shuffle(items, rng)  # type: ignore[arg-type]
    assert rng.calls == [(0, 4), (1, 4), (2, 4)]
    assert sorted(items) == ["a", "b", "c", "d"]


def test_random_in_disk_stays_inside_radius():
    rng = random.Random(1)
    for _ in range(500):
        x, y = random_in_disk(rng, 2.5)
        assert math.hypot(x, y) <= 2.5 + 1e-9


def test_random_in_disk_zero_radius():
    assert random_in_disk(random.Random(1), 0.0) == (0.0, 0.0)


def test_deep_get_and_merge():
    base = {"map": {"rounds": 10, "roads": 3}, "window": {"width": 800}}
    merged = deep_merge(base, {"map": {"seed": 5}, "window": {"width": 640}})
    assert merged == {"map": {"rounds": 10, "roads": 3, "seed": 5}, "window": {"width": 640}}
    assert base["map"] == {"rounds": 10, "roads": 3}
    assert deep_get(merged, "map.seed", None) == 5
    assert deep_get(merged, "map.missing", "d") == "d"


def test_colors():
    assert as_color([300, -5, 10], (0, 0, 0)) == (255, 0, 10)
    assert as_color("red", (1, 2, 3)) == (1, 2, 3)
    assert apply_color_mode((10, 20, 30), "multicolor") == (10, 20, 30)
    r, g, b = apply_color_mode((255, 0, 0), "gray")
    assert r == g == b
