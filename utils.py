from __future__ import annotations

import math
import random
from typing import Any, Dict, MutableSequence, TypeVar

from game_types import Color, Vec2

T = TypeVar("T")


def clamp_int(v: int, lo: int, hi: int) -> int:
    """Clamp an integer value into the inclusive range [lo, hi]."""
    return lo if v < lo else hi if v > hi else v


def as_color(value: Any, default: Color) -> Color:
    """Parse a value into an RGB color tuple.

    Args:
        value: A list/tuple-like value with at least 3 items (r, g, b).
        default: The color to return if parsing fails.

    Returns:
        A clamped (r, g, b) tuple in the range [0, 255].
    """
    if isinstance(value, (list, tuple)) and len(value) >= 3:
        r = clamp_int(int(value[0]), 0, 255)
        g = clamp_int(int(value[1]), 0, 255)
        b = clamp_int(int(value[2]), 0, 255)
        return (r, g, b)
    return default


def apply_color_mode(color: Color, color_mode: str) -> Color:
    """Return the color as-is (multicolor) or as its luminance gray."""
    if color_mode != "gray":
        return color
    lum = int(round(0.299 * color[0] + 0.587 * color[1] + 0.114 * color[2]))
    lum = clamp_int(lum, 0, 255)
    return (lum, lum, lum)


def deep_get(d: Dict[str, Any], path: str, default: Any) -> Any:
    """Get a nested value from a dict using a dotted path.

    Args:
        d: Source dictionary.
        path: Dot-separated key path (e.g. "window.width").
        default: Value to return if any path segment is missing.

    Returns:
        The found value or default.
    """
    cur: Any = d
    for part in path.split("."):
        if not isinstance(cur, dict) or part not in cur:
            return default
        cur = cur[part]
    return cur


def deep_merge(base: Dict[str, Any], override: Dict[str, Any]) -> Dict[str, Any]:
    """Return a new dict with override recursively laid over base."""
    merged: Dict[str, Any] = dict(base)
    for key, value in override.items():
        if isinstance(value, dict) and isinstance(merged.get(key), dict):
            merged[key] = deep_merge(merged[key], value)
        else:
            merged[key] = value
    return merged


def shuffle(items: MutableSequence[T], rng: random.Random) -> None:
    """Shuffle items in place (Fisher-Yates) using only rng.randrange."""
    count = len(items)
    last = count - 1
    for i in range(last):
        r = rng.randrange(i, count)
        items[i], items[r] = items[r], items[i]


def random_in_disk(rng: random.Random, radius: float) -> Vec2:
    """Return a point drawn uniformly from a disk of the given radius."""
    dist = radius * math.sqrt(rng.random())
    angle = rng.uniform(0.0, 2.0 * math.pi)
    return (dist * math.cos(angle), dist * math.sin(angle))
