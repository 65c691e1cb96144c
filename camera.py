from __future__ import annotations

from dataclasses import dataclass
from typing import Tuple

import pygame

from game_types import Vec2
from models import PathMap


@dataclass(frozen=True)
class ViewTransform:
    """Maps world coordinates (y up) to screen pixels (y down)."""

    scale: float
    origin: pygame.Vector2  # world point drawn at screen_center
    screen_center: pygame.Vector2

    def world_to_screen(self, point: Vec2) -> Tuple[int, int]:
        sx = self.screen_center.x + (point[0] - self.origin.x) * self.scale
        sy = self.screen_center.y - (point[1] - self.origin.y) * self.scale
        return (int(round(sx)), int(round(sy)))


def fit_view(
    bounds: Tuple[float, float, float, float],
    window_w: int,
    window_h: int,
    margin: int,
) -> ViewTransform:
    """Return a transform that fits the world bounds inside the window margins."""
    min_x, min_y, max_x, max_y = bounds
    world_w = max(max_x - min_x, 1e-6)
    world_h = max(max_y - min_y, 1e-6)
    avail_w = max(1, window_w - margin * 2)
    avail_h = max(1, window_h - margin * 2)
    scale = min(avail_w / world_w, avail_h / world_h)
    return ViewTransform(
        scale=scale,
        origin=pygame.Vector2((min_x + max_x) / 2, (min_y + max_y) / 2),
        screen_center=pygame.Vector2(window_w / 2, window_h / 2),
    )


def view_for_map(path_map: PathMap, window_w: int, window_h: int, margin: int) -> ViewTransform:
    return fit_view(path_map.bounds(), window_w, window_h, margin)
