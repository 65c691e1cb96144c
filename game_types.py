from __future__ import annotations

from typing import Tuple

Color = Tuple[int, int, int]
Vec2 = Tuple[float, float]
NodeId = Tuple[int, int]  # (round, road)
