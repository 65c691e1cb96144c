from __future__ import annotations

from typing import List, Tuple

import pygame

from camera import ViewTransform
from game_types import Color
from models import Connector, MapNode, PathMap, RenderConfig


def _vertical_gradient_surface(
    size: Tuple[int, int], top: Color, bottom: Color
) -> pygame.Surface:
    """Create a vertical gradient surface from top to bottom."""
    w, h = size
    grad = pygame.Surface((w, h), pygame.SRCALPHA)

    def lerp(a: int, b: int, t: float) -> int:
        return int(a + (b - a) * t)

    for y in range(h):
        t = y / max(1, h - 1)
        color = (
            lerp(top[0], bottom[0], t),
            lerp(top[1], bottom[1], t),
            lerp(top[2], bottom[2], t),
        )
        grad.fill(color, pygame.Rect(0, y, w, 1))
    return grad


def _draw_gradient_circle(
    surf: pygame.Surface, center: Tuple[int, int], radius: int, color: Color
) -> None:
    """Draw a circle with a smooth vertical gradient derived from its base color."""

    def clamp(v: int) -> int:
        return max(0, min(255, v))

    top = (
        clamp(int(color[0] * 1.05)),
        clamp(int(color[1] * 1.05)),
        clamp(int(color[2] * 1.05)),
    )
    bottom = (
        clamp(int(color[0] * 0.55)),
        clamp(int(color[1] * 0.55)),
        clamp(int(color[2] * 0.55)),
    )

    size = radius * 2 + 1
    grad = _vertical_gradient_surface((size, size), top, bottom)
    mask = pygame.Surface((size, size), pygame.SRCALPHA)
    pygame.draw.circle(mask, (255, 255, 255), (radius, radius), radius)
    grad.blit(mask, (0, 0), special_flags=pygame.BLEND_RGBA_MULT)
    surf.blit(grad, (center[0] - radius, center[1] - radius))


def node_color(node: MapNode, path_map: PathMap, cfg: RenderConfig) -> Color:
    """First round uses the start color, last round the end color."""
    if node.round == 0:
        return cfg.start_color
    if node.round == path_map.rounds - 1:
        return cfg.end_color
    return cfg.node_color


def draw_connectors(
    surf: pygame.Surface,
    connectors: List[Connector],
    view: ViewTransform,
    cfg: RenderConfig,
) -> None:
    for connector in connectors:
        a = view.world_to_screen(connector.start.position)
        b = view.world_to_screen(connector.end.position)
        pygame.draw.line(surf, cfg.connector_color, a, b, cfg.connector_width)


def draw_nodes(
    surf: pygame.Surface, path_map: PathMap, view: ViewTransform, cfg: RenderConfig
) -> None:
    for node in path_map.iter_nodes():
        center = view.world_to_screen(node.position)
        color = node_color(node, path_map, cfg)
        if cfg.mode == "gradient":
            _draw_gradient_circle(surf, center, cfg.node_radius, color)
        else:
            pygame.draw.circle(surf, color, center, cfg.node_radius)


def draw_labels(
    surf: pygame.Surface,
    path_map: PathMap,
    connectors: List[Connector],
    view: ViewTransform,
    cfg: RenderConfig,
    label_font: pygame.font.Font,
) -> None:
    """Label nodes with (round-road) and lateral connectors at their midpoint."""
    for node in path_map.iter_nodes():
        x, y = view.world_to_screen(node.position)
        text = label_font.render(f"{node.round}-{node.road}", True, cfg.label_color)
        rect = text.get_rect()
        rect.centerx = x
        rect.bottom = y - cfg.node_radius - 2
        surf.blit(text, rect.topleft)

    for connector in connectors:
        if not connector.is_lateral:
            continue
        a = view.world_to_screen(connector.start.position)
        b = view.world_to_screen(connector.end.position)
        text = label_font.render(connector.label, True, cfg.connector_color)
        surf.blit(text, text.get_rect(center=((a[0] + b[0]) // 2, (a[1] + b[1]) // 2)))


def draw_hud(
    surf: pygame.Surface,
    hud_font: pygame.font.Font,
    path_map: PathMap,
    connector_count: int,
    cfg: RenderConfig,
) -> None:
    """Draw HUD text."""
    bar_height = hud_font.get_height() + 12
    bar = pygame.Surface((surf.get_width(), bar_height), pygame.SRCALPHA)
    bar.fill((0, 0, 0, 230))
    surf.blit(bar, (0, 0))

    mode_label = "Gradient" if cfg.mode == "gradient" else "Flat"
    color_label = "Gray" if cfg.color_mode == "gray" else "Multicolor"
    labels_label = "On" if cfg.show_labels else "Off"
    txt = (
        f"{path_map.rounds} rounds x {path_map.roads} roads | Connectors: {connector_count} "
        f"| Mode (T): {mode_label} | Color (C): {color_label} | Labels (L): {labels_label} "
        "| SPACE: new map | ESC: quit"
    )
    surf.blit(hud_font.render(txt, True, (255, 255, 255)), (12, 6))


class MapRenderer:
    """Renderer that owns fonts and draws a PathMap."""

    def __init__(
        self,
        window_w: int,
        window_h: int,
        font: pygame.font.Font,
        label_font: pygame.font.Font,
    ) -> None:
        self.update_window_size(window_w, window_h)
        self.update_fonts(font, label_font)

    def update_window_size(self, window_w: int, window_h: int) -> None:
        self.window_w = window_w
        self.window_h = window_h

    def update_fonts(self, font: pygame.font.Font, label_font: pygame.font.Font) -> None:
        """Refresh stored fonts and derived monospace variants."""
        self.font = font
        self.label_font = label_font
        self.hud_font = pygame.font.SysFont("monospace", max(10, font.get_height() - 6))

    def draw_frame(
        self,
        screen: pygame.Surface,
        bg: Color,
        path_map: PathMap,
        view: ViewTransform,
        cfg: RenderConfig,
    ) -> None:
        """Draw a full frame without presenting it."""
        screen.fill(bg)
        connectors = path_map.connectors()
        draw_connectors(screen, connectors, view, cfg)
        draw_nodes(screen, path_map, view, cfg)
        if cfg.show_labels:
            draw_labels(screen, path_map, connectors, view, cfg, self.label_font)
        draw_hud(screen, self.hud_font, path_map, len(connectors), cfg)

    def render_frame(
        self,
        screen: pygame.Surface,
        bg: Color,
        path_map: PathMap,
        view: ViewTransform,
        cfg: RenderConfig,
    ) -> None:
        """Render and present a full frame."""
        self.draw_frame(screen, bg, path_map, view, cfg)
        pygame.display.flip()
