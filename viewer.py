from __future__ import annotations

import logging
from dataclasses import replace
from typing import Any, Dict, Optional

import pygame

from camera import ViewTransform, view_for_map
from config_parsing import parse_color_mode, parse_map_config, parse_render_config
from map_generator import MapGenerator
from models import PathMap
from rendering import MapRenderer
from utils import apply_color_mode, as_color, deep_get

logger = logging.getLogger(__name__)


class MapViewer:
    """Window that shows a generated map and rebuilds it on SPACE."""

    def __init__(self, cfg: Dict[str, Any]) -> None:
        self.cfg = cfg
        # Bad map settings must fail before a window opens.
        self.map_cfg = parse_map_config(cfg.get("map", {}))
        self.generator = MapGenerator(self.map_cfg)

        self.window_w = int(deep_get(cfg, "window.width", 1000))
        self.window_h = int(deep_get(cfg, "window.height", 600))
        self.windowed_size = (self.window_w, self.window_h)
        self.title = str(deep_get(cfg, "window.title", "Path Map"))
        self.fullscreen = bool(deep_get(cfg, "window.fullscreen", False))

        self.color_mode = parse_color_mode(deep_get(cfg, "render.color", None))
        self.render_mode: Optional[str] = None
        self.show_labels: Optional[bool] = None
        self._refresh_render_config()

        self._init_pygame()
        self._init_ui()
        self.renderer = MapRenderer(self.window_w, self.window_h, self.font, self.label_font)

        self.path_map: PathMap = self.generator.generate()
        self.view = self._fit_view()

    # ----------------------------
    # Initialization
    # ----------------------------

    def _init_pygame(self) -> None:
        """Initialize pygame and create window + clock."""
        pygame.init()
        self._apply_display_mode()
        self.clock = pygame.time.Clock()

    def _apply_display_mode(self) -> None:
        """Create or recreate the display surface with the current mode."""
        flags = pygame.FULLSCREEN if self.fullscreen else 0
        self.screen = pygame.display.set_mode((self.window_w, self.window_h), flags)
        # Capture the actual size in case the platform adjusted it.
        self.window_w, self.window_h = self.screen.get_size()
        if hasattr(self, "renderer"):
            self.renderer.update_window_size(self.window_w, self.window_h)
        if hasattr(self, "path_map"):
            self.view = self._fit_view()
        pygame.display.set_caption(self.title)
        logger.debug("display %sx%s fullscreen=%s", self.window_w, self.window_h, self.fullscreen)

    def _init_ui(self) -> None:
        """Initialize UI resources."""
        self.font = pygame.font.Font(None, 28)
        self.label_font = pygame.font.Font(None, 20)

    def _refresh_render_config(self) -> None:
        """Recompute colors and render flags for the current toggles."""
        raw_render = self.cfg.get("render", {})
        render_cfg = parse_render_config(raw_render, color_mode=self.color_mode)
        overrides: Dict[str, Any] = {}
        if self.render_mode is not None:
            overrides["mode"] = self.render_mode
        if self.show_labels is not None:
            overrides["show_labels"] = self.show_labels
        if overrides:
            render_cfg = replace(render_cfg, **overrides)
        self.render_cfg = render_cfg
        self.render_mode = render_cfg.mode
        self.show_labels = render_cfg.show_labels

        base_bg = as_color(deep_get(self.cfg, "window.bg", [18, 20, 28]), (18, 20, 28))
        self.bg = apply_color_mode(base_bg, self.color_mode)

    def _fit_view(self) -> ViewTransform:
        return view_for_map(
            self.path_map, self.window_w, self.window_h, self.render_cfg.margin
        )

    # ----------------------------
    # Map management
    # ----------------------------

    def regenerate(self) -> None:
        """Replace the current map with a freshly generated one."""
        self.path_map = self.generator.regenerate()
        self.view = self._fit_view()

    # ----------------------------
    # Events / loop
    # ----------------------------

    def _handle_keydown(self, key: int) -> bool:
        """Handle KEYDOWN events.

        Returns:
            False if the viewer should exit, True otherwise.
        """
        if key == pygame.K_ESCAPE:
            return False
        if key == pygame.K_SPACE:
            self.regenerate()
        if key == pygame.K_l:
            self._toggle_labels()
        if key == pygame.K_t:
            self._toggle_render_mode()
        if key == pygame.K_c:
            self._toggle_color_mode()
        if key in (pygame.K_F11, pygame.K_f):
            self._toggle_fullscreen()
        return True

    def _toggle_labels(self) -> None:
        self.show_labels = not self.show_labels
        self._refresh_render_config()

    def _toggle_render_mode(self) -> None:
        """Toggle node style between flat and gradient."""
        self.render_mode = "gradient" if self.render_mode == "flat" else "flat"
        self._refresh_render_config()

    def _toggle_color_mode(self) -> None:
        """Toggle render color mode between multicolor and gray."""
        self.color_mode = "gray" if self.color_mode == "multicolor" else "multicolor"
        self._refresh_render_config()

    def _toggle_fullscreen(self) -> None:
        """Toggle between windowed and fullscreen display modes."""
        self.fullscreen = not self.fullscreen
        if self.fullscreen:
            # Remember the last windowed size so we can restore it.
            self.windowed_size = (self.window_w, self.window_h)
            info = pygame.display.Info()
            self.window_w = info.current_w
            self.window_h = info.current_h
        else:
            self.window_w, self.window_h = self.windowed_size
        self._apply_display_mode()

    def _handle_events(self) -> bool:
        """Process pygame events.

        Returns:
            False if the viewer should exit, True otherwise.
        """
        for e in pygame.event.get():
            if e.type == pygame.QUIT:
                return False
            if e.type == pygame.KEYDOWN:
                if not self._handle_keydown(e.key):
                    return False
        return True

    def run(self) -> None:
        """Run the main loop."""
        running = True
        while running:
            self.clock.tick(60)
            running = self._handle_events()
            self.renderer.render_frame(
                screen=self.screen,
                bg=self.bg,
                path_map=self.path_map,
                view=self.view,
                cfg=self.render_cfg,
            )

        pygame.quit()
