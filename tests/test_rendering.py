from __future__ import annotations

import random
from dataclasses import replace

import pygame
import pytest

from camera import view_for_map
from config_parsing import parse_render_config
from map_generator import MapGenerator
from models import MapConfig
from rendering import MapRenderer, node_color

BG = (18, 20, 28)


@pytest.fixture
def renderer():
    pygame.font.init()
    yield MapRenderer(800, 500, pygame.font.Font(None, 28), pygame.font.Font(None, 20))
    pygame.font.quit()


def _setup(mode: str = "flat", show_labels: bool = False):
    path_map = MapGenerator(MapConfig(rounds=6, roads=3), random.Random(1)).generate()
    cfg = replace(parse_render_config({}), mode=mode, show_labels=show_labels)
    view = view_for_map(path_map, 800, 500, cfg.margin)
    return path_map, cfg, view


def test_node_colors_mark_first_and_last_round():
    path_map, cfg, _ = _setup()
    assert node_color(path_map.node(0, 1), path_map, cfg) == cfg.start_color
    assert node_color(path_map.node(5, 0), path_map, cfg) == cfg.end_color
    assert node_color(path_map.node(2, 2), path_map, cfg) == cfg.node_color


def test_flat_frame_draws_nodes_at_their_positions(renderer):
    path_map, cfg, view = _setup()
    screen = pygame.Surface((800, 500))
    renderer.draw_frame(screen, BG, path_map, view, cfg)
    for node in path_map.iter_nodes():
        center = view.world_to_screen(node.position)
        assert screen.get_at(center)[:3] == node_color(node, path_map, cfg)


def test_gradient_and_labels_draw_something(renderer):
    path_map, cfg, view = _setup(mode="gradient", show_labels=True)
    screen = pygame.Surface((800, 500))
    renderer.draw_frame(screen, BG, path_map, view, cfg)
    center = view.world_to_screen(path_map.node(3, 1).position)
    assert screen.get_at(center)[:3] != BG
