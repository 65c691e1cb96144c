from __future__ import annotations

import random

from map_generator import MapGenerator
from map_validator import MapValidator
from models import MapConfig, MapNode, PathMap


def _straight(rounds: int, roads: int) -> PathMap:
    m = PathMap(
        nodes_by_round=[
            [MapNode(round=r, road=k, position=(float(r), float(-k))) for k in range(roads)]
            for r in range(rounds)
        ]
    )
    for r in range(rounds - 1):
        for k in range(roads):
            m.node(r, k).add_connection(m.node(r + 1, k))
    return m


def test_generated_maps_are_valid():
    gen = MapGenerator(MapConfig(rounds=10, roads=3, additional_connector_probability=0.5), random.Random(0))
    validator = MapValidator(rounds=10, roads=3)
    for _ in range(10):
        assert validator.is_valid(gen.regenerate())


def test_straight_map_is_valid():
    assert MapValidator().problems(_straight(4, 3)) == []


def test_detects_crossing():
    m = _straight(3, 2)
    m.node(1, 0).add_connection(m.node(2, 1))
    m.node(1, 1).add_connection(m.node(2, 0))
    problems = MapValidator().problems(m)
    assert problems == ["crossing connectors between roads 0 and 1 after round 1"]


def test_detects_duplicates_and_bad_steps():
    m = _straight(3, 3)
    m.node(0, 0).next_nodes.append(m.node(1, 0))
    m.node(0, 0).next_nodes.append(m.node(2, 0))
    m.node(0, 2).next_nodes.append(m.node(1, 0))
    problems = MapValidator().problems(m)
    assert "duplicate connector MapNode(0-0) -> MapNode(1-0)" in problems
    assert "connector MapNode(0-0) -> MapNode(2-0) does not advance one round" in problems
    assert "connector MapNode(0-2) -> MapNode(1-0) skips a road" in problems


def test_detects_dead_end_and_unreachable_end():
    m = _straight(3, 2)
    m.node(1, 1).next_nodes.clear()
    problems = MapValidator().problems(m)
    assert "MapNode(1-1) has no outgoing connector" in problems
    assert "MapNode(0-1) cannot reach round 2" in problems
    assert not any("MapNode(0-0)" in p for p in problems)


def test_detects_foreign_node():
    m = _straight(2, 1)
    stranger = MapNode(round=1, road=0, position=(0.0, 0.0))
    m.node(0, 0).next_nodes.append(stranger)
    assert "connector MapNode(0-0) -> MapNode(1-0) leaves the map" in MapValidator().problems(m)


def test_detects_shape_problems():
    m = _straight(3, 2)
    assert MapValidator(rounds=4, roads=2).problems(m) == ["map has 3 rounds, expected 4"]

    m.nodes_by_round[1].pop()
    assert MapValidator().problems(m) == ["round 1 has 1 roads, expected 2"]

    one = _straight(1, 2)
    assert MapValidator().problems(one) == ["map has 1 rounds, need at least 2"]


def test_detects_misplaced_node():
    m = _straight(2, 2)
    row = m.nodes_by_round[1]
    row[0], row[1] = row[1], row[0]
    problems = MapValidator().problems(m)
    assert "MapNode(1-1) stored at (1-0)" in problems
