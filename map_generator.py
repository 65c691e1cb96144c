"""
map_generator.py

Builds the branching path graph for a level map.

A map is R rounds x K roads of jittered nodes. Every road is first connected
straight through from round 0 to round R-1, which guarantees reachability.
Lateral connectors between adjacent roads are then added at random, visiting
rounds and roads in a shuffled order, and never forming an "X" between the
same two rounds.
"""

from __future__ import annotations

import logging
import random
from typing import List, Optional

from models import Connector, MapConfig, MapNode, PathMap
from utils import random_in_disk, shuffle

logger = logging.getLogger(__name__)


# ----------------------------
# Nodes
# ----------------------------


class NodeGridBuilder:
    def __init__(self, rng: random.Random) -> None:
        self.rng = rng

    @staticmethod
    def round_spacing(cfg: MapConfig) -> float:
        return (cfg.x_max - cfg.x_min) / (cfg.rounds - 1)

    def build(self, cfg: MapConfig) -> List[List[MapNode]]:
        cfg.validate()
        dx = self.round_spacing(cfg)
        jitter = dx / 4.0

        nodes_by_round: List[List[MapNode]] = []
        for round_idx in range(cfg.rounds):
            base_x = cfg.x_min + dx * round_idx
            round_nodes: List[MapNode] = []
            for road in range(cfg.roads):
                ox, oy = random_in_disk(self.rng, jitter)
                round_nodes.append(
                    MapNode(
                        round=round_idx,
                        road=road,
                        position=(base_x + ox, cfg.road_y(road) + oy),
                    )
                )
            nodes_by_round.append(round_nodes)
        return nodes_by_round


# ----------------------------
# Connectors
# ----------------------------


class ConnectorGenerator:
    def __init__(self, rng: random.Random) -> None:
        self.rng = rng

    def generate(
        self, nodes_by_round: List[List[MapNode]], probability: float
    ) -> List[Connector]:
        self.add_main_connectors(nodes_by_round)
        self.add_lateral_connectors(nodes_by_round, probability)
        return [
            Connector(start=node, end=nxt)
            for round_nodes in nodes_by_round
            for node in round_nodes
            for nxt in node.next_nodes
        ]

    def add_main_connectors(self, nodes_by_round: List[List[MapNode]]) -> None:
        rounds = len(nodes_by_round)
        roads = len(nodes_by_round[0])
        for road in range(roads):
            for round_idx in range(rounds - 1):
                nodes_by_round[round_idx][road].add_connection(
                    nodes_by_round[round_idx + 1][road]
                )

    def add_lateral_connectors(
        self, nodes_by_round: List[List[MapNode]], probability: float
    ) -> None:
        num_rounds = len(nodes_by_round)
        num_roads = len(nodes_by_round[0])

        rounds = list(range(num_rounds - 1))
        shuffle(rounds, self.rng)

        for round_idx in rounds:
            here = nodes_by_round[round_idx]
            there = nodes_by_round[round_idx + 1]

            roads = list(range(num_roads))
            shuffle(roads, self.rng)

            for road in roads:
                # Only the mirrored connector is checked; which side claims the
                # crossing first depends on the shuffled order.
                if road > 0:
                    crossing = here[road - 1].is_connected_to(there[road])
                    if not crossing and self._roll(probability):
                        self._add_lateral(here[road], there[road - 1])

                if road < num_roads - 1:
                    crossing = here[road + 1].is_connected_to(there[road])
                    if not crossing and self._roll(probability):
                        self._add_lateral(here[road], there[road + 1])

    def _roll(self, probability: float) -> bool:
        """Accept roughly one in (1 / probability) draws."""
        return self.rng.uniform(0.0, 1.0 / probability) <= 1.0

    def _add_lateral(self, start: MapNode, end: MapNode) -> None:
        if start.add_connection(end):
            logger.debug("lateral connector %s -> %s", start.name, end.name)


# ----------------------------
# Orchestration
# ----------------------------


class MapGenerator:
    """Builds maps from a MapConfig and keeps the most recent one.

    The random source defaults to ``random.Random(cfg.seed)``; pass ``rng``
    to share one source across several generators.
    """

    def __init__(self, cfg: MapConfig, rng: Optional[random.Random] = None) -> None:
        cfg.validate()
        self.cfg = cfg
        self.rng = rng if rng is not None else random.Random(cfg.seed)
        self.grid = NodeGridBuilder(self.rng)
        self.connectors = ConnectorGenerator(self.rng)
        self.current: Optional[PathMap] = None

    def generate(self) -> PathMap:
        nodes_by_round = self.grid.build(self.cfg)
        connectors = self.connectors.generate(
            nodes_by_round, self.cfg.additional_connector_probability
        )
        path_map = PathMap(nodes_by_round=nodes_by_round)
        # Swap only once the new map is complete.
        self.current = path_map
        logger.info(
            "generated map %sx%s with %s connectors (%s lateral)",
            self.cfg.rounds,
            self.cfg.roads,
            len(connectors),
            sum(1 for c in connectors if c.is_lateral),
        )
        return path_map

    def regenerate(self) -> PathMap:
        """Discard the current map and build a new one from scratch."""
        logger.info("regenerating map")
        return self.generate()
