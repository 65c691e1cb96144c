from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Dict, Iterator, List, Optional, Tuple

from game_types import Color, NodeId, Vec2

logger = logging.getLogger(__name__)


class MapConfigError(ValueError):
    """Raised when map generation settings are out of range."""


class ConnectorError(ValueError):
    """Raised when a connector would skip a round or a road."""


@dataclass(frozen=True)
class MapConfig:
    rounds: int = 10
    roads: int = 3
    x_min: float = -8.0
    x_max: float = 8.0
    y_high: float = 3.0
    y_mid: float = 0.0
    y_low: float = -3.0
    additional_connector_probability: float = 0.33
    seed: Optional[int] = None

    def validate(self) -> None:
        """Raise MapConfigError unless the settings can produce a map."""
        if self.rounds < 2:
            raise MapConfigError(f"rounds must be >= 2 (got {self.rounds})")
        if self.roads < 1:
            raise MapConfigError(f"roads must be >= 1 (got {self.roads})")
        p = self.additional_connector_probability
        if not (0.0 < p <= 1.0):
            raise MapConfigError(
                f"additional_connector_probability must be in (0, 1] (got {p})"
            )

    def road_y(self, road: int) -> float:
        """Vertical lane for a road index; roads past the third reuse the middle lane."""
        if road == 0:
            return self.y_high
        if road == 1:
            return self.y_mid
        if road == 2:
            return self.y_low
        return self.y_mid


@dataclass(frozen=True)
class RenderConfig:
    mode: str  # flat|gradient
    color_mode: str  # multicolor|gray
    node_color: Color
    start_color: Color
    end_color: Color
    connector_color: Color
    label_color: Color
    node_radius: int
    connector_width: int
    margin: int
    show_labels: bool


@dataclass(eq=False)
class MapNode:
    round: int
    road: int
    position: Vec2
    next_nodes: List["MapNode"] = field(default_factory=list, repr=False)

    @property
    def node_id(self) -> NodeId:
        return (self.round, self.road)

    @property
    def name(self) -> str:
        return f"MapNode({self.round}-{self.road})"

    def is_connected_to(self, other: "MapNode") -> bool:
        return any(n is other for n in self.next_nodes)

    def add_connection(self, next_node: "MapNode") -> bool:
        """Append an outgoing connector to next_node.

        Returns:
            True if the connector was added, False if it already existed.

        Raises:
            ConnectorError: If next_node is not exactly one round ahead or
                is more than one road away. The node is left unchanged.
        """
        if next_node.round != self.round + 1:
            raise ConnectorError(
                f"{self.name} -> {next_node.name}: connectors must advance exactly one round"
            )
        if abs(next_node.road - self.road) > 1:
            raise ConnectorError(
                f"{self.name} -> {next_node.name}: connectors may not skip roads"
            )
        if self.is_connected_to(next_node):
            logger.debug("duplicate connector ignored %s -> %s", self.name, next_node.name)
            return False
        self.next_nodes.append(next_node)
        return True


@dataclass(frozen=True)
class Connector:
    start: MapNode
    end: MapNode

    @property
    def label(self) -> str:
        s, e = self.start, self.end
        return f"Connector({s.round}-{s.road})-({e.round}-{e.road})"

    @property
    def is_lateral(self) -> bool:
        return self.start.road != self.end.road

    def as_pair(self) -> Tuple[NodeId, NodeId]:
        return (self.start.node_id, self.end.node_id)


@dataclass
class PathMap:
    """A generated map: nodes grouped by round, connectors stored on the nodes."""

    nodes_by_round: List[List[MapNode]]

    @property
    def rounds(self) -> int:
        return len(self.nodes_by_round)

    @property
    def roads(self) -> int:
        return len(self.nodes_by_round[0]) if self.nodes_by_round else 0

    @property
    def start_nodes(self) -> List[MapNode]:
        return list(self.nodes_by_round[0]) if self.nodes_by_round else []

    @property
    def end_nodes(self) -> List[MapNode]:
        return list(self.nodes_by_round[-1]) if self.nodes_by_round else []

    def node(self, round: int, road: int) -> MapNode:
        return self.nodes_by_round[round][road]

    def iter_nodes(self) -> Iterator[MapNode]:
        for round_nodes in self.nodes_by_round:
            yield from round_nodes

    def connectors(self) -> List[Connector]:
        return [
            Connector(start=node, end=nxt)
            for node in self.iter_nodes()
            for nxt in node.next_nodes
        ]

    def edge_pairs(self) -> List[Tuple[NodeId, NodeId]]:
        return [c.as_pair() for c in self.connectors()]

    def bounds(self) -> Tuple[float, float, float, float]:
        """Return (min_x, min_y, max_x, max_y) over all node positions."""
        xs = [n.position[0] for n in self.iter_nodes()]
        ys = [n.position[1] for n in self.iter_nodes()]
        if not xs:
            return (0.0, 0.0, 0.0, 0.0)
        return (min(xs), min(ys), max(xs), max(ys))

    def to_dict(self) -> Dict[str, Any]:
        return {
            "rounds": self.rounds,
            "roads": self.roads,
            "nodes": [
                {
                    "round": n.round,
                    "road": n.road,
                    "position": [n.position[0], n.position[1]],
                    "next": [[m.round, m.road] for m in n.next_nodes],
                }
                for n in self.iter_nodes()
            ],
            "connectors": [[list(a), list(b)] for a, b in self.edge_pairs()],
        }
