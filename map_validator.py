from __future__ import annotations

from collections import deque
from typing import List, Optional, Set

from game_types import NodeId
from models import MapNode, PathMap


class MapValidator:
    """Structural checks for a generated PathMap."""

    def __init__(self, rounds: Optional[int] = None, roads: Optional[int] = None) -> None:
        self.rounds = rounds
        self.roads = roads

    def is_valid(self, path_map: PathMap) -> bool:
        return not self.problems(path_map)

    def problems(self, path_map: PathMap) -> List[str]:
        found = self._shape_problems(path_map)
        if found:
            # The remaining checks index the matrix and need a sound shape.
            return found
        found.extend(self._connector_problems(path_map))
        found.extend(self._crossing_problems(path_map))
        found.extend(self._reachability_problems(path_map))
        return found

    def _shape_problems(self, path_map: PathMap) -> List[str]:
        found: List[str] = []
        rounds = path_map.rounds
        if rounds < 2:
            return [f"map has {rounds} rounds, need at least 2"]
        if self.rounds is not None and rounds != self.rounds:
            found.append(f"map has {rounds} rounds, expected {self.rounds}")

        roads = path_map.roads
        if roads < 1:
            return found + ["map has no roads"]
        if self.roads is not None and roads != self.roads:
            found.append(f"map has {roads} roads, expected {self.roads}")

        for round_idx, round_nodes in enumerate(path_map.nodes_by_round):
            if len(round_nodes) != roads:
                found.append(f"round {round_idx} has {len(round_nodes)} roads, expected {roads}")
                continue
            for road, node in enumerate(round_nodes):
                if node.node_id != (round_idx, road):
                    found.append(f"{node.name} stored at ({round_idx}-{road})")
        return found

    def _connector_problems(self, path_map: PathMap) -> List[str]:
        found: List[str] = []
        last_round = path_map.rounds - 1
        for node in path_map.iter_nodes():
            seen: Set[int] = set()
            for nxt in node.next_nodes:
                if id(nxt) in seen:
                    found.append(f"duplicate connector {node.name} -> {nxt.name}")
                seen.add(id(nxt))
                if nxt.round != node.round + 1:
                    found.append(f"connector {node.name} -> {nxt.name} does not advance one round")
                if abs(nxt.road - node.road) > 1:
                    found.append(f"connector {node.name} -> {nxt.name} skips a road")
                if not self._belongs(path_map, nxt):
                    found.append(f"connector {node.name} -> {nxt.name} leaves the map")
            if node.round < last_round and not node.next_nodes:
                found.append(f"{node.name} has no outgoing connector")
        return found

    def _crossing_problems(self, path_map: PathMap) -> List[str]:
        found: List[str] = []
        for round_idx in range(path_map.rounds - 1):
            for road in range(path_map.roads - 1):
                down = path_map.node(round_idx, road).is_connected_to(
                    path_map.node(round_idx + 1, road + 1)
                )
                up = path_map.node(round_idx, road + 1).is_connected_to(
                    path_map.node(round_idx + 1, road)
                )
                if down and up:
                    found.append(
                        f"crossing connectors between roads {road} and {road + 1} "
                        f"after round {round_idx}"
                    )
        return found

    def _reachability_problems(self, path_map: PathMap) -> List[str]:
        last_round = path_map.rounds - 1
        found: List[str] = []
        for start in path_map.start_nodes:
            if self._reaches_round(start, last_round) is None:
                found.append(f"{start.name} cannot reach round {last_round}")
        return found

    def _reaches_round(self, start: MapNode, target_round: int) -> Optional[NodeId]:
        """BFS from start; return the first node id found in target_round."""
        q = deque([start])
        visited = {id(start)}
        while q:
            node = q.popleft()
            if node.round == target_round:
                return node.node_id
            for nxt in node.next_nodes:
                if id(nxt) not in visited:
                    visited.add(id(nxt))
                    q.append(nxt)
        return None

    @staticmethod
    def _belongs(path_map: PathMap, node: MapNode) -> bool:
        r, k = node.node_id
        if not (0 <= r < path_map.rounds and 0 <= k < path_map.roads):
            return False
        return path_map.node(r, k) is node
