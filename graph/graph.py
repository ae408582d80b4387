"""
graph.py — Graph Container
==========================
Single source of truth for the map.  The engine and the HTTP layer both
read from this object; nobody writes to it after construction.

Responsibilities:
  1. Validate nodes & edges once, at construction     (MalformedGraphError)
  2. Lookups                                          (get_node, get_edge, …)
  3. Factories                                        (from_positions, random)
  4. Serialisation round-trip                         (to_dict / from_dict)

Design decisions:
  - Nodes & edges stored in plain dicts keyed by id for O(1) lookup, exposed
    through read-only mapping proxies.
  - No adjacency is kept here.  The engine builds its own index per run, so
    a Graph can be shared between concurrent runs without coordination.
  - Lookups by id return None on a miss; explanations look endpoints up
    constantly and must not blow up on a stale id.
"""

import math
import random
from types import MappingProxyType
from typing import (
    Dict, Iterable, List, Mapping, Optional, Sequence, Tuple
)

from graph.node import Node
from graph.edge import Edge
from graph.errors import MalformedGraphError


class Graph:
    """
    Attributes:
        nodes : {node_id: Node}   (read-only)
        edges : {edge_id: Edge}   (read-only)
    """

    def __init__(self, nodes: Iterable[Node] = (), edges: Iterable[Edge] = ()):
        node_map: Dict[str, Node] = {}
        for node in nodes:
            if node.id in node_map:
                raise MalformedGraphError(f"Duplicate node id: '{node.id}'")
            node_map[node.id] = node

        edge_map: Dict[str, Edge] = {}
        for edge in edges:
            if edge.id in edge_map:
                raise MalformedGraphError(f"Duplicate edge id: '{edge.id}'")
            for end in (edge.source, edge.target):
                if end not in node_map:
                    raise MalformedGraphError(
                        f"Edge '{edge.id}' references unknown node '{end}'"
                    )
            if not math.isfinite(edge.weight) or edge.weight < 0:
                raise MalformedGraphError(
                    f"Edge '{edge.id}' has invalid weight {edge.weight!r}; "
                    f"weights must be finite and non-negative"
                )
            edge_map[edge.id] = edge

        self._nodes = node_map
        self._edges = edge_map

    # ==================================================================
    # READ-ONLY VIEWS
    # ==================================================================
    @property
    def nodes(self) -> Mapping[str, Node]:
        return MappingProxyType(self._nodes)

    @property
    def edges(self) -> Mapping[str, Edge]:
        return MappingProxyType(self._edges)

    # ==================================================================
    # LOOKUPS
    # ==================================================================
    def get_node(self, node_id: Optional[str]) -> Optional[Node]:
        if node_id is None:
            return None
        return self._nodes.get(node_id)

    def has_node(self, node_id: Optional[str]) -> bool:
        return node_id in self._nodes

    def node_name(self, node_id: Optional[str], default: str = "") -> str:
        """Display name for node_id, or `default` if there is no such node."""
        node = self.get_node(node_id)
        return node.name if node else (default or str(node_id))

    def get_edge(self, edge_id: str) -> Optional[Edge]:
        return self._edges.get(edge_id)

    def get_edge_between(self, a: str, b: str) -> Optional[Edge]:
        """Lightest edge connecting a and b (either direction), or None."""
        candidates = [e for e in self._edges.values() if e.connects(a, b)]
        if not candidates:
            return None
        return min(candidates, key=lambda e: e.weight)

    def path_edges(self, path: Sequence[str]) -> List[Edge]:
        """Edges along consecutive pairs of `path`, skipping unknown hops."""
        result = []
        for a, b in zip(path, path[1:]):
            edge = self.get_edge_between(a, b)
            if edge:
                result.append(edge)
        return result

    # ==================================================================
    # SERIALISATION
    # ==================================================================
    def to_dict(self) -> dict:
        return {
            "nodes": [n.to_dict() for n in self._nodes.values()],
            "edges": [e.to_dict() for e in self._edges.values()],
        }

    @classmethod
    def from_dict(cls, data: dict) -> "Graph":
        """
        Rebuild a graph from `to_dict` output.  Edges without a "weight"
        get the Euclidean length of their endpoints.
        """
        nodes = [Node.from_dict(nd) for nd in data.get("nodes", [])]
        by_id = {n.id: n for n in nodes}
        edges = []
        for i, ed in enumerate(data.get("edges", [])):
            if "weight" in ed:
                edges.append(Edge.from_dict({"id": f"e{i}", **ed}))
                continue
            a, b = by_id.get(ed["source"]), by_id.get(ed["target"])
            weight = a.distance_to(b) if a and b else 0.0
            edges.append(Edge(
                id=ed.get("id", f"e{i}"),
                source=ed["source"],
                target=ed["target"],
                weight=weight,
            ))
        return cls(nodes, edges)

    # ==================================================================
    # FACTORIES
    # ==================================================================
    @classmethod
    def from_positions(
        cls,
        nodes: Iterable[Node],
        connections: Iterable[Tuple[str, str]],
    ) -> "Graph":
        """
        Build a map graph: every edge weight is the Euclidean distance
        between its endpoints, computed here and never again.

        Edge ids are "e0", "e1", … in connection order.
        """
        nodes = list(nodes)
        by_id = {n.id: n for n in nodes}
        edges = []
        for i, (src, tgt) in enumerate(connections):
            if src not in by_id or tgt not in by_id:
                missing = src if src not in by_id else tgt
                raise MalformedGraphError(
                    f"Connection {src}–{tgt} references unknown node '{missing}'"
                )
            edges.append(Edge(
                id=f"e{i}",
                source=src,
                target=tgt,
                weight=by_id[src].distance_to(by_id[tgt]),
            ))
        return cls(nodes, edges)

    @classmethod
    def generate_random(
        cls,
        num_nodes: int = 10,
        edge_probability: float = 0.3,
        seed: Optional[int] = None,
        connected: bool = False,
        canvas_w: float = 800,
        canvas_h: float = 500,
    ) -> "Graph":
        """
        Erdős–Rényi style random map.
        Nodes are scattered over the canvas, each possible edge is included
        with probability `edge_probability`, weights are Euclidean.

        With connected=True a shuffled spanning chain is added so every
        node is reachable.
        """
        rng = random.Random(seed)
        margin = 40

        nodes = []
        for i in range(num_nodes):
            x = round(rng.uniform(margin, canvas_w - margin), 1)
            y = round(rng.uniform(margin, canvas_h - margin), 1)
            nodes.append(Node(id=str(i), name=f"Node {i}", x=x, y=y))

        pairs: List[Tuple[str, str]] = []
        seen = set()
        for i in range(num_nodes):
            for j in range(i + 1, num_nodes):
                if rng.random() < edge_probability:
                    pairs.append((str(i), str(j)))
                    seen.add(frozenset((i, j)))

        if connected:
            order = list(range(num_nodes))
            rng.shuffle(order)
            for a, b in zip(order, order[1:]):
                if frozenset((a, b)) not in seen:
                    pairs.append((str(a), str(b)))
                    seen.add(frozenset((a, b)))

        return cls.from_positions(nodes, pairs)

    # ==================================================================
    # UTILITY
    # ==================================================================
    def node_count(self) -> int:
        return len(self._nodes)

    def edge_count(self) -> int:
        return len(self._edges)

    def node_ids(self) -> List[str]:
        return list(self._nodes.keys())

    def __contains__(self, node_id: object) -> bool:
        return node_id in self._nodes

    def __repr__(self) -> str:
        return f"Graph(nodes={self.node_count()}, edges={self.edge_count()})"
