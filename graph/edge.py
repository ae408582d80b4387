"""
edge.py — Graph Edge
====================
Connects two nodes with a non-negative weight.

Design decisions:
  - `source` and `target` are node-id strings, NOT Node references.
    This keeps edges serialisable and avoids circular references.
  - The graph is undirected: `source` / `target` are labels only, every
    query on an Edge treats the two ends symmetrically.
  - The weight is fixed when the Graph is built (see Graph.from_positions);
    the engine never recomputes it.
"""

from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class Edge:
    """
    Attributes:
        id     : Unique identifier, e.g. "e7".
        source : ID of one endpoint.
        target : ID of the other endpoint.
        weight : Non-negative cost (Euclidean length for map graphs).
    """

    id:     str
    source: str
    target: str
    weight: float = 1.0

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------
    def connects(self, node_a: str, node_b: str) -> bool:
        """True if this edge links node_a ↔ node_b, in either direction."""
        return (self.source, self.target) in ((node_a, node_b), (node_b, node_a))

    def other_end(self, node_id: str) -> Optional[str]:
        """Given one endpoint, return the other. None if node_id isn't an endpoint."""
        if node_id == self.source:
            return self.target
        if node_id == self.target:
            return self.source
        return None

    @property
    def is_self_loop(self) -> bool:
        return self.source == self.target

    # ------------------------------------------------------------------
    # Serialisation
    # ------------------------------------------------------------------
    def to_dict(self) -> dict:
        return {
            "id":     self.id,
            "source": self.source,
            "target": self.target,
            "weight": self.weight,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "Edge":
        return cls(
            id=data["id"],
            source=data["source"],
            target=data["target"],
            weight=float(data.get("weight", 1.0)),
        )

    def __repr__(self) -> str:
        return f"Edge({self.source} ↔ {self.target}, w={self.weight:g})"
