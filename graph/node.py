"""
node.py — Graph Node
====================
A point on the map: identity, display name and a 2-D position.

Design decisions:
  - Frozen dataclass.  The engine and the playback layer share one Graph
    across runs, so nothing on a Node may change once it is built.
  - Position lives on the node (not only in the renderer) because edge
    weights are derived from it.
"""

import math
from dataclasses import dataclass


@dataclass(frozen=True)
class Node:
    """
    Attributes:
        id   : Unique identifier, e.g. "mg_road_metro".
        name : Human-readable name shown in explanations.
        x, y : Map coordinates (pixels in the bundled sample).
    """

    id:   str
    name: str
    x:    float = 0.0
    y:    float = 0.0

    def distance_to(self, other: "Node") -> float:
        """Euclidean distance — this is what every edge weight is."""
        return math.hypot(self.x - other.x, self.y - other.y)

    # ------------------------------------------------------------------
    # Serialisation
    # ------------------------------------------------------------------
    def to_dict(self) -> dict:
        return {"id": self.id, "name": self.name, "x": self.x, "y": self.y}

    @classmethod
    def from_dict(cls, data: dict) -> "Node":
        return cls(
            id=data["id"],
            name=data.get("name") or data["id"],
            x=float(data.get("x", 0.0)),
            y=float(data.get("y", 0.0)),
        )

    def __repr__(self) -> str:
        return f"Node(id={self.id}, name={self.name}, pos=({self.x:.1f},{self.y:.1f}))"
