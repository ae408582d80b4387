"""
step.py — Algorithm Step Snapshot
==================================
The engine emits one Step per decision it makes.  A Step is a
frozen-in-time picture of everything a visualizer needs to render one
frame and explain it:

    • What kind of event this is (visit, neighbour check, update, …)
    • The node being processed and the neighbour under consideration
    • The full distance table and visited set at that instant
    • The priority-queue contents (stale entries included)
    • A one-line description and a longer "why" for Learning Mode
    • On the last Step only: the reconstructed path and its distance

Design decisions:
  - Step is a frozen dataclass and copies every container it is given
    in __post_init__.  Later mutation of the engine's live tables can
    never leak into a Step that was already emitted.
  - `distances` is a read-only mapping, `visited` a frozenset, `queue`
    and `path` tuples.
  - `to_dict()` is the JSON shape; infinite distances become None.
"""

import math
from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType
from typing import Any, Dict, FrozenSet, Mapping, Optional, Sequence, Tuple

from pathfinding.queue import QueueEntry


# ---------------------------------------------------------------------------
# Step kinds: the run lifecycle as seen by someone replaying it
#
#   initial → (visiting → [neighbor → update?]* → finished-node)*
#           → path-found | no-path
# ---------------------------------------------------------------------------
class StepKind(Enum):
    INITIAL       = "initial"
    VISITING      = "visiting"
    NEIGHBOR      = "neighbor"
    UPDATE        = "update"
    FINISHED_NODE = "finished-node"
    PATH_FOUND    = "path-found"
    NO_PATH       = "no-path"

    @property
    def is_terminal(self) -> bool:
        return self in (StepKind.PATH_FOUND, StepKind.NO_PATH)


def _json_distance(value: Optional[float]) -> Optional[float]:
    if value is None or math.isinf(value):
        return None
    return value


@dataclass(frozen=True)
class Step:
    """
    Attributes:
        step_number     : 0-based index of this step in the run.
        kind            : StepKind of the event.
        current_node    : Node being processed (None on initial / terminal steps).
        neighbor        : Neighbour under consideration (neighbor / update steps).
        distances       : {node_id: float} — best known distances, ∞ if unknown.
        visited         : Node ids whose distance is final.
        queue           : Priority-queue contents in pop order.
        description     : Short headline, e.g. "Visiting UB City."
        reasoning       : Why this step happened, in plain English.
        path            : Source→target path (terminal step only, empty if none).
        distance        : Target distance (terminal step only, None if unreachable).
        pseudocode_line : 0-based index into pathfinding.dijkstra.PSEUDOCODE.
        is_final        : True on the very last step.
    """

    step_number:     int                       = 0
    kind:            StepKind                  = StepKind.INITIAL
    current_node:    Optional[str]             = None
    neighbor:        Optional[str]             = None
    distances:       Mapping[str, float]       = field(default_factory=dict)
    visited:         FrozenSet[str]            = frozenset()
    queue:           Tuple[QueueEntry, ...]    = ()
    description:     str                       = ""
    reasoning:       str                       = ""
    path:            Tuple[str, ...]           = ()
    distance:        Optional[float]           = None
    pseudocode_line: int                       = 0
    is_final:        bool                      = False

    def __post_init__(self):
        object.__setattr__(self, "distances", MappingProxyType(dict(self.distances)))
        object.__setattr__(self, "visited", frozenset(self.visited))
        object.__setattr__(self, "queue", tuple(QueueEntry(*e) for e in self.queue))
        object.__setattr__(self, "path", tuple(self.path))

    def to_dict(self) -> Dict[str, Any]:
        return {
            "step_number":     self.step_number,
            "kind":            self.kind.value,
            "current_node":    self.current_node,
            "neighbor":        self.neighbor,
            "distances":       {k: _json_distance(v) for k, v in self.distances.items()},
            "visited":         sorted(self.visited),
            "queue":           [
                {"node_id": e.node_id, "distance": _json_distance(e.distance)}
                for e in self.queue
            ],
            "description":     self.description,
            "reasoning":       self.reasoning,
            "path":            list(self.path),
            "distance":        _json_distance(self.distance),
            "pseudocode_line": self.pseudocode_line,
            "is_final":        self.is_final,
        }


# ---------------------------------------------------------------------------
# Route: the answer, read off the terminal Step
# ---------------------------------------------------------------------------
@dataclass(frozen=True)
class Route:
    path:     Tuple[str, ...]  = ()
    distance: Optional[float]  = None

    @property
    def found(self) -> bool:
        return bool(self.path)

    @property
    def hops(self) -> int:
        return max(len(self.path) - 1, 0)

    @classmethod
    def from_steps(cls, steps: Sequence[Step]) -> "Route":
        """Route carried by the terminal step of a trace."""
        if not steps or not steps[-1].kind.is_terminal:
            raise ValueError("Trace does not end with a path-found / no-path step")
        last = steps[-1]
        return cls(path=tuple(last.path), distance=last.distance)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "path":     list(self.path),
            "distance": _json_distance(self.distance),
            "found":    self.found,
        }
