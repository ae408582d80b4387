"""
pathfinding/
------------
The shortest-path engine.

    from pathfinding import compute_shortest_path, Step, StepKind, Route

compute_shortest_path(graph, source, target) returns the full trace;
iter_dijkstra is the same thing as a generator.
"""

from pathfinding.queue    import MinQueue, QueueEntry
from pathfinding.step     import Route, Step, StepKind
from pathfinding.dijkstra import (
    PSEUDOCODE,
    SearchState,
    build_adjacency,
    check_endpoints,
    compute_shortest_path,
    iter_dijkstra,
    shortest_route,
)

__all__ = [
    "MinQueue",
    "QueueEntry",
    "Route",
    "Step",
    "StepKind",
    "PSEUDOCODE",
    "SearchState",
    "build_adjacency",
    "check_endpoints",
    "compute_shortest_path",
    "iter_dijkstra",
    "shortest_route",
]
