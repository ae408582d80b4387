"""
dijkstra.py — Dijkstra's Shortest-Path Algorithm
==================================================
Generator-based Dijkstra over an undirected Graph, using a lazy-deletion
min-heap (pathfinding.queue.MinQueue).

Yields a Step at:
  1. Initialise distances / push source                → INITIAL
  2. Pop the closest unvisited node, finalise it       → VISITING
  3. Each unvisited neighbour looked at                → NEIGHBOR
  4. Successful relaxation (distance improved)         → UPDATE
  5. All neighbours of the current node handled        → FINISHED_NODE
  6. Target finalised, path rebuilt                    → PATH_FOUND
  7. Queue exhausted without reaching the target       → NO_PATH

Stale heap entries (node already visited) are dropped silently; they are
not decisions, so they get no Step.

The loop stops as soon as the target is finalised.  Distances of nodes
still in the queue at that point are tentative.

Correctness note: Dijkstra requires non-negative weights.  Graph refuses
to build with a negative or non-finite weight, so the engine never sees one.
"""

import logging
import math
from dataclasses import dataclass, field
from typing import Dict, Iterator, List, Optional, Set, Tuple

from graph import Graph, UnknownNodeError
from pathfinding.queue import MinQueue
from pathfinding.step import Route, Step, StepKind

logger = logging.getLogger(__name__)

INF = math.inf


# ---------------------------------------------------------------------------
# Pseudocode
# ---------------------------------------------------------------------------
PSEUDOCODE: List[str] = [
    "def dijkstra(graph, source, target):",                 # 0
    "    dist ← {v: ∞ for v in V};  dist[source] ← 0",      # 1
    "    prev ← {v: None for v in V};  visited ← ∅",        # 2
    "    pq ← [(source, 0)]",                               # 3
    "    while pq is not empty:",                           # 4
    "        node ← pq.pop_min()",                          # 5
    "        if node in visited: continue",                 # 6
    "        visited.add(node)",                            # 7
    "        if node == target: break",                     # 8
    "        for (nbr, w) in adj(node) if nbr ∉ visited:",  # 9
    "            alt ← dist[node] + w",                     # 10
    "            if alt < dist[nbr]:",                      # 11
    "                dist[nbr] ← alt;  prev[nbr] ← node",   # 12
    "                pq.push((nbr, alt))",                  # 13
    "    path ← follow prev from target back to source",    # 14
    "    return path if it starts at source else NOT FOUND", # 15
]

LINE_INIT     = 3
LINE_LOOP     = 4
LINE_VISIT    = 7
LINE_CONSIDER = 10
LINE_UPDATE   = 13
LINE_PATH     = 14
LINE_NO_PATH  = 15


AdjacencyIndex = Dict[str, List[Tuple[str, float]]]


def build_adjacency(graph: Graph) -> AdjacencyIndex:
    """node_id → [(neighbour_id, weight)], each edge inserted both ways."""
    adj: AdjacencyIndex = {nid: [] for nid in graph.nodes}
    for edge in graph.edges.values():
        adj[edge.source].append((edge.target, edge.weight))
        adj[edge.target].append((edge.source, edge.weight))
    return adj


def _fmt(d: float) -> str:
    if math.isinf(d):
        return "∞"
    return f"{round(d, 1):g}"


# ---------------------------------------------------------------------------
# Run-scoped state
# ---------------------------------------------------------------------------
@dataclass
class SearchState:
    """Everything one run mutates.  Built fresh by begin(), dropped after."""

    graph:     Graph
    source:    str
    target:    str
    adjacency: AdjacencyIndex
    dist:      Dict[str, float]          = field(default_factory=dict)
    prev:      Dict[str, Optional[str]]  = field(default_factory=dict)
    visited:   Set[str]                  = field(default_factory=set)
    queue:     MinQueue                  = field(default_factory=MinQueue)
    step_no:   int                       = 0

    @classmethod
    def begin(cls, graph: Graph, source: str, target: str) -> "SearchState":
        state = cls(graph=graph, source=source, target=target,
                    adjacency=build_adjacency(graph))
        state.dist = {nid: INF for nid in graph.nodes}
        state.dist[source] = 0.0
        state.prev = {nid: None for nid in graph.nodes}
        state.queue.push(source, 0.0)
        return state

    def name(self, node_id: Optional[str]) -> str:
        return self.graph.node_name(node_id)

    def emit(
        self,
        kind: StepKind,
        *,
        line: int,
        description: str,
        reasoning: str,
        current: Optional[str] = None,
        neighbor: Optional[str] = None,
        path: Tuple[str, ...] = (),
        distance: Optional[float] = None,
    ) -> Step:
        step = Step(
            step_number=self.step_no,
            kind=kind,
            current_node=current,
            neighbor=neighbor,
            distances=dict(self.dist),
            visited=frozenset(self.visited),
            queue=self.queue.snapshot(),
            description=description,
            reasoning=reasoning,
            path=path,
            distance=distance,
            pseudocode_line=line,
            is_final=kind.is_terminal,
        )
        self.step_no += 1
        return step

    def reconstruct(self) -> List[str]:
        """Walk prev back from the target.  Empty unless the walk ends at source."""
        path: List[str] = []
        seen: Set[str] = set()
        cur: Optional[str] = self.target
        while cur is not None and cur not in seen:
            seen.add(cur)
            path.append(cur)
            cur = self.prev.get(cur)
        path.reverse()
        if path and path[0] == self.source:
            return path
        return []


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------
def check_endpoints(graph: Graph, source: str, target: str) -> None:
    if not graph.has_node(source):
        raise UnknownNodeError(source, "source")
    if not graph.has_node(target):
        raise UnknownNodeError(target, "target")


def compute_shortest_path(graph: Graph, source: str, target: str) -> List[Step]:
    """
    Run Dijkstra from `source` to `target` and return the full trace.

    Raises UnknownNodeError before doing any work if either id is not in
    the graph.  An unreachable target is not an error: the trace ends with
    a NO_PATH step.
    """
    check_endpoints(graph, source, target)
    return list(iter_dijkstra(graph, source, target))


def shortest_route(graph: Graph, source: str, target: str) -> Route:
    return Route.from_steps(compute_shortest_path(graph, source, target))


def iter_dijkstra(graph: Graph, source: str, target: str) -> Iterator[Step]:
    check_endpoints(graph, source, target)
    state = SearchState.begin(graph, source, target)
    logger.debug("dijkstra %s → %s on %r", source, target, graph)

    src_name = state.name(source)
    yield state.emit(
        StepKind.INITIAL,
        line=LINE_INIT,
        description="Algorithm started.",
        reasoning=(
            f"We set the distance to the start node '{src_name}' to 0 and every "
            f"other node to infinity. The start node goes into a priority queue, "
            f"which always hands back the node with the smallest known distance."
        ),
    )

    # --- main loop ---
    while state.queue:
        entry = state.queue.pop()
        node = entry.node_id

        if node in state.visited:
            logger.debug("skip stale entry %s (%s)", node, _fmt(entry.distance))
            continue

        state.visited.add(node)
        node_name = state.name(node)
        yield state.emit(
            StepKind.VISITING,
            line=LINE_VISIT,
            current=node,
            description=f"Visiting {node_name}.",
            reasoning=(
                f"'{node_name}' comes out of the priority queue because its distance "
                f"({_fmt(state.dist[node])}) is the smallest of all unvisited nodes. "
                f"Its distance is now final; next we explore its neighbours."
            ),
        )

        if node == target:
            logger.debug("target %s finalised at %s", target, _fmt(state.dist[node]))
            break

        yield from _relax_neighbours(state, node)

        yield state.emit(
            StepKind.FINISHED_NODE,
            line=LINE_LOOP,
            current=node,
            description=f"Finished with {node_name}.",
            reasoning=(
                f"Every unvisited neighbour of '{node_name}' has been checked. "
                f"The next node to visit is the unvisited one with the smallest "
                f"distance in the priority queue."
            ),
        )

    yield _final_step(state)


def _relax_neighbours(state: SearchState, node: str) -> Iterator[Step]:
    node_name = state.name(node)

    for nbr, weight in state.adjacency[node]:
        if nbr in state.visited:
            continue

        candidate = state.dist[node] + weight
        known = state.dist[nbr]
        nbr_name = state.name(nbr)

        yield state.emit(
            StepKind.NEIGHBOR,
            line=LINE_CONSIDER,
            current=node,
            neighbor=nbr,
            description=f"Checking neighbour: {nbr_name}.",
            reasoning=(
                f"'{nbr_name}' is a neighbour of '{node_name}'. Going through "
                f"'{node_name}' it is {_fmt(state.dist[node])} + {_fmt(weight)} = "
                f"{_fmt(candidate)} away; the best distance known so far is {_fmt(known)}."
            ),
        )

        if candidate < known:
            state.dist[nbr] = candidate
            state.prev[nbr] = node
            state.queue.push(nbr, candidate)
            yield state.emit(
                StepKind.UPDATE,
                line=LINE_UPDATE,
                current=node,
                neighbor=nbr,
                description=f"Updating distance for {nbr_name}.",
                reasoning=(
                    f"The new path to '{nbr_name}' ({_fmt(candidate)}) is shorter than "
                    f"the old one ({_fmt(known)}). We record it, remember that we came "
                    f"from '{node_name}', and queue '{nbr_name}' for a later visit."
                ),
            )


def _final_step(state: SearchState) -> Step:
    path = state.reconstruct()

    if path:
        total = state.dist[state.target]
        names = " → ".join(state.name(n) for n in path)
        return state.emit(
            StepKind.PATH_FOUND,
            line=LINE_PATH,
            path=tuple(path),
            distance=total,
            description="Shortest path found!",
            reasoning=(
                f"The algorithm is complete. The shortest path is {names}, "
                f"with a total distance of {_fmt(total)}."
            ),
        )

    logger.debug("no path %s → %s", state.source, state.target)
    return state.emit(
        StepKind.NO_PATH,
        line=LINE_NO_PATH,
        description="No path found.",
        reasoning=(
            f"The priority queue ran empty before '{state.name(state.target)}' was "
            f"reached, so no connecting path exists from '{state.name(state.source)}'."
        ),
    )
