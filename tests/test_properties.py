"""Trace invariants, checked over seeded random maps."""

import math
import random

import pytest

from graph import Graph
from pathfinding import StepKind, compute_shortest_path

SEEDS = range(25)

ALLOWED_NEXT = {
    StepKind.INITIAL:       {StepKind.VISITING},
    StepKind.VISITING:      {StepKind.NEIGHBOR, StepKind.FINISHED_NODE, StepKind.PATH_FOUND},
    StepKind.NEIGHBOR:      {StepKind.NEIGHBOR, StepKind.UPDATE, StepKind.FINISHED_NODE},
    StepKind.UPDATE:        {StepKind.NEIGHBOR, StepKind.FINISHED_NODE},
    StepKind.FINISHED_NODE: {StepKind.VISITING, StepKind.NO_PATH},
}


def random_case(seed):
    rng = random.Random(seed)
    g = Graph.generate_random(num_nodes=7, edge_probability=0.35, seed=seed)
    source, target = rng.choice(g.node_ids()), rng.choice(g.node_ids())
    return g, source, target


def brute_force_distance(graph, source, target):
    """Cheapest simple path by exhaustive DFS, or None."""
    best = math.inf

    def walk(node, cost, seen):
        nonlocal best
        if node == target:
            best = min(best, cost)
            return
        for edge in graph.edges.values():
            nxt = edge.other_end(node)
            if nxt is None or nxt in seen:
                continue
            walk(nxt, cost + edge.weight, seen | {nxt})

    walk(source, 0.0, {source})
    return None if math.isinf(best) else best


@pytest.mark.parametrize("seed", SEEDS)
def test_distance_matches_brute_force(seed):
    g, source, target = random_case(seed)

    last = compute_shortest_path(g, source, target)[-1]
    expected = brute_force_distance(g, source, target)

    if expected is None:
        assert last.kind is StepKind.NO_PATH
        assert last.path == ()
    else:
        assert last.kind is StepKind.PATH_FOUND
        assert last.distance == pytest.approx(expected)
        assert sum(e.weight for e in g.path_edges(last.path)) == pytest.approx(expected)


@pytest.mark.parametrize("seed", SEEDS)
def test_trace_follows_lifecycle(seed):
    g, source, target = random_case(seed)

    steps = compute_shortest_path(g, source, target)

    assert steps[0].kind is StepKind.INITIAL
    assert steps[-1].kind.is_terminal and steps[-1].is_final
    assert sum(s.kind.is_terminal for s in steps) == 1
    for prev, nxt in zip(steps, steps[1:]):
        assert nxt.kind in ALLOWED_NEXT[prev.kind], (prev.kind, nxt.kind)


@pytest.mark.parametrize("seed", SEEDS)
def test_visited_set_only_grows(seed):
    g, source, target = random_case(seed)

    steps = compute_shortest_path(g, source, target)

    for prev, nxt in zip(steps, steps[1:]):
        assert prev.visited <= nxt.visited


@pytest.mark.parametrize("seed", SEEDS)
def test_distances_never_increase_and_freeze_once_visited(seed):
    g, source, target = random_case(seed)

    steps = compute_shortest_path(g, source, target)

    for prev, nxt in zip(steps, steps[1:]):
        for node_id in g.node_ids():
            assert nxt.distances[node_id] <= prev.distances[node_id]
            if node_id in prev.visited:
                assert nxt.distances[node_id] == prev.distances[node_id]


@pytest.mark.parametrize("seed", SEEDS)
def test_runs_are_repeatable(seed):
    g, source, target = random_case(seed)

    first = [s.to_dict() for s in compute_shortest_path(g, source, target)]
    second = [s.to_dict() for s in compute_shortest_path(g, source, target)]

    assert first == second


@pytest.mark.parametrize("seed", SEEDS)
def test_target_never_visited_when_unreachable(seed):
    g, source, target = random_case(seed)

    steps = compute_shortest_path(g, source, target)

    if steps[-1].kind is StepKind.NO_PATH:
        assert all(
            not (s.kind is StepKind.VISITING and s.current_node == target) for s in steps
        )
        assert steps[-1].queue == ()


def test_connected_random_map_always_has_a_path():
    g = Graph.generate_random(num_nodes=12, edge_probability=0.1, seed=3, connected=True)
    ids = g.node_ids()

    last = compute_shortest_path(g, ids[0], ids[-1])[-1]

    assert last.kind is StepKind.PATH_FOUND
