"""Shared graph fixtures."""

import pytest

from graph import Edge, Graph, Node


def make_graph(node_ids, weighted_edges):
    """Graph with explicit weights; positions don't matter for these tests."""
    nodes = [Node(nid, f"Node {nid}") for nid in node_ids]
    edges = [
        Edge(f"e{i}", src, tgt, weight)
        for i, (src, tgt, weight) in enumerate(weighted_edges)
    ]
    return Graph(nodes, edges)


@pytest.fixture
def cycle_graph():
    """A-B-C-D-A with AB=1, BC=2, CD=1, DA=4."""
    return make_graph(
        "ABCD",
        [("A", "B", 1), ("B", "C", 2), ("C", "D", 1), ("D", "A", 4)],
    )


@pytest.fixture
def split_graph():
    """Two components: A-B and C-D."""
    return make_graph("ABCD", [("A", "B", 1), ("C", "D", 1)])


@pytest.fixture
def zero_weight_graph():
    """S-X costs 2, X-Y is free."""
    return make_graph(["S", "X", "Y"], [("S", "X", 2), ("X", "Y", 0)])


@pytest.fixture
def detour_graph():
    """A is queued at 10 first, then improved to 3 via B; Z hangs off A."""
    return make_graph(
        ["S", "A", "B", "Z"],
        [("S", "A", 10), ("S", "B", 1), ("B", "A", 2), ("A", "Z", 100)],
    )


@pytest.fixture
def graph_factory():
    return make_graph
