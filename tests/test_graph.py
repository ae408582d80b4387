import dataclasses

import pytest

from graph import Edge, Graph, GraphError, MalformedGraphError, Node
from graph.samples import bengaluru_graph, load_sample


def test_from_positions_uses_euclidean_weights():
    g = Graph.from_positions(
        [Node("a", "A", 0, 0), Node("b", "B", 3, 4)],
        [("a", "b")],
    )

    edge = g.get_edge("e0")
    assert edge.weight == pytest.approx(5.0)


def test_edge_to_unknown_node_is_rejected():
    with pytest.raises(MalformedGraphError, match="ghost"):
        Graph([Node("a", "A")], [Edge("e0", "a", "ghost", 1.0)])


def test_from_positions_rejects_unknown_endpoint():
    with pytest.raises(MalformedGraphError):
        Graph.from_positions([Node("a", "A")], [("a", "b")])


@pytest.mark.parametrize("weight", [-1.0, float("inf"), float("nan")])
def test_invalid_weights_are_rejected(weight):
    with pytest.raises(MalformedGraphError):
        Graph([Node("a", "A"), Node("b", "B")], [Edge("e0", "a", "b", weight)])


def test_duplicate_node_ids_are_rejected():
    with pytest.raises(MalformedGraphError):
        Graph([Node("a", "A"), Node("a", "Again")])


def test_graph_errors_are_value_errors():
    assert issubclass(MalformedGraphError, GraphError)
    assert issubclass(GraphError, ValueError)


def test_zero_weight_and_self_loop_are_allowed():
    g = Graph(
        [Node("a", "A"), Node("b", "B")],
        [Edge("e0", "a", "b", 0.0), Edge("e1", "a", "a", 0.0)],
    )

    assert g.edge_count() == 2
    assert g.get_edge("e1").is_self_loop


def test_get_node_returns_none_when_missing(cycle_graph):
    assert cycle_graph.get_node("nope") is None
    assert cycle_graph.get_node(None) is None
    assert cycle_graph.node_name("nope") == "nope"
    assert cycle_graph.node_name("A") == "Node A"


def test_edge_lookup_is_symmetric(cycle_graph):
    forward = cycle_graph.get_edge_between("A", "B")
    backward = cycle_graph.get_edge_between("B", "A")

    assert forward is not None
    assert forward == backward
    assert forward.other_end("B") == "A"
    assert forward.other_end("C") is None
    assert cycle_graph.get_edge_between("A", "C") is None


def test_graph_is_read_only(cycle_graph):
    with pytest.raises(TypeError):
        cycle_graph.nodes["Z"] = Node("Z", "Z")
    with pytest.raises(dataclasses.FrozenInstanceError):
        cycle_graph.get_node("A").x = 10


def test_dict_round_trip_keeps_weights(cycle_graph):
    rebuilt = Graph.from_dict(cycle_graph.to_dict())

    assert rebuilt.node_ids() == cycle_graph.node_ids()
    assert {e.id: e.weight for e in rebuilt.edges.values()} == {
        e.id: e.weight for e in cycle_graph.edges.values()
    }


def test_from_dict_derives_missing_weights():
    g = Graph.from_dict({
        "nodes": [{"id": "a", "x": 0, "y": 0}, {"id": "b", "x": 6, "y": 8}],
        "edges": [{"source": "a", "target": "b"}],
    })

    assert g.get_edge_between("a", "b").weight == pytest.approx(10.0)
    assert g.get_node("a").name == "a"


def test_generate_random_is_seeded():
    first = Graph.generate_random(num_nodes=8, edge_probability=0.3, seed=7)
    second = Graph.generate_random(num_nodes=8, edge_probability=0.3, seed=7)

    assert first.to_dict() == second.to_dict()


def test_bengaluru_sample():
    g = bengaluru_graph()

    assert g.node_count() == 15
    assert g.edge_count() == 23
    assert g.get_node("ub_city").name == "UB City"
    assert all(e.weight > 0 for e in g.edges.values())


def test_unknown_sample_name():
    with pytest.raises(KeyError):
        load_sample("atlantis")
