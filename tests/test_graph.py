import numpy as np
import pytest

from rcsp_ga.data.generate_data import example_edges, example_graph
from rcsp_ga.engine.errors import InvalidEdge, InvalidGraph, RCSPError
from rcsp_ga.engine.graph import build_graph


def _adjacency(graph):
    adj = {}
    for u in range(graph.num_nodes):
        for e in graph.out_edges(u):
            res = tuple(float(x) for x in graph.edge_res[e])
            adj.setdefault(u, []).append((int(graph.edge_to[e]), float(graph.edge_cost[e]), res))
    return adj


def test_example_graph_groups_edges_by_source():
    graph = example_graph()
    assert graph.num_nodes == 5
    assert graph.n_resources == 2
    assert graph.n_edges == 7
    assert graph.source == 0
    assert graph.sink == 4
    assert graph.n_intermediate == 3

    adj = _adjacency(graph)
    assert adj[0] == [(1, 2.0, (1.0, 2.0)), (2, 3.0, (2.0, 1.0))]
    assert adj[3] == [(4, 1.0, (1.0, 2.0))]
    assert 4 not in adj


def test_insertion_order_preserved_per_source():
    edges = [
        (1, 3, 1.0, [0.0]),
        (0, 1, 1.0, [0.0]),
        (1, 2, 1.0, [0.0]),
        (0, 2, 1.0, [0.0]),
        (2, 3, 1.0, [0.0]),
    ]
    graph = build_graph(4, edges)
    adj = _adjacency(graph)
    assert [to for to, _, _ in adj[0]] == [1, 2]
    assert [to for to, _, _ in adj[1]] == [3, 2]
    np.testing.assert_array_equal(graph.adj_ptr, [0, 2, 4, 5, 5])


def test_out_edges_range_matches_adjacency():
    graph = example_graph()
    tos = [int(graph.edge_to[e]) for e in graph.out_edges(2)]
    assert tos == [3, 4]
    assert len(graph.out_edges(4)) == 0


def test_resource_length_mismatch_rejected():
    edges = example_edges()
    edges.append((1, 4, 1.0, [1.0]))
    with pytest.raises(InvalidEdge):
        build_graph(5, edges)


def test_declared_resource_dimension_enforced():
    with pytest.raises(InvalidEdge):
        build_graph(5, example_edges(), n_resources=3)


@pytest.mark.parametrize("num_nodes", [0, 1])
def test_too_few_nodes_rejected(num_nodes):
    with pytest.raises(InvalidGraph):
        build_graph(num_nodes, [])


def test_endpoint_out_of_range_rejected():
    with pytest.raises(InvalidEdge):
        build_graph(3, [(0, 3, 1.0, [1.0])])
    with pytest.raises(InvalidEdge):
        build_graph(3, [(-1, 2, 1.0, [1.0])])


def test_negative_values_rejected():
    with pytest.raises(InvalidEdge):
        build_graph(3, [(0, 1, -1.0, [1.0])])
    with pytest.raises(InvalidEdge):
        build_graph(3, [(0, 1, 1.0, [-0.5])])


def test_errors_are_value_errors():
    assert issubclass(InvalidGraph, RCSPError)
    assert issubclass(InvalidEdge, RCSPError)
    assert issubclass(RCSPError, ValueError)


def test_graph_arrays_are_read_only():
    graph = example_graph()
    with pytest.raises(ValueError):
        graph.edge_cost[0] = 100.0
    with pytest.raises(ValueError):
        graph.edge_res[0, 0] = 100.0


def test_edgeless_graph_has_no_resources():
    graph = build_graph(3, [])
    assert graph.n_edges == 0
    assert graph.n_resources == 0
    assert graph.edge_res.shape == (0, 0)
