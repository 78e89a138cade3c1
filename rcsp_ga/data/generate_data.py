import numpy as np

from ..engine.graph import build_graph

# Demo instance: 5 nodes, two resources
EXAMPLE_NUM_NODES = 5
EXAMPLE_LIMITS = [5.0, 7.0]


def example_edges():
    return [
        (0, 1, 2.0, [1.0, 2.0]),
        (0, 2, 3.0, [2.0, 1.0]),
        (1, 2, 1.0, [1.0, 1.0]),
        (1, 3, 4.0, [2.0, 3.0]),
        (2, 3, 2.0, [1.0, 4.0]),
        (2, 4, 5.0, [3.0, 1.0]),
        (3, 4, 1.0, [1.0, 2.0]),
    ]


def example_graph():
    return build_graph(EXAMPLE_NUM_NODES, example_edges())


def generate_data(n_nodes=20, n_resources=2, density=0.3, seed=0):
    """Random layered DAG with a guaranteed feasible chain ``0 -> 1 -> ... -> n-1``.

    Forward arcs ``u -> v`` (``u < v``) appear with probability ``density``;
    the chain arcs are always present. Limits equal the chain's resource
    totals, so the chain itself is feasible while most shortcuts compete on
    cost against it.
    """
    if n_nodes < 3:
        raise ValueError("n_nodes must be >= 3")
    rng = np.random.default_rng(seed)

    edges = []
    chain_res = np.zeros(n_resources, dtype=np.float64)
    for u in range(n_nodes - 1):
        for v in range(u + 1, n_nodes):
            if v != u + 1 and rng.random() >= density:
                continue
            hops = v - u
            cost = float(np.round(rng.uniform(1.0, 10.0) * hops ** 0.8, 2))
            res = np.round(rng.uniform(0.0, 5.0, size=n_resources) * hops ** 0.9, 2)
            if v == u + 1:
                chain_res += res
            edges.append((u, v, cost, res.tolist()))

    limits = chain_res.tolist()
    return {
        "num_nodes": n_nodes,
        "edges": edges,
        "resource_limits": limits,
        "graph": build_graph(n_nodes, edges, n_resources=n_resources),
    }
