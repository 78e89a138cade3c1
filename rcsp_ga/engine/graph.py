"""Immutable directed graph with per-edge cost and resource consumption.

Edges are stored grouped by source node in CSR form (``adj_ptr`` offsets into
flat edge arrays). Insertion order within each source node is preserved since
the decoder breaks frontier ties by push order.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, List, Optional, Sequence, Tuple

import numpy as np

from ..config.enums import SOURCE
from .errors import InvalidEdge, InvalidGraph

EdgeTuple = Tuple[int, int, float, Sequence[float]]


def _readonly(arr: np.ndarray) -> np.ndarray:
    arr.setflags(write=False)
    return arr


@dataclass(frozen=True, eq=False)
class Graph:
    num_nodes: int
    n_resources: int
    edge_from: np.ndarray
    edge_to: np.ndarray
    edge_cost: np.ndarray
    edge_res: np.ndarray
    adj_ptr: np.ndarray

    @property
    def source(self) -> int:
        return SOURCE

    @property
    def sink(self) -> int:
        return self.num_nodes - 1

    @property
    def n_edges(self) -> int:
        return int(self.edge_to.shape[0])

    @property
    def n_intermediate(self) -> int:
        return self.num_nodes - 2

    def out_edges(self, node: int) -> range:
        return range(int(self.adj_ptr[node]), int(self.adj_ptr[node + 1]))


def build_graph(
    num_nodes: int,
    edges: Iterable[EdgeTuple],
    n_resources: Optional[int] = None,
) -> Graph:
    """Group ``(from, to, cost, resources)`` tuples into a :class:`Graph`.

    Parameters
    ----------
    num_nodes:
        Node count; node ``0`` is the source and ``num_nodes - 1`` the sink.
    edges:
        Directed arcs. Every resource vector must have the same length.
    n_resources:
        Declared resource dimensionality. When omitted the length of the
        first edge's vector is used (``0`` for an edgeless graph).

    Raises
    ------
    InvalidGraph
        Fewer than two nodes, so source and sink would coincide.
    InvalidEdge
        Endpoint out of range, negative cost/resource, or resource vector
        length different from the declared dimensionality.
    """

    num_nodes = int(num_nodes)
    if num_nodes < 2:
        raise InvalidGraph(f"graph needs at least 2 nodes, got {num_nodes}")

    froms: List[int] = []
    tos: List[int] = []
    costs: List[float] = []
    res_rows: List[np.ndarray] = []

    for k, (u, v, cost, resources) in enumerate(edges):
        u = int(u)
        v = int(v)
        if not (0 <= u < num_nodes and 0 <= v < num_nodes):
            raise InvalidEdge(f"edge {k} ({u}->{v}) has endpoint outside [0, {num_nodes})")
        res = np.atleast_1d(np.asarray(resources, dtype=np.float64)).ravel()
        if n_resources is None:
            n_resources = int(res.shape[0])
        if res.shape[0] != n_resources:
            raise InvalidEdge(
                f"edge {k} ({u}->{v}) has {res.shape[0]} resources, expected {n_resources}"
            )
        cost = float(cost)
        if not cost >= 0.0:
            raise InvalidEdge(f"edge {k} ({u}->{v}) has negative cost {cost}")
        if np.any(~(res >= 0.0)):
            raise InvalidEdge(f"edge {k} ({u}->{v}) has negative resource consumption")
        froms.append(u)
        tos.append(v)
        costs.append(cost)
        res_rows.append(res)

    if n_resources is None:
        n_resources = 0

    edge_from = np.asarray(froms, dtype=np.int64)
    order = np.argsort(edge_from, kind="stable")
    edge_from = edge_from[order]
    edge_to = np.asarray(tos, dtype=np.int64)[order]
    edge_cost = np.asarray(costs, dtype=np.float64)[order]
    if res_rows:
        edge_res = np.vstack(res_rows)[order]
    else:
        edge_res = np.zeros((0, n_resources), dtype=np.float64)

    adj_ptr = np.zeros(num_nodes + 1, dtype=np.int64)
    np.cumsum(np.bincount(edge_from, minlength=num_nodes), out=adj_ptr[1:])

    return Graph(
        num_nodes=num_nodes,
        n_resources=int(n_resources),
        edge_from=_readonly(edge_from),
        edge_to=_readonly(edge_to),
        edge_cost=_readonly(edge_cost),
        edge_res=_readonly(np.ascontiguousarray(edge_res)),
        adj_ptr=_readonly(adj_ptr),
    )
