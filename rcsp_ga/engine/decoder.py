"""Priority-guided feasible-path search used to decode chromosomes.

The frontier is a binary heap keyed by ``(priority, cost, push order)`` where
``priority`` is the rank of the node in the chromosome's gene sequence. The
first time the sink is popped its path is returned, so the decode is a
heuristic biased by the gene order and not an exact shortest-path solver.
"""

from __future__ import annotations

import heapq
import itertools
from typing import Any, Dict, List, Optional, Sequence, Tuple

import numpy as np

from ..config.enums import PRIORITY_MAX, SOURCE
from .dimension import as_limits, extend_resources

# frontier entry layout
_PRIO, _COST, _SEQ, _NODE, _RES, _PARENT = range(6)


def priority_map(genes: Sequence[int]) -> Dict[int, int]:
    return {int(node): rank for rank, node in enumerate(genes)}


def _unwind(entry) -> Tuple[List[int], np.ndarray, np.ndarray]:
    nodes = []
    costs = []
    res = []
    while entry is not None:
        nodes.append(int(entry[_NODE]))
        costs.append(entry[_COST])
        res.append(entry[_RES])
        entry = entry[_PARENT]
    nodes.reverse()
    costs.reverse()
    res.reverse()
    return nodes, np.asarray(costs, dtype=np.float64), np.vstack(res)


def search(graph, genes: Sequence[int], resource_limits) -> Dict[str, Any]:
    """Run the priority-guided search for one gene sequence.

    Returns a dict with ``feasible``, ``path``, ``cost``, the cumulative
    ``costs_along`` / ``resources_along`` the path (one row per node),
    ``expanded`` and ``pushed`` counters and ``best_cost`` (lowest cost seen
    per reached node). Infeasible searches report ``path=None`` and
    ``cost=inf``.
    """

    limits = as_limits(graph, resource_limits)
    priorities = priority_map(genes)
    sink = graph.sink
    n_res = graph.n_resources
    edge_to = graph.edge_to
    edge_cost = graph.edge_cost
    edge_res = graph.edge_res

    order = itertools.count()
    frontier = [(0, 0.0, next(order), SOURCE, np.zeros(n_res, dtype=np.float64), None)]
    visited = np.zeros(graph.num_nodes, dtype=np.bool_)
    best_cost = {SOURCE: 0.0}
    expanded = 0
    pushed = 1

    while frontier:
        entry = heapq.heappop(frontier)
        node = entry[_NODE]
        if node == sink:
            path, costs_along, resources_along = _unwind(entry)
            return {
                "feasible": True,
                "path": path,
                "cost": float(entry[_COST]),
                "costs_along": costs_along,
                "resources_along": resources_along,
                "expanded": expanded,
                "pushed": pushed,
                "best_cost": best_cost,
            }

        if visited[node]:
            continue
        visited[node] = True
        expanded += 1

        cost = entry[_COST]
        res = entry[_RES]
        for e in graph.out_edges(node):
            cand = np.empty(n_res, dtype=np.float64)
            if not extend_resources(res, edge_res[e], limits, cand):
                continue
            to = int(edge_to[e])
            new_cost = cost + float(edge_cost[e])
            heapq.heappush(
                frontier,
                (priorities.get(to, PRIORITY_MAX), new_cost, next(order), to, cand, entry),
            )
            pushed += 1
            if new_cost < best_cost.get(to, np.inf):
                best_cost[to] = new_cost

    return {
        "feasible": False,
        "path": None,
        "cost": float("inf"),
        "costs_along": np.zeros(0, dtype=np.float64),
        "resources_along": np.zeros((0, n_res), dtype=np.float64),
        "expanded": expanded,
        "pushed": pushed,
        "best_cost": best_cost,
    }


def decode(graph, chromosome, resource_limits) -> Optional[Tuple[List[int], float]]:
    """Decode ``chromosome`` into ``(path, cost)``, or ``None`` when infeasible."""

    result = search(graph, chromosome["genes"], resource_limits)
    if not result["feasible"]:
        return None
    return result["path"], result["cost"]
