import numpy as np

from ._numba_utils import ox_fill
from .chromosome import make_chromosome


def _check_parent(genes, n):
    if genes.size and (genes.min() < 1 or genes.max() > n):
        raise ValueError("parent genes must lie in 1..n")


def repair_underfilled(child):
    """Fill zero slots with the missing values of ``1..n`` in ascending order.

    Only malformed parents leave slots unfilled; valid permutations always
    fill the child completely.
    """
    holes = np.flatnonzero(child == 0)
    if holes.size == 0:
        return child
    n = child.shape[0]
    missing = np.setdiff1d(np.arange(1, n + 1, dtype=child.dtype), child)
    child[holes] = missing[: holes.size]
    return child


def order_crossover(parent1, parent2, rng):
    """OX crossover: keep a random segment of ``parent1`` and fill the rest
    in ``parent2``'s order, starting after the segment and wrapping around.
    Returns a new chromosome with fitness 0."""
    g1 = np.ascontiguousarray(parent1["genes"], dtype=np.int64)
    g2 = np.ascontiguousarray(parent2["genes"], dtype=np.int64)
    n = g1.shape[0]
    if g2.shape[0] != n:
        raise ValueError("parents must have the same number of genes")
    if n == 0:
        return make_chromosome(g1)
    _check_parent(g1, n)
    _check_parent(g2, n)

    point1 = int(rng.integers(0, n))
    point2 = int(rng.integers(0, n))
    start, end = (point1, point2) if point1 < point2 else (point2, point1)

    child = np.zeros(n, dtype=np.int64)
    filled = ox_fill(g1, g2, start, end, child)
    if filled < n:
        repair_underfilled(child)
    return make_chromosome(child)
