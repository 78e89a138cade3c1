"""Shared Numba-accelerated kernels for the permutation operators."""

from __future__ import annotations

import numpy as np
from numba import njit


@njit(cache=True)
def ox_fill(genes1, genes2, start, end, child):
    """Order-crossover fill of ``child`` (pre-zeroed) from two parents.

    Parameters
    ----------
    genes1, genes2 : ndarray
        Parent gene sequences of equal length ``n`` with values in ``1..n``.
    start, end : int
        Inclusive segment copied verbatim from ``genes1``.
    child : ndarray
        Output buffer of length ``n``; slots left unfilled keep the value 0.

    Returns
    -------
    int
        Number of populated slots.
    """

    n = genes1.shape[0]
    used = np.zeros(n + 2, dtype=np.bool_)
    filled = 0
    for i in range(start, end + 1):
        child[i] = genes1[i]
        used[genes1[i]] = True
        filled += 1

    j = (end + 1) % n
    if j == start:
        return filled
    for idx in range(n):
        gene = genes2[idx]
        if not used[gene]:
            child[j] = gene
            used[gene] = True
            filled += 1
            j = (j + 1) % n
            if j == start:
                break
    return filled
