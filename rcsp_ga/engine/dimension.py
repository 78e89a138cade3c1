"""Resource dimension helpers shared by the decoder and reporting code."""

from __future__ import annotations

import numpy as np
from numba import njit


@njit(cache=True)
def extend_resources(current, consumption, limits, out):
    """Add ``consumption`` to ``current`` into ``out`` under hard ceilings.

    Returns ``False`` at the first component exceeding its limit; ``out`` is
    then only partially written and must be discarded.
    """

    for i in range(limits.shape[0]):
        val = current[i] + consumption[i]
        if val > limits[i]:
            return False
        out[i] = val
    return True


@njit(cache=True)
def prefix_within_limits(prefix, limits):
    """Check every row of a cumulative resource table against ``limits``."""

    for k in range(prefix.shape[0]):
        for i in range(limits.shape[0]):
            if prefix[k, i] > limits[i]:
                return False
    return True


def as_limits(graph, resource_limits) -> np.ndarray:
    limits = np.ascontiguousarray(resource_limits, dtype=np.float64).ravel()
    if limits.shape[0] != graph.n_resources:
        raise ValueError("resource_limits dimension mismatch with graph resources")
    if np.any(~(limits >= 0.0)):
        raise ValueError("resource_limits must be non-negative")
    return limits
