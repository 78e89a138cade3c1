"""Exception types raised for malformed graph input.

An infeasible instance is not an error: the decoder reports it as ``None`` and
the GA scores it with zero fitness.
"""


class RCSPError(ValueError):
    """Base class for malformed resource-constrained path problems."""


class InvalidGraph(RCSPError):
    """Graph cannot host a source/sink search (too few nodes)."""


class InvalidEdge(RCSPError):
    """Edge data inconsistent with the graph (endpoints, signs, resource length)."""
