import numpy as np

from ..config.enums import FITNESS_INFEASIBLE
from .decoder import decode


def fitness_from_cost(cost):
    # lower cost means higher fitness; a zero-cost path is unbeatable
    if cost is None:
        return FITNESS_INFEASIBLE
    if cost <= 0.0:
        return np.inf
    return 1.0 / cost


def cost_from_fitness(fitness):
    if fitness <= 0.0:
        return np.inf
    return 1.0 / fitness


def evaluate(chromosome, graph, resource_limits):
    """Decode ``chromosome`` and store its fitness. Returns the decode result."""
    decoded = decode(graph, chromosome, resource_limits)
    chromosome["fitness"] = float(fitness_from_cost(None if decoded is None else decoded[1]))
    return decoded
