"""Genetic operators over intermediate-node permutations."""

from .chromosome import clone_chromosome, is_permutation, make_chromosome, random_chromosome
from .crossover import order_crossover, repair_underfilled
from .mutation import swap_mutation
from .selection import tournament_selection

__all__ = [
    "clone_chromosome",
    "is_permutation",
    "make_chromosome",
    "random_chromosome",
    "order_crossover",
    "repair_underfilled",
    "swap_mutation",
    "tournament_selection",
]
