from ..engine.fitness import evaluate
from ..operators.chromosome import random_chromosome


def build_initial(graph, resource_limits, population_size, rng):
    # Random orderings of the intermediate nodes, each decoded once for fitness
    population = []
    for _ in range(population_size):
        chrom = random_chromosome(graph.num_nodes, rng)
        evaluate(chrom, graph, resource_limits)
        population.append(chrom)
    return population
