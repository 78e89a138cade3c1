import time

import numpy as np

from .decoder import search
from .dimension import as_limits, prefix_within_limits
from .errors import InvalidGraph
from .fitness import cost_from_fitness, evaluate
from ..operators import (
    clone_chromosome,
    is_permutation,
    order_crossover,
    swap_mutation,
    tournament_selection,
)
from ..preprocessing.initial_population import build_initial


def _check_rate(name, value):
    if not 0.0 <= value <= 1.0:
        raise ValueError(f"{name} must lie in [0, 1], got {value}")
    return value


def _elite_count(population_size, elite_fraction):
    return int(population_size * elite_fraction)


def sort_population(population):
    # stable: equal fitness keeps the previous order
    population.sort(key=lambda c: c["fitness"], reverse=True)
    return population


def population_stats(population):
    fitness = np.array([c["fitness"] for c in population], dtype=np.float64)
    best = float(fitness.max()) if fitness.size else 0.0
    return {
        "best_fitness": best,
        "mean_fitness": float(fitness.mean()) if fitness.size else 0.0,
        "best_cost": float(cost_from_fitness(best)),
        "feasible": int((fitness > 0.0).sum()),
        "diversity": len({c["genes"].tobytes() for c in population}),
    }


def _record(metrics, generation, population):
    if metrics is None:
        return
    stats = population_stats(population)
    metrics.append(
        generation,
        stats["best_fitness"],
        stats["mean_fitness"],
        stats["best_cost"],
        stats["feasible"],
        stats["diversity"],
    )


def next_generation(
    population,
    graph,
    limits,
    rng,
    *,
    crossover_rate,
    mutation_rate,
    tournament_size=3,
    elite_fraction=0.1,
):
    """Build the next population from ``population`` (sorted in place)."""

    size = len(population)
    sort_population(population)
    new_population = [clone_chromosome(c) for c in population[: _elite_count(size, elite_fraction)]]

    while len(new_population) < size:
        parent1 = tournament_selection(population, tournament_size, rng)
        parent2 = tournament_selection(population, tournament_size, rng)

        if rng.random() < crossover_rate:
            child = order_crossover(parent1, parent2, rng)
        elif parent1["fitness"] > parent2["fitness"]:
            child = parent1
        else:
            child = parent2

        swap_mutation(child, mutation_rate, rng)
        evaluate(child, graph, limits)
        new_population.append(child)

    return new_population


def run_ga(graph, resource_limits, params, metrics=None, rng=None):
    """Evolve orderings of the intermediate nodes and decode the best one.

    Returns a dict with the best chromosome, its decoded ``path``/``cost``
    (``None``/``inf`` when infeasible), the cumulative cost and resource
    profile along the path, the final sorted population and run metadata.
    """

    if rng is None:
        rng = np.random.default_rng()
    if graph.n_intermediate < 1:
        raise InvalidGraph(
            f"graph with {graph.num_nodes} nodes has no intermediate nodes to order"
        )
    limits = as_limits(graph, resource_limits)

    population_size = int(params.get("population_size", 50))
    generations = int(params.get("generations", 100))
    crossover_rate = _check_rate("crossover_rate", float(params.get("crossover_rate", 0.8)))
    mutation_rate = _check_rate("mutation_rate", float(params.get("mutation_rate", 0.1)))
    tournament_size = int(params.get("tournament_size", 3))
    elite_fraction = _check_rate("elite_fraction", float(params.get("elite_fraction", 0.1)))
    log_period = max(1, int(params.get("log_period", 10)))
    time_limit = float(params.get("time_limit") or 0.0)

    if population_size < 1:
        raise ValueError("population_size must be at least 1")
    if generations < 0:
        raise ValueError("generations must be non-negative")
    if tournament_size < 1:
        raise ValueError("tournament_size must be at least 1")

    started = time.perf_counter()
    population = build_initial(graph, limits, population_size, rng)
    _record(metrics, 0, population)

    completed = 0
    stopped_early = False
    for gen in range(1, generations + 1):
        population = next_generation(
            population,
            graph,
            limits,
            rng,
            crossover_rate=crossover_rate,
            mutation_rate=mutation_rate,
            tournament_size=tournament_size,
            elite_fraction=elite_fraction,
        )
        completed = gen

        out_of_time = time_limit > 0.0 and (time.perf_counter() - started) >= time_limit
        if (gen % log_period) == 0 or gen == generations or out_of_time:
            _record(metrics, gen, population)
        if out_of_time and gen < generations:
            stopped_early = True
            break

    sort_population(population)
    best = clone_chromosome(population[0])
    decoded = search(graph, best["genes"], limits)
    if not prefix_within_limits(decoded["resources_along"], limits):
        raise RuntimeError(f"decoded path {decoded['path']} exceeds resource limits {limits.tolist()}")
    invalid = sum(1 for c in population if not is_permutation(c["genes"], graph.num_nodes))

    return {
        "best": best,
        "path": decoded["path"],
        "cost": decoded["cost"],
        "costs_along": decoded["costs_along"],
        "resources_along": decoded["resources_along"],
        "population": population,
        "meta": {
            "generations_completed": completed,
            "stopped_early": stopped_early,
            "invalid_chromosomes": invalid,
            "elapsed": time.perf_counter() - started,
        },
    }


def run_search(
    graph,
    population_size,
    generations,
    crossover_rate,
    mutation_rate,
    resource_limits,
    *,
    rng=None,
    seed=None,
    metrics=None,
    tournament_size=3,
    elite_fraction=0.1,
    time_limit=None,
):
    """Best path found by the GA, or ``None`` when no feasible path was found."""

    if rng is None:
        rng = np.random.default_rng(seed)
    params = {
        "population_size": population_size,
        "generations": generations,
        "crossover_rate": crossover_rate,
        "mutation_rate": mutation_rate,
        "tournament_size": tournament_size,
        "elite_fraction": elite_fraction,
        "log_period": 1,
        "time_limit": time_limit,
    }
    return run_ga(graph, resource_limits, params, metrics, rng)["path"]
