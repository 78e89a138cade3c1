from .chromosome import clone_chromosome


def tournament_selection(population, tournament_size, rng):
    """Return a clone of the fittest of ``tournament_size`` entrants drawn
    with replacement. A later entrant only wins with strictly higher fitness."""
    size = len(population)
    best = population[int(rng.integers(0, size))]
    for _ in range(1, tournament_size):
        competitor = population[int(rng.integers(0, size))]
        if competitor["fitness"] > best["fitness"]:
            best = competitor
    return clone_chromosome(best)
