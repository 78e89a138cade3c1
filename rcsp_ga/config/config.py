# Simple parameter defaults (extend freely)
DEFAULTS = {
    "population_size": 50,
    "generations": 100,
    "crossover_rate": 0.8,
    "mutation_rate": 0.1,
    "tournament_size": 3,
    "elite_fraction": 0.1,  # share of the population copied verbatim each generation
    "log_period": 10,       # record metrics every N generations
    "time_limit": 0.0,      # wall-clock budget in seconds, 0 disables it
}
