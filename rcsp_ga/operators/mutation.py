def swap_mutation(chromosome, mutation_rate, rng):
    """Swap two random positions in place with probability ``mutation_rate``.

    Positions are drawn with replacement, so the swap may be a no-op.
    Returns True when a swap was drawn.
    """
    if rng.random() < mutation_rate:
        genes = chromosome["genes"]
        n = genes.shape[0]
        if n == 0:
            return False
        i = int(rng.integers(0, n))
        j = int(rng.integers(0, n))
        genes[i], genes[j] = genes[j], genes[i]
        return True
    return False
