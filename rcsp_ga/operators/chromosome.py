import numpy as np

from ..engine.errors import InvalidGraph


def make_chromosome(genes, fitness=0.0):
    return {
        "genes": np.asarray(genes, dtype=np.int64).copy(),
        "fitness": float(fitness),
    }


def clone_chromosome(chrom):
    return {
        "genes": chrom["genes"].copy(),
        "fitness": float(chrom["fitness"]),
    }


def random_chromosome(num_nodes, rng):
    """Uniformly random ordering of the intermediate nodes ``1..num_nodes-2``."""
    if num_nodes < 3:
        raise InvalidGraph(
            f"graph with {num_nodes} nodes has no intermediate nodes to order"
        )
    genes = rng.permutation(np.arange(1, num_nodes - 1, dtype=np.int64))
    return make_chromosome(genes)


def is_permutation(genes, num_nodes):
    genes = np.asarray(genes)
    expected = np.arange(1, num_nodes - 1)
    return genes.shape == expected.shape and np.array_equal(np.sort(genes), expected)
