import numpy as np
import pytest

from rcsp_ga.engine.errors import InvalidGraph
from rcsp_ga.operators import (
    clone_chromosome,
    is_permutation,
    make_chromosome,
    order_crossover,
    random_chromosome,
    repair_underfilled,
    swap_mutation,
    tournament_selection,
)


class _ScriptedRng:
    """Replays fixed draws so operator behaviour can be checked exactly."""

    def __init__(self, ints=(), floats=()):
        self._ints = list(ints)
        self._floats = list(floats)

    def integers(self, low, high=None):
        val = self._ints.pop(0)
        assert low <= val < high
        return val

    def random(self):
        return self._floats.pop(0)


def test_random_chromosome_is_permutation():
    rng = np.random.default_rng(42)
    for num_nodes in (3, 4, 10, 25):
        for _ in range(20):
            chrom = random_chromosome(num_nodes, rng)
            assert chrom["fitness"] == 0.0
            assert is_permutation(chrom["genes"], num_nodes)
            assert sorted(chrom["genes"].tolist()) == list(range(1, num_nodes - 1))


def test_random_chromosome_without_intermediate_nodes_fails():
    rng = np.random.default_rng(0)
    with pytest.raises(InvalidGraph):
        random_chromosome(2, rng)


def test_is_permutation_rejects_bad_sequences():
    assert not is_permutation([1, 1, 2], 5)
    assert not is_permutation([0, 1, 2], 5)
    assert not is_permutation([1, 2], 5)
    assert is_permutation([3, 1, 2], 5)


def test_clone_is_independent():
    chrom = make_chromosome([1, 2, 3], fitness=0.5)
    clone = clone_chromosome(chrom)
    clone["genes"][0] = 3
    clone["fitness"] = 0.0
    np.testing.assert_array_equal(chrom["genes"], [1, 2, 3])
    assert chrom["fitness"] == 0.5


def test_order_crossover_known_child():
    p1 = make_chromosome([1, 2, 3, 4, 5, 6, 7, 8])
    p2 = make_chromosome([8, 7, 6, 5, 4, 3, 2, 1])
    # cut points drawn in reverse order are normalised to start=2, end=4
    child = order_crossover(p1, p2, _ScriptedRng(ints=[4, 2]))
    np.testing.assert_array_equal(child["genes"], [2, 1, 3, 4, 5, 8, 7, 6])
    assert child["fitness"] == 0.0


def test_order_crossover_full_segment_copies_parent1():
    p1 = make_chromosome([3, 1, 4, 2])
    p2 = make_chromosome([1, 2, 3, 4])
    child = order_crossover(p1, p2, _ScriptedRng(ints=[0, 3]))
    np.testing.assert_array_equal(child["genes"], [3, 1, 4, 2])


def test_order_crossover_single_point_segment():
    p1 = make_chromosome([3, 1, 4, 2])
    p2 = make_chromosome([1, 2, 3, 4])
    # segment [1, 1] keeps gene 1, fill starts at slot 2 and wraps
    child = order_crossover(p1, p2, _ScriptedRng(ints=[1, 1]))
    np.testing.assert_array_equal(child["genes"], [4, 1, 2, 3])


def test_order_crossover_preserves_permutation():
    rng = np.random.default_rng(42)
    num_nodes = 12
    for _ in range(200):
        p1 = random_chromosome(num_nodes, rng)
        p2 = random_chromosome(num_nodes, rng)
        child = order_crossover(p1, p2, rng)
        assert is_permutation(child["genes"], num_nodes)


def test_order_crossover_does_not_touch_parents():
    rng = np.random.default_rng(1)
    p1 = make_chromosome([1, 2, 3, 4, 5], fitness=0.2)
    p2 = make_chromosome([5, 4, 3, 2, 1], fitness=0.1)
    order_crossover(p1, p2, rng)
    np.testing.assert_array_equal(p1["genes"], [1, 2, 3, 4, 5])
    np.testing.assert_array_equal(p2["genes"], [5, 4, 3, 2, 1])


def test_order_crossover_length_mismatch():
    with pytest.raises(ValueError):
        order_crossover(
            make_chromosome([1, 2, 3]),
            make_chromosome([1, 2]),
            np.random.default_rng(0),
        )


def test_order_crossover_rejects_out_of_range_genes():
    with pytest.raises(ValueError):
        order_crossover(
            make_chromosome([1, 2, 3]),
            make_chromosome([0, 1, 2]),
            np.random.default_rng(0),
        )


def test_underfilled_child_is_repaired():
    # malformed parent2 cannot supply the genes missing from the segment
    p1 = make_chromosome([1, 2, 3, 4])
    p2 = make_chromosome([1, 1, 1, 1])
    child = order_crossover(p1, p2, _ScriptedRng(ints=[0, 1]))
    np.testing.assert_array_equal(child["genes"], [1, 2, 3, 4])

    p2 = make_chromosome([4, 4, 4, 4])
    child = order_crossover(p1, p2, _ScriptedRng(ints=[0, 0]))
    np.testing.assert_array_equal(child["genes"], [1, 4, 2, 3])
    assert is_permutation(child["genes"], 6)


def test_repair_underfilled_fills_in_ascending_order():
    child = np.array([0, 5, 0, 1, 0], dtype=np.int64)
    repair_underfilled(child)
    np.testing.assert_array_equal(child, [2, 5, 3, 1, 4])

    full = np.array([2, 1, 3], dtype=np.int64)
    repair_underfilled(full)
    np.testing.assert_array_equal(full, [2, 1, 3])


def test_swap_mutation_swaps_drawn_positions():
    chrom = make_chromosome([1, 2, 3])
    swapped = swap_mutation(chrom, 1.0, _ScriptedRng(ints=[0, 2], floats=[0.0]))
    assert swapped
    np.testing.assert_array_equal(chrom["genes"], [3, 2, 1])


def test_swap_mutation_same_index_is_noop():
    chrom = make_chromosome([1, 2, 3])
    swap_mutation(chrom, 1.0, _ScriptedRng(ints=[1, 1], floats=[0.0]))
    np.testing.assert_array_equal(chrom["genes"], [1, 2, 3])


def test_swap_mutation_respects_rate():
    chrom = make_chromosome([1, 2, 3])
    assert not swap_mutation(chrom, 0.0, _ScriptedRng(floats=[0.0]))
    assert not swap_mutation(chrom, 0.5, _ScriptedRng(floats=[0.7]))
    np.testing.assert_array_equal(chrom["genes"], [1, 2, 3])


def test_swap_mutation_preserves_permutation():
    rng = np.random.default_rng(7)
    chrom = random_chromosome(15, rng)
    for _ in range(100):
        swap_mutation(chrom, 0.5, rng)
        assert is_permutation(chrom["genes"], 15)


def _population():
    return [
        make_chromosome([1, 2], fitness=1.0),
        make_chromosome([2, 1], fitness=1.0),
        make_chromosome([1, 2], fitness=0.5),
    ]


def test_tournament_ties_keep_earliest_entrant():
    population = _population()
    winner = tournament_selection(population, 3, _ScriptedRng(ints=[0, 1, 2]))
    np.testing.assert_array_equal(winner["genes"], [1, 2])
    assert winner["fitness"] == 1.0

    winner = tournament_selection(population, 2, _ScriptedRng(ints=[1, 0]))
    np.testing.assert_array_equal(winner["genes"], [2, 1])


def test_tournament_strictly_fitter_later_entrant_wins():
    population = _population()
    winner = tournament_selection(population, 2, _ScriptedRng(ints=[2, 1]))
    np.testing.assert_array_equal(winner["genes"], [2, 1])
    assert winner["fitness"] == 1.0


def test_tournament_returns_clone():
    population = _population()
    winner = tournament_selection(population, 1, _ScriptedRng(ints=[0]))
    assert winner is not population[0]
    winner["genes"][0] = 2
    np.testing.assert_array_equal(population[0]["genes"], [1, 2])
