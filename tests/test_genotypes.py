"""
tests/test_genotypes.py - Genome values and genotype population tracking.
"""

import random

import pytest

from evostats import Genome, GenomeRegistry, GenotypePopulationTracker, UnknownGenotype
from conftest import genome


def brute_force_dominant(population):
    """Independent argmax: highest count, lowest genome among ties."""
    best = max(population.values())
    return min(g for g, c in population.items() if c == best), best


class TestGenome:
    """Genome value semantics."""

    def test_value_equality_and_hash(self):
        a = Genome.of([1, 2, 3])
        b = Genome((1, 2, 3))
        assert a == b
        assert hash(a) == hash(b)
        assert {a: 1}[b] == 1

    def test_different_genes_differ(self):
        assert Genome((1, 2, 3)) != Genome((1, 2, 4))

    def test_lexicographic_order(self):
        assert Genome((0, 7, 7)) < Genome((1, 0, 0))
        assert min([Genome((2, 0)), Genome((1, 9)), Genome((1, 3))]) == Genome((1, 3))

    def test_display_concatenates_genes(self):
        assert Genome((0, 1, 2, 7)).display() == "0127"
        assert str(Genome((5, 5))) == "55"

    def test_zeros_default_length(self):
        z = Genome.zeros()
        assert len(z) == 32
        assert set(z.genes) == {0}

    def test_is_immutable(self):
        g = Genome((1, 2))
        with pytest.raises(AttributeError):
            g.genes = (3, 4)


class TestGenomeRegistry:
    """Registry stores each genome once under a stable id."""

    def test_intern_returns_same_id(self):
        reg = GenomeRegistry()
        first = reg.intern(Genome((1, 2)))
        assert reg.intern(Genome((1, 2))) == first
        assert reg.intern(Genome((2, 1))) != first
        assert len(reg) == 2

    def test_release_forgets_genome(self):
        reg = GenomeRegistry()
        gid = reg.intern(Genome((1,)))
        reg.release(gid)
        assert Genome((1,)) not in reg
        assert reg.lookup(Genome((1,))) is None

    def test_ids_are_not_reused(self):
        reg = GenomeRegistry()
        gid = reg.intern(Genome((1,)))
        reg.release(gid)
        assert reg.intern(Genome((1,))) != gid


class TestGenotypePopulationTracker:
    """Live counts and dominant genotype."""

    def test_two_a_one_b_then_death_of_a(self):
        """A, A, B -> (A, 2); one A dies -> tie at 1, lowest genome wins."""
        a = genome(2, 2)
        b = genome(1, 1)
        tracker = GenotypePopulationTracker()
        tracker.on_birth(a)
        tracker.on_birth(a)
        tracker.on_birth(b)
        assert tracker.dominant() == (a, 2)

        tracker.on_death(a)
        assert tracker.dominant() == (b, 1)

    def test_tie_break_independent_of_insertion_order(self):
        low = genome(0, 1)
        high = genome(0, 2)
        other = genome(0, 3)
        for order in ([low, high], [high, low]):
            tracker = GenotypePopulationTracker()
            for g in order:
                tracker.on_birth(g)
                tracker.on_birth(g)
            tracker.on_birth(other)
            tracker.on_death(other)
            assert tracker.dominant() == (low, 2)

    def test_birth_of_other_genome_never_lowers_dominant(self):
        a = genome(1)
        b = genome(2)
        tracker = GenotypePopulationTracker()
        tracker.on_birth(a)
        tracker.on_birth(a)
        assert tracker.on_birth(b) is False
        assert tracker.on_birth(b) is False  # ties do not replace on birth
        assert tracker.dominant() == (a, 2)
        assert tracker.on_birth(b) is True
        assert tracker.dominant() == (b, 3)

    def test_extinct_population_falls_back_to_sentinel(self):
        tracker = GenotypePopulationTracker()
        assert tracker.dominant() == (Genome.zeros(32), 0)
        a = genome(4, 4, 4)
        tracker.on_birth(a)
        tracker.on_death(a)
        assert tracker.dominant() == (Genome.zeros(32), 0)
        assert tracker.distinct() == 0

    def test_zero_count_entries_are_removed(self):
        a = genome(3)
        tracker = GenotypePopulationTracker()
        tracker.on_birth(a)
        tracker.on_death(a)
        assert tracker.count(a) == 0
        assert a not in tracker.genomes()
        assert a not in tracker.registry

    def test_death_of_unknown_genome_raises(self):
        tracker = GenotypePopulationTracker()
        with pytest.raises(UnknownGenotype):
            tracker.on_death(genome(9))

    def test_death_below_zero_raises(self):
        a = genome(5)
        tracker = GenotypePopulationTracker()
        tracker.on_birth(a)
        tracker.on_death(a)
        with pytest.raises(UnknownGenotype) as exc:
            tracker.on_death(a)
        assert exc.value.genome == a

    def test_death_reports_dominant_change(self):
        a = genome(1)
        b = genome(2)
        tracker = GenotypePopulationTracker()
        for g in (a, a, a, b):
            tracker.on_birth(g)
        assert tracker.on_death(b) is False
        assert tracker.on_death(a) is True

    def test_random_sequences_match_brute_force(self):
        """Counts equal births minus deaths; every death leaves the true argmax."""
        rng = random.Random(1234)
        pool = [genome(rng.randrange(3), rng.randrange(3)) for _ in range(6)]
        tracker = GenotypePopulationTracker()
        expected = {}

        for _ in range(2000):
            alive = [g for g, c in expected.items() if c > 0]
            if alive and rng.random() < 0.45:
                g = rng.choice(alive)
                tracker.on_death(g)
                expected[g] -= 1
                population = {k: v for k, v in expected.items() if v > 0}
                if population:
                    assert tracker.dominant() == brute_force_dominant(population)
                else:
                    assert tracker.dominant()[1] == 0
            else:
                g = rng.choice(pool)
                tracker.on_birth(g)
                expected[g] = expected.get(g, 0) + 1

            for g, c in expected.items():
                assert tracker.count(g) == c
                assert c >= 0

        assert tracker.total() == sum(expected.values())
