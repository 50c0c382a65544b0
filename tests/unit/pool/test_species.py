"""
Unit tests for neatlite.pool.species module.

Tests cover membership, fitness sharing, distance to the representative
and spawning offspring (with and without elitism).
"""

import numpy as np
import pytest
from unittest.mock import Mock

from neatlite.genotype  import Genome
from neatlite.pool      import Species


# ============================================================================
# Fixtures
# ============================================================================

@pytest.fixture
def make_species(config, make_genome):
    """Factory building a species whose members have the given fitness values."""
    def _make_species(fitness_values):
        members = []
        for i, fitness in enumerate(fitness_values):
            genome = make_genome(config, [(0, 0, 4, float(i))])
            genome.fitness = fitness
            members.append(genome)

        species = Species(members[0], config)
        for genome in members[1:]:
            species.add(genome)
        return species
    return _make_species


# ============================================================================
# Test: Membership
# ============================================================================

class TestSpeciesMembership:

    def test_new_species(self, config):
        representative = Genome(config)
        species = Species(representative, config)

        assert species.representative is representative
        assert species.members == [representative]
        assert len(species) == 1
        assert species.offspring_count == 0
        assert species.adjusted_fitness_sum == 0.0

    def test_add(self, make_species):
        species = make_species([1.0, 2.0, 3.0])
        assert len(species) == 3

    def test_distance_to_uses_representative(self, config, make_genome):
        config.distance_weight_coeff = 2.0
        representative = make_genome(config, [(0, 0, 4, 1.0)])
        species = Species(representative, config)
        species.add(make_genome(config, [(0, 0, 4, 50.0)]))

        assert species.distance_to(make_genome(config, [(0, 0, 4, 1.5)])) == pytest.approx(1.0)
        assert species.distance_to(representative) == 0.0


# ============================================================================
# Test: Fitness sharing
# ============================================================================

class TestShareFitness:

    def test_adjusted_fitness(self, make_species):
        """Each member's adjusted fitness is its fitness divided by the species size."""
        species = make_species([2.0, 4.0, 6.0, 8.0])
        species.share_fitness()

        assert sorted(genome.adjusted_fitness for genome in species.members) == [0.5, 1.0, 1.5, 2.0]
        assert species.adjusted_fitness_sum == pytest.approx(5.0)

    def test_members_sorted_by_fitness(self, make_species):
        species = make_species([2.0, 8.0, 4.0])
        species.share_fitness()

        assert [genome.fitness for genome in species.members] == [8.0, 4.0, 2.0]

    def test_champion(self, make_species):
        species = make_species([2.0, 8.0, 4.0])
        assert species.champion().fitness == 8.0


# ============================================================================
# Test: Spawning offspring
# ============================================================================

class TestSpawn:

    def test_no_offspring(self, make_species, rng):
        species = make_species([1.0] * 8)
        mutate = Mock()

        assert species.spawn(mutate, rng) == []
        mutate.assert_not_called()

    def test_small_species_mutates_every_offspring(self, make_species, rng):
        """Species with at most 5 members get no elitism."""
        species = make_species([1.0, 2.0, 3.0, 4.0, 5.0])
        species.offspring_count = 4
        mutate = Mock()

        offspring = species.spawn(mutate, rng)

        assert len(offspring) == 4
        assert mutate.call_count == 4
        for child in offspring:
            assert child not in species.members

    def test_large_species_keeps_champion(self, make_species, rng):
        """The champion of a species with more than 5 members is copied unchanged."""
        species = make_species([1.0, 2.0, 9.0, 4.0, 5.0, 3.0])
        species.share_fitness()
        species.offspring_count = 3
        mutate = Mock()

        offspring = species.spawn(mutate, rng)
        champion  = species.champion()

        assert len(offspring) == 3
        assert mutate.call_count == 2
        assert offspring[0] is not champion
        assert offspring[0].conn_genes == champion.conn_genes
        assert all(call.args[0] is not offspring[0] for call in mutate.call_args_list)

    def test_single_offspring_of_large_species_is_champion(self, make_species, rng):
        species = make_species([1.0, 2.0, 9.0, 4.0, 5.0, 3.0])
        species.offspring_count = 1
        mutate = Mock()

        offspring = species.spawn(mutate, rng)

        assert len(offspring) == 1
        assert offspring[0].fitness == 9.0
        mutate.assert_not_called()

    def test_offspring_are_copies(self, make_species, rng):
        """Mutating offspring never touches the parents."""
        species = make_species([1.0, 2.0, 3.0])
        species.offspring_count = 5

        def mutate(genome):
            genome.gene(0).weight = -100.0

        species.spawn(mutate, rng)

        assert all(genome.gene(0).weight >= 0.0 for genome in species.members)

    def test_offspring_may_exceed_species_size(self, make_species):
        species = make_species([1.0, 2.0])
        species.offspring_count = 7

        offspring = species.spawn(Mock(), np.random.default_rng(0))

        assert len(offspring) == 7

    def test_champion_threshold_is_configurable(self, config, make_species, rng):
        config.champion_min_species_size = 1
        species = make_species([1.0, 5.0])
        species.offspring_count = 2
        mutate = Mock()

        species.spawn(mutate, rng)

        assert mutate.call_count == 1
