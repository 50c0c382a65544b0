"""
Unit tests for neatlite.pool.population module.

Tests cover the initial population, the mutation driver, reproduction
(population size, elitism, generation counter), seeding and the queries.
"""

import numpy as np
import pytest
from unittest.mock import Mock, patch

from neatlite.errors            import ConfigurationError, MutationExhausted
from neatlite.genotype          import Genome
from neatlite.pool              import Population


# ============================================================================
# Fixtures
# ============================================================================

@pytest.fixture
def population(config):
    return Population(config, seed=1)


def assign_random_fitness(population, rng):
    for genome in population.genomes:
        genome.fitness = float(rng.random())


# ============================================================================
# Test: Initialization
# ============================================================================

class TestPopulationInit:
    """Test creating the initial population."""

    def test_initial_population(self, population):
        """20 genomes, each with 5 input->output genes numbered 0 to 4."""
        assert len(population) == 20
        assert population.generation == 0
        assert population.species == []
        for genome in population.genomes:
            assert set(genome.conn_genes) == {0, 1, 2, 3, 4}
        assert population.innovation_tracker.next_innovation_number == 5

    def test_starting_genes_connect_inputs_to_outputs(self, population):
        genome = population.genomes[0]
        pairs = [(gene.node_in, gene.node_out) for gene in genome.conn_genes.values()]

        assert len(set(pairs)) == 5
        for node_in, node_out in pairs:
            assert node_in in genome.input_nodes
            assert node_out in genome.output_nodes

    def test_all_genomes_share_the_same_structure(self, population):
        first = population.genomes[0]
        for genome in population.genomes[1:]:
            for innov, gene in genome.conn_genes.items():
                assert (gene.node_in, gene.node_out) == (first.gene(innov).node_in, first.gene(innov).node_out)

    def test_genomes_are_independent(self, population):
        population.genomes[0].gene(0).weight = 1000.0
        assert all(genome.gene(0).weight != 1000.0 for genome in population.genomes[1:])

    def test_weights_in_range(self, config, population):
        for genome in population.genomes:
            for gene in genome.conn_genes.values():
                assert config.min_weight <= gene.weight <= config.max_weight

    def test_every_input_output_pair(self, config):
        """Asking for all 24 pairs is allowed."""
        config.num_starting_genes = 24
        population = Population(config, seed=0)

        assert len(population.genomes[0].conn_genes) == 24

    def test_too_many_starting_genes(self, config):
        config.num_starting_genes = 25

        with pytest.raises(ConfigurationError, match="too many starting genes"):
            Population(config)

    def test_no_starting_genes(self, config):
        config.num_starting_genes = 0
        population = Population(config, seed=0)

        assert all(genome.conn_genes == {} for genome in population.genomes)

    def test_seed_from_config(self, config):
        config.seed = 99
        population1 = Population(config)
        population2 = Population(config)

        assert population1.genomes[3].conn_genes == population2.genomes[3].conn_genes

    def test_seed_argument_overrides_config(self, config):
        config.seed = 99
        population1 = Population(config, seed=5)
        population2 = Population(config, seed=5)
        population3 = Population(config)

        assert population1.genomes[0].conn_genes == population2.genomes[0].conn_genes
        assert population1.genomes[0].conn_genes != population3.genomes[0].conn_genes


# ============================================================================
# Test: Mutation
# ============================================================================

class TestMutateGenome:
    """Test the mutation driver."""

    def test_all_operators_applied(self, config, population):
        config.gene_add_probability = config.node_add_probability = config.weight_nudge_probability = 1.0
        genome = Mock(spec=Genome)

        population.mutate_genome(genome)

        genome.mutate_add_gene.assert_called_once_with(population.innovation_tracker, population.rng)
        genome.mutate_add_node.assert_called_once_with(population.innovation_tracker, population.rng)
        genome.nudge_weights.assert_called_once_with(population.rng)

    def test_no_operator_applied(self, config, population):
        config.gene_add_probability = config.node_add_probability = config.weight_nudge_probability = 0.0
        genome = Mock(spec=Genome)

        population.mutate_genome(genome)

        genome.mutate_add_gene.assert_not_called()
        genome.mutate_add_node.assert_not_called()
        genome.nudge_weights.assert_not_called()

    def test_exhausted_mutations_are_skipped(self, config, population, caplog):
        config.gene_add_probability = config.node_add_probability = config.weight_nudge_probability = 1.0
        genome = Mock(spec=Genome)
        genome.mutate_add_gene.side_effect = MutationExhausted("no room")
        genome.mutate_add_node.side_effect = MutationExhausted("nothing to split")

        with caplog.at_level("DEBUG", logger="neatlite.pool.population"):
            population.mutate_genome(genome)

        genome.nudge_weights.assert_called_once()
        assert "no room" in caplog.text
        assert "nothing to split" in caplog.text

    def test_structural_mutations_use_shared_tracker(self, config, population):
        config.gene_add_probability = config.node_add_probability = 1.0
        genome = population.genomes[0].copy()

        population.mutate_genome(genome)

        # add node always succeeds here: 2 new genes, plus possibly 1 from add gene
        assert population.innovation_tracker.next_innovation_number in (7, 8)
        assert max(genome.conn_genes) == population.innovation_tracker.next_innovation_number - 1


# ============================================================================
# Test: Reproduction
# ============================================================================

class TestReproduce:
    """Test breeding the next generation."""

    def test_population_size_preserved(self, population):
        rng = np.random.default_rng(0)
        for generation in range(1, 11):
            assign_random_fitness(population, rng)
            population.reproduce()

            assert len(population) == 20
            assert population.generation == generation

    def test_population_size_preserved_with_zero_fitness(self, population):
        for _ in range(5):
            for genome in population.genomes:
                genome.fitness = 0.0
            population.reproduce()

            assert len(population) == 20

    def test_offspring_are_new_genomes(self, population):
        assign_random_fitness(population, np.random.default_rng(0))
        previous = {id(genome) for genome in population.genomes}

        population.reproduce()

        assert not previous & {id(genome) for genome in population.genomes}

    def test_champion_survives_unchanged(self, config, population):
        """With a single large species, the fittest genome is carried over as is."""
        config.compatibility_threshold = 1e9
        assign_random_fitness(population, np.random.default_rng(0))
        champion = population.genomes[7]
        champion.fitness = 10.0

        population.reproduce()

        assert any(genome.conn_genes == champion.conn_genes for genome in population.genomes)

    def test_offspring_counts_match_population_size(self, population):
        assign_random_fitness(population, np.random.default_rng(0))
        population.reproduce()

        assert sum(population.offspring_counts()) == 20
        assert sum(population.species_sizes()) == 20

    def test_innovation_numbers_below_tracker(self, config, population):
        config.gene_add_probability = 0.5
        config.node_add_probability = 0.3
        rng = np.random.default_rng(0)
        for _ in range(15):
            assign_random_fitness(population, rng)
            population.reproduce()

        next_innovation = population.innovation_tracker.next_innovation_number
        assert next_innovation > 5
        for genome in population.genomes:
            assert all(innov < next_innovation for innov in genome.conn_genes)

    def test_same_seed_same_evolution(self, config):
        """Two populations with the same seed, fed the same fitness values, evolve identically."""
        populations = [Population(config, seed=123), Population(config, seed=123)]
        for population in populations:
            rng = np.random.default_rng(0)
            for _ in range(5):
                assign_random_fitness(population, rng)
                population.reproduce()

        for genome1, genome2 in zip(populations[0].genomes, populations[1].genomes):
            assert genome1.conn_genes == genome2.conn_genes

    def test_reproduce_calls_speciation_and_allocation(self, population):
        manager = population._species_manager
        with patch.object(manager, 'speciate', wraps=manager.speciate) as speciate, \
             patch.object(manager, 'allocate_offspring', wraps=manager.allocate_offspring) as allocate:
            population.reproduce()

        speciate.assert_called_once()
        allocate.assert_called_once()
        assert allocate.call_args.args[1] == 20


# ============================================================================
# Test: Queries
# ============================================================================

class TestPopulationQueries:

    def test_get_fittest_genome(self, population):
        population.genomes[4].fitness = 3.0
        assert population.get_fittest_genome() is population.genomes[4]

    def test_sort_by_fitness(self, population):
        assign_random_fitness(population, np.random.default_rng(2))
        population.sort_by_fitness()

        fitness = [genome.fitness for genome in population.genomes]
        assert fitness == sorted(fitness, reverse=True)

    def test_speciate_sets_adjusted_fitness(self, population):
        for genome in population.genomes:
            genome.fitness = 2.0

        species_list = population.speciate()

        assert population.species is species_list
        assert population.sum_adjusted_fitness() == pytest.approx(2.0 * len(species_list))
        population.sort_by_adjusted_fitness()
        adjusted = [genome.adjusted_fitness for genome in population.genomes]
        assert adjusted == sorted(adjusted, reverse=True)

    def test_speciate_logs_species_sizes(self, population, caplog):
        with caplog.at_level("DEBUG", logger="neatlite.pool.population"):
            population.speciate()

        assert "Species: " + " ".join(str(size) for size in population.species_sizes()) in caplog.text

    def test_str(self, population):
        assert str(population).count("NETWORK--------") == 20
