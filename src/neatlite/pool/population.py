"""
NEAT Population Module

This module implements the Population class, the top-level orchestrator for the NEAT
evolutionary algorithm. The population owns the genomes of the current generation,
the innovation tracker shared by all mutations, and the random number generator.

Classes:
    Population: Top-level evolutionary coordinator managing genomes and generations
"""

import logging
import numpy as np

from neatlite.errors                      import MutationExhausted
from neatlite.genotype.genome             import Genome
from neatlite.genotype.innovation_tracker import InnovationTracker
from neatlite.pool                        import ranking
from neatlite.pool.species                import Species
from neatlite.pool.species_manager        import SpeciesManager
from neatlite.run.config                  import Config

logger = logging.getLogger(__name__)

class Population:
    """
    A population of evolving genomes in the NEAT algorithm.

    The caller drives the evolution: after the population is created, and after
    every call to 'reproduce', it must assign a fitness to every genome (for
    instance by activating it on some task and scoring the outputs). Otherwise
    the next generation is bred from stale fitness values.

        population = Population(config, seed=42)
        for _ in range(100):
            for genome in population.genomes:
                genome.fitness = evaluate(genome)
            population.reproduce()

    Public Attributes:
        genomes:            List of all genomes in the current generation
        generation:         Number of times the population has reproduced
        innovation_tracker: Hands out innovation numbers to new connection genes
        rng:                Random number generator used by all stochastic operations
        species:            Species found by the most recent speciation

    Public Methods:
        speciate():                 Split the current genomes into species
        reproduce():                Replace the genomes by the next generation
        mutate_genome(genome):      Apply the mutation operators to a genome
        get_fittest_genome():       Return the genome with highest fitness
        sort_by_fitness():          Sort the genomes by raw fitness
        sort_by_adjusted_fitness(): Sort the genomes by adjusted fitness
        sum_adjusted_fitness():     Sum of all adjusted fitness values
        species_sizes():            Size of each species
        offspring_counts():         Offspring allocated to each species
    """

    def __init__(self, config: Config, seed: int | None = None):
        """
        Create the initial population.

        A seed genome is built with 'config.num_starting_genes' distinct connections,
        each from an input node to an output node, chosen at random. Every member of
        the population is a copy of the seed genome with randomized weights, so all
        of them share the same innovation numbers (0, 1, ...).

        Parameters:
            config: Stores configuration parameters
            seed:   Seed for the random number generator, overriding 'config.seed'.
                    If both are None the generator is seeded from OS entropy.

        Raises:
            ConfigurationError: if the configuration is invalid, in particular if more
                                starting genes are requested than there are distinct
                                input->output connections
        """
        config.validate()

        self._config = config
        self._species_manager = SpeciesManager(config)

        self.rng                = np.random.default_rng(config.seed if seed is None else seed)
        self.innovation_tracker = InnovationTracker()
        self.generation         = 0
        self.species: list[Species] = []

        seed_genome = self._make_seed_genome()

        self.genomes: list[Genome] = []
        for _ in range(config.population_size):
            genome = seed_genome.copy()
            genome.randomize_weights(self.rng)
            self.genomes.append(genome)

        logger.debug("Created population of %d genomes with %d starting genes",
                     len(self.genomes), config.num_starting_genes)

    @property
    def config(self) -> Config:
        return self._config

    def _make_seed_genome(self) -> Genome:
        """
        Build a genome connecting randomly selected input-output node pairs.
        """
        genome    = Genome(self._config)
        all_pairs = [(inp, out) for inp in genome.input_nodes for out in genome.output_nodes]
        picks     = self.rng.choice(len(all_pairs), size=self._config.num_starting_genes, replace=False)
        for pick in picks:
            node_in, node_out = all_pairs[pick]
            weight = self.rng.uniform(self._config.min_weight, self._config.max_weight)
            genome.add_gene(self.innovation_tracker.get_innovation_number(), node_in, node_out, weight)
        return genome

    def mutate_genome(self, genome: Genome) -> None:
        """
        Apply the mutation operators to a genome.

        Each operator is applied independently, with its own probability:
          + add a connection    ('gene_add_probability')
          + add a node          ('node_add_probability')
          + nudge the weights   ('weight_nudge_probability')
        A structural mutation that finds nowhere to apply itself is skipped.
        """
        if self.rng.random() < self._config.gene_add_probability:
            try:
                genome.mutate_add_gene(self.innovation_tracker, self.rng)
            except MutationExhausted as exc:
                logger.debug("mutate_add_gene skipped: %s", exc)

        if self.rng.random() < self._config.node_add_probability:
            try:
                genome.mutate_add_node(self.innovation_tracker, self.rng)
            except MutationExhausted as exc:
                logger.debug("mutate_add_node skipped: %s", exc)

        if self.rng.random() < self._config.weight_nudge_probability:
            genome.nudge_weights(self.rng)

    def speciate(self) -> list[Species]:
        """
        Split the current genomes into species, and set their adjusted fitness.

        Assumes that the fitness of each genome has already been assigned.

        Returns:
            the species, sorted by summed adjusted fitness (best first)
        """
        self.species = self._species_manager.speciate(self.genomes)
        logger.debug("%s", ranking.species_summary(self.species))
        return self.species

    def reproduce(self) -> None:
        """
        Replace the current generation by the next one.

        Steps:
        1. Speciate the current genomes (and compute adjusted fitness)
        2. Allocate offspring to species proportionally to their adjusted fitness
        3. Each species spawns its offspring: its champion unchanged (for large
           enough species), the rest mutated copies of random members
        4. The offspring become the population; the generation counter advances

        The new population has exactly 'config.population_size' genomes.
        """
        species_list = self.speciate()
        self._species_manager.allocate_offspring(species_list, self._config.population_size)

        offspring_all = []
        for species in species_list:
            offspring_all.extend(species.spawn(self.mutate_genome, self.rng))

        self.genomes     = offspring_all
        self.generation += 1

    def get_fittest_genome(self) -> Genome | None:
        """
        Find and return the genome with the highest fitness in the population.

        Returns:
            The genome with the highest fitness value, or None if the population is empty
        """
        return ranking.fittest(self.genomes)

    def sort_by_fitness(self) -> None:
        ranking.sort_by_fitness(self.genomes)

    def sort_by_adjusted_fitness(self) -> None:
        ranking.sort_by_adjusted_fitness(self.genomes)

    def sum_adjusted_fitness(self) -> float:
        return ranking.sum_adjusted_fitness(self.genomes)

    def species_sizes(self) -> list[int]:
        return [len(species) for species in self.species]

    def offspring_counts(self) -> list[int]:
        return [species.offspring_count for species in self.species]

    def __len__(self):
        return len(self.genomes)

    def __str__(self):
        return '\n'.join(str(genome) for genome in self.genomes)
