"""
NEAT Species Module

This module implements the Species class for the NEAT algorithm.
A species represents a cluster of genetically similar genomes that
compete primarily within their own niche.

Classes:
    Species: A per-generation cluster of genomes, with fitness sharing and reproduction
"""

import numpy as np
from typing import Callable, TYPE_CHECKING

from neatlite.genotype.distance import compatibility_distance
from neatlite.pool.ranking       import sort_by_fitness
from neatlite.run.config         import Config
if TYPE_CHECKING:
    from neatlite.genotype import Genome

class Species:
    """
    A species representing a cluster of genetically similar genomes in NEAT.

    In NEAT, the population is divided into species based on genetic similarity,
    so that new structures, which usually start out less fit, only compete with
    similar genomes until they had time to optimize their weights.

    Species here live for a single generation: they are rebuilt from scratch
    every time the population is speciated, and do not own their members.
    The representative (the first genome placed in the species) is only used
    to decide which genomes join the species.

    Public Attributes:
        representative:       Genome used for distance calculations during speciation
        members:              The genomes that are part of this species
        adjusted_fitness_sum: Sum of the adjusted fitness of all members
        offspring_count:      Number of offspring this species contributes to the next generation

    Public Methods:
        distance_to(genome):      Calculate genetic distance to a genome
        add(genome):              Add a genome to the species
        share_fitness():          Calculate the adjusted fitness of all members
        champion():               The member with the highest raw fitness
        spawn(mutate, rng):       Generate this species' share of the next generation
    """

    def __init__(self, representative: 'Genome', config: Config):
        """
        Initialize a new species.

        Parameters:
            representative: the genome that represents this species in the speciation process
            config:         stores configuration parameters
        """
        self._config: Config = config

        self.representative: 'Genome'       = representative
        self.members       : list['Genome'] = [representative]

        self.adjusted_fitness_sum: float = 0.0
        self.offspring_count     : int   = 0

    def __len__(self):
        return len(self.members)

    def distance_to(self, genome: 'Genome') -> float:
        """
        Calculate the genetic distance between this species and a given genome.
        Uses the species representative for comparison.
        """
        return compatibility_distance(self.representative, genome,
                                      self._config.distance_excess_coeff,
                                      self._config.distance_disjoint_coeff,
                                      self._config.distance_weight_coeff)

    def add(self, genome: 'Genome') -> None:
        self.members.append(genome)

    def share_fitness(self) -> None:
        """
        Apply explicit fitness sharing.

        Each member's adjusted fitness is its raw fitness divided by the size of
        the species. Afterwards the members are sorted by raw fitness, best first.
        """
        size = len(self.members)
        for genome in self.members:
            genome.adjusted_fitness = genome.fitness / size
        self.adjusted_fitness_sum = sum(genome.adjusted_fitness for genome in self.members)

        sort_by_fitness(self.members)

    def champion(self) -> 'Genome':
        return max(self.members, key=lambda genome: genome.fitness)

    def spawn(self,
              mutate: Callable[['Genome'], None],
              rng   : np.random.Generator) -> list['Genome']:
        """
        Generate 'offspring_count' genomes for the next generation.

        Species larger than 'config.champion_min_species_size' copy their champion
        unchanged into the next generation (elitism). All other offspring are
        copies of randomly chosen members, which are then mutated.

        Parameters:
            mutate: applies the mutation operators to a genome, in place
            rng:    random number generator

        Returns:
            List of offspring genomes for the next generation
        """
        # Trivial case
        if self.offspring_count <= 0 or not self.members:
            return []

        offspring = []
        if len(self.members) > self._config.champion_min_species_size:
            offspring.append(self.champion().copy())

        while len(offspring) < self.offspring_count:
            parent = self.members[rng.integers(len(self.members))]
            child  = parent.copy()
            mutate(child)
            offspring.append(child)

        return offspring

    def __repr__(self):
        return (f"Species(size={len(self.members)}, adjusted_fitness_sum={self.adjusted_fitness_sum:.3g}, "
                f"offspring_count={self.offspring_count})")
