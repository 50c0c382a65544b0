"""
NEAT Species Manager Module

This module implements the SpeciesManager class for the NEAT algorithm.
The manager partitions a population into species and decides how many
offspring each species contributes to the next generation.

Speciation in NEAT:
In traditional genetic algorithms, new structural innovations often have lower
initial fitness and are quickly eliminated. NEAT addresses this by organizing
the population into species - groups of genetically similar genomes that
compete primarily within their own niche. This allows novel structures time to
optimize before facing global competition.

How Speciation Works Here:
1. Genomes are visited in population order
2. Each genome joins the first species (in creation order) whose representative
   is within the compatibility threshold
3. A genome that fits no species founds a new one, becoming its representative
4. Explicit fitness sharing: adjusted fitness = fitness / species size
5. Offspring are allocated proportionally to each species' summed adjusted fitness

Species are not carried over between generations: every call to 'speciate'
clusters the current population from scratch. The clustering is greedy and
depends on the order of the population, so it is not a stable partition.

Classes:
    SpeciesManager: Speciation and offspring allocation
"""

import logging
from typing import TYPE_CHECKING

from neatlite.pool.species import Species
from neatlite.run.config   import Config
if TYPE_CHECKING:
    from neatlite.genotype import Genome

logger = logging.getLogger(__name__)

class SpeciesManager:
    """
    Clusters genomes into species and allocates offspring among species.

    Public Methods:
        speciate(genomes):                            Partition genomes into species
        allocate_offspring(species, population_size): Set the offspring count of each species
    """

    def __init__(self, config: Config):
        """
        Initialize the Species Manager.

        Parameters:
            config: Stores configuration parameters.
        """
        self._config = config

    def speciate(self, genomes: list['Genome']) -> list[Species]:
        """
        Assign all genomes to species based on genetic similarity.

        After clustering, each genome's adjusted fitness is set (explicit fitness
        sharing), the members of each species are sorted by raw fitness (best
        first) and the species are sorted by summed adjusted fitness (best first).

        Postconditions:
            - Every genome is assigned to exactly one species
            - Each species has at least one member

        Parameters:
            genomes: the genomes to cluster, in the order they are to be visited

        Returns:
            the new species
        """
        threshold    = self._config.compatibility_threshold
        species_list = []

        for genome in genomes:
            for species in species_list:
                if species.distance_to(genome) <= threshold:
                    species.add(genome)
                    break

            # No species is similar enough, found a new species,
            # with this genome as its representative.
            else:
                species_list.append(Species(genome, self._config))

        for species in species_list:
            species.share_fitness()

        species_list.sort(key=lambda s: s.adjusted_fitness_sum, reverse=True)

        # Error check: all genomes must have been allocated to a species
        assigned_count = sum(len(species) for species in species_list)
        assert assigned_count == len(genomes), "Lost genomes during speciation!"

        return species_list

    def allocate_offspring(self, species_list: list[Species], population_size: int) -> None:
        """
        Calculate how many offspring each species should produce.

        Offspring are allocated proportionally to the species' summed adjusted
        fitness. The shortfall caused by rounding down is handed out one offspring
        at a time, to each species in turn (best species first), so that the total
        always equals 'population_size'.

        Parameters:
            species_list:    species sorted by summed adjusted fitness, best first
            population_size: the total number of offspring to allocate
        """
        if not species_list:
            return

        total_adjusted = sum(species.adjusted_fitness_sum for species in species_list)

        # When every genome has zero fitness, each species gets nothing at
        # first and the whole population is handed out round-robin.
        fitness_per_offspring = total_adjusted / population_size
        if fitness_per_offspring == 0:
            fitness_per_offspring = 1.0

        total_allocated = 0
        for species in species_list:
            species.offspring_count = max(0, int(species.adjusted_fitness_sum / fitness_per_offspring))
            total_allocated += species.offspring_count

        # Hand out the remaining offspring round-robin
        remaining = population_size - total_allocated
        for i in range(max(0, remaining)):
            species_list[i % len(species_list)].offspring_count += 1

        # Floating point error can over-allocate; take the excess from the weakest species
        excess = total_allocated - population_size
        for species in reversed(species_list):
            if excess <= 0:
                break
            taken = min(excess, species.offspring_count)
            species.offspring_count -= taken
            excess -= taken

        logger.debug("Offspring: %s", " ".join(str(species.offspring_count) for species in species_list))
