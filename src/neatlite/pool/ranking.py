"""
NEAT Ranking Module

Helpers for ranking and summarizing groups of genomes (a species, or
a whole population) by raw or adjusted fitness.

Functions:
    fittest:                  The genome with the highest raw fitness
    sort_by_fitness:          Sort genomes in place, highest raw fitness first
    sort_by_adjusted_fitness: Sort genomes in place, highest adjusted fitness first
    sum_adjusted_fitness:     Sum of the adjusted fitness of a group of genomes
    fitness_report:           One-line listing of raw fitness values
    adjusted_fitness_report:  One-line listing of adjusted fitness values
    species_summary:          One-line listing of species sizes
"""

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from neatlite.genotype import Genome
    from neatlite.pool.species import Species

def fittest(genomes: list['Genome']) -> 'Genome | None':
    """
    Return the genome with the highest raw fitness (the first one, on ties),
    or None if there are no genomes.
    """
    return max(genomes, key=lambda genome: genome.fitness, default=None)

def sort_by_fitness(genomes: list['Genome']) -> None:
    genomes.sort(key=lambda genome: genome.fitness, reverse=True)

def sort_by_adjusted_fitness(genomes: list['Genome']) -> None:
    genomes.sort(key=lambda genome: genome.adjusted_fitness, reverse=True)

def sum_adjusted_fitness(genomes: list['Genome']) -> float:
    return sum(genome.adjusted_fitness for genome in genomes)

def fitness_report(genomes: list['Genome']) -> str:
    return "Fitness: " + " ".join(f"{genome.fitness:.3g}" for genome in genomes)

def adjusted_fitness_report(genomes: list['Genome']) -> str:
    return "Adjusted: " + " ".join(f"{genome.adjusted_fitness:.3g}" for genome in genomes)

def species_summary(species_list: list['Species']) -> str:
    """One-line listing of species sizes, e.g. 'Species: 3 5 2'."""
    return "Species: " + " ".join(str(len(species)) for species in species_list)
