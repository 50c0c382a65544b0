"""
NEAT Pool Package

This package contains classes for managing populations and species in the NEAT
(NeuroEvolution of Augmenting Topologies) algorithm.

The pool package coordinates the evolutionary process at the population level,
organizing genomes into species based on genetic similarity and managing
reproduction across generations.

Modules:
    ranking:         Ranking and summary helpers for groups of genomes
    species:         Per-generation species, fitness sharing and reproduction
    species_manager: Speciation and offspring allocation
    population:      Top-level population management and evolution

Exported Classes:
    Species:        A cluster of genetically similar genomes
    SpeciesManager: Clusters genomes and allocates offspring
    Population:     Top-level evolutionary coordinator
"""

from neatlite.pool.species         import Species
from neatlite.pool.species_manager import SpeciesManager
from neatlite.pool.population      import Population

__all__ = [
    'Species',
    'SpeciesManager',
    'Population',
]
