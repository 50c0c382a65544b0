"""
neatlite - NEAT (NeuroEvolution of Augmenting Topologies) with single-parent reproduction.

This package evolves populations of small neural networks of arbitrary (possibly
recurrent) topology. Genomes are sets of connection genes tagged with innovation
numbers; mutation grows the topology one connection or node at a time; genomes
are split into species by a compatibility distance, and fitness is shared inside
each species so that new structure is not eliminated before it can improve.

Main components:
- genotype:    Genetic encoding (genomes, genes, innovation tracking, distance)
- phenotype:   Network evaluation by fixed-iteration relaxation
- pool:        Speciation, reproduction and the population
- run:         Configuration and the trial (driver) loop
- activations: Squash functions for network nodes

Example:
    >>> from neatlite import Config, Population
    >>> config = Config()
    >>> population = Population(config, seed=0)
    >>> for genome in population.genomes:
    ...     genome.fitness = sum(genome.activate([1.0, 0.0, 0.0, 1.0]))
    >>> population.reproduce()
"""

__version__ = "0.1.0"

from neatlite.errors               import (NeatError, ConfigurationError, ArityMismatch,
                                           DuplicateGeneId, MutationExhausted)
from neatlite.run.config           import Config
from neatlite.genotype             import ConnectionGene, Genome, InnovationTracker, NodeType, compatibility_distance
from neatlite.phenotype            import NetworkRelaxed
from neatlite.pool                 import Population, Species, SpeciesManager
from neatlite.run.trial            import Trial

__all__ = [
    "Config",
    "Trial",
    "Genome",
    "ConnectionGene",
    "InnovationTracker",
    "NodeType",
    "compatibility_distance",
    "NetworkRelaxed",
    "Population",
    "Species",
    "SpeciesManager",
    "NeatError",
    "ConfigurationError",
    "ArityMismatch",
    "DuplicateGeneId",
    "MutationExhausted",
]
