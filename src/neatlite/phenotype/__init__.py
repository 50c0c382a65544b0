"""
NEAT Phenotype Package

This package expresses genomes as executable neural networks.

Modules:
    network_relaxed: Network evaluated by fixed-iteration relaxation

Exported Classes:
    NetworkRelaxed: A (possibly recurrent) network built from a genome
"""

from neatlite.phenotype.network_relaxed import NetworkRelaxed

__all__ = ['NetworkRelaxed']
