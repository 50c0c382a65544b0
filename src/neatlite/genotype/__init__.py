"""
NEAT Genotype Package

This package implements the genotype representation for the NEAT (NeuroEvolution of
Augmenting Topologies) algorithm. A genome is a set of connection genes, each tagged
with the innovation number of the mutation that created it; nodes are implicit.

Modules:
    node_type:          NodeType enumeration
    connection_gene:    ConnectionGene class
    innovation_tracker: InnovationTracker class
    genome:             Genome class (genes, mutations, activation)
    distance:           compatibility_distance function

Exported:
    NodeType:               Enumeration for node types (INPUT, HIDDEN, OUTPUT)
    ConnectionGene:         Gene encoding a weighted connection between nodes
    Genome:                 Complete genome representing a neural network
    InnovationTracker:      Counter handing out innovation numbers
    compatibility_distance: NEAT distance between two genomes
"""

from neatlite.genotype.connection_gene    import ConnectionGene
from neatlite.genotype.distance           import compatibility_distance
from neatlite.genotype.genome             import Genome
from neatlite.genotype.innovation_tracker import InnovationTracker
from neatlite.genotype.node_type          import NodeType

__all__ = ['ConnectionGene',
           'Genome',
           'InnovationTracker',
           'NodeType',
           'compatibility_distance']
