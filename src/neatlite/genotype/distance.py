"""
NEAT Compatibility Distance Module

This module implements the genomic distance used to split a population into species.

Functions:
    compatibility_distance: NEAT distance between two genomes
"""

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from neatlite.genotype.genome import Genome

# Genomes with fewer genes than this are not normalized by their size
SMALL_GENOME_SIZE = 20

def compatibility_distance(genome1: 'Genome',
                           genome2: 'Genome',
                           excess_coeff  : float,
                           disjoint_coeff: float,
                           weight_coeff  : float) -> float:
    """
    Calculate the genetic distance between two genomes using the original NEAT formula.

       distance = (c1 * E / N) + (c2 * D / N) + c3 * W̄

    Where:
    - E = number of excess connection genes
    - D = number of disjoint connection genes
    - N = number of connection genes in larger genome (1 if it has fewer than 20 genes)
    - W̄ = average weight difference of matching connection genes
    - c1, c2, c3 = 'excess_coeff', 'disjoint_coeff', 'weight_coeff'

    A gene present in only one of the genomes is 'disjoint' if its innovation
    number falls inside the range of innovation numbers spanned by both genomes,
    and 'excess' otherwise.

    Parameters:
        genome1:        the first genome
        genome2:        the second genome
        excess_coeff:   weight of the excess genes term (c1)
        disjoint_coeff: weight of the disjoint genes term (c2)
        weight_coeff:   weight of the weight difference term (c3)

    Returns:
        the distance between the two genomes (symmetric, zero between identical genomes)
    """
    genes1 = genome1.conn_genes
    genes2 = genome2.conn_genes
    if not genes1 and not genes2:
        return 0.0

    # An empty genome spans no innovation numbers: every gene of the other one is excess
    if genes1 and genes2:
        overlap_start = max(min(genes1), min(genes2))
        overlap_end   = min(max(genes1), max(genes2))
    else:
        overlap_start, overlap_end = 1, 0

    # Matching genes: shared innovation numbers
    matching_innovs = genes1.keys() & genes2.keys()

    num_excess   = 0
    num_disjoint = 0
    for innov in genes1.keys() ^ genes2.keys():
        if overlap_start <= innov <= overlap_end:
            num_disjoint += 1
        else:
            num_excess += 1

    avg_weight_diff = 0.0
    if matching_innovs:
        weight_diff = sum(abs(genes1[i].weight - genes2[i].weight) for i in matching_innovs)
        avg_weight_diff = weight_diff / len(matching_innovs)

    N = max(len(genes1), len(genes2))
    if N < SMALL_GENOME_SIZE:
        N = 1

    return (excess_coeff   * num_excess   / N +
            disjoint_coeff * num_disjoint / N +
            weight_coeff   * avg_weight_diff)
