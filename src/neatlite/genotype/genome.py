"""
NEAT Genome Module

This module implements the Genome class for the NEAT
(NeuroEvolution of Augmenting Topologies) algorithm.

Classes:
    Genome: Complete genome representing a neural network structure
"""

import numpy as np
from typing import TYPE_CHECKING, Sequence

from neatlite.errors                      import DuplicateGeneId, MutationExhausted
from neatlite.genotype.connection_gene    import ConnectionGene
from neatlite.genotype.innovation_tracker import InnovationTracker
from neatlite.genotype.node_type          import NodeType
from neatlite.run.config                  import Config

if TYPE_CHECKING:
    from neatlite.phenotype.network_relaxed import NetworkRelaxed

class Genome:
    """
    A NEAT genome representing a neural network as a collection of connection genes.

    The genome owns a mapping from innovation number to connection gene. Nodes are
    implicit: the input and output nodes always exist, and hidden nodes exist only
    because some connection gene references them.

    Node numbering convention:
        - Input nodes:  [0, num_inputs)
        - Output nodes: [num_inputs, num_inputs + num_outputs)
        - Hidden nodes: [num_inputs + num_outputs, ...)

    The network encoded by a genome is not guaranteed to be acyclic: splitting
    connections and adding connections between hidden nodes can create loops.
    Networks are therefore evaluated by fixed-iteration relaxation (see
    'neatlite.phenotype.network_relaxed').

    Attributes:
        conn_genes:       Dictionary mapping innovation numbers to ConnectionGene objects
        fitness:          Raw fitness, assigned by whoever evaluates the genome
        adjusted_fitness: Fitness shared among the members of the genome's species

    Public Properties:
        config:       The (shared) configuration
        input_nodes:  IDs of all input nodes
        output_nodes: IDs of all output nodes
        hidden_nodes: IDs of all hidden nodes

    Public Methods:
        add_gene(innovation, node_in, node_out, weight): Insert a new enabled connection gene
        gene(innovation):                                Look a gene up by innovation number
        gene_between(node_in, node_out):                 Look a gene up by its endpoints
        has_gene(innovation):                            Whether an innovation number is present
        min_innovation(), max_innovation():              Range of innovation numbers present
        nodes():                                         IDs of all nodes in the network
        node_type(node_id):                              Type of a node
        copy():                                          Independent copy of this genome
        mutate_add_gene(tracker, rng):                   Add a random connection
        mutate_add_node(tracker, rng):                   Split a random enabled connection
        nudge_weights(rng):                              Perturb or replace every weight
        randomize_weights(rng):                          Replace every weight
        activate(inputs):                                Evaluate the network
    """

    def __init__(self, config: Config):
        """
        Initialize a genome without any connection genes.

        Parameters:
            config: Stores configuration parameters (shared, never modified by the genome)
        """
        self._config = config

        self.conn_genes: dict[int, ConnectionGene] = {}  # innovation number => connection gene

        self.fitness         : float = 0.0
        self.adjusted_fitness: float = 0.0

    @property
    def config(self) -> Config:
        return self._config

    # ------------------------------------------------------------------
    # Genes

    def add_gene(self, innovation: int, node_in: int, node_out: int, weight: float) -> ConnectionGene:
        """
        Insert a new, enabled connection gene.

        No check is made that the two nodes are not already connected;
        callers that care must check 'gene_between' first.

        Parameters:
            innovation: innovation number of the new gene
            node_in:    ID of the source node
            node_out:   ID of the destination node
            weight:     weight of the connection

        Returns:
            the new connection gene

        Raises:
            DuplicateGeneId: if the genome already has a gene with this innovation number
        """
        if innovation in self.conn_genes:
            raise DuplicateGeneId(innovation)

        gene = ConnectionGene(node_in, node_out, weight, innovation)
        self.conn_genes[innovation] = gene
        return gene

    def gene(self, innovation: int) -> ConnectionGene | None:
        return self.conn_genes.get(innovation)

    def gene_between(self, node_in: int, node_out: int) -> ConnectionGene | None:
        """
        Find the gene connecting 'node_in' to 'node_out' (direction matters).

        Returns:
            the connection gene, or None if the nodes are not connected in this direction
        """
        for gene in self.conn_genes.values():
            if gene.node_in == node_in and gene.node_out == node_out:
                return gene
        return None

    def has_gene(self, innovation: int) -> bool:
        return innovation in self.conn_genes

    def min_innovation(self) -> int:
        """Smallest innovation number in the genome (0 if there are no genes)."""
        return min(self.conn_genes, default=0)

    def max_innovation(self) -> int:
        """Largest innovation number in the genome (0 if there are no genes)."""
        return max(self.conn_genes, default=0)

    def genes_into(self, node_id: int) -> list[ConnectionGene]:
        return [gene for gene in self.conn_genes.values() if gene.node_out == node_id]

    def genes_out_of(self, node_id: int) -> list[ConnectionGene]:
        return [gene for gene in self.conn_genes.values() if gene.node_in == node_id]

    # ------------------------------------------------------------------
    # Nodes

    def nodes(self) -> set[int]:
        """
        IDs of all nodes in the network: every input and output node,
        plus every node referenced by a connection gene.
        """
        node_ids = set(range(self._config.num_inputs + self._config.num_outputs))
        for gene in self.conn_genes.values():
            node_ids.add(gene.node_in)
            node_ids.add(gene.node_out)
        return node_ids

    def max_node(self) -> int:
        return max(self.nodes())

    def node_type(self, node_id: int) -> NodeType:
        return NodeType.of(node_id, self._config.num_inputs, self._config.num_outputs)

    @property
    def input_nodes(self) -> list[int]:
        return list(range(self._config.num_inputs))

    @property
    def output_nodes(self) -> list[int]:
        return list(range(self._config.num_inputs, self._config.num_inputs + self._config.num_outputs))

    @property
    def hidden_nodes(self) -> list[int]:
        first_hidden = self._config.num_inputs + self._config.num_outputs
        return sorted(node_id for node_id in self.nodes() if node_id >= first_hidden)

    # ------------------------------------------------------------------
    # Copying

    def copy(self) -> 'Genome':
        """
        Create an independent copy of this genome.

        Connection genes are copied, so mutating the copy never affects
        the original. The configuration is shared.
        """
        clone = Genome.__new__(Genome)
        clone._config          = self._config
        clone.conn_genes       = {innov: gene.copy() for innov, gene in self.conn_genes.items()}
        clone.fitness          = self.fitness
        clone.adjusted_fitness = self.adjusted_fitness
        return clone

    # ------------------------------------------------------------------
    # Mutations

    def mutate_add_gene(self, tracker: InnovationTracker, rng: np.random.Generator) -> ConnectionGene:
        """
        Add a new connection between two existing nodes.

        The source of the new connection is an input or hidden node, the
        destination a hidden or output node. Candidate pairs are drawn at
        random; a pair is rejected if both ends are the same node, or if the
        two nodes are already connected in either direction (whether that
        connection is enabled or not).

        To bound the work done, only 'config.gene_add_attempts' pairs are tried.

        Parameters:
            tracker: hands out the innovation number of the new gene
            rng:     random number generator

        Returns:
            the new connection gene

        Raises:
            MutationExhausted: if no valid pair was found (the genome is left unchanged)
        """
        sources = []
        targets = []
        for node_id in sorted(self.nodes()):
            node_type = self.node_type(node_id)
            if node_type != NodeType.OUTPUT:
                sources.append(node_id)
            if node_type != NodeType.INPUT:
                targets.append(node_id)

        num_attempts = self._config.gene_add_attempts
        for _ in range(num_attempts):
            node_in  = sources[rng.integers(len(sources))]
            node_out = targets[rng.integers(len(targets))]

            if node_in == node_out:
                continue
            if self.gene_between(node_in, node_out) is not None or self.gene_between(node_out, node_in) is not None:
                continue

            # Success - add connection gene to the genome and return
            weight = rng.uniform(self._config.min_weight, self._config.max_weight)
            return self.add_gene(tracker.get_innovation_number(), node_in, node_out, weight)

        raise MutationExhausted(f"failed to add a connection after {num_attempts} attempts")

    def mutate_add_node(self, tracker: InnovationTracker, rng: np.random.Generator) -> int:
        """
        Split an existing connection by adding a new node.

        The connection to split is selected at random among the enabled ones,
        and is disabled. Two new connections replace it:
            source   -> new node (weight 1.0)
            new node -> destination (weight of the split connection)
        so the signal reaching the destination is initially about the same.

        Parameters:
            tracker: hands out the innovation numbers of the two new genes
            rng:     random number generator

        Returns:
            the ID of the new (hidden) node

        Raises:
            MutationExhausted: if the genome has no enabled connection
        """
        enabled_genes = [gene for _, gene in sorted(self.conn_genes.items()) if gene.enabled]
        if not enabled_genes:
            raise MutationExhausted("no enabled connection to split")

        split_gene = enabled_genes[rng.integers(len(enabled_genes))]
        new_node   = self.max_node() + 1

        split_gene.enabled = False
        self.add_gene(tracker.get_innovation_number(), split_gene.node_in, new_node, 1.0)
        self.add_gene(tracker.get_innovation_number(), new_node, split_gene.node_out, split_gene.weight)
        return new_node

    def nudge_weights(self, rng: np.random.Generator) -> None:
        """
        Mutate the weight of every connection.

        With probability 'config.weight_replace_prob' a weight is replaced by a
        new value drawn from the weight range; otherwise it is perturbed by a
        value drawn from the nudge range.
        """
        for gene in self.conn_genes.values():
            if rng.random() < self._config.weight_replace_prob:
                gene.weight = rng.uniform(self._config.min_weight, self._config.max_weight)
            else:
                gene.weight = gene.weight + rng.uniform(self._config.min_nudge, self._config.max_nudge)

    def randomize_weights(self, rng: np.random.Generator) -> None:
        """Replace the weight of every connection by a value drawn from the weight range."""
        for gene in self.conn_genes.values():
            gene.weight = rng.uniform(self._config.min_weight, self._config.max_weight)

    # ------------------------------------------------------------------
    # Evaluation

    def to_network(self) -> 'NetworkRelaxed':
        # Import here to avoid circular import
        from neatlite.phenotype.network_relaxed import NetworkRelaxed
        return NetworkRelaxed(self)

    def activate(self, inputs: Sequence[float]) -> list[float]:
        """
        Feed 'inputs' through the network encoded by this genome.

        Parameters:
            inputs: one value per input node

        Returns:
            one value per output node

        Raises:
            ArityMismatch: if the number of inputs is wrong
        """
        return self.to_network().forward_pass(inputs)

    # ------------------------------------------------------------------

    def __str__(self):
        lines = [f"{'E' if gene.enabled else 'D'} [{innov}] {gene.node_in}->{gene.node_out} ({gene.weight:.3g})"
                 for innov, gene in sorted(self.conn_genes.items())]
        return "\n".join(["NETWORK--------", *lines, "---------------"])

    def __repr__(self):
        return f"Genome(genes={len(self.conn_genes)}, fitness={self.fitness}, adjusted_fitness={self.adjusted_fitness})"

    @staticmethod
    def show_aligned(genome1: 'Genome', genome2: 'Genome') -> None:
        """
        Print two genomes aligning the connection genes by innovation number.
        """
        innovs_all = sorted(set(genome1.conn_genes.keys()) | set(genome2.conn_genes.keys()))
        conn_str1 = ""
        conn_str2 = ""
        padding   = ' ' * 20
        for inov in innovs_all:
            conn_str1 += str(genome1.conn_genes[inov]) if inov in genome1.conn_genes else padding
            conn_str2 += str(genome2.conn_genes[inov]) if inov in genome2.conn_genes else padding

        print(f"Connections:\n{conn_str1}\n{conn_str2}\n")
