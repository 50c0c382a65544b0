"""
NEAT Relaxed Network Module

This module implements the phenotype representation for the NEAT algorithm:
the executable network expressed by a genome.

Networks evolved here may contain cycles, so they cannot be evaluated by
propagating values in topological order. Instead the network is evaluated by
relaxation: every non-input node is recomputed from its incoming connections,
for a fixed number of sweeps, always using the most recent node values
(Gauss-Seidel style). Each extra sweep lets the input signal travel one or
more connections further along multi-hop and recurrent paths. Convergence is
never checked; the configured number of sweeps is always performed.

Classes:
    NetworkRelaxed: A (possibly recurrent) neural network built from a genome
"""

from collections import defaultdict
from typing      import Sequence, TYPE_CHECKING

from neatlite.errors import ArityMismatch

if TYPE_CHECKING:
    from neatlite.genotype import Genome

class NetworkRelaxed:
    """
    A neural network built from a genome and evaluated by fixed-iteration relaxation.

    The network captures the genome's enabled connections when it is built;
    later changes to the genome are not seen by an existing network.

    Public Properties:
        number_nodes:               Total number of nodes in the network
        number_nodes_hidden:        Number of hidden nodes in the network
        number_connections:         Total number of connections in the network
        number_connections_enabled: Number of enabled connections in the network

    Public Methods:
        forward_pass(inputs): Process inputs through the network and return outputs
    """

    def __init__(self, genome: 'Genome'):
        """
        Parameters:
            genome: The Genome encoding the network structure
        """
        config = genome.config

        self._num_inputs     = config.num_inputs
        self._squash         = config.squash
        self._iterations     = config.eval_iterations
        self._input_ids      = genome.input_nodes
        self._output_ids     = genome.output_nodes
        self._node_ids       = genome.nodes()
        self._num_genes      = len(genome.conn_genes)

        # node ID => [(source node ID, weight)], enabled connections only
        self._incoming = defaultdict(list)
        for _, gene in sorted(genome.conn_genes.items()):
            if gene.enabled:
                self._incoming[gene.node_out].append((gene.node_in, gene.weight))

        # Nodes are recomputed from the highest ID down to the first output node
        self._update_order = sorted((n for n in self._node_ids if n >= self._num_inputs), reverse=True)

    @property
    def number_nodes(self) -> int:
        """Total number of nodes in the network."""
        return len(self._node_ids)

    @property
    def number_nodes_hidden(self) -> int:
        """Number of hidden nodes in the network."""
        return len(self._node_ids) - len(self._input_ids) - len(self._output_ids)

    @property
    def number_connections(self) -> int:
        """Total number of connections in the network."""
        return self._num_genes

    @property
    def number_connections_enabled(self) -> int:
        """Number of enabled connections in the network."""
        return sum(len(sources) for sources in self._incoming.values())

    def forward_pass(self, inputs: Sequence[float]) -> list[float]:
        """
        Evaluate the network.

        Every node value starts at zero, except for the input nodes which are
        clamped to 'inputs'. Then, 'eval_iterations' times, every non-input
        node (highest ID first) takes the value:
            squash( sum(weight * value of source node) )
        over its enabled incoming connections.

        Parameters:
            inputs: one value per input node

        Returns:
            the values of the output nodes, in node ID order

        Raises:
            ArityMismatch: if the number of inputs differs from the number of input nodes
        """
        if len(inputs) != self._num_inputs:
            raise ArityMismatch(f"network expects {self._num_inputs} inputs, got {len(inputs)}")

        values = dict.fromkeys(self._node_ids, 0.0)
        for node_id, value in zip(self._input_ids, inputs):
            values[node_id] = float(value)

        for _ in range(self._iterations):
            for node_id in self._update_order:
                total = 0.0
                for source, weight in self._incoming.get(node_id, ()):
                    total += weight * values[source]
                values[node_id] = float(self._squash(total))

        return [values[node_id] for node_id in self._output_ids]
