"""
XOR Problem Implementation for NEAT

This module implements the classic XOR (exclusive OR) problem as a benchmark
for the NEAT algorithm. XOR cannot be solved by a network without hidden
nodes, so solving it shows that the topology is being evolved.

The XOR Problem:
        Input (0, 0) → Output 0
        Input (0, 1) → Output 1
        Input (1, 0) → Output 1
        Input (1, 1) → Output 0

    The networks have no bias terms, so a third input clamped to 1.0 is
    fed to every network.

Fitness Function:
    Fitness = 4.0 - Σ(output - target)²

Usage:
    config = Config("examples/configs/config_xor.ini")
    trial  = Trial_XOR(config)
    trial.run()
"""

import logging
from pathlib import Path

from neatlite.genotype  import Genome
from neatlite.run       import Config
from neatlite.run.trial import Trial

logger = logging.getLogger(__name__)

class Trial_XOR(Trial):
    """
    NEAT trial for solving the XOR problem.

    Implemented Methods:
        _evaluate_fitness(genome): Test network on all 4 XOR cases
        _final_report():           Log the truth table of the best network
    """

    BIAS = 1.0

    def __init__(self, config: Config, seed: int | None = None, suppress_output: bool = False):
        super().__init__(config, seed, suppress_output)

        self.xor_inputs  = [[0.0, 0.0], [0.0, 1.0], [1.0, 0.0], [1.0, 1.0]]
        self.xor_outputs = [[0.0],      [1.0],      [1.0],      [0.0]]

    def _evaluate_fitness(self, genome: Genome) -> float:
        """
        Evaluate genome fitness by testing on the XOR inputs.

        Returns:
            Fitness score (maximum 4.0 for perfect XOR solution)
        """
        network = genome.to_network()

        fitness = 4.0  # max possible fitness
        for inputs, expected_output in zip(self.xor_inputs, self.xor_outputs):
            output   = network.forward_pass(inputs + [self.BIAS])
            error    = output[0] - expected_output[0]
            fitness -= error ** 2
        return fitness

    def _final_report(self):
        super()._final_report()

        best    = self.population.get_fittest_genome()
        network = best.to_network()
        logger.info("Hidden nodes: %d, enabled connections: %d",
                    network.number_nodes_hidden, network.number_connections_enabled)
        for inputs, expected_output in zip(self.xor_inputs, self.xor_outputs):
            output = network.forward_pass(inputs + [self.BIAS])[0]
            logger.info("  %s -> %.3f (target %.0f)", inputs, output, expected_output[0])


if __name__ == '__main__':
    logging.basicConfig(level=logging.INFO, format="%(message)s")

    config_file = Path(__file__).parent / "configs" / "config_xor.ini"
    trial = Trial_XOR(Config(str(config_file)))
    trial.run()
