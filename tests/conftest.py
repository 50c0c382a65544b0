"""Pytest configuration and shared fixtures."""

import numpy as np
import pytest

from neatlite.genotype   import Genome, InnovationTracker
from neatlite.run.config import Config


@pytest.fixture
def config():
    """Default configuration: 4 inputs, 6 outputs, population of 20."""
    return Config()


@pytest.fixture
def small_config():
    """Configuration with 2 inputs and 1 output, identity squash and a single relaxation sweep."""
    config = Config()
    config.num_inputs         = 2
    config.num_outputs        = 1
    config.num_starting_genes = 2
    config.activation         = 'identity'
    config.eval_iterations    = 1
    return config


@pytest.fixture
def rng():
    """Seeded random number generator, for reproducible tests."""
    return np.random.default_rng(42)


@pytest.fixture
def tracker():
    return InnovationTracker()


@pytest.fixture
def make_genome():
    """
    Factory building a genome from a list of (innovation, node_in, node_out, weight) tuples.
    """
    def _make_genome(config, genes):
        genome = Genome(config)
        for innovation, node_in, node_out, weight in genes:
            genome.add_gene(innovation, node_in, node_out, weight)
        return genome
    return _make_genome
