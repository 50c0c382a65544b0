"""
Shared fixtures for integration tests.
"""

import os

import pytest


@pytest.fixture
def xor_inputs():
    """XOR inputs, each followed by a constant bias input."""
    return [[0.0, 0.0, 1.0], [0.0, 1.0, 1.0], [1.0, 0.0, 1.0], [1.0, 1.0, 1.0]]


@pytest.fixture
def xor_outputs():
    return [0.0, 1.0, 1.0, 0.0]


@pytest.fixture
def xor_config_file():
    """Path of the configuration file shipped with the XOR example."""
    return os.path.join(os.path.dirname(__file__), '..', '..', 'examples', 'configs', 'config_xor.ini')
