"""
NEAT Errors Module

Exception hierarchy raised by the genotype, phenotype and pool packages.

Classes:
    NeatError:          Base class of all errors raised by this package
    ConfigurationError: Invalid configuration (fatal, raised at construction)
    ArityMismatch:      Wrong number of inputs passed to a network (fatal)
    DuplicateGeneId:    A connection gene with the same innovation number already exists
    MutationExhausted:  A structural mutation found no valid candidate
"""

class NeatError(Exception):
    """Base class for all NEAT errors."""


class ConfigurationError(NeatError, ValueError):
    """
    The configuration cannot be used to build a population or a network.
    """


class ArityMismatch(NeatError, ValueError):
    """
    The number of values fed into a network differs from its number of input nodes.
    """


class DuplicateGeneId(NeatError, KeyError):
    """
    A connection gene was added under an innovation number already used by the genome.
    """

    def __init__(self, innovation: int):
        super().__init__(innovation)
        self.innovation = innovation

    def __str__(self):
        return f"genome already has a connection gene with innovation number {self.innovation}"


class MutationExhausted(NeatError, RuntimeError):
    """
    A structural mutation could not find a valid place to apply itself.
    The genome is left unchanged.
    """
