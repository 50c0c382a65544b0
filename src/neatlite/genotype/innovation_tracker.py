"""
NEAT Innovation Tracker Module

This module implements the InnovationTracker class for the
NEAT (NeuroEvolution of Augmenting Topologies) algorithm.

Classes:
    InnovationTracker: Counter handing out innovation numbers for new connection genes
"""

class InnovationTracker:
    """
    Hands out innovation numbers (historical markings) for new connection genes.

    Every connection gene created during a run receives the next number.
    Numbers are never reused and never decremented, so within one run a
    number identifies exactly one mutation event. Unlike some NEAT variants,
    two genomes independently creating the same connection get different
    numbers.

    One tracker is owned by the population and is passed explicitly to
    every mutation that creates genes.

    Public Properties:
        next_innovation_number: The number the next call will return

    Public Methods:
        get_innovation_number(): Return a fresh innovation number
    """

    def __init__(self, start: int = 0):
        """
        Parameters:
            start: the first innovation number to hand out
        """
        if start < 0:
            raise ValueError("innovation numbers cannot be negative")
        self._next_innovation_number = start

    @property
    def next_innovation_number(self) -> int:
        return self._next_innovation_number

    def get_innovation_number(self) -> int:
        """
        Get a new innovation number and advance the counter.

        Returns:
            connection ID (a.k.a. innovation number)
        """
        innovation = self._next_innovation_number
        self._next_innovation_number += 1
        return innovation

    def __repr__(self):
        return f"InnovationTracker(next_innovation_number={self._next_innovation_number})"
