"""
NEAT Node Type Module.

Nodes are not stored as genes: a node exists because it is an input or an
output of the network, or because some connection gene references it.
Its type follows from its ID alone.

Node numbering convention:
    - Input nodes:  [0, num_inputs)
    - Output nodes: [num_inputs, num_inputs + num_outputs)
    - Hidden nodes: [num_inputs + num_outputs, ...)

Classes:
    NodeType: Enumeration for node types (INPUT, HIDDEN, OUTPUT)
"""

from enum import Enum

class NodeType(Enum):
    """
    Nodes come in three types: input, hidden, output.
    """
    INPUT  = "I"
    HIDDEN = "H"
    OUTPUT = "O"

    @classmethod
    def of(cls, node_id: int, num_inputs: int, num_outputs: int) -> 'NodeType':
        """
        Classify a node by comparing its ID against the input/output ranges.
        """
        if node_id < num_inputs:
            return cls.INPUT
        if node_id < num_inputs + num_outputs:
            return cls.OUTPUT
        return cls.HIDDEN

    def __str__(self):
        return self.name
