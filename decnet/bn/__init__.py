"""
Data structures for decision networks: values, assignments, distribution tables,
nodes and networks. Networks are immutable snapshots read by inference.
"""
from .values import NONE
from .assignment import Assignment
from .distribs import ProbabilityTable, ConditionalTable, UtilityTable
from .nodes import BNode, NodeKind
from .network import BNetwork

__all__ = [
    "NONE", "Assignment", "ProbabilityTable", "ConditionalTable", "UtilityTable",
    "BNode", "NodeKind", "BNetwork"
]
