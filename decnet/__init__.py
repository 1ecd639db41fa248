"""
Exact probabilistic inference over decision networks (chance, action and utility
nodes), for computing posterior distributions and expected utilities in service
of action selection by a dialogue manager.
"""
from .bn import (
    NONE, Assignment, ProbabilityTable, ConditionalTable, UtilityTable,
    BNode, NodeKind, BNetwork
)
from .inference import VariableElimination, query_prob, query_util, reduce_network
from .exceptions import (
    DecNetError, MalformedQueryError, UnknownVariableError, CyclicNetworkError
)
