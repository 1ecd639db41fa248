"""
Exact inference on decision networks with variable elimination. Module-level
shortcuts run queries with a default-configured engine.
"""
from .api import VariableElimination
from .factor import DoubleFactor
from .couple import DistributionCouple
from .queries import Query, ProbQuery, UtilQuery, ReductionQuery

__all__ = [
    "VariableElimination", "DoubleFactor", "DistributionCouple",
    "Query", "ProbQuery", "UtilQuery", "ReductionQuery",
    "query_prob", "query_util", "reduce_network"
]


def query_prob(network, query_vars, evidence=None):
    return VariableElimination().query_prob(network, query_vars, evidence)

def query_util(network, query_vars, evidence=None):
    return VariableElimination().query_util(network, query_vars, evidence)

def reduce_network(network, retain_vars, evidence=None):
    return VariableElimination().reduce_network(network, retain_vars, evidence)
