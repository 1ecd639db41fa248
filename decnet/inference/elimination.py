""" VariableElimination subroutines factored out """
import logging
from collections import defaultdict

from .factor import DoubleFactor
from ..bn import Assignment, ProbabilityTable, UtilityTable

logger = logging.getLogger(__name__)


# Fallback for direct calls; mirrors inference.dont_care_utility in configs/config.yaml,
# which the engine passes in explicitly
DONT_CARE_UTILITY = 0.0

def create_query_factor(sorted_nodes, query_vars, evidence, dont_care=DONT_CARE_UTILITY):
    """
    Generate the full (unnormalised) double factor over the query variables with the
    variable elimination algorithm. Nodes must be provided in dependency order (each
    node before its parents), so that by the time a node is visited every factor
    mentioning its variable is already in the list and the variable can be summed
    out right away if not queried.
    """
    factors = []

    for node in sorted_nodes:
        # Basic factor for every node, conditioned on evidence
        basic_factor = make_factor(node, evidence)

        if basic_factor.is_empty():
            # Node fully eliminated by evidence
            continue
        factors.append(basic_factor)

        # If the variable is hidden, sum it out at once to keep factors small
        if node.id not in query_vars:
            factors = sum_out(node.id, factors, dont_care)

    logger.debug(f"{len(factors)} factor(s) remaining after elimination")

    # Final product yields the joint over the query variables
    return pointwise_product(factors)


def make_factor(node, evidence):
    """
    Create the basic factor for the node from its flat table. Rows inconsistent with
    evidence are dropped altogether, and evidence variables are removed from the
    remaining rows; conditioning is done by slicing the table.
    """
    factor = DoubleFactor()
    evidence_vars = evidence.variables()

    for a, val in node.get_factor().items():
        if not a.consistent_with(evidence): continue

        a_stripped = a.trimmed_inverse(evidence_vars)
        if node.is_utility:
            # Rewards contribute to utility only
            factor.add_entry(a_stripped, 1.0, val)
        else:
            factor.add_entry(a_stripped, val, 0.0)

    return factor


def sum_out(var, factors, dont_care=DONT_CARE_UTILITY):
    """
    Sum out the variable from the list of factors; factors that do not depend on the
    variable are kept intact, while those that do are multiplied and then reduced to
    a single factor without the variable
    """
    dependent_factors = []
    remaining_factors = []
    for f in factors:
        if var in f.variables():
            dependent_factors.append(f)
        else:
            remaining_factors.append(f)

    if len(dependent_factors) == 0:
        # No factor mentions the variable (e.g. id of a utility node)
        return remaining_factors

    product_dependent = pointwise_product(dependent_factors)
    summed = sum_out_dependent(var, product_dependent, dont_care)

    if not summed.is_empty():
        remaining_factors.append(summed)

    return remaining_factors


def sum_out_dependent(var, factor, dont_care=DONT_CARE_UTILITY):
    """
    Sum out the variable from a single factor. Probabilities are added up; utilities
    are accumulated weighted by probabilities and then divided by the accumulated
    probabilities, giving expected utilities. Cells with zero accumulated probability
    get the don't-care utility value instead.
    """
    summed = DoubleFactor()

    for a, (prob, util) in factor.matrix.items():
        summed.increment_entry(a.removed(var), prob, prob * util)

    for a, (prob, weighted_util) in list(summed.matrix.items()):
        if prob == 0.0:
            summed.add_entry(a, prob, dont_care)
        else:
            summed.add_entry(a, prob, weighted_util / prob)

    return summed


def pointwise_product(factors):
    """
    Compute the pointwise product of the factors: probabilities are multiplied and
    utilities are added, for every combination of mutually consistent rows. Rows are
    matched through an index on the shared variables, and inconsistent combinations
    are simply not produced.
    """
    if len(factors) == 1:
        return factors[0]

    # Neutral scalar factor to start with
    product = DoubleFactor()
    product.add_entry(Assignment(), 1.0, 0.0)

    for f in factors:
        shared_vars = f.variables() & product.variables()

        # Index accumulated rows by their values of the shared variables
        product_index = defaultdict(list)
        for b, entry in product.matrix.items():
            product_index[b.trimmed(shared_vars)].append((b, entry))

        new_product = DoubleFactor()
        for a, (prob, util) in f.matrix.items():
            for b, (b_prob, b_util) in product_index.get(a.trimmed(shared_vars), []):
                new_product.add_entry(Assignment.union(a, b), prob * b_prob, util + b_util)

        product = new_product

    return product


def add_evidence_pairs(query, prob_matrix, util_matrix):
    """
    In case of overlap between query variables and evidence, the computed matrices
    lack the overlapping variables (conditioned away). Extend them so that they cover
    the full set of query variables: probability rows agreeing with evidence keep
    their values while all the other value combinations get zero probability, and
    utility rows are extended with the evidence values.
    """
    evidence = query.evidence

    # Values to enumerate for each overlapping variable
    values_to_add = {
        var: query.network.get_node(var).values
        for var in query.query_vars if var in evidence
    }
    extensions = Assignment.all_combinations(values_to_add)
    evidence_overlap = evidence.trimmed(values_to_add)

    prob_table = ProbabilityTable()
    for a, prob in prob_matrix.items():
        for b in extensions:
            if evidence.contains(b):
                prob_table.add_row(Assignment.union(a, b), prob)
            else:
                prob_table.add_row(Assignment.union(a, b), 0.0)

    util_table = UtilityTable()
    for a, util in util_matrix.items():
        util_table.set_utility(Assignment.union(a, evidence_overlap), util)

    return prob_table, util_table
