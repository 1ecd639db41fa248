""" VariableElimination().reduce_network() factored out """
import logging

from .elimination import create_query_factor, sum_out, DONT_CARE_UTILITY
from .factor import TOLERANCE
from ..bn import Assignment, ProbabilityTable, ConditionalTable

logger = logging.getLogger(__name__)


def reduce_network(query, dont_care=DONT_CARE_UTILITY, tolerance=TOLERANCE):
    """
    Reduce the network of the ReductionQuery by retaining only its query variables,
    marginalising out the rest. Returns a new network whose nodes carry the exact
    marginal/conditional distributions implied by the original network and evidence.
    The original network is left untouched.
    """
    network = query.network
    evidence = query.evidence

    # Fails with CyclicNetworkError if no dependency order exists, even when no
    # distribution ends up being computed below
    network.get_sorted_nodes()

    # Structure-only copy of the network, without distributions
    reduced = network.get_reduced_copy(query.query_vars)

    # Nodes with distributions unaffected by reduction can be copied as-is
    distribs = {}
    for node_id in network.get_identical_nodes(reduced, evidence):
        distribs[node_id] = network.get_node(node_id).distrib
        query.remove_query_var(node_id)

    # Observed retained nodes are deterministic
    for node_id in list(query.unresolved):
        if node_id in evidence:
            distribs[node_id] = _deterministic_table(reduced.get_node(node_id), evidence)
            query.remove_query_var(node_id)

    logger.debug(
        f"Reducing {network} to {sorted(query.query_vars)}; copied "
        f"{sorted(distribs)}, computing {sorted(query.unresolved)}"
    )

    if len(query.unresolved) > 0:
        # Joint factor needs to cover unresolved nodes and their (reduced) parents
        keep_vars = set(query.unresolved)
        for node_id in query.unresolved:
            keep_vars |= reduced.get_node(node_id).parents

        full_factor = create_query_factor(
            query.get_filtered_sorted_nodes(), keep_vars, evidence, dont_care
        )

        for node_id in sorted(query.unresolved):
            node = reduced.get_node(node_id)
            factor = get_relevant_factor(full_factor, node, dont_care)
            distribs[node_id] = create_prob_distribution(
                factor, node, evidence, tolerance
            )

    return reduced.with_distributions(distribs)


def get_relevant_factor(full_factor, node, dont_care=DONT_CARE_UTILITY):
    """
    Return the factor associated with the distribution of the node, by summing out
    from (a copy of) the full factor every variable that is neither the node itself
    nor one of its parents
    """
    factor = full_factor.copy()
    for other_var in sorted(factor.variables()):
        if other_var != node.id and other_var not in node.parents:
            factor = sum_out(other_var, [factor], dont_care)[0]

    return factor


def create_prob_distribution(factor, node, evidence, tolerance=TOLERANCE):
    """
    Create the probability distribution for the node as described by the factor;
    flat table if the factor has no dependencies, otherwise conditional table
    normalised per parent assignment
    """
    # Observed parents were conditioned away; re-attach their values
    observed_parents = evidence.trimmed(node.parents)

    if factor.variables() == frozenset({node.id}) and observed_parents.is_empty():
        factor.normalise(tolerance=tolerance)
        return ProbabilityTable(factor.get_prob_matrix())

    dep_vars = factor.variables() - {node.id}
    factor.normalise(dep_vars, tolerance=tolerance)

    table = ConditionalTable()
    for a, prob in factor.get_prob_matrix().items():
        condition = Assignment.union(a.trimmed(dep_vars), observed_parents)
        head = a.trimmed_inverse(dep_vars)
        table.add_row(condition, head, prob)

    return table


def _deterministic_table(node, evidence):
    """ Flat table putting all probability mass on the observed value """
    return ProbabilityTable.from_values(node.id, {
        val: 1.0 if val == evidence[node.id] else 0.0 for val in node.values
    })
