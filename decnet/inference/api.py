"""
Inference module API that exposes the high-level functionalities required by a
dialogue manager for action selection under uncertainty: posterior probability
distributions and expected utilities of variables in a decision network given
evidence, and reduction of networks to a subset of their variables.

Inference is exact, implemented with the variable elimination algorithm over
factors that pair probabilities with (expected) utilities. Calls never modify the
networks or evidence they are given, so independent calls can safely run
concurrently on shared network snapshots.
"""
import logging

from .couple import DistributionCouple
from .queries import ProbQuery, UtilQuery, ReductionQuery
from .elimination import create_query_factor, add_evidence_pairs
from .reduction import reduce_network
from ..bn import Assignment, ProbabilityTable, UtilityTable
from ..config import load_config

logger = logging.getLogger(__name__)


class VariableElimination:

    def __init__(self, cfg=None):
        self.cfg = load_config() if cfg is None else cfg

        self.dont_care = float(self.cfg.inference.dont_care_utility)
        self.tolerance = float(self.cfg.inference.tolerance)

    def query_prob(self, network, query_vars, evidence=None):
        """ Posterior distribution of the query variables given evidence """
        query = ProbQuery(network, query_vars, evidence)
        return self.query_joint(query).prob_distrib

    def query_util(self, network, query_vars, evidence=None):
        """
        Expected utility of each assignment of the query variables given evidence;
        with no query variables, the overall expected utility keyed by the empty
        assignment
        """
        query = UtilQuery(network, query_vars, evidence)
        return self.query_joint(query).util_distrib

    def query_joint(self, query):
        """
        Compute the probability and utility distributions for the query variables,
        given the evidence
        """
        logger.debug(f"Running {query} on {query.network}")

        if isinstance(query, UtilQuery) and len(query.query_vars) == 0:
            # Special case; elimination cannot run on zero query variables
            return self._query_without_vars(query)

        query_factor = create_query_factor(
            query.get_filtered_sorted_nodes(), query.query_vars, query.evidence,
            self.dont_care
        )
        query_factor.normalise(tolerance=self.tolerance)

        prob_table, util_table = add_evidence_pairs(
            query, query_factor.get_prob_matrix(), query_factor.get_utility_matrix()
        )

        return DistributionCouple(prob_table, util_table)

    def reduce_network(self, network, retain_vars, evidence=None):
        """
        Return new network retaining only the provided variables, where each retained
        node carries its exact distribution after marginalising out the rest
        """
        query = ReductionQuery(network, retain_vars, evidence)
        return reduce_network(query, self.dont_care, self.tolerance)

    def _query_without_vars(self, query):
        """
        Utility query without any query variables: pick a variable in the network
        (the last one in dependency order), run the inference with it, then sum it
        out to obtain the overall expected utility
        """
        nodes = query.get_filtered_sorted_nodes()

        prob_table = ProbabilityTable({ Assignment(): 1.0 })
        util_table = UtilityTable()

        # Utility nodes cannot serve as query variables
        candidates = [n for n in nodes if not n.is_utility]

        if len(candidates) > 0:
            surrogate = candidates[-1].id
            couple = self.query_joint(
                UtilQuery(query.network, [surrogate], query.evidence)
            )

            util_value = 0.0
            for a, util in couple.util_distrib.get_rows().items():
                util_value += util * couple.prob_distrib.get_prob(a)
            util_table.set_utility(Assignment(), util_value)
        else:
            # Only parentless utility nodes, if any; product of their factors is a
            # scalar (neutral factor with zero utility if there are no nodes at all)
            scalar = create_query_factor(nodes, frozenset(), query.evidence, self.dont_care)
            util_table.set_utility(Assignment(), scalar.get_utility_entry(Assignment()))

        return DistributionCouple(prob_table, util_table)
