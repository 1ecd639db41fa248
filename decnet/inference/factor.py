"""
Implements double factor class, the intermediate data structure manipulated by
variable elimination
"""
from collections import defaultdict

import numpy as np

from ..bn import Assignment


# Fallback for direct calls; mirrors inference.tolerance in configs/config.yaml, which
# the engine passes in explicitly
TOLERANCE = 1e-6

class DoubleFactor:
    """
    Sparse table from (partial) assignments to pairs of probability and utility.
    All assignments in a factor share the same set of variables (the factor's scope);
    factor with empty scope represents a scalar. Assignments inconsistent with the
    evidence at hand are never stored, not even with zero probability.
    """
    def __init__(self, entries=None):
        self.matrix = {}
        if entries is not None:
            for a, (prob, util) in entries.items():
                self.add_entry(a, prob, util)

    def __repr__(self):
        return f"DoubleFactor(len={len(self.matrix)}, vars={sorted(self.variables())})"

    def __len__(self):
        return len(self.matrix)

    def __contains__(self, a):
        return a in self.matrix

    def is_empty(self):
        return len(self.matrix) == 0

    def add_entry(self, a, prob, util):
        """ Add new entry, or overwrite the existing one """
        # Scope uniformity across entries
        assert len(self.matrix) == 0 or a in self.matrix or \
            next(iter(self.matrix)).variables() == a.variables(), \
            f"Assignment {a} does not match factor scope {sorted(self.variables())}"

        self.matrix[a] = (float(prob), float(util))

    def increment_entry(self, a, prob_incr, util_incr):
        """
        Accumulate probability and (pre-weighted) utility contributions on the entry,
        creating it if absent
        """
        if a in self.matrix:
            prob, util = self.matrix[a]
            self.matrix[a] = (prob + prob_incr, util + util_incr)
        else:
            self.add_entry(a, prob_incr, util_incr)

    def get_prob_entry(self, a):
        return self.matrix[a][0] if a in self.matrix else 0.0

    def get_utility_entry(self, a):
        return self.matrix[a][1] if a in self.matrix else 0.0

    def get_values(self):
        """ Assignments covered by the factor """
        return list(self.matrix)

    def get_prob_matrix(self):
        return {a: prob for a, (prob, _) in self.matrix.items()}

    def get_utility_matrix(self):
        return {a: util for a, (_, util) in self.matrix.items()}

    def variables(self):
        """ Scope of the factor as frozenset of variable names """
        if len(self.matrix) == 0:
            return frozenset()
        return next(iter(self.matrix)).variables()

    def copy(self):
        """ Independent copy; entries are immutable so a shallow dict copy suffices """
        copied = DoubleFactor()
        copied.matrix = dict(self.matrix)
        return copied

    def normalise(self, conditioning_vars=None, tolerance=TOLERANCE):
        """
        Normalise probabilities in place so that they sum to one. If conditioning_vars
        is provided, entries are grouped by their values of the conditioning variables
        and normalised within each group. Groups with zero total probability mass are
        left unchanged.
        """
        if conditioning_vars is None:
            groups = { Assignment(): list(self.matrix) }
        else:
            groups = defaultdict(list)
            for a in self.matrix:
                groups[a.trimmed(conditioning_vars)].append(a)

        for members in groups.values():
            total = float(np.sum([self.matrix[a][0] for a in members]))
            if total == 0.0:
                # Nothing to distribute; leave as-is instead of dividing by zero
                continue

            for a in members:
                prob, util = self.matrix[a]
                self.matrix[a] = (prob / total, util)

            assert np.isclose(
                np.sum([self.matrix[a][0] for a in members]), 1.0, atol=tolerance
            )
