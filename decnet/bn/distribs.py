"""
Implements discrete distribution classes attached to network nodes and returned
as inference results: flat probability tables, conditional probability tables
and utility tables. Each can export a flat table, mapping assignments over
(parents + node) to numbers, which is the form consumed by inference.
"""
import numpy as np

from .assignment import Assignment


class ProbabilityTable:
    """ Flat (unconditional) table from assignments to probabilities """
    def __init__(self, rows=None):
        self.rows = {}
        if rows is not None:
            for a, prob in rows.items():
                self.add_row(a, prob)

    def __repr__(self):
        rows_str = ", ".join(f"{a}: {p:.3f}" for a, p in self.rows.items())
        return f"ProbabilityTable({rows_str})"

    def __eq__(self, other):
        if not isinstance(other, ProbabilityTable):
            return NotImplemented
        return self.rows == other.rows

    def __len__(self):
        return len(self.rows)

    def __iter__(self):
        return iter(self.rows)

    @staticmethod
    def from_values(var, probs):
        """ Convenience constructor for a table over a single variable """
        return ProbabilityTable({
            Assignment({var: val}): prob for val, prob in probs.items()
        })

    def add_row(self, a, prob):
        if not isinstance(a, Assignment):
            a = Assignment(a)
        self.rows[a] = float(prob)

    def get_prob(self, a):
        """ Probability of the assignment; zero if not covered by the table """
        if not isinstance(a, Assignment):
            a = Assignment(a)
        return self.rows.get(a, 0.0)

    def get_rows(self):
        return dict(self.rows)

    def variables(self):
        if len(self.rows) == 0:
            return frozenset()
        return next(iter(self.rows)).variables()

    def get_values(self, var):
        """ Set of values of var occurring in the table """
        return {a[var] for a in self.rows if var in a}

    def get_flat_table(self):
        return dict(self.rows)

    def normalised(self):
        """ Return normalised copy; table with zero total is returned as-is """
        total = float(np.sum(list(self.rows.values()))) if len(self.rows) > 0 else 0.0
        if total == 0.0:
            return ProbabilityTable(self.rows)
        return ProbabilityTable({a: p / total for a, p in self.rows.items()})


class ConditionalTable:
    """
    Conditional probability table, from assignments of conditioning (parent)
    variables to flat tables over head variables
    """
    def __init__(self, rows=None):
        self.tables = {}
        if rows is not None:
            for condition, head_probs in rows.items():
                for head, prob in head_probs.items():
                    self.add_row(condition, head, prob)

    def __repr__(self):
        return f"ConditionalTable(conditions={len(self.tables)})"

    def __eq__(self, other):
        if not isinstance(other, ConditionalTable):
            return NotImplemented
        return self.tables == other.tables

    def __len__(self):
        return len(self.tables)

    def __iter__(self):
        return iter(self.tables)

    def add_row(self, condition, head, prob):
        if not isinstance(condition, Assignment):
            condition = Assignment(condition)
        if condition not in self.tables:
            self.tables[condition] = ProbabilityTable()
        self.tables[condition].add_row(head, prob)

    def get_prob(self, condition, head):
        if not isinstance(condition, Assignment):
            condition = Assignment(condition)
        if condition not in self.tables:
            return 0.0
        return self.tables[condition].get_prob(head)

    def get_conditions(self):
        return set(self.tables)

    def get_table(self, condition):
        return self.tables[condition]

    def variables(self):
        """ Head variables of the table """
        for table in self.tables.values():
            return table.variables()
        return frozenset()

    def conditional_variables(self):
        for condition in self.tables:
            return condition.variables()
        return frozenset()

    def get_values(self, var):
        return set.union(set(), *[t.get_values(var) for t in self.tables.values()])

    def get_flat_table(self):
        flat = {}
        for condition, table in self.tables.items():
            for head, prob in table.rows.items():
                flat[Assignment.union(condition, head)] = prob
        return flat


class UtilityTable:
    """ Table from assignments to (expected) utilities """
    def __init__(self, rows=None):
        self.rows = {}
        if rows is not None:
            for a, util in rows.items():
                self.set_utility(a, util)

    def __repr__(self):
        rows_str = ", ".join(f"{a}: {u:.3f}" for a, u in self.rows.items())
        return f"UtilityTable({rows_str})"

    def __eq__(self, other):
        if not isinstance(other, UtilityTable):
            return NotImplemented
        return self.rows == other.rows

    def __len__(self):
        return len(self.rows)

    def __iter__(self):
        return iter(self.rows)

    def set_utility(self, a, util):
        if not isinstance(a, Assignment):
            a = Assignment(a)
        self.rows[a] = float(util)

    def add_utility(self, a, util):
        """ Accumulate utility on the (possibly new) row """
        if not isinstance(a, Assignment):
            a = Assignment(a)
        self.rows[a] = self.rows.get(a, 0.0) + float(util)

    def get_utility(self, a):
        if not isinstance(a, Assignment):
            a = Assignment(a)
        return self.rows.get(a, 0.0)

    def get_rows(self):
        return dict(self.rows)

    def variables(self):
        if len(self.rows) == 0:
            return frozenset()
        return next(iter(self.rows)).variables()

    def get_flat_table(self):
        return dict(self.rows)

    def get_best(self):
        """
        Return the assignment with highest utility along with the utility value; for
        selecting the action to perform from a utility query over action variables
        """
        if len(self.rows) == 0:
            raise ValueError("Cannot select best assignment from empty utility table")

        assigs = list(self.rows)
        best_ind = int(np.argmax([self.rows[a] for a in assigs]))
        return assigs[best_ind], self.rows[assigs[best_ind]]
