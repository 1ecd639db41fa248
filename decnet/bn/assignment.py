"""
Implements assignment class, a (partial) mapping from variable names to values
"""
from itertools import product


class Assignment:
    """
    Immutable mapping from variable names to discrete values. Order of variables
    does not matter; equality and hashing are based on the full set of pairs, so
    that assignments can be used as keys of sparse tables.
    """
    __slots__ = ("_pairs", "_hash")

    def __init__(self, pairs=None, **kwargs):
        if pairs is None:
            self._pairs = {}
        elif isinstance(pairs, Assignment):
            self._pairs = dict(pairs._pairs)
        else:
            # Mapping or iterable of (var, value) pairs
            self._pairs = dict(pairs)
        self._pairs.update(kwargs)

        self._hash = None

    def __repr__(self):
        pairs_str = [f"{var}={val!r}" for var, val in sorted(self._pairs.items())]
        return f"Assignment({', '.join(pairs_str)})"

    def __hash__(self):
        if self._hash is None:
            self._hash = hash(frozenset(self._pairs.items()))
        return self._hash

    def __eq__(self, other):
        """ Equal if exactly the same pairs """
        if not isinstance(other, Assignment):
            return NotImplemented
        return self._pairs == other._pairs

    def __len__(self):
        return len(self._pairs)

    def __iter__(self):
        return iter(self._pairs)

    def __contains__(self, var):
        return var in self._pairs

    def __getitem__(self, var):
        return self._pairs[var]

    def get(self, var, default=None):
        return self._pairs.get(var, default)

    def items(self):
        return self._pairs.items()

    def variables(self):
        """ Return variable names as frozenset """
        return frozenset(self._pairs)

    def is_empty(self):
        return len(self._pairs) == 0

    @staticmethod
    def union(*assignments, override=False):
        """
        Merge the provided assignments into a new one. Conflicting values for a shared
        variable raise ValueError, unless override is set, in which case assignments
        later in the argument list prevail.
        """
        merged = {}
        for a in assignments:
            for var, val in a.items():
                if not override and var in merged and merged[var] != val:
                    raise ValueError(
                        f"Conflicting values for {var}: {merged[var]!r} vs. {val!r}"
                    )
                merged[var] = val
        return Assignment(merged)

    def added(self, var, val):
        """ Return new assignment with the pair var=val added (or overridden) """
        extended = dict(self._pairs)
        extended[var] = val
        return Assignment(extended)

    def removed(self, *variables):
        """ Return new assignment without the provided variables """
        return Assignment(
            (var, val) for var, val in self._pairs.items() if var not in variables
        )

    def trimmed(self, variables):
        """ Restriction of the assignment to the provided variables """
        return Assignment(
            (var, val) for var, val in self._pairs.items() if var in variables
        )

    def trimmed_inverse(self, variables):
        """ Restriction of the assignment to variables other than the provided ones """
        return Assignment(
            (var, val) for var, val in self._pairs.items() if var not in variables
        )

    def consistent_with(self, other):
        """ Test if the two assignments agree on every variable they share """
        if len(other) < len(self):
            smaller, larger = other._pairs, self._pairs
        else:
            smaller, larger = self._pairs, other._pairs

        for var, val in smaller.items():
            if var in larger and larger[var] != val:
                return False
        return True

    def contains(self, other):
        """ Test if every pair in other also appears in self """
        for var, val in other.items():
            if var not in self._pairs or self._pairs[var] != val:
                return False
        return True

    @staticmethod
    def all_combinations(values_by_var):
        """
        Enumerate every full assignment over the provided mapping from variables
        to their possible values. Empty mapping yields single empty assignment.
        """
        variables = sorted(values_by_var)
        return [
            Assignment(zip(variables, vals))
            for vals in product(*[list(values_by_var[var]) for var in variables])
        ]
