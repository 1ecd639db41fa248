"""
Implements distribution couple class, pairing the probability and utility
distributions obtained from a single inference call
"""

class DistributionCouple:
    """ Probability table and utility table over the same query variables """
    def __init__(self, prob_distrib, util_distrib):
        self.prob_distrib = prob_distrib
        self.util_distrib = util_distrib

    def __repr__(self):
        return f"DistributionCouple({self.prob_distrib!r}, {self.util_distrib!r})"

    def __iter__(self):
        # Allows unpacking as (prob_distrib, util_distrib)
        return iter((self.prob_distrib, self.util_distrib))
