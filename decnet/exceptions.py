"""
Exceptions raised by decision network inference. Degenerate numeric outcomes
(empty results, zero probability mass) are not errors and never raised; they are
returned as explicit zero or don't-care values.
"""

class DecNetError(Exception):
    """ Base exception for decision network inference """
    pass

class MalformedQueryError(DecNetError, ValueError):
    """ Query referencing unknown variables or values outside a node's domain """
    pass

class UnknownVariableError(MalformedQueryError, KeyError):
    """ Variable (node) id not present in the network """
    def __str__(self):
        # KeyError would wrap the message in quotes
        return Exception.__str__(self)

class CyclicNetworkError(DecNetError):
    """ No dependency order can be derived for the network """
    pass
