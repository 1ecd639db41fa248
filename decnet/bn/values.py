"""
Discrete values taken by network variables. Any hashable Python object can serve
as a value; the only special value is the NONE sentinel, standing for the absence
of a value (e.g. a decision option of doing nothing).
"""

class NoneValue:
    """ Singleton sentinel; equal only to itself """
    _instance = None

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self):
        return "None"

    def __hash__(self):
        return hash("decnet.NONE")

    def __eq__(self, other):
        return other is self

    def __reduce__(self):
        return (NoneValue, ())


NONE = NoneValue()
