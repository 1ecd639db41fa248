"""
Implements network node class. Nodes of all kinds share a single representation;
the kind tag only decides whether table entries are read as probabilities or as
rewards.
"""
import enum
from types import MappingProxyType


class NodeKind(enum.Enum):
    CHANCE = "chance"
    ACTION = "action"
    UTILITY = "utility"
    DERIVED_ACTION = "derived_action"


class BNode:
    """
    Node in a decision network, identified by its variable name. Holds the set of
    parent variable names, the finite value domain (None for utility nodes) and a
    distribution exporting a flat table over (parents + node) assignments. Nodes are
    immutable once created; use with_distrib() to obtain a modified copy.
    """
    __slots__ = ("_id", "_kind", "_parents", "_values", "_distrib", "_factor")

    def __init__(self, node_id, kind=NodeKind.CHANCE, parents=None, values=None, distrib=None):
        if not isinstance(kind, NodeKind):
            kind = NodeKind(kind)

        self._id = node_id
        self._kind = kind
        self._parents = frozenset() if parents is None else frozenset(parents)
        self._distrib = distrib

        assert node_id not in self._parents, "Node cannot be its own parent"

        if distrib is not None:
            self._factor = MappingProxyType(distrib.get_flat_table())
        else:
            # Structure-only node
            self._factor = MappingProxyType({})

        if kind == NodeKind.UTILITY:
            # Utility nodes are not random variables and take no values
            self._values = None
        elif values is not None:
            self._values = tuple(values)
        else:
            # Collect own values as witnessed in the flat table
            seen = []
            for a in self._factor:
                if node_id in a and a[node_id] not in seen:
                    seen.append(a[node_id])
            self._values = tuple(seen)

    def __repr__(self):
        return f"BNode({self._id}, kind={self._kind.value}, parents={sorted(self._parents)})"

    @property
    def id(self):
        return self._id

    @property
    def kind(self):
        return self._kind

    @property
    def parents(self):
        return self._parents

    @property
    def values(self):
        return self._values

    @property
    def distrib(self):
        return self._distrib

    @property
    def is_utility(self):
        """ Whether flat table entries are utilities rather than probabilities """
        return self._kind == NodeKind.UTILITY

    def get_factor(self):
        """ Read-only flat table from (parents + node) assignments to numbers """
        return self._factor

    def with_distrib(self, distrib):
        """ Return copy of node with the distribution replaced """
        return BNode(
            self._id, kind=self._kind, parents=self._parents,
            values=self._values, distrib=distrib
        )
