"""
Implements decision network class, as a frozen directed acyclic graph of nodes
"""
import networkx as nx

from .nodes import BNode, NodeKind
from ..exceptions import CyclicNetworkError, UnknownVariableError


class BNetwork:
    """
    Decision network consisting of chance, action and utility nodes. Instances are
    immutable snapshots (underlying graph is frozen), so that any number of inference
    calls may read the same network concurrently; modified versions are obtained as
    new networks sharing all unchanged node objects.
    """
    def __init__(self, nodes=None):
        graph = nx.DiGraph()

        nodes = [] if nodes is None else list(nodes)
        for node in nodes:
            assert isinstance(node, BNode)
            if node.id in graph:
                raise ValueError(f"Duplicate node id: {node.id}")
            graph.add_node(node.id, node=node)

        for node in nodes:
            for parent in node.parents:
                if parent not in graph:
                    raise UnknownVariableError(
                        f"Node {node.id} has unknown parent {parent}"
                    )
                # Edge direction is parent -> child
                graph.add_edge(parent, node.id)

        self.graph = nx.freeze(graph)

    def __repr__(self):
        return f"BNetwork(len={len(self)})"

    def __len__(self):
        return self.graph.number_of_nodes()

    def __contains__(self, node_id):
        return self.has_node(node_id)

    def has_node(self, node_id):
        return node_id in self.graph

    def get_node(self, node_id):
        if node_id not in self.graph:
            raise UnknownVariableError(f"Network has no node {node_id}")
        return self.graph.nodes[node_id]["node"]

    @property
    def node_ids(self):
        return frozenset(self.graph.nodes)

    def get_nodes(self):
        return [self.graph.nodes[n]["node"] for n in sorted(self.graph.nodes, key=str)]

    def get_chance_nodes(self):
        """ All nodes carrying probability tables (chance and action nodes) """
        return [n for n in self.get_nodes() if not n.is_utility]

    def get_utility_nodes(self):
        return [n for n in self.get_nodes() if n.is_utility]

    def get_children_ids(self, node_id):
        self.get_node(node_id)
        return set(self.graph.successors(node_id))

    def get_ancestor_ids(self, node_id):
        self.get_node(node_id)
        return set(nx.ancestors(self.graph, node_id))

    def get_descendant_ids(self, node_id):
        self.get_node(node_id)
        return set(nx.descendants(self.graph, node_id))

    def get_sorted_nodes(self, node_ids=None):
        """
        Return nodes in dependency order for elimination: each node is listed before
        all of its parents, i.e. leaves first and roots last. Ties are broken by node
        id so the order is deterministic. If node_ids is provided, only those nodes
        are returned (in the same relative order).
        """
        try:
            topo = list(nx.lexicographical_topological_sort(self.graph, key=str))
        except nx.NetworkXUnfeasible as e:
            raise CyclicNetworkError("Network contains a cycle") from e

        ordered = reversed(topo)
        if node_ids is not None:
            node_ids = set(node_ids)
            ordered = [n for n in ordered if n in node_ids]

        return [self.graph.nodes[n]["node"] for n in ordered]

    def get_reduced_copy(self, retain_ids):
        """
        Return a structure-only network over the retained nodes, without any
        distributions. Each retained node becomes a chance node whose parents are its
        closest retained ancestors; search up each path stops at the first retained
        node encountered.
        """
        retain_ids = set(retain_ids)
        for node_id in retain_ids:
            self.get_node(node_id)

        reduced_nodes = []
        for node_id in retain_ids:
            original = self.get_node(node_id)

            reduced_parents = set()
            frontier = list(original.parents)
            visited = set()
            while len(frontier) > 0:
                ancestor = frontier.pop()
                if ancestor in visited: continue
                visited.add(ancestor)

                if ancestor in retain_ids:
                    reduced_parents.add(ancestor)
                else:
                    frontier += list(self.get_node(ancestor).parents)

            reduced_nodes.append(BNode(
                node_id, kind=NodeKind.CHANCE, parents=reduced_parents,
                values=original.values
            ))

        return BNetwork(reduced_nodes)

    def get_identical_nodes(self, reduced, evidence):
        """
        Return ids of nodes in the reduced network whose conditional distribution
        remains unchanged after reduction under the given evidence. That is the case
        if the parent set is the same as in this network, and neither the node nor
        any of its descendants is observed (evidence on non-descendants can only
        affect the distribution of parents, given which the node is independent).
        """
        identical = set()
        for reduced_node in reduced.get_nodes():
            if not self.has_node(reduced_node.id): continue
            original = self.get_node(reduced_node.id)

            if original.is_utility: continue
            if original.parents != reduced_node.parents: continue

            observed = evidence.variables()
            if reduced_node.id in observed: continue
            if len(self.get_descendant_ids(reduced_node.id) & observed) > 0: continue

            identical.add(reduced_node.id)

        return identical

    def with_distributions(self, distribs):
        """
        Return new network where the nodes with ids in the provided dict have their
        distributions replaced; other node objects are shared as-is
        """
        for node_id in distribs:
            self.get_node(node_id)

        return BNetwork([
            node.with_distrib(distribs[node.id]) if node.id in distribs else node
            for node in self.get_nodes()
        ])
