import unittest

import networkx as nx

from decnet import (
    Assignment, ProbabilityTable, BNode, NodeKind, BNetwork,
    CyclicNetworkError, UnknownVariableError
)
from networks import chain_network, umbrella_network, cyclic_network


class TestNodes(unittest.TestCase):

    def test_values_from_distribution(self):
        node = BNode("A", distrib=ProbabilityTable.from_values("A", { "a1": 0.3, "a2": 0.7 }))

        self.assertEqual(set(node.values), {"a1", "a2"})
        self.assertFalse(node.is_utility)
        self.assertEqual(len(node.get_factor()), 2)

    def test_factor_is_read_only(self):
        node = BNode("A", distrib=ProbabilityTable.from_values("A", { "a1": 1.0 }))

        with self.assertRaises(TypeError):
            node.get_factor()[Assignment(A="a2")] = 0.0

    def test_utility_node_has_no_values(self):
        net = umbrella_network()
        self.assertIsNone(net.get_node("U").values)
        self.assertTrue(net.get_node("U").is_utility)
        self.assertEqual(net.get_node("A").kind, NodeKind.ACTION)


class TestNetwork(unittest.TestCase):

    def test_sorted_nodes_leaves_first(self):
        net = chain_network()
        self.assertEqual([n.id for n in net.get_sorted_nodes()], ["C", "B", "A"])

        # Filtered to a subset, same relative order
        self.assertEqual([n.id for n in net.get_sorted_nodes({"A", "C"})], ["C", "A"])

    def test_sorted_nodes_children_before_parents(self):
        net = umbrella_network()
        order = [n.id for n in net.get_sorted_nodes()]

        for node in net.get_nodes():
            for parent in node.parents:
                self.assertLess(order.index(node.id), order.index(parent))

    def test_cycle(self):
        net = cyclic_network()
        with self.assertRaises(CyclicNetworkError):
            net.get_sorted_nodes()

    def test_unknown_parent(self):
        with self.assertRaises(UnknownVariableError):
            BNetwork([BNode("B", parents=["A"])])

    def test_unknown_node(self):
        with self.assertRaises(UnknownVariableError):
            chain_network().get_node("Z")

    def test_frozen(self):
        net = chain_network()
        self.assertTrue(nx.is_frozen(net.graph))

    def test_ancestry(self):
        net = chain_network()
        self.assertEqual(net.get_ancestor_ids("C"), {"A", "B"})
        self.assertEqual(net.get_descendant_ids("A"), {"B", "C"})
        self.assertEqual(net.get_children_ids("B"), {"C"})

    def test_reduced_copy(self):
        net = chain_network()
        reduced = net.get_reduced_copy({"A", "C"})

        self.assertEqual(reduced.node_ids, frozenset({"A", "C"}))
        # Closest retained ancestor becomes the parent
        self.assertEqual(reduced.get_node("C").parents, frozenset({"A"}))
        self.assertEqual(set(reduced.get_node("C").values), {"c1", "c2"})
        # Structure only
        self.assertIsNone(reduced.get_node("C").distrib)
        self.assertEqual(len(reduced.get_node("C").get_factor()), 0)

    def test_identical_nodes(self):
        net = chain_network()

        reduced = net.get_reduced_copy({"A", "C"})
        self.assertEqual(net.get_identical_nodes(reduced, Assignment()), {"A"})

        reduced = net.get_reduced_copy({"A", "B"})
        self.assertEqual(net.get_identical_nodes(reduced, Assignment()), {"A", "B"})

        # Observed descendant changes the conditional distributions
        self.assertEqual(net.get_identical_nodes(reduced, Assignment(C="c1")), set())

        # Observed ancestor does not change P(B|A)
        reduced = net.get_reduced_copy({"B", "C"})
        self.assertEqual(net.get_identical_nodes(reduced, Assignment(A="a1")), {"C"})

    def test_with_distributions(self):
        net = chain_network()
        new_distrib = ProbabilityTable.from_values("A", { "a1": 0.5, "a2": 0.5 })
        modified = net.with_distributions({ "A": new_distrib })

        self.assertIs(modified.get_node("A").distrib, new_distrib)
        self.assertIs(modified.get_node("B"), net.get_node("B"))
        # Original untouched
        self.assertAlmostEqual(
            net.get_node("A").distrib.get_prob(Assignment(A="a1")), 0.3
        )


if __name__ == "__main__":
    unittest.main()
