import unittest

from decnet import Assignment, MalformedQueryError, UnknownVariableError
from decnet.inference import ProbQuery, UtilQuery, ReductionQuery
from networks import chain_network, umbrella_network


class TestQueries(unittest.TestCase):

    def test_fields(self):
        query = ProbQuery(chain_network(), "A", { "C": "c1" })

        self.assertEqual(query.query_vars, frozenset({"A"}))
        self.assertEqual(query.evidence, Assignment(C="c1"))

    def test_unknown_variables(self):
        net = chain_network()

        with self.assertRaises(UnknownVariableError):
            ProbQuery(net, ["Z"])
        with self.assertRaises(UnknownVariableError):
            ProbQuery(net, ["A"], Assignment(Z="z1"))

        # Also classified as malformed query, and as missing key
        with self.assertRaises(MalformedQueryError):
            ProbQuery(net, ["Z"])
        with self.assertRaises(KeyError):
            ProbQuery(net, ["Z"])

    def test_evidence_outside_domain(self):
        with self.assertRaises(MalformedQueryError):
            ProbQuery(chain_network(), ["A"], Assignment(B="b3"))

    def test_utility_node_in_query(self):
        net = umbrella_network()

        with self.assertRaises(MalformedQueryError):
            UtilQuery(net, ["U"])
        with self.assertRaises(MalformedQueryError):
            ProbQuery(net, ["W"], Assignment(U=1.0))

    def test_irrelevant_nodes_prob_query(self):
        net = umbrella_network()

        # Utility node is barren, then so are action and forecast
        query = ProbQuery(net, ["W"])
        self.assertEqual(query.get_irrelevant_node_ids(), {"U", "A", "F"})
        self.assertEqual([n.id for n in query.get_filtered_sorted_nodes()], ["W"])

        # Observed forecast is relevant
        query = ProbQuery(net, ["W"], Assignment(F="rainy_fc"))
        self.assertEqual(query.get_irrelevant_node_ids(), {"U", "A"})

    def test_irrelevant_nodes_util_query(self):
        net = umbrella_network()

        query = UtilQuery(net, ["A"])
        self.assertEqual(query.get_irrelevant_node_ids(), {"F"})
        self.assertEqual(
            [n.id for n in query.get_filtered_sorted_nodes()], ["U", "W", "A"]
        )

    def test_reduction_query_unresolved(self):
        query = ReductionQuery(chain_network(), ["A", "C"])
        self.assertEqual(query.unresolved, {"A", "C"})

        query.remove_query_var("A")
        self.assertEqual(query.unresolved, {"C"})
        self.assertEqual(query.query_vars, frozenset({"A", "C"}))


if __name__ == "__main__":
    unittest.main()
