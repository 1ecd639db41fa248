import unittest

from decnet import NONE, Assignment


class TestAssignment(unittest.TestCase):

    def test_equality_ignores_order(self):
        a = Assignment([("A", "a1"), ("B", "b1")])
        b = Assignment(B="b1", A="a1")

        self.assertEqual(a, b)
        self.assertEqual(hash(a), hash(b))
        self.assertEqual(len({a, b}), 1)

    def test_union(self):
        merged = Assignment.union(Assignment(A="a1"), Assignment(B="b1"))
        self.assertEqual(merged, Assignment(A="a1", B="b1"))

        # Agreeing values on shared variable are fine
        merged = Assignment.union(Assignment(A="a1"), Assignment(A="a1", C=3))
        self.assertEqual(merged, Assignment(A="a1", C=3))

    def test_union_conflict(self):
        with self.assertRaises(ValueError):
            Assignment.union(Assignment(A="a1"), Assignment(A="a2"))

        # Later assignment wins when overriding
        merged = Assignment.union(Assignment(A="a1"), Assignment(A="a2"), override=True)
        self.assertEqual(merged, Assignment(A="a2"))

    def test_trimming_and_removal(self):
        a = Assignment(A="a1", B="b1", C="c1")

        self.assertEqual(a.trimmed({"A", "C"}), Assignment(A="a1", C="c1"))
        self.assertEqual(a.trimmed_inverse({"A", "C"}), Assignment(B="b1"))
        self.assertEqual(a.removed("B"), Assignment(A="a1", C="c1"))
        self.assertEqual(a.trimmed({"D"}), Assignment())

        # Original left untouched
        self.assertEqual(a.variables(), frozenset({"A", "B", "C"}))

    def test_consistency(self):
        a = Assignment(A="a1", B="b1")

        self.assertTrue(a.consistent_with(Assignment(B="b1", C="c1")))
        self.assertTrue(a.consistent_with(Assignment(C="c1")))
        self.assertTrue(a.consistent_with(Assignment()))
        self.assertFalse(a.consistent_with(Assignment(B="b2", C="c1")))

    def test_contains(self):
        a = Assignment(A="a1", B="b1")

        self.assertTrue(a.contains(Assignment(A="a1")))
        self.assertFalse(a.contains(Assignment(A="a1", C="c1")))
        self.assertFalse(a.contains(Assignment(A="a2")))

    def test_all_combinations(self):
        combs = Assignment.all_combinations({ "A": ["a1", "a2"], "B": [0, 1, 2] })
        self.assertEqual(len(combs), 6)
        self.assertIn(Assignment(A="a2", B=1), combs)

        # Empty mapping gives single empty assignment
        self.assertEqual(Assignment.all_combinations({}), [Assignment()])

    def test_none_value(self):
        a = Assignment(A=NONE)

        self.assertEqual(a, Assignment(A=NONE))
        self.assertNotEqual(a, Assignment(A=None))
        self.assertNotEqual(a, Assignment(A="None"))
        self.assertEqual(repr(NONE), "None")


if __name__ == "__main__":
    unittest.main()
