"""
Associative Factoring Tests
===========================

1. Signed term collection from +/- chains
2. Common factor extraction at the root sum
"""

import unittest

from expr_optimizer.transforms.rewrite.associative import (
    collect_terms,
    factors_of,
    remainder_of,
    single_step_factorings,
)
from expr_optimizer.utils import build_tree


def nodes(*items):
    return [build_tree(item).root for item in items]


class AssociativeTest(unittest.TestCase):
    def factorings(self, data):
        return single_step_factorings(build_tree(data))

    def test_collect_terms(self):
        root = build_tree(["-", "a", ["-", "b", "c"]]).root
        self.assertEqual(collect_terms(root), nodes("a", ["-", "b"], "c"))

        root = build_tree(["-", "a", ["+", ["-", "b"], "c"]]).root
        self.assertEqual(collect_terms(root), nodes("a", "b", ["-", "c"]))

    def test_factors_and_remainders(self):
        term = build_tree(["-", ["*", "a", "k"]]).root
        self.assertEqual(factors_of(term), nodes("a", "k"))
        self.assertEqual(remainder_of(term, build_tree("k").root), build_tree(["-", "a"]).root)
        self.assertIsNone(remainder_of(term, build_tree("x").root))
        self.assertEqual(factors_of(build_tree("a").root), [])

    def test_shared_factor(self):
        self.assertEqual(
            self.factorings(["+", ["*", "a", "k"], ["*", "c", "k"]]),
            [build_tree(["*", "k", ["+", "a", "c"]])],
        )

    def test_negative_term(self):
        self.assertEqual(
            self.factorings(["-", ["*", "a", "k"], ["*", "c", "k"]]),
            [build_tree(["*", "k", ["+", "a", ["-", "c"]]])],
        )

    def test_several_factors(self):
        data = ["-", ["-", ["*", "a", "k"], ["*", "c", "k"]], ["*", "a", "x"]]
        self.assertEqual(
            self.factorings(data),
            [
                build_tree(["+", ["*", "a", ["+", "k", ["-", "x"]]], ["-", ["*", "c", "k"]]]),
                build_tree(["+", ["*", "k", ["+", "a", ["-", "c"]]], ["-", ["*", "a", "x"]]]),
            ],
        )

    def test_numbers_match_exactly(self):
        self.assertEqual(
            self.factorings(["+", ["*", 2, "a"], ["*", 2, "b"]]),
            [build_tree(["*", 2, ["+", "a", "b"]])],
        )
        self.assertEqual(self.factorings(["+", ["*", 2, "a"], ["*", 2.5, "b"]]), [])

    def test_nothing_to_factor(self):
        self.assertEqual(self.factorings(["+", ["*", "a", "b"], "c"]), [])
        self.assertEqual(self.factorings(["*", "a", ["+", "b", "c"]]), [])
        self.assertEqual(self.factorings("a"), [])


if __name__ == "__main__":
    unittest.main()
