"""
Equivalence Search Tests
========================

1. The input form comes first and every form is unique
2. Expansion, flattening and factoring all contribute forms
3. The max_forms bound
"""

import unittest

from expr_optimizer.equivalence import EquivalenceExplorer, find_equivalent_forms
from expr_optimizer.errors import ConfigurationError
from expr_optimizer.utils import build_tree


class EquivalenceTest(unittest.TestCase):
    def test_simple_product(self):
        tree = build_tree(["*", "a", ["+", "b", "c"]])
        forms = find_equivalent_forms(tree)
        self.assertEqual(forms, [tree, build_tree(["+", ["*", "a", "b"], ["*", "a", "c"]])])

    def test_forms_unique_and_input_first(self):
        tree = build_tree(["*", ["+", "a", "b"], ["+", "c", "d"]])
        forms = find_equivalent_forms(tree)
        keys = [form.to_canonical_string() for form in forms]
        self.assertIs(forms[0], tree)
        self.assertEqual(len(keys), len(set(keys)))
        self.assertGreater(len(forms), 3)

    def test_fully_expanded_form_reached(self):
        tree = build_tree(["*", ["+", "a", "b"], ["+", "c", "d"]])
        keys = {form.to_canonical_string() for form in find_equivalent_forms(tree)}
        expanded = build_tree(
            ["+", ["+", ["*", "a", "c"], ["*", "a", "d"]], ["+", ["*", "b", "c"], ["*", "b", "d"]]]
        )
        self.assertIn(expanded.to_canonical_string(), keys)

    def test_factoring_after_flattening(self):
        # a*k + a*x + c*k has no brackets; only factoring applies
        tree = build_tree(["+", ["+", ["*", "a", "k"], ["*", "a", "x"]], ["*", "c", "k"]])
        forms = find_equivalent_forms(tree)
        self.assertIn(build_tree(["+", ["*", "a", ["+", "k", "x"]], ["*", "c", "k"]]), forms)
        self.assertIn(build_tree(["+", ["*", "k", ["+", "a", "c"]], ["*", "a", "x"]]), forms)

    def test_subtraction(self):
        tree = build_tree(["*", "a", ["-", "b", "c"]])
        self.assertEqual(
            find_equivalent_forms(tree),
            [
                tree,
                build_tree(["-", ["*", "a", "b"], ["*", "a", "c"]]),
                build_tree(["*", "a", ["+", "b", ["-", "c"]]]),
            ],
        )

    def test_leaf(self):
        self.assertEqual(find_equivalent_forms(build_tree("a")), [build_tree("a")])

    def test_max_forms(self):
        explorer = EquivalenceExplorer(max_forms=1)
        tree = build_tree(["*", "a", ["+", "b", "c"]])
        with self.assertLogs("ExprOptimizer", level="WARNING"):
            forms = explorer.explore(tree)
        self.assertEqual(forms, [tree])
        self.assertTrue(explorer.truncated)

    def test_invalid_max_forms(self):
        with self.assertRaises(ConfigurationError):
            EquivalenceExplorer(max_forms=0)

    def test_deterministic(self):
        tree = build_tree(["*", ["+", "a", "b"], ["-", "c", "d"]])
        self.assertEqual(find_equivalent_forms(tree), find_equivalent_forms(tree))


if __name__ == "__main__":
    unittest.main()
