"""
BalancePass Tests
=================

Tests for the ``balance`` pass: minimal-height reconstruction of ``+`` and
``*`` chains.
"""

import unittest

from expr_optimizer.transforms.combine.balance import BalancePass
from expr_optimizer.tree import Identifier
from expr_optimizer.utils import build_tree
from expr_optimizer.utils.tree_utils import tree_height


def left_chain(operation, operands):
    data = operands[0]
    for operand in operands[1:]:
        data = [operation, data, operand]
    return data


class BalancePassTest(unittest.TestCase):
    def balance(self, data):
        return BalancePass().transform(build_tree(data)).root

    def test_eight_terms(self):
        result = self.balance(left_chain("+", list("abcdefgh")))
        expected = build_tree(
            ["+", ["+", ["+", "a", "b"], ["+", "c", "d"]], ["+", ["+", "e", "f"], ["+", "g", "h"]]]
        ).root
        self.assertEqual(result, expected)
        # three operator levels above the leaves
        self.assertEqual(tree_height(result), 4)

    def test_nine_terms(self):
        result = self.balance(left_chain("+", list("abcdefghi")))
        self.assertEqual(result.right, Identifier("i"))
        self.assertEqual(result.left, self.balance(left_chain("+", list("abcdefgh"))))
        self.assertEqual(tree_height(result), 5)

    def test_right_leaning_chain(self):
        result = self.balance(["*", "a", ["*", "b", ["*", "c", "d"]]])
        self.assertEqual(result, build_tree(["*", ["*", "a", "b"], ["*", "c", "d"]]).root)

    def test_nested_chains(self):
        product = left_chain("*", list("abcd"))
        result = self.balance(["+", product, "e"])
        self.assertEqual(
            result, build_tree(["+", ["*", ["*", "a", "b"], ["*", "c", "d"]], "e"]).root
        )

    def test_non_associative_operators_keep_shape(self):
        data = ["-", left_chain("+", list("abcd")), ["/", "x", left_chain("*", list("pqr"))]]
        result = self.balance(data)
        self.assertEqual(
            result,
            build_tree(
                ["-", ["+", ["+", "a", "b"], ["+", "c", "d"]], ["/", "x", ["*", ["*", "p", "q"], "r"]]]
            ).root,
        )

    def test_leaf_unchanged(self):
        self.assertEqual(self.balance("a"), Identifier("a"))


if __name__ == "__main__":
    unittest.main()
