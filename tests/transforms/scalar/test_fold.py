"""
FoldPass Tests
==============

Tests for the ``fold`` presentation pass.
"""

import unittest

from expr_optimizer.transforms.scalar.fold import FoldPass
from expr_optimizer.utils import build_tree


class FoldPassTest(unittest.TestCase):
    def check(self, data, expected):
        self.assertEqual(FoldPass().transform(build_tree(data)), build_tree(expected))

    def test_negated_term(self):
        self.check(["+", "a", ["-", "b"]], ["-", "a", "b"])

    def test_negative_number(self):
        self.check(["+", "a", -3], ["-", "a", 3])
        self.check(["+", "a", 3], ["+", "a", 3])

    def test_reciprocal(self):
        self.check(["*", "a", ["/", 1, "b"]], ["/", "a", "b"])
        self.check(["*", "a", ["/", 2, "b"]], ["*", "a", ["/", 2, "b"]])

    def test_nested(self):
        self.check(["+", ["+", "a", ["-", "b"]], ["-", "c"]], ["-", ["-", "a", "b"], "c"])
        self.check(["*", ["+", "a", ["-", "b"]], "c"], ["*", ["-", "a", "b"], "c"])

    def test_left_negation_kept(self):
        self.check(["+", ["-", "a"], "b"], ["+", ["-", "a"], "b"])


if __name__ == "__main__":
    unittest.main()
