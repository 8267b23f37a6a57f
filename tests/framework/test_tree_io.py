"""
Tree I/O Tests
==============

1. Decoding every node kind from JSON data
2. Rejection of malformed data
3. File round trip through save_tree/load_tree
"""

import os
import tempfile
import unittest

from expr_optimizer.tree import (
    ArrayAccess,
    BinaryOperation,
    BinaryOperationKind,
    FunctionCall,
    Identifier,
    Number,
    StringLiteral,
    UnaryOperation,
    UnaryOperationKind,
)
from expr_optimizer.utils import build_tree, from_json_data, load_tree, save_tree, to_json_data


class TestTreeIO(unittest.TestCase):
    def test_decode_leaves(self):
        self.assertEqual(from_json_data(3), Number(3.0))
        self.assertEqual(from_json_data("x"), Identifier("x"))
        self.assertEqual(from_json_data({"str": "hi"}), StringLiteral("hi"))

    def test_decode_operations(self):
        self.assertEqual(
            from_json_data(["!", "a"]), UnaryOperation(UnaryOperationKind.NOT, Identifier("a"))
        )
        self.assertEqual(
            from_json_data(["&", "a", "b"]),
            BinaryOperation(BinaryOperationKind.AND, Identifier("a"), Identifier("b")),
        )
        # "-" with one operand is negation, with two it is subtraction
        self.assertIsInstance(from_json_data(["-", "a"]), UnaryOperation)
        self.assertIsInstance(from_json_data(["-", "a", "b"]), BinaryOperation)

    def test_decode_call_and_index(self):
        self.assertEqual(
            from_json_data({"call": "f", "args": [1, "y"]}),
            FunctionCall("f", (Number(1), Identifier("y"))),
        )
        self.assertEqual(
            from_json_data({"index": "m", "indices": ["i"]}),
            ArrayAccess("m", (Identifier("i"),)),
        )
        self.assertEqual(from_json_data({"call": "g"}), FunctionCall("g"))

    def test_rejects_malformed(self):
        for data in (True, None, ["%", "a", "b"], ["+", "a"], {"other": 1}):
            with self.subTest(data=data):
                with self.assertRaises(ValueError):
                    from_json_data(data)

    def test_encode(self):
        node = build_tree(["+", "a", ["-", {"str": "s"}]]).root
        self.assertEqual(to_json_data(node), ["+", "a", ["-", {"str": "s"}]])

    def test_save_and_load(self):
        tree = build_tree(
            ["*", {"call": "f", "args": [["/", "x", 2]]}, ["|", {"index": "m", "indices": [0]}, ["!", "b"]]]
        )
        with tempfile.TemporaryDirectory() as tmp:
            path = os.path.join(tmp, "nested", "tree.json")
            save_tree(tree, path)
            self.assertEqual(load_tree(path), tree)

    def test_load_missing_file(self):
        with self.assertRaises(FileNotFoundError):
            load_tree("does_not_exist_tree.json")


if __name__ == "__main__":
    unittest.main()
