"""
JSON encoding of expression trees.

Layout of the encoded form:

  3.5                               Number
  "a"                               Identifier
  {"str": "text"}                   StringLiteral
  ["-", x] / ["!", x]               UnaryOperation
  ["+", l, r]  (+ - * / | &)        BinaryOperation
  {"call": "f", "args": [...]}      FunctionCall
  {"index": "m", "indices": [...]}  ArrayAccess
"""

import json
import os

from ..tree import (
    AbstractSyntaxTree,
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

_BINARY_BY_SYMBOL = {kind.value: kind for kind in BinaryOperationKind}
_UNARY_BY_SYMBOL = {kind.value: kind for kind in UnaryOperationKind}


def from_json_data(data):
    """Builds a node from its decoded JSON representation."""
    if isinstance(data, bool):
        raise ValueError(f"Booleans are not valid expression nodes: {data!r}")
    if isinstance(data, (int, float)):
        return Number(data)
    if isinstance(data, str):
        return Identifier(data)
    if isinstance(data, dict):
        if "str" in data:
            return StringLiteral(data["str"])
        if "call" in data:
            return FunctionCall(data["call"], [from_json_data(a) for a in data.get("args", [])])
        if "index" in data:
            return ArrayAccess(data["index"], [from_json_data(i) for i in data.get("indices", [])])
        raise ValueError(f"Unrecognized node object: {data!r}")
    if isinstance(data, (list, tuple)):
        if len(data) == 2 and data[0] in _UNARY_BY_SYMBOL:
            return UnaryOperation(_UNARY_BY_SYMBOL[data[0]], from_json_data(data[1]))
        if len(data) == 3 and data[0] in _BINARY_BY_SYMBOL:
            return BinaryOperation(
                _BINARY_BY_SYMBOL[data[0]], from_json_data(data[1]), from_json_data(data[2])
            )
        raise ValueError(f"Unrecognized operation: {data!r}")
    raise ValueError(f"Unsupported JSON value: {data!r}")


def to_json_data(node):
    if isinstance(node, Number):
        return node.value
    if isinstance(node, Identifier):
        return node.name
    if isinstance(node, StringLiteral):
        return {"str": node.text}
    if isinstance(node, UnaryOperation):
        return [node.operation.value, to_json_data(node.operand)]
    if isinstance(node, BinaryOperation):
        return [node.operation.value, to_json_data(node.left), to_json_data(node.right)]
    if isinstance(node, FunctionCall):
        return {"call": node.name, "args": [to_json_data(a) for a in node.arguments]}
    if isinstance(node, ArrayAccess):
        return {"index": node.identifier, "indices": [to_json_data(i) for i in node.indices]}
    raise TypeError(f"Unsupported node type: {type(node).__name__}")


def build_tree(data) -> AbstractSyntaxTree:
    return AbstractSyntaxTree(from_json_data(data))


def save_tree(tree: AbstractSyntaxTree, path):
    """Saves a tree as JSON."""
    # Ensure output directory exists
    output_dir = os.path.dirname(path)
    if output_dir and not os.path.exists(output_dir):
        os.makedirs(output_dir, exist_ok=True)

    with open(path, "w") as f:
        json.dump(to_json_data(tree.root), f)


def load_tree(path) -> AbstractSyntaxTree:
    """Loads a tree from a JSON file."""
    if not os.path.exists(path):
        raise FileNotFoundError(f"Tree file not found: {path}")

    with open(path, "r") as f:
        return build_tree(json.load(f))
