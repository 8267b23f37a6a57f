"""
Expression Tree
===============

Purpose:
--------
Immutable value types for arithmetic/boolean expression trees plus the three
renderings used everywhere else in the package:

- ``pretty_print``: an indented outline, one node per line.
- ``to_pretty_string``: infix text with the minimum parentheses required by
  operator precedence.
- ``to_canonical_string``: a deduplication key in which the operands of the
  commutative operators (``+`` and ``*``) are sorted, so ``a + b`` and
  ``b + a`` produce the same key.

Nodes are frozen dataclasses. Equality and hashing are structural, which is
what the fixed-point loops and factor matching rely on. Rewrites never mutate
a node: they build new parents and share untouched children.

Example:
--------
  >>> tree = AbstractSyntaxTree(
  ...     BinaryOperation(BinaryOperationKind.PLUS, Identifier("b"), Identifier("a"))
  ... )
  >>> tree.to_canonical_string()
  '(a + b)'
"""

from __future__ import annotations

import enum
from dataclasses import dataclass
from typing import List, Tuple, Union


class UnaryOperationKind(enum.Enum):
    MINUS = "-"
    NOT = "!"

    def __str__(self):
        return self.value


class BinaryOperationKind(enum.Enum):
    PLUS = "+"
    MINUS = "-"
    MULTIPLY = "*"
    DIVIDE = "/"
    OR = "|"
    AND = "&"

    def __str__(self):
        return self.value

    @property
    def precedence(self) -> int:
        if self in (BinaryOperationKind.PLUS, BinaryOperationKind.MINUS, BinaryOperationKind.OR):
            return 1
        return 2

    @property
    def is_commutative(self) -> bool:
        return self in (BinaryOperationKind.PLUS, BinaryOperationKind.MULTIPLY)

    @property
    def is_additive(self) -> bool:
        return self in (BinaryOperationKind.PLUS, BinaryOperationKind.MINUS)

    @property
    def is_arithmetic(self) -> bool:
        return self not in (BinaryOperationKind.OR, BinaryOperationKind.AND)


UNARY_PRECEDENCE = 3


@dataclass(frozen=True)
class Number:
    value: float

    def __post_init__(self):
        object.__setattr__(self, "value", float(self.value))


@dataclass(frozen=True)
class Identifier:
    name: str


@dataclass(frozen=True)
class StringLiteral:
    text: str


@dataclass(frozen=True)
class UnaryOperation:
    operation: UnaryOperationKind
    operand: "AstNode"


@dataclass(frozen=True)
class BinaryOperation:
    operation: BinaryOperationKind
    left: "AstNode"
    right: "AstNode"


@dataclass(frozen=True)
class FunctionCall:
    name: str
    arguments: Tuple["AstNode", ...] = ()

    def __post_init__(self):
        object.__setattr__(self, "arguments", tuple(self.arguments))


@dataclass(frozen=True)
class ArrayAccess:
    identifier: str
    indices: Tuple["AstNode", ...] = ()

    def __post_init__(self):
        object.__setattr__(self, "indices", tuple(self.indices))


AstNode = Union[
    Number,
    Identifier,
    StringLiteral,
    UnaryOperation,
    BinaryOperation,
    FunctionCall,
    ArrayAccess,
]


def is_unary_minus(node) -> bool:
    return isinstance(node, UnaryOperation) and node.operation is UnaryOperationKind.MINUS


def is_binary(node, *kinds) -> bool:
    """True if ``node`` is a binary operation of one of ``kinds`` (any kind if empty)."""
    if not isinstance(node, BinaryOperation):
        return False
    return not kinds or node.operation in kinds


def negate(node) -> UnaryOperation:
    return UnaryOperation(UnaryOperationKind.MINUS, node)


class AbstractSyntaxTree:
    """A validated expression tree wrapped around its root node."""

    def __init__(self, root: AstNode):
        self.root = root

    def __eq__(self, other):
        if not isinstance(other, AbstractSyntaxTree):
            return NotImplemented
        return self.root == other.root

    def __hash__(self):
        return hash(self.root)

    def __repr__(self):
        return f"AbstractSyntaxTree({self.to_pretty_string()!r})"

    def is_finalized(self) -> bool:
        """A tree is finalized once computation reduced it to a single number."""
        return isinstance(self.root, Number)

    # ------------------------------------------------------------------
    # Outline
    # ------------------------------------------------------------------
    def pretty_print(self) -> str:
        lines: List[str] = []
        _outline(self.root, lines, "", True)
        return "".join(line + "\n" for line in lines)

    # ------------------------------------------------------------------
    # Canonical key
    # ------------------------------------------------------------------
    def to_canonical_string(self) -> str:
        return canonical_string(self.root)

    # ------------------------------------------------------------------
    # Infix text
    # ------------------------------------------------------------------
    def to_pretty_string(self) -> str:
        return pretty_string(self.root)


def _node_label(node) -> str:
    if isinstance(node, Number):
        return f"{node.value:.3f}"
    if isinstance(node, Identifier):
        return node.name
    if isinstance(node, StringLiteral):
        return f'"{node.text}"'
    if isinstance(node, (UnaryOperation, BinaryOperation)):
        return str(node.operation)
    if isinstance(node, FunctionCall):
        return f"{node.name}(...)"
    if isinstance(node, ArrayAccess):
        return f"{node.identifier}[...]"
    raise TypeError(f"Unsupported node type: {type(node).__name__}")


def children(node) -> Tuple[AstNode, ...]:
    """Direct child nodes in left-to-right order."""
    if isinstance(node, UnaryOperation):
        return (node.operand,)
    if isinstance(node, BinaryOperation):
        return (node.left, node.right)
    if isinstance(node, FunctionCall):
        return node.arguments
    if isinstance(node, ArrayAccess):
        return node.indices
    return ()


def _outline(node, lines: List[str], prefix: str, is_last: bool):
    connector = "└── " if is_last else "├── "
    lines.append(f"{prefix}{connector}{_node_label(node)}")

    child_prefix = prefix + ("    " if is_last else "│   ")
    nested = children(node)
    for i, child in enumerate(nested):
        _outline(child, lines, child_prefix, i == len(nested) - 1)


def canonical_string(node) -> str:
    if isinstance(node, Number):
        return f"{node.value:.2f}"
    if isinstance(node, Identifier):
        return node.name
    if isinstance(node, StringLiteral):
        return f'"{node.text}"'
    if isinstance(node, UnaryOperation):
        return f"({node.operation}{canonical_string(node.operand)})"
    if isinstance(node, FunctionCall):
        args = ", ".join(canonical_string(arg) for arg in node.arguments)
        return f"{node.name}({args})"
    if isinstance(node, ArrayAccess):
        idx = "".join(f"[{canonical_string(i)}]" for i in node.indices)
        return f"{node.identifier}{idx}"
    if isinstance(node, BinaryOperation):
        left = canonical_string(node.left)
        right = canonical_string(node.right)
        if node.operation.is_commutative:
            left, right = sorted((left, right))
        return f"({left} {node.operation} {right})"
    raise TypeError(f"Unsupported node type: {type(node).__name__}")


def pretty_string(node, parent_precedence: int = 0) -> str:
    if isinstance(node, Number):
        return f"{node.value:.2f}"
    if isinstance(node, Identifier):
        return node.name
    if isinstance(node, StringLiteral):
        return f'"{node.text}"'
    if isinstance(node, FunctionCall):
        args = ", ".join(pretty_string(arg) for arg in node.arguments)
        return f"{node.name}({args})"
    if isinstance(node, ArrayAccess):
        idx = "".join(f"[{pretty_string(i)}]" for i in node.indices)
        return f"{node.identifier}{idx}"
    if isinstance(node, UnaryOperation):
        text = f"{node.operation}{pretty_string(node.operand, UNARY_PRECEDENCE)}"
        return _wrap(text, UNARY_PRECEDENCE, parent_precedence)
    if isinstance(node, BinaryOperation):
        precedence = node.operation.precedence

        if node.operation is BinaryOperationKind.PLUS:
            # A + (-B) reads as A - B
            if is_unary_minus(node.right):
                text = (
                    f"{pretty_string(node.left, precedence)} - "
                    f"{pretty_string(node.right.operand, precedence + 1)}"
                )
                return _wrap(text, precedence, parent_precedence)
            # (-A) + B reads as B - A
            if is_unary_minus(node.left):
                text = (
                    f"{pretty_string(node.right, precedence)} - "
                    f"{pretty_string(node.left.operand, precedence + 1)}"
                )
                return _wrap(text, precedence, parent_precedence)

        if node.operation in (BinaryOperationKind.MINUS, BinaryOperationKind.DIVIDE):
            left_precedence, right_precedence = precedence, precedence + 1
        else:
            left_precedence, right_precedence = precedence, precedence

        text = (
            f"{pretty_string(node.left, left_precedence)} {node.operation} "
            f"{pretty_string(node.right, right_precedence)}"
        )
        return _wrap(text, precedence, parent_precedence)
    raise TypeError(f"Unsupported node type: {type(node).__name__}")


def _wrap(text: str, precedence: int, parent_precedence: int) -> str:
    return f"({text})" if precedence < parent_precedence else text
