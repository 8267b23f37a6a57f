"""
Canonical Form Pass (``transform``)
===================================

Purpose:
--------
Rewrites the tree into the flat, subtraction-free shape that the balancer and
the equivalence search work on.

Algorithm:
----------
1. ``A - B``            ->  ``A + (-B)``
2. ``A / B / C / ...``  ->  ``A / (B * C * ...)`` (left-associative product)
3. ``-(-A)``            ->  ``A``
4. ``-(A + B)``         ->  ``(-A) + (-B)``, applied recursively, including
   to the negated right operand created by rule 1.

Complexity:
-----------
- Time: O(N)
- Space: O(H)

Example:
--------
  a - (b - c)   ->   a + ((-b) + c)
  a / b / c     ->   a / (b * c)

Relationships:
--------------
- Followed by ``compute`` and ``balance``: once subtraction is gone every
  additive chain is a plain ``+`` chain that ``balance`` can flatten.
- ``fold`` is its presentation-side inverse.
"""

from ...core import BasePass, PassRegistry
from ...tree import (
    BinaryOperation,
    BinaryOperationKind,
    UnaryOperation,
    UnaryOperationKind,
    is_binary,
    is_unary_minus,
    negate,
)
from ...utils.tree_utils import build_left_associative, collect_left_chain, map_children

PLUS = BinaryOperationKind.PLUS
MINUS = BinaryOperationKind.MINUS
MULTIPLY = BinaryOperationKind.MULTIPLY
DIVIDE = BinaryOperationKind.DIVIDE


@PassRegistry.register("transform")
class CanonicalizePass(BasePass):
    """Removes subtraction, flattens division chains and pushes negation inward."""

    def __init__(self):
        super().__init__(name="transform")

    def rewrite(self, node):
        if isinstance(node, UnaryOperation):
            operand = self.rewrite(node.operand)
            if node.operation is UnaryOperationKind.MINUS:
                return self._negate(operand)
            return UnaryOperation(node.operation, operand)

        if is_binary(node, MINUS):
            return BinaryOperation(PLUS, self.rewrite(node.left), self._negate(self.rewrite(node.right)))

        if is_binary(node, DIVIDE):
            return self._flatten_division_chain(node)

        return map_children(node, self.rewrite)

    def _negate(self, operand):
        """Negates an already canonical operand."""
        if is_unary_minus(operand):
            return operand.operand
        if is_binary(operand, PLUS):
            return BinaryOperation(PLUS, self._negate(operand.left), self._negate(operand.right))
        return negate(operand)

    def _flatten_division_chain(self, node):
        head, terms = collect_left_chain(node, DIVIDE)
        head = self.rewrite(head)
        if not terms:
            return head

        product = build_left_associative([self.rewrite(term) for term in terms], MULTIPLY)
        return BinaryOperation(DIVIDE, head, product)
