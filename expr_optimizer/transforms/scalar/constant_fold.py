"""
Constant Folding Pass (``compute``)
===================================

Purpose:
--------
Evaluates constant subexpressions and applies algebraic identities until the
tree stops changing. A tree that folds down to a single ``Number`` is
"finalized": nothing is left to optimize or schedule.

Algorithm:
----------
1. Walk the tree bottom-up. For ``+ - * /`` compute both operands first.
2. Equal operands: ``x - x -> 0`` and ``x / x -> 1`` (a literal ``0 / 0``
   raises ``DivisionByZero``).
3. Two numbers: evaluate with NumPy. A zero divisor raises ``DivisionByZero``
   naming the original (unfolded) division node.
4. One number: ``0 + x``, ``x + 0``, ``x - 0``, ``0 - x -> -x``, ``0 * x``,
   ``x * 0``, ``0 / x``, ``1 * x``, ``x * 1``, ``x / 1``; a trailing constant
   is merged into an inner ``X +/- n``.
5. ``-(number)`` is negated, ``-(A - B)`` becomes ``(-A) + B`` and
   ``A - (-B)`` becomes ``A + B``.
6. Repeat the whole walk until the result equals its input.

Complexity:
-----------
- Time: O(N) per walk, at most ``max_iterations`` walks.
- Space: O(H) recursion for tree height H.

Example:
--------
  5040 / 8 / 7 / 6 / 5 / 4 / 3 / 2   ->   0.125
  ((a * 2) - 5) + 5                 ->   (a * 2) + 0   ->   a * 2

Relationships:
--------------
- Runs between every structural pass of the pipeline so that constants
  exposed by ``transform`` and ``balance`` are folded again.
- Logical ``|``/``&`` and ``!`` are never evaluated; only their operands are.
"""

from __future__ import annotations

import numpy as np

from ...core import BasePass, PassRegistry
from ...errors import DivisionByZero
from ...tree import (
    AbstractSyntaxTree,
    BinaryOperation,
    BinaryOperationKind,
    Number,
    UnaryOperation,
    UnaryOperationKind,
    is_binary,
    is_unary_minus,
    negate,
)
from ...utils.logger import logger, log_pass
from ...utils.tree_utils import map_children

PLUS = BinaryOperationKind.PLUS
MINUS = BinaryOperationKind.MINUS
MULTIPLY = BinaryOperationKind.MULTIPLY
DIVIDE = BinaryOperationKind.DIVIDE


_ARITHMETIC = {
    PLUS: np.add,
    MINUS: np.subtract,
    MULTIPLY: np.multiply,
    DIVIDE: np.divide,
}


def evaluate(operation: BinaryOperationKind, left: float, right: float) -> float:
    """Evaluates one arithmetic operation on float64 operands."""
    return float(_ARITHMETIC[operation](np.float64(left), np.float64(right)))


@PassRegistry.register("compute")
class ConstantFoldPass(BasePass):
    """
    Folds constants and trivial identities to a fixed point.
    """

    def __init__(self, max_iterations=100):
        super().__init__(name="compute")
        self.max_iterations = max_iterations

    @log_pass
    def transform(self, tree: AbstractSyntaxTree) -> AbstractSyntaxTree:
        current = tree.root
        iteration = 0
        while True:
            if iteration >= self.max_iterations:
                logger.warning(
                    f"Pass '{self.name}' reached max iterations ({self.max_iterations}). Stopping."
                )
                return AbstractSyntaxTree(current)
            iteration += 1

            next_node = self.rewrite(current)
            if next_node == current:
                return AbstractSyntaxTree(next_node)
            current = next_node

    def rewrite(self, node):
        if isinstance(node, UnaryOperation):
            return self._rewrite_unary(node)
        if isinstance(node, BinaryOperation) and node.operation.is_arithmetic:
            return self._rewrite_arithmetic(node)
        return map_children(node, self.rewrite)

    def _rewrite_unary(self, node):
        operand = self.rewrite(node.operand)
        if node.operation is UnaryOperationKind.NOT:
            return UnaryOperation(node.operation, operand)

        if isinstance(operand, Number):
            return Number(-operand.value)
        if is_binary(operand, MINUS):
            return BinaryOperation(PLUS, negate(operand.left), operand.right)
        return UnaryOperation(node.operation, operand)

    def _rewrite_arithmetic(self, node):
        operation = node.operation
        left = self.rewrite(node.left)
        right = self.rewrite(node.right)

        # (a + b) - (a + b) = 0, (a + b) / (a + b) = 1
        if left == right:
            if operation is MINUS:
                return Number(0.0)
            if operation is DIVIDE:
                if isinstance(left, Number) and left.value == 0.0:
                    raise DivisionByZero(node)
                return Number(1.0)

        if isinstance(left, Number) and isinstance(right, Number):
            if operation is DIVIDE and right.value == 0.0:
                raise DivisionByZero(node)
            return Number(evaluate(operation, left.value, right.value))

        if isinstance(left, Number):
            return self._fold_constant_left(operation, left.value, right)

        if isinstance(right, Number):
            return self._fold_constant_right(node, left, right.value)

        if operation is MINUS and is_unary_minus(right):
            return BinaryOperation(PLUS, left, right.operand)

        return BinaryOperation(operation, left, right)

    @staticmethod
    def _fold_constant_left(operation, number, right):
        if number == 0.0:
            if operation in (MULTIPLY, DIVIDE):
                return Number(0.0)
            if operation is PLUS:
                return right
            if operation is MINUS:
                return negate(right)
        if number == 1.0 and operation is MULTIPLY:
            return right
        return BinaryOperation(operation, Number(number), right)

    @staticmethod
    def _fold_constant_right(node, left, number):
        operation = node.operation
        if number == 0.0:
            if operation is DIVIDE:
                raise DivisionByZero(node)
            if operation is MULTIPLY:
                return Number(0.0)
            return left
        if number == 1.0 and operation in (MULTIPLY, DIVIDE):
            return left

        # ((a * 2) - 5) + 5 -> (a * 2) + 0
        if operation.is_additive and is_binary(left, PLUS, MINUS) and isinstance(left.right, Number):
            inner = left.right.value
            if left.operation is MINUS:
                inner = -inner
            outer = -number if operation is MINUS else number
            return BinaryOperation(PLUS, left.left, Number(evaluate(PLUS, outer, inner)))

        return BinaryOperation(operation, left, Number(number))
