"""
Presentation Fold Pass (``fold``)
=================================

Undoes the parts of ``transform`` that make output hard to read:

- ``A + (-B)``       ->  ``A - B``
- ``A + n`` (n < 0)  ->  ``A - |n|``
- ``A * (1 / B)``    ->  ``A / B``

Only used when producing human-readable output and to flatten the fully
expanded form during the equivalence search; the search itself keys on the
unfolded shape.
"""

import numpy as np

from ...core import BasePass, PassRegistry
from ...tree import BinaryOperation, BinaryOperationKind, Number, is_binary, is_unary_minus
from ...utils.tree_utils import map_children

PLUS = BinaryOperationKind.PLUS
MINUS = BinaryOperationKind.MINUS
MULTIPLY = BinaryOperationKind.MULTIPLY
DIVIDE = BinaryOperationKind.DIVIDE


@PassRegistry.register("fold")
class FoldPass(BasePass):
    def __init__(self):
        super().__init__(name="fold")

    def rewrite(self, node):
        node = map_children(node, self.rewrite)
        if not isinstance(node, BinaryOperation):
            return node

        left, right = node.left, node.right
        if node.operation is PLUS:
            if is_unary_minus(right):
                return BinaryOperation(MINUS, left, right.operand)
            if isinstance(right, Number) and np.signbit(right.value):
                return BinaryOperation(MINUS, left, Number(-right.value))

        if node.operation is MULTIPLY and is_binary(right, DIVIDE):
            if isinstance(right.left, Number) and right.left.value == 1.0:
                return BinaryOperation(DIVIDE, left, right.right)

        return node
