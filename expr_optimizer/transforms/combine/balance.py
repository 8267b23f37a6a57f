"""
Chain Balancing Pass (``balance``)
==================================

Purpose:
--------
Rebuilds every maximal ``+`` or ``*`` chain as a tree of minimal height so
that independent operands can be evaluated in parallel. Other operators keep
their shape; only their children are balanced.

Algorithm:
----------
1. Flatten the chain rooted at the node into its operands, left to right
   (``(a + (b + c)) + d`` -> ``[a, b, c, d]``).
2. Balance each operand recursively.
3. Combine the operands level by level through a queue: pair adjacent
   operands, and carry an odd leftover to the end of the next level.

Complexity:
-----------
- Time: O(N)
- Result height: ceil(log2(n)) operator levels for n operands.

Example:
--------
  a + b + c + d + e + f + g + h  ->  ((a + b) + (c + d)) + ((e + f) + (g + h))
  a + b + ... + i (9 operands)   ->  (the 8-operand tree above) + i

Relationships:
--------------
- Runs after ``transform`` so that subtraction no longer breaks ``+`` chains.
"""

from ...core import BasePass, PassRegistry
from ...tree import BinaryOperation, BinaryOperationKind
from ...utils.tree_utils import build_balanced_tree, collect_chain, map_children

ASSOCIATIVE = (BinaryOperationKind.PLUS, BinaryOperationKind.MULTIPLY)


@PassRegistry.register("balance")
class BalancePass(BasePass):
    """Balances associative operator chains to minimal height."""

    def __init__(self):
        super().__init__(name="balance")

    def rewrite(self, node):
        if isinstance(node, BinaryOperation) and node.operation in ASSOCIATIVE:
            operands = [self.rewrite(operand) for operand in collect_chain(node, node.operation)]
            return build_balanced_tree(operands, node.operation)
        return map_children(node, self.rewrite)
