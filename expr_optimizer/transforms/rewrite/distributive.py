"""
Distributive Expansion
======================

Purpose:
--------
Generates every tree reachable from the input by opening exactly one pair of
brackets with the distributive law:

  (A +/- B) * C   ->  A * C +/- B * C
  C * (A +/- B)   ->  C * A +/- C * B
  (A +/- B) / C   ->  A / C +/- B / C

Algorithm:
----------
1. Walk the tree pre-order, recording the path (0 = left, 1 = right,
   2 = unary operand) and the side of every matching bracket. A product of
   two sums matches twice, once per side.
2. For each site rebuild the spine from the root to the site with the
   expanded subtree in place; untouched subtrees are shared.

The walk does not descend into function arguments or array indices.

Complexity:
-----------
- Time: O(N) to find sites, O(H) per produced candidate.

Relationships:
--------------
- Driven breadth-first by ``EquivalenceExplorer`` until a form with no
  expansion site is reached.
"""

from collections import namedtuple
from typing import List

from ...tree import AbstractSyntaxTree, BinaryOperation, BinaryOperationKind, UnaryOperation, is_binary
from ...utils.logger import trace_rewrite
from ...utils.tree_utils import LEFT, OPERAND, RIGHT, node_at, replace_at

PLUS = BinaryOperationKind.PLUS
MINUS = BinaryOperationKind.MINUS
MULTIPLY = BinaryOperationKind.MULTIPLY
DIVIDE = BinaryOperationKind.DIVIDE

# side is the operand holding the sum: LEFT for (A + B) * C, RIGHT for C * (A + B)
ExpansionSite = namedtuple("ExpansionSite", ["path", "side"])


def find_expansion_sites(node, path=()) -> List[ExpansionSite]:
    sites = []
    if is_binary(node, MULTIPLY, DIVIDE):
        if node.operation is MULTIPLY and is_binary(node.right, PLUS, MINUS):
            sites.append(ExpansionSite(path, RIGHT))
        if is_binary(node.left, PLUS, MINUS):
            sites.append(ExpansionSite(path, LEFT))

    if isinstance(node, BinaryOperation):
        sites.extend(find_expansion_sites(node.left, path + (LEFT,)))
        sites.extend(find_expansion_sites(node.right, path + (RIGHT,)))
    elif isinstance(node, UnaryOperation):
        sites.extend(find_expansion_sites(node.operand, path + (OPERAND,)))
    return sites


def expand(node: BinaryOperation, side: int) -> BinaryOperation:
    """Distributes ``node`` over the sum held by its ``side`` operand."""
    operation = node.operation
    if side == RIGHT:
        factor, total = node.left, node.right
        return BinaryOperation(
            total.operation,
            BinaryOperation(operation, factor, total.left),
            BinaryOperation(operation, factor, total.right),
        )

    total, factor = node.left, node.right
    return BinaryOperation(
        total.operation,
        BinaryOperation(operation, total.left, factor),
        BinaryOperation(operation, total.right, factor),
    )


@trace_rewrite
def single_step_expansions(tree: AbstractSyntaxTree) -> List[AbstractSyntaxTree]:
    """Returns one tree per expansion site, in pre-order site order."""
    results = []
    for site in find_expansion_sites(tree.root):
        expanded = expand(node_at(tree.root, site.path), site.side)
        results.append(AbstractSyntaxTree(replace_at(tree.root, site.path, expanded)))
    return results
