"""
Associative Factoring
=====================

Purpose:
--------
Generates every tree reachable by pulling exactly one shared factor out of
the top-level sum:

  a*k - c*k - a*x   ->   a * (k + (-x)) + (-(c*k))

Algorithm:
----------
1. Only a root ``+``/``-`` chain is factored. Flatten it into signed terms:
   ``A - B`` contributes ``A`` and ``-B``, with ``-(-A) -> A``,
   ``-(A + B) -> -A, -B`` and ``-(A - B) -> -A, B``.
2. For each term i and each factor of it (``A * B`` and ``-(A * B)`` both
   have factors ``[A, B]``), skipping factors already tried (by canonical
   string), collect every term j >= i that contains the factor.
3. When at least two terms share it, emit
   ``factor * (sum of remainders)`` followed by the untouched terms, summed
   into a balanced ``+`` tree.

Factors are matched by structural equality; two numbers only match when
their floats are exactly equal.

Complexity:
-----------
- Time: O(T^2) for T terms per call.

Relationships:
--------------
- Driven breadth-first by ``EquivalenceExplorer`` from the flattened, fully
  expanded form.
"""

from typing import List, Optional

from ...tree import (
    AbstractSyntaxTree,
    BinaryOperation,
    BinaryOperationKind,
    canonical_string,
    is_binary,
    is_unary_minus,
    negate,
)
from ...utils.logger import trace_rewrite
from ...utils.tree_utils import build_balanced_tree

PLUS = BinaryOperationKind.PLUS
MINUS = BinaryOperationKind.MINUS
MULTIPLY = BinaryOperationKind.MULTIPLY


def collect_terms(node, negative=False) -> List:
    """Flattens a ``+``/``-`` chain into its signed additive terms."""
    if is_binary(node, PLUS):
        return collect_terms(node.left, negative) + collect_terms(node.right, negative)
    if is_binary(node, MINUS):
        return collect_terms(node.left, negative) + collect_terms(node.right, not negative)
    if negative:
        if is_unary_minus(node):
            return collect_terms(node.operand)
        return [negate(node)]
    return [node]


def factors_of(term) -> List:
    if is_unary_minus(term):
        term = term.operand
    if is_binary(term, MULTIPLY):
        return [term.left, term.right]
    return []


def remainder_of(term, factor) -> Optional[object]:
    """What is left of ``term`` once ``factor`` is divided out, or None."""
    negative = is_unary_minus(term)
    product = term.operand if negative else term
    if not is_binary(product, MULTIPLY):
        return None

    if product.left == factor:
        rest = product.right
    elif product.right == factor:
        rest = product.left
    else:
        return None
    return negate(rest) if negative else rest


@trace_rewrite
def single_step_factorings(tree: AbstractSyntaxTree) -> List[AbstractSyntaxTree]:
    root = tree.root
    if not is_binary(root, PLUS, MINUS):
        return []

    terms = collect_terms(root)
    if len(terms) < 2:
        return []

    results = []
    tried = set()
    for i, term in enumerate(terms):
        for factor in factors_of(term):
            key = canonical_string(factor)
            if key in tried:
                continue
            tried.add(key)

            grouped = [i]
            remainders = [remainder_of(term, factor)]
            for j in range(i + 1, len(terms)):
                remainder = remainder_of(terms[j], factor)
                if remainder is not None:
                    grouped.append(j)
                    remainders.append(remainder)

            if len(grouped) < 2:
                continue

            factored = BinaryOperation(MULTIPLY, factor, build_balanced_tree(remainders, PLUS))
            rest = [t for idx, t in enumerate(terms) if idx not in grouped]
            results.append(AbstractSyntaxTree(build_balanced_tree([factored] + rest, PLUS)))
    return results
