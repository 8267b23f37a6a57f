"""Structural helpers shared by the passes, the rewrite laws and the scheduler."""

import collections
from typing import Callable, List, Sequence, Tuple

from ..errors import CannotBuildEmptyTree, FailedPopFromQueue
from ..tree import (
    ArrayAccess,
    BinaryOperation,
    BinaryOperationKind,
    FunctionCall,
    UnaryOperation,
    children,
)

# Path steps into a node
LEFT = 0
RIGHT = 1
OPERAND = 2

Path = Tuple[int, ...]


def count_nodes(node) -> int:
    # Explicit stack: also used to report trees too deep for the recursive passes
    count = 0
    stack = [node]
    while stack:
        count += 1
        stack.extend(children(stack.pop()))
    return count


def tree_height(node) -> int:
    """Number of nodes on the longest root-to-leaf path."""
    height = 0
    stack = [(node, 1)]
    while stack:
        current, depth = stack.pop()
        height = max(height, depth)
        stack.extend((child, depth + 1) for child in children(current))
    return height


def map_children(node, func: Callable):
    """Rebuilds ``node`` with ``func`` applied to each direct child."""
    if isinstance(node, UnaryOperation):
        return UnaryOperation(node.operation, func(node.operand))
    if isinstance(node, BinaryOperation):
        return BinaryOperation(node.operation, func(node.left), func(node.right))
    if isinstance(node, FunctionCall):
        return FunctionCall(node.name, [func(arg) for arg in node.arguments])
    if isinstance(node, ArrayAccess):
        return ArrayAccess(node.identifier, [func(idx) for idx in node.indices])
    return node


def node_at(node, path: Sequence[int]):
    for step in path:
        if step == LEFT:
            node = node.left
        elif step == RIGHT:
            node = node.right
        elif step == OPERAND:
            node = node.operand
        else:
            raise ValueError(f"Invalid path step: {step}")
    return node


def replace_at(node, path: Sequence[int], replacement):
    """
    Returns a copy of ``node`` with the subtree at ``path`` replaced.

    Only the ancestors along the path are rebuilt; every other subtree is
    shared with the input, which is safe because nodes are immutable.
    """
    if not path:
        return replacement
    step, rest = path[0], path[1:]
    if step == LEFT:
        return BinaryOperation(node.operation, replace_at(node.left, rest, replacement), node.right)
    if step == RIGHT:
        return BinaryOperation(node.operation, node.left, replace_at(node.right, rest, replacement))
    if step == OPERAND:
        return UnaryOperation(node.operation, replace_at(node.operand, rest, replacement))
    raise ValueError(f"Invalid path step: {step}")


def collect_chain(node, kind: BinaryOperationKind) -> List:
    """Flattens a maximal chain of ``kind`` into its operands, left to right."""
    if isinstance(node, BinaryOperation) and node.operation is kind:
        return collect_chain(node.left, kind) + collect_chain(node.right, kind)
    return [node]


def collect_left_chain(node, kind: BinaryOperationKind):
    """Splits ``((head op t1) op t2) ...`` into ``head`` and ``[t1, t2, ...]``."""
    terms = []
    while isinstance(node, BinaryOperation) and node.operation is kind:
        terms.append(node.right)
        node = node.left
    terms.reverse()
    return node, terms


def build_left_associative(operands: Sequence, kind: BinaryOperationKind):
    if not operands:
        raise CannotBuildEmptyTree()
    result = operands[0]
    for operand in operands[1:]:
        result = BinaryOperation(kind, result, operand)
    return result


def _pop(queue):
    if not queue:
        raise FailedPopFromQueue()
    return queue.popleft()


def build_balanced_tree(operands: Sequence, kind: BinaryOperationKind):
    """
    Builds a minimal-height tree of ``kind`` over ``operands``.

    Works level by level: adjacent pairs are combined and queued for the next
    level, and an odd leftover operand is carried over unchanged.
    """
    if not operands:
        raise CannotBuildEmptyTree()

    queue = collections.deque(operands)
    while len(queue) > 1:
        level_size = len(queue)
        for _ in range(level_size // 2):
            left = _pop(queue)
            right = _pop(queue)
            queue.append(BinaryOperation(kind, left, right))
        if level_size % 2 == 1:
            queue.append(_pop(queue))
    return _pop(queue)
