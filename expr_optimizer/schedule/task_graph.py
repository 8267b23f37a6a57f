"""
Task Graph Builder
==================

Flattens an expression tree into computational tasks:

- ``Number``, ``Identifier``, ``StringLiteral``, ``FunctionCall`` and
  ``ArrayAccess`` become zero-latency ``LOAD`` tasks of rank 0, available at
  tick 0.
- Binary ``+ - * /`` become ``ADD``/``SUB``/``MUL``/``DIV`` tasks depending on
  their operand tasks; logical ``|``/``&`` become ``LOAD`` (treated as free).
- Unary ``-`` becomes ``SUB``; ``!`` becomes ``LOAD``.

Ids are assigned in pre-order starting at 0. ``rank`` is one more than the
highest rank among the dependencies.
"""

import enum
from dataclasses import dataclass
from typing import Dict, Tuple

from ..tree import (
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


class OperationType(enum.Enum):
    ADD = "ADD"
    SUB = "SUB"
    MUL = "MUL"
    DIV = "DIV"
    LOAD = "LOAD"

    def __str__(self):
        return self.value


# Kinds that occupy a functional unit, in report order
UNIT_KINDS = (OperationType.ADD, OperationType.SUB, OperationType.MUL, OperationType.DIV)

_BINARY_TYPES = {
    BinaryOperationKind.PLUS: OperationType.ADD,
    BinaryOperationKind.MINUS: OperationType.SUB,
    BinaryOperationKind.MULTIPLY: OperationType.MUL,
    BinaryOperationKind.DIVIDE: OperationType.DIV,
    BinaryOperationKind.OR: OperationType.LOAD,
    BinaryOperationKind.AND: OperationType.LOAD,
}


@dataclass(frozen=True)
class Task:
    id: int
    operation: OperationType
    dependencies: Tuple[int, ...]
    rank: int
    label: str

    @property
    def is_load(self) -> bool:
        return self.operation is OperationType.LOAD


class TaskGraphBuilder:
    def __init__(self):
        self.tasks: Dict[int, Task] = {}
        self._next_id = 0

    def build(self, node) -> Dict[int, Task]:
        """Returns the tasks of ``node`` keyed and ordered by id."""
        self.tasks = {}
        self._next_id = 0
        self._visit(node)
        return {task_id: self.tasks[task_id] for task_id in sorted(self.tasks)}

    def _add(self, task_id, operation, dependencies, rank, label) -> Task:
        task = Task(task_id, operation, tuple(dependencies), rank, label)
        self.tasks[task_id] = task
        return task

    def _visit(self, node) -> Task:
        task_id = self._next_id
        self._next_id += 1

        if isinstance(node, BinaryOperation):
            left = self._visit(node.left)
            right = self._visit(node.right)
            return self._add(
                task_id,
                _BINARY_TYPES[node.operation],
                (left.id, right.id),
                max(left.rank, right.rank) + 1,
                f"({left.label} {node.operation} {right.label})",
            )

        if isinstance(node, UnaryOperation):
            operand = self._visit(node.operand)
            operation = (
                OperationType.SUB if node.operation is UnaryOperationKind.MINUS else OperationType.LOAD
            )
            return self._add(
                task_id, operation, (operand.id,), operand.rank + 1, f"{node.operation}{operand.label}"
            )

        return self._add(task_id, OperationType.LOAD, (), 0, _leaf_label(node))


def _leaf_label(node) -> str:
    if isinstance(node, Number):
        return f"{node.value:.1f}"
    if isinstance(node, Identifier):
        return node.name
    if isinstance(node, StringLiteral):
        return f'"{node.text}"'
    if isinstance(node, FunctionCall):
        return f"{node.name}()"
    if isinstance(node, ArrayAccess):
        return f"{node.identifier}[..]"
    raise TypeError(f"Unsupported node type: {type(node).__name__}")


def build_task_graph(tree) -> Dict[int, Task]:
    return TaskGraphBuilder().build(tree.root)
