"""
Task Graph Tests
================

1. Pre-order ids, dependencies and ranks
2. Operation types per node kind
3. Labels
"""

import unittest

from expr_optimizer.schedule.task_graph import OperationType, build_task_graph
from expr_optimizer.utils import build_tree


class TaskGraphTest(unittest.TestCase):
    def test_ids_dependencies_and_ranks(self):
        tasks = build_task_graph(build_tree(["+", "a", ["*", "b", "c"]]))
        self.assertEqual(list(tasks), [0, 1, 2, 3, 4])

        root, mul = tasks[0], tasks[2]
        self.assertEqual(root.operation, OperationType.ADD)
        self.assertEqual(root.dependencies, (1, 2))
        self.assertEqual(root.rank, 2)
        self.assertEqual(root.label, "(a + (b * c))")
        self.assertEqual(mul.operation, OperationType.MUL)
        self.assertEqual(mul.dependencies, (3, 4))
        self.assertEqual(mul.rank, 1)
        for task_id in (1, 3, 4):
            self.assertTrue(tasks[task_id].is_load)
            self.assertEqual(tasks[task_id].rank, 0)
            self.assertEqual(tasks[task_id].dependencies, ())

    def test_operation_types(self):
        tasks = build_task_graph(build_tree(["/", ["-", "a", "b"], ["-", "c"]]))
        self.assertEqual(tasks[0].operation, OperationType.DIV)
        self.assertEqual(tasks[1].operation, OperationType.SUB)
        self.assertEqual(tasks[4].operation, OperationType.SUB)
        self.assertEqual(tasks[4].dependencies, (5,))
        self.assertEqual(tasks[4].label, "-c")

    def test_logical_operations_are_loads(self):
        tasks = build_task_graph(build_tree(["|", ["!", "a"], ["&", "b", "c"]]))
        self.assertTrue(all(task.is_load for task in tasks.values()))
        self.assertEqual(tasks[1].label, "!a")
        self.assertEqual(tasks[0].dependencies, (1, 3))

    def test_leaf_labels(self):
        data = ["+", ["+", 2, {"str": "s"}], ["+", {"call": "f", "args": ["x"]}, {"index": "m", "indices": [1]}]]
        tasks = build_task_graph(build_tree(data))
        self.assertEqual(tasks[0].label, '((2.0 + "s") + (f() + m[..]))')
        # call arguments and indices do not become tasks
        self.assertEqual(len(tasks), 7)

    def test_single_leaf(self):
        tasks = build_task_graph(build_tree("a"))
        self.assertEqual(len(tasks), 1)
        self.assertEqual(tasks[0].operation, OperationType.LOAD)


if __name__ == "__main__":
    unittest.main()
