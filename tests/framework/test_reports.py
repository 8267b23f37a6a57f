"""
Report Tests
============

1. Stage headlines and error lines
2. Equivalent form listing
3. Simulation and research tables
"""

import unittest

from expr_optimizer.errors import DivisionByZero
from expr_optimizer.reports import (
    FINALIZATION_MESSAGE,
    equivalence_report,
    research_report,
    simulation_report,
    stages_report,
)
from expr_optimizer.runner import StageResult
from expr_optimizer.schedule.research import Researcher
from expr_optimizer.schedule.scheduler import simulate
from expr_optimizer.utils import build_tree


class TestReports(unittest.TestCase):
    def test_stage_success(self):
        tree = build_tree(["+", "a", "b"])
        text = stages_report([StageResult("compute", 2, tree=tree)])
        self.assertTrue(
            text.startswith("Computing constants of Abstract-Syntax Tree (Run #2) succeed!\n\n")
        )
        self.assertIn(tree.pretty_print(), text)

    def test_stage_error(self):
        error = DivisionByZero(build_tree(["/", "a", 0]).root)
        text = stages_report([StageResult("balance", 1, error=error)])
        self.assertEqual(text, f"Balancing AST error: {error}\n")

    def test_finalization_message(self):
        stage = StageResult("compute", 1, tree=build_tree(3))
        self.assertTrue(stages_report([stage], finalized=True).endswith(FINALIZATION_MESSAGE + "\n"))

    def test_equivalence_report(self):
        forms = [build_tree(["*", "a", ["+", "b", "c"]]), build_tree(["+", ["*", "a", "b"], ["*", "a", "c"]])]
        self.assertEqual(
            equivalence_report(forms),
            "Found 1 equivalent forms!\n\n0) a * (b + c)\n\n1) a * b + a * c\n",
        )

    def test_simulation_report(self):
        text = simulation_report(simulate(build_tree(["+", "a", ["*", "b", "c"]])))
        self.assertIn("Configuration: ADD: 1 (1t), SUB: 1 (1t), MUL: 1 (2t), DIV: 1 (4t)", text)
        self.assertIn("T1 (Seq): 3     | Tp (Par): 3     | Speedup: 1.0000 | Efficiency: 0.2500", text)
        self.assertIn("MUL #1       | 0        | 2        | (b * c)", text)
        self.assertIn('Tick 01:\n  Ready Queue: ["(b * c)"]', text)
        self.assertIn("  MUL #1    : [Stage 2: (b * c)]", text)
        self.assertIn("  ADD #1    : [Stage 1: (a + (b * c))]", text)
        self.assertNotIn("Tick 04:", text)

    def test_research_report(self):
        forms = [build_tree(["+", ["*", "a", "b"], ["*", "a", "c"]]), build_tree(["*", "a", ["+", "b", "c"]])]
        text = research_report(Researcher().run(forms))
        self.assertIn("System Config: Add(1), Sub(1), Mul(1), Div(1) | Costs: A=1, S=1, M=2, D=4", text)
        self.assertIn("Optimal Form Found: ID #1", text)
        self.assertIn("Expression: a * (b + c)", text)
        self.assertIn("Metrics: T1 = 3, Tp = 3 ticks, Speedup = 1.0000, Efficiency = 0.2500", text)

    def test_research_report_without_forms(self):
        self.assertIn("No optimization results available.", research_report(Researcher().run([])))

    def test_long_forms_are_shortened(self):
        terms = ["+", ["*", "alpha", "beta"], ["*", "gamma", ["+", "delta", "epsilon"]]]
        text = research_report(Researcher().run([build_tree(terms), build_tree(1)]))
        self.assertIn("alpha * beta + gamma * (delta + epsil...", text)


if __name__ == "__main__":
    unittest.main()
