"""
Plain-text reports built from structured pipeline results.

Report text is meant for people; nothing here logs or parses it back.
"""

from typing import Sequence

from .tree import AbstractSyntaxTree

RULE = "-" * 100

FINALIZATION_MESSAGE = "Tree is fully solved by computation. Further optimization is not needed"

# pass name -> (success headline, error prefix)
_STAGE_MESSAGES = {
    "compute": (
        "Computing constants of Abstract-Syntax Tree (Run #{run}) succeed!",
        "Computing constants of Abstract-Syntax Tree error",
    ),
    "transform": (
        "Transformed Abstract-Syntax Tree generation success!",
        "Transformed Abstract-Syntax Tree generation error",
    ),
    "balance": (
        "Balanced Abstract-Syntax Tree generation succeed!",
        "Balancing AST error",
    ),
    "fold": (
        "Folding Abstract-Syntax Tree success!",
        "Folding AST error",
    ),
}


def stage_report(stage) -> str:
    """Success headline plus outline of the tree, or the error message."""
    success, failure = _STAGE_MESSAGES.get(
        stage.name, (f"Pass '{stage.name}' (Run #{{run}}) succeed!", f"Pass '{stage.name}' error")
    )
    if stage.error is not None:
        return f"{failure}: {stage.error}\n"
    return f"{success.format(run=stage.run)}\n\n{stage.tree.pretty_print()}"


def stages_report(stages: Sequence, finalized: bool = False) -> str:
    parts = [stage_report(stage) for stage in stages]
    if finalized:
        parts.append(FINALIZATION_MESSAGE + "\n")
    return "\n".join(parts)


def equivalence_report(forms: Sequence[AbstractSyntaxTree]) -> str:
    lines = [f"Found {max(len(forms) - 1, 0)} equivalent forms!", ""]
    for index, form in enumerate(forms):
        lines.append(f"{index}) {form.to_pretty_string()}")
        if index == 0:
            lines.append("")
    return "\n".join(lines) + "\n"


def simulation_report(result) -> str:
    lines = ["Parallel Pipelined System Simulation", RULE]
    lines.append(f"Configuration: {result.configuration.describe()}")
    lines.append(RULE)
    lines.append(
        f"T1 (Seq): {result.t1:<5} | Tp (Par): {result.tp:<5} | "
        f"Speedup: {result.speedup:.4f} | Efficiency: {result.efficiency:.4f}"
    )
    lines.append(RULE)
    lines.append(f"{'Processor':<12} | {'Start':<8} | {'End':<8} | {'Operation':<40}")
    lines.append(RULE)

    for entry in sorted(result.schedule, key=lambda e: e.start):
        lines.append(f"{entry.unit_name:<12} | {entry.start:<8} | {entry.end:<8} | {entry.label:<40}")

    lines.append("")
    lines.append("Detailed Pipeline Log (Tick-by-Tick):")
    lines.append(RULE)
    for log in result.tick_logs:
        if log.is_idle:
            continue
        lines.append(f"Tick {log.tick + 1:02}:")
        if log.ready_queue:
            queue = ", ".join(f'"{label}"' for label in log.ready_queue)
            lines.append(f"  Ready Queue: [{queue}]")
        for unit, state in log.pipelines:
            lines.append(f"  {unit:<10}: {state}")
        lines.append("")
    return "\n".join(lines) + "\n"


def _snippet(text: str, width: int = 37) -> str:
    return f"{text[:width]}..." if len(text) > width else text


def research_report(research) -> str:
    lines = [
        "Optimization Research",
        "Goal: Find the optimal parallel form for the given architecture.",
        RULE,
    ]
    if not research.entries:
        lines.append("No optimization results available.")
        return "\n".join(lines) + "\n"

    p, t = research.configuration.processors, research.configuration.time
    lines.append(
        f"System Config: Add({p.add}), Sub({p.sub}), Mul({p.mul}), Div({p.div}) | "
        f"Costs: A={t.add}, S={t.sub}, M={t.mul}, D={t.div}"
    )
    lines.append(RULE)
    lines.append(
        f"{'ID':<4} | {'Form (Snippet)':<40} | {'T1':<5} | {'Tp':<5} | {'Kp (Spd)':<8} | {'Ep (Eff)':<8}"
    )
    lines.append(RULE)
    for entry in research.entries:
        r = entry.result
        lines.append(
            f"{entry.index:<4} | {_snippet(entry.tree.to_pretty_string()):<40} | {r.t1:<5} | "
            f"{r.tp:<5} | {r.speedup:<8.4f} | {r.efficiency:<8.4f}"
        )
    lines.append(RULE)

    best = research.best
    lines.append("")
    lines.append(f"Optimal Form Found: ID #{best.index}")
    lines.append(f"Expression: {best.tree.to_pretty_string()}")
    lines.append(
        f"Metrics: T1 = {best.result.t1}, Tp = {best.result.tp} ticks, "
        f"Speedup = {best.result.speedup:.4f}, Efficiency = {best.result.efficiency:.4f}"
    )
    return "\n".join(lines) + "\n"
