from typing import Dict, Optional, Set

from ..schedule.task_graph import Task


def _escape(text: str) -> str:
    return text.replace("\\", "\\\\").replace('"', '\\"')


def export_to_dot(tasks: Dict[int, Task], highlight_tasks: Optional[Set[int]] = None) -> str:
    """
    Exports a task graph to GraphViz DOT format.

    Args:
        tasks: Tasks keyed by id, as returned by ``build_task_graph``.
        highlight_tasks: Optional set of task ids to highlight in the diagram.

    Returns:
        A string containing the DOT representation of the graph.
    """
    highlight_tasks = highlight_tasks or set()
    dot = ["digraph G {"]
    dot.append('  node [shape=box, style=filled, fillcolor=white, fontname="Courier"];')
    dot.append('  edge [fontname="Courier"];')

    for task in tasks.values():
        color = "lightblue" if task.id in highlight_tasks else "white"
        label = f"{_escape(task.label)}\\n({task.operation})"
        dot.append(f'  "t{task.id}" [label="{label}", fillcolor="{color}"];')

        for dependency in task.dependencies:
            dot.append(f'  "t{dependency}" -> "t{task.id}";')

    dot.append("}")
    return "\n".join(dot)


def save_dot(tasks: Dict[int, Task], path: str, highlight_tasks: Optional[Set[int]] = None):
    """Saves the DOT representation of a task graph to a file."""
    dot_content = export_to_dot(tasks, highlight_tasks)
    with open(path, "w") as f:
        f.write(dot_content)
