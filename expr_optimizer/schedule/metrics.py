"""Execution metrics of one schedule."""

from dataclasses import dataclass
from typing import Iterable

from .task_graph import OperationType


@dataclass(frozen=True)
class Metrics:
    t1: int
    tp: int
    speedup: float
    efficiency: float


def compute_metrics(schedule: Iterable, total_units: int) -> Metrics:
    """
    Args:
        schedule: ``ScheduledTask`` placements; ``LOAD`` entries are ignored.
        total_units: configured functional units across all kinds.

    ``t1`` is the sequential work (sum of latencies), ``tp`` the makespan.
    """
    placed = [entry for entry in schedule if entry.operation is not OperationType.LOAD]
    t1 = sum(entry.end - entry.start for entry in placed)
    tp = max((entry.end for entry in placed), default=0)
    speedup = t1 / tp if tp > 0 else 0.0
    efficiency = speedup / total_units if total_units > 0 else 0.0
    return Metrics(t1=t1, tp=tp, speedup=speedup, efficiency=efficiency)
