"""
Pipelined List Scheduler
========================

Purpose:
--------
Simulates the execution of a task graph on a machine with a fixed number of
pipelined functional units per operator kind, one tick at a time.

Algorithm:
----------
Each unit is tracked by the next tick it can accept an operation. ``LOAD``
tasks need no unit and are finished at tick 0. On every tick:

1. Drop in-flight operations that have finished; stop once every task is
   placed and nothing is in flight.
2. Ready set: unplaced tasks whose dependencies all finished at or before
   this tick, ordered by rank (ascending), latency (descending), id.
3. Place each ready task on the first unit of its kind that accepts input
   this tick: ``end = tick + latency`` and the unit accepts again at
   ``tick + 1`` (a new operand enters the pipeline every tick).
4. Record the ready queue and the stage occupancy of every unit.

Running past ``tick_limit`` raises ``TickLimitExceeded``; a task kind with
no configured unit raises ``SchedulerDeadlock`` before the loop starts.

Example:
--------
``a + b * c`` with one unit per kind and latencies add=1, mul=2:
MUL runs ticks 0-2, ADD runs ticks 2-3; t1 = 3, tp = 3, speedup 1.0,
efficiency 0.25.
"""

from dataclasses import dataclass
from typing import Dict, List, Optional, Tuple

from ..errors import SchedulerDeadlock, TickLimitExceeded
from ..utils.logger import log_simulation
from .config import SystemConfiguration
from .metrics import compute_metrics
from .task_graph import UNIT_KINDS, OperationType, Task, build_task_graph

TICK_LIMIT = 10_000

IDLE = "Idle"


@dataclass(frozen=True)
class ScheduledTask:
    task_id: int
    label: str
    operation: OperationType
    unit_index: int
    start: int
    end: int

    @property
    def unit_name(self) -> str:
        return unit_name(self.operation, self.unit_index)


@dataclass(frozen=True)
class TickLog:
    tick: int
    ready_queue: Tuple[str, ...]
    # (unit name, occupancy text) for every unit, in configuration order
    pipelines: Tuple[Tuple[str, str], ...]

    @property
    def is_idle(self) -> bool:
        return not self.ready_queue and all(state == IDLE for _, state in self.pipelines)


@dataclass(frozen=True)
class SimulationResult:
    configuration: SystemConfiguration
    schedule: Tuple[ScheduledTask, ...]
    tick_logs: Tuple[TickLog, ...]
    t1: int
    tp: int
    speedup: float
    efficiency: float


def unit_name(operation: OperationType, index: int) -> str:
    return f"{operation} #{index + 1}"


def short_label(label: str) -> str:
    return f"{label[:12]}..." if len(label) > 15 else label


class PipelinedScheduler:
    def __init__(self, configuration: Optional[SystemConfiguration] = None, tick_limit=TICK_LIMIT):
        self.configuration = configuration or SystemConfiguration()
        self.tick_limit = tick_limit

    def _check_units(self, tasks: Dict[int, Task]):
        processors = self.configuration.processors
        for task in tasks.values():
            if not task.is_load and processors.count(task.operation) == 0:
                raise SchedulerDeadlock(task.operation)

    def schedule(self, tasks: Dict[int, Task]) -> Tuple[List[ScheduledTask], List[TickLog]]:
        self._check_units(tasks)
        time = self.configuration.time
        processors = self.configuration.processors

        finish_times = {task.id: 0 for task in tasks.values() if task.is_load}
        next_accept = {kind: [0] * processors.count(kind) for kind in UNIT_KINDS}
        placements: List[ScheduledTask] = []
        in_flight: List[ScheduledTask] = []
        tick_logs: List[TickLog] = []

        tick = 0
        while True:
            in_flight = [entry for entry in in_flight if entry.end > tick]
            if len(finish_times) == len(tasks) and not in_flight:
                break

            ready = [
                task
                for task in tasks.values()
                if task.id not in finish_times
                and all(dep in finish_times and finish_times[dep] <= tick for dep in task.dependencies)
            ]
            ready.sort(key=lambda t: (t.rank, -time.latency(t.operation), t.id))

            for task in ready:
                units = next_accept[task.operation]
                for index, accepts_at in enumerate(units):
                    if accepts_at > tick:
                        continue
                    units[index] = tick + 1
                    entry = ScheduledTask(
                        task_id=task.id,
                        label=task.label,
                        operation=task.operation,
                        unit_index=index,
                        start=tick,
                        end=tick + time.latency(task.operation),
                    )
                    placements.append(entry)
                    in_flight.append(entry)
                    finish_times[task.id] = entry.end
                    break

            tick_logs.append(
                TickLog(
                    tick=tick,
                    ready_queue=tuple(task.label for task in ready),
                    pipelines=self._snapshot(in_flight, tick),
                )
            )

            tick += 1
            if tick > self.tick_limit:
                raise TickLimitExceeded(self.tick_limit)

        return placements, tick_logs

    def _snapshot(self, in_flight: List[ScheduledTask], tick: int) -> Tuple[Tuple[str, str], ...]:
        states = []
        for kind in UNIT_KINDS:
            for index in range(self.configuration.processors.count(kind)):
                occupants = sorted(
                    (e for e in in_flight if e.operation is kind and e.unit_index == index),
                    key=lambda e: e.start,
                )
                if not occupants:
                    states.append((unit_name(kind, index), IDLE))
                    continue
                # Stage number counts from 1 at the start tick
                state = " ".join(
                    f"[Stage {tick - e.start + 1}: {short_label(e.label)}]" for e in occupants
                )
                states.append((unit_name(kind, index), state))
        return tuple(states)

    def simulate(self, tree) -> SimulationResult:
        placements, tick_logs = self.schedule(build_task_graph(tree))
        metrics = compute_metrics(placements, self.configuration.processors.total())
        return SimulationResult(
            configuration=self.configuration,
            schedule=tuple(placements),
            tick_logs=tuple(tick_logs),
            t1=metrics.t1,
            tp=metrics.tp,
            speedup=metrics.speedup,
            efficiency=metrics.efficiency,
        )


@log_simulation
def simulate(tree, configuration: Optional[SystemConfiguration] = None) -> SimulationResult:
    """Builds the task graph of ``tree`` and schedules it under ``configuration``."""
    return PipelinedScheduler(configuration).simulate(tree)
