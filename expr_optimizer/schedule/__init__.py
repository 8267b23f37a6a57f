from .config import SystemConfiguration, TimeConfiguration, ProcessorConfiguration
from .task_graph import OperationType, Task, build_task_graph
from .scheduler import (
    TICK_LIMIT,
    PipelinedScheduler,
    ScheduledTask,
    SimulationResult,
    TickLog,
    simulate,
)
from .metrics import Metrics, compute_metrics
from .research import Researcher, ResearchResult, ResearchEntry

__all__ = [
    "SystemConfiguration",
    "TimeConfiguration",
    "ProcessorConfiguration",
    "OperationType",
    "Task",
    "build_task_graph",
    "TICK_LIMIT",
    "PipelinedScheduler",
    "ScheduledTask",
    "SimulationResult",
    "TickLog",
    "simulate",
    "Metrics",
    "compute_metrics",
    "Researcher",
    "ResearchResult",
    "ResearchEntry",
]
