from .tree import (
    AbstractSyntaxTree,
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
from .errors import (
    AstError,
    DivisionByZero,
    CannotBuildEmptyTree,
    FailedPopFromQueue,
    ExpressionTooDeep,
    SchedulingError,
    TickLimitExceeded,
    SchedulerDeadlock,
    ConfigurationError,
)
from .core import BasePass, PassRegistry
from .utils import (
    build_tree,
    load_tree,
    save_tree,
    export_to_dot,
    save_dot,
)
from .equivalence import EquivalenceExplorer, find_equivalent_forms
from .schedule import (
    SystemConfiguration,
    TimeConfiguration,
    ProcessorConfiguration,
    build_task_graph,
    PipelinedScheduler,
    simulate,
    Researcher,
)
from .runner import OptimizationPipeline
from .utils.logger import set_log_level, DEBUG, INFO, WARNING, ERROR

# Import transforms to register all passes
from . import transforms

__all__ = [
    "AbstractSyntaxTree",
    "ArrayAccess",
    "BinaryOperation",
    "BinaryOperationKind",
    "FunctionCall",
    "Identifier",
    "Number",
    "StringLiteral",
    "UnaryOperation",
    "UnaryOperationKind",
    "AstError",
    "DivisionByZero",
    "CannotBuildEmptyTree",
    "FailedPopFromQueue",
    "SchedulingError",
    "TickLimitExceeded",
    "SchedulerDeadlock",
    "ConfigurationError",
    "BasePass",
    "PassRegistry",
    "build_tree",
    "load_tree",
    "save_tree",
    "export_to_dot",
    "save_dot",
    "EquivalenceExplorer",
    "find_equivalent_forms",
    "SystemConfiguration",
    "TimeConfiguration",
    "ProcessorConfiguration",
    "build_task_graph",
    "PipelinedScheduler",
    "simulate",
    "Researcher",
    "OptimizationPipeline",
    "set_log_level",
    "DEBUG",
    "INFO",
    "WARNING",
    "ERROR",
]
