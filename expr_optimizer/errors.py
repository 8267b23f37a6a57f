"""Exceptions raised by the normalization passes and the scheduler."""

from .tree import AbstractSyntaxTree


class AstError(Exception):
    """Base class for failures while rewriting an expression tree."""


class DivisionByZero(AstError):
    def __init__(self, node):
        self.node = node
        super().__init__(
            f"Division by zero. Node: {AbstractSyntaxTree(node).to_pretty_string()}"
        )

    def __reduce__(self):
        return (self.__class__, (self.node,))


class CannotBuildEmptyTree(AstError):
    def __init__(self):
        super().__init__("Cannot build a balanced tree from zero operands")

    def __reduce__(self):
        return (self.__class__, ())


class FailedPopFromQueue(AstError):
    def __init__(self):
        super().__init__("Failed to pop node from the queue during tree construction")

    def __reduce__(self):
        return (self.__class__, ())


class ExpressionTooDeep(AstError):
    def __init__(self, node_count: int):
        self.node_count = node_count
        super().__init__(
            f"Expression is nested too deeply to rewrite ({node_count} nodes); "
            "regroup it into a shallower form"
        )

    def __reduce__(self):
        return (self.__class__, (self.node_count,))


class SchedulingError(Exception):
    """Base class for scheduling failures."""


class TickLimitExceeded(SchedulingError):
    def __init__(self, limit: int):
        self.limit = limit
        super().__init__(
            f"Schedule did not complete within {limit} ticks; simulation aborted"
        )

    def __reduce__(self):
        return (self.__class__, (self.limit,))


class SchedulerDeadlock(SchedulingError):
    def __init__(self, kind):
        self.kind = kind
        super().__init__(
            f"No {kind.value} processors configured but the expression needs them"
        )

    def __reduce__(self):
        return (self.__class__, (self.kind,))


class ConfigurationError(ValueError):
    """Raised for invalid system configuration values."""
