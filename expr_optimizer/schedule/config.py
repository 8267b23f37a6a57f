"""Machine configuration for the pipelined scheduler: latencies and unit counts."""

from dataclasses import asdict, dataclass, field, fields

from ..errors import ConfigurationError

OPERATOR_KEYS = ("add", "sub", "mul", "div")


def _key(kind) -> str:
    return kind.value.lower()


@dataclass(frozen=True)
class TimeConfiguration:
    """Ticks one operation of each kind takes to leave its pipeline."""

    add: int = 1
    sub: int = 1
    mul: int = 2
    div: int = 4

    def __post_init__(self):
        for f in fields(self):
            value = getattr(self, f.name)
            if isinstance(value, bool) or not isinstance(value, int) or value < 1:
                raise ConfigurationError(
                    f"Latency for '{f.name}' must be a positive integer, got {value!r}"
                )

    def latency(self, kind) -> int:
        return getattr(self, _key(kind))


@dataclass(frozen=True)
class ProcessorConfiguration:
    """Number of pipelined functional units per operator kind."""

    add: int = 1
    sub: int = 1
    mul: int = 1
    div: int = 1

    def __post_init__(self):
        for f in fields(self):
            value = getattr(self, f.name)
            if isinstance(value, bool) or not isinstance(value, int) or value < 0:
                raise ConfigurationError(
                    f"Processor count for '{f.name}' must be a non-negative integer, got {value!r}"
                )

    def count(self, kind) -> int:
        return getattr(self, _key(kind))

    def total(self) -> int:
        return self.add + self.sub + self.mul + self.div


@dataclass(frozen=True)
class SystemConfiguration:
    time: TimeConfiguration = field(default_factory=TimeConfiguration)
    processors: ProcessorConfiguration = field(default_factory=ProcessorConfiguration)

    @classmethod
    def from_dict(cls, data):
        """
        Builds a configuration from ``{"time": {...}, "processors": {...}}``.

        Missing keys fall back to the defaults; unknown keys are rejected.
        """
        data = data or {}
        unknown = set(data) - {"time", "processors"}
        if unknown:
            raise ConfigurationError(f"Unknown system configuration keys: {sorted(unknown)}")

        sections = {}
        for name in ("time", "processors"):
            section = data.get(name) or {}
            bad = set(section) - set(OPERATOR_KEYS)
            if bad:
                raise ConfigurationError(f"Unknown '{name}' keys: {sorted(bad)}")
            sections[name] = section

        return cls(
            time=TimeConfiguration(**sections["time"]),
            processors=ProcessorConfiguration(**sections["processors"]),
        )

    def to_dict(self):
        return asdict(self)

    def describe(self) -> str:
        t, p = self.time, self.processors
        return (
            f"ADD: {p.add} ({t.add}t), SUB: {p.sub} ({t.sub}t), "
            f"MUL: {p.mul} ({t.mul}t), DIV: {p.div} ({t.div}t)"
        )
