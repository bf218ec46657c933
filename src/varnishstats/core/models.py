"""Core domain models for varnishstat data."""

from dataclasses import dataclass, field


@dataclass(frozen=True)
class Numeric:
    """A counter or gauge payload."""

    value: int | float


@dataclass(frozen=True)
class Flag:
    """A boolean or health-probe bitmap payload."""

    value: bool


@dataclass(frozen=True)
class Unsupported:
    """A payload that is neither numeric nor a flag."""

    raw: object = None


StatValue = Numeric | Flag | Unsupported


@dataclass(frozen=True)
class StatEntry:
    """One raw observation reported by varnishstat.

    Attributes:
        name: Dotted stat name (e.g., MAIN.uptime, MEMPOOL.req0.live).
        value: Classified stat payload.
        description: Human readable description from varnishstat.
        flag: Varnishstat type flag ("c" counter, "g" gauge, "b" bitmap).
        format: Varnishstat display format ("i", "B", "d", "b").
    """

    name: str
    value: StatValue
    description: str = ""
    flag: str = ""
    format: str = ""


@dataclass(frozen=True)
class Record:
    """A tagged, multi-field measurement for one section.

    Attributes:
        measurement: Measurement name (e.g., varnish).
        tags: Tag set, always holding the "section" key.
        fields: Residual stat path mapped to its numeric value.
        timestamp: Unix timestamp in seconds of the collection cycle.
    """

    measurement: str
    tags: dict[str, str]
    fields: dict[str, int | float] = field(default_factory=dict)
    timestamp: float = 0.0

    @property
    def section(self) -> str:
        return self.tags["section"]


@dataclass(frozen=True)
class LogEntry:
    """A structured log entry.

    Attributes:
        timestamp: Unix timestamp in seconds.
        level: Log level (e.g., INFO, WARN, DEBUG).
        message: The log message.
        attributes: Additional structured fields.
    """

    timestamp: float
    level: str
    message: str
    attributes: dict[str, str | int | float | bool] = field(default_factory=dict)


@dataclass(frozen=True)
class Cycle:
    """Outcome of regrouping one stat snapshot.

    Attributes:
        records: Records in the order their section was first seen.
        diagnostics: One WARN entry per stat that could not be used.
    """

    records: list[Record] = field(default_factory=list)
    diagnostics: list[LogEntry] = field(default_factory=list)

    @property
    def field_count(self) -> int:
        return sum(len(record.fields) for record in self.records)
