"""Collector configuration."""

from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any

from varnishstats.core.exceptions import ConfigError
from varnishstats.core.regroup import DEFAULT_MEASUREMENT

DEFAULT_STATS = ("MAIN.cache_hit", "MAIN.cache_miss", "MAIN.uptime")


def parse_stats_option(value: str) -> tuple[str, ...]:
    """Split a comma-separated stats option into patterns.

    An empty option yields a single empty pattern, which selects nothing.
    """
    return tuple(part.strip() for part in value.split(","))


@dataclass(frozen=True)
class CollectorConfig:
    """Configuration for one varnish collector.

    Attributes:
        stats: Stat selection patterns (see varnishstats.core.patterns).
        measurement: Measurement name stamped on every record.
    """

    stats: tuple[str, ...] = DEFAULT_STATS
    measurement: str = DEFAULT_MEASUREMENT

    @classmethod
    def from_mapping(cls, mapping: Mapping[str, Any]) -> "CollectorConfig":
        """Build a config from a plain mapping (e.g. a loaded TOML table).

        Args:
            mapping: May hold "stats" (list of strings or comma-separated
                string) and "measurement" (non-empty string). Other keys are
                ignored.

        Raises:
            ConfigError: If a known key has the wrong type or is empty.
        """
        stats = mapping.get("stats", DEFAULT_STATS)
        if isinstance(stats, str):
            stats = parse_stats_option(stats)
        elif isinstance(stats, (list, tuple)):
            if not all(isinstance(pattern, str) for pattern in stats):
                raise ConfigError("stats must contain only strings")
            stats = tuple(stats)
        else:
            raise ConfigError(
                f"stats must be a list of strings, got {type(stats).__name__}"
            )

        measurement = mapping.get("measurement", DEFAULT_MEASUREMENT)
        if not isinstance(measurement, str) or not measurement:
            raise ConfigError("measurement must be a non-empty string")

        return cls(stats=stats, measurement=measurement)
