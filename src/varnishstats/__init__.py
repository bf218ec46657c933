"""varnishstats - select and regroup varnishstat counters into records."""

from varnishstats.adapters.collector import VarnishCollector
from varnishstats.adapters.logging import LogStorageHandler
from varnishstats.adapters.storage import (
    InMemoryLogStorage,
    InMemoryRecordStorage,
    RingBufferRecordStorage,
    SQLiteRecordStorage,
)
from varnishstats.core.config import DEFAULT_STATS, CollectorConfig
from varnishstats.core.encoding import decode, encode_records
from varnishstats.core.exceptions import (
    ConfigError,
    StatDecodeError,
    VarnishStatsError,
)
from varnishstats.core.models import (
    Cycle,
    Flag,
    LogEntry,
    Numeric,
    Record,
    StatEntry,
    Unsupported,
)
from varnishstats.core.patterns import Matcher, compile_patterns
from varnishstats.core.regroup import process, regroup

__all__ = [
    "DEFAULT_STATS",
    "CollectorConfig",
    "ConfigError",
    "Cycle",
    "Flag",
    "InMemoryLogStorage",
    "InMemoryRecordStorage",
    "LogEntry",
    "LogStorageHandler",
    "Matcher",
    "Numeric",
    "Record",
    "RingBufferRecordStorage",
    "SQLiteRecordStorage",
    "StatDecodeError",
    "StatEntry",
    "Unsupported",
    "VarnishCollector",
    "VarnishStatsError",
    "compile_patterns",
    "decode",
    "encode_records",
    "process",
    "regroup",
]
