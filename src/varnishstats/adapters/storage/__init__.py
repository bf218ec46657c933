"""Storage adapters implementing core ports."""

from varnishstats.adapters.storage.in_memory import (
    InMemoryLogStorage,
    InMemoryRecordStorage,
)
from varnishstats.adapters.storage.ring_buffer import RingBufferRecordStorage
from varnishstats.adapters.storage.sqlite import SQLiteRecordStorage

__all__ = [
    "InMemoryLogStorage",
    "InMemoryRecordStorage",
    "RingBufferRecordStorage",
    "SQLiteRecordStorage",
]
