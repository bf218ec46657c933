"""Port interfaces for storage adapters.

These protocols define the contracts that record and log sinks must
implement. The collector depends only on these interfaces.
"""

from collections.abc import AsyncIterable
from typing import Protocol, runtime_checkable

from varnishstats.core.models import LogEntry, Record


@runtime_checkable
class RecordStoragePort(Protocol):
    """Port for record storage operations.

    Examples: InMemoryRecordStorage, RingBufferRecordStorage,
    SQLiteRecordStorage.
    """

    async def write(self, record: Record) -> None:
        """Write a record to storage."""
        ...

    def scrape(self) -> AsyncIterable[Record]:
        """Return every stored record, oldest first."""
        ...


@runtime_checkable
class LogStoragePort(Protocol):
    """Port for log storage operations."""

    async def write(self, entry: LogEntry) -> None:
        """Write a log entry to storage."""
        ...

    def read(self, since: float = 0) -> AsyncIterable[LogEntry]:
        """Read log entries since the given timestamp.

        Args:
            since: Unix timestamp. Returns entries with timestamp > since.
                   Default 0 returns all entries.

        Returns:
            Async iterable of LogEntry objects, ordered by timestamp ascending.
        """
        ...
