"""In-memory storage adapters for records and logs."""

from collections.abc import AsyncIterable

from varnishstats.core.models import LogEntry, Record


class InMemoryRecordStorage:
    """In-memory implementation of RecordStoragePort.

    Keeps every record in a list. Suitable for testing and for hosts that
    drain records themselves after each cycle.
    """

    def __init__(self) -> None:
        self._records: list[Record] = []

    async def write(self, record: Record) -> None:
        """Write a record to storage."""
        self._records.append(record)

    async def scrape(self) -> AsyncIterable[Record]:
        """Return every stored record in write order."""
        for record in self._records:
            yield record

    async def clear(self) -> None:
        """Drop every stored record."""
        self._records.clear()


class InMemoryLogStorage:
    """In-memory implementation of LogStoragePort."""

    def __init__(self) -> None:
        self._entries: list[LogEntry] = []

    async def write(self, entry: LogEntry) -> None:
        """Write a log entry to storage."""
        self._entries.append(entry)

    async def read(self, since: float = 0) -> AsyncIterable[LogEntry]:
        """Read log entries since the given timestamp.

        Returns entries with timestamp > since, ordered by timestamp ascending.
        """
        filtered = [e for e in self._entries if e.timestamp > since]
        for entry in sorted(filtered, key=lambda e: e.timestamp):
            yield entry
