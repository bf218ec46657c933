"""Bounded record storage for long-running collectors.

Keeps only the most recent records so a collector that nobody drains does
not grow without limit.
"""

from collections import deque
from collections.abc import AsyncIterable

from varnishstats.core.models import Record


class RingBufferRecordStorage:
    """Ring buffer implementation of RecordStoragePort.

    When the buffer is full, the oldest record is evicted to make room.

    Args:
        max_size: Maximum number of records to keep.
    """

    def __init__(self, max_size: int) -> None:
        if max_size < 1:
            raise ValueError("max_size must be at least 1")
        self._buffer: deque[Record] = deque(maxlen=max_size)

    async def write(self, record: Record) -> None:
        """Write a record to storage."""
        self._buffer.append(record)

    async def scrape(self) -> AsyncIterable[Record]:
        """Return the retained records, oldest first."""
        for record in self._buffer:
            yield record
