"""SQLite storage adapter for records."""

import asyncio
import json
from collections.abc import AsyncIterable, AsyncIterator, Sequence
from contextlib import asynccontextmanager
from typing import Any

import aiosqlite

from varnishstats.core.models import Record

_RECORDS_SCHEMA = """
CREATE TABLE IF NOT EXISTS records (
    id INTEGER PRIMARY KEY AUTOINCREMENT,
    measurement TEXT NOT NULL,
    timestamp REAL NOT NULL,
    tags TEXT NOT NULL DEFAULT '{}',
    fields TEXT NOT NULL DEFAULT '{}'
);
CREATE INDEX IF NOT EXISTS idx_records_timestamp ON records(timestamp);
"""

_INSERT_RECORD = """
INSERT INTO records (measurement, timestamp, tags, fields) VALUES (?, ?, ?, ?)
"""

_SELECT_RECORDS_SINCE = """
SELECT measurement, timestamp, tags, fields FROM records
WHERE timestamp > ?
ORDER BY timestamp ASC, id ASC
"""

_SELECT_ALL_RECORDS = """
SELECT measurement, timestamp, tags, fields FROM records
ORDER BY id ASC
"""

_COUNT_RECORDS = """
SELECT COUNT(*) FROM records
"""


def _row_to_record(row: Sequence[Any]) -> Record:
    return Record(
        measurement=row[0],
        timestamp=row[1],
        tags=json.loads(row[2]),
        fields=json.loads(row[3]),
    )


class _Database:
    """Opens aiosqlite connections to one database, creating its schema first.

    An in-memory database only lives as long as its connection, so for
    :memory: one shared connection is handed out until close().
    """

    def __init__(self, db_path: str, schema: str) -> None:
        self._db_path = db_path
        self._schema = schema
        self._ready = False
        # asyncio.Lock binds to the running loop, so it is created on first use
        self._setup_lock: asyncio.Lock | None = None
        self._shared: aiosqlite.Connection | None = None

    async def _setup(self) -> None:
        if self._setup_lock is None:
            self._setup_lock = asyncio.Lock()
        async with self._setup_lock:
            if self._ready:
                return
            if self._db_path == ":memory:":
                self._shared = await aiosqlite.connect(self._db_path)
                await self._shared.executescript(self._schema)
            else:
                async with aiosqlite.connect(self._db_path) as db:
                    await db.execute("PRAGMA journal_mode=WAL")
                    await db.executescript(self._schema)
            self._ready = True

    @asynccontextmanager
    async def open(self) -> AsyncIterator[aiosqlite.Connection]:
        """Yield a connection; file connections are closed on exit."""
        if not self._ready:
            await self._setup()
        if self._shared is not None:
            yield self._shared
            return
        async with aiosqlite.connect(self._db_path) as db:
            yield db

    async def close(self) -> None:
        shared, self._shared = self._shared, None
        self._ready = False
        if shared is not None:
            await shared.close()


class SQLiteRecordStorage:
    """SQLite implementation of RecordStoragePort.

    Stores records using aiosqlite with tags and fields as JSON columns.
    File databases use WAL mode and a connection per operation; :memory:
    databases keep their data until close().
    """

    def __init__(self, db_path: str) -> None:
        self._db = _Database(db_path, _RECORDS_SCHEMA)

    async def write(self, record: Record) -> None:
        """Write a record to storage."""
        async with self._db.open() as db:
            await db.execute(
                _INSERT_RECORD,
                (
                    record.measurement,
                    record.timestamp,
                    json.dumps(record.tags),
                    json.dumps(record.fields),
                ),
            )
            await db.commit()

    async def scrape(self) -> AsyncIterable[Record]:
        """Return every stored record in write order."""
        async with self._db.open() as db:
            async with db.execute(_SELECT_ALL_RECORDS) as cursor:
                async for row in cursor:
                    yield _row_to_record(row)

    async def read(self, since: float = 0) -> AsyncIterable[Record]:
        """Read records since the given timestamp.

        Returns records with timestamp > since, ordered by timestamp ascending.
        """
        async with self._db.open() as db:
            async with db.execute(_SELECT_RECORDS_SINCE, (since,)) as cursor:
                async for row in cursor:
                    yield _row_to_record(row)

    async def count(self) -> int:
        """Return total number of records in storage."""
        async with self._db.open() as db:
            async with db.execute(_COUNT_RECORDS) as cursor:
                row = await cursor.fetchone()
                return row[0] if row else 0

    async def clear(self) -> None:
        """Clear all records from storage."""
        async with self._db.open() as db:
            await db.execute("DELETE FROM records")
            await db.commit()

    async def close(self) -> None:
        """Close the shared connection of a :memory: database."""
        await self._db.close()
