"""Python logging handler adapter for varnishstats.

Bridges the standard library logging module to a LogStoragePort, so the
collector's own log output (skipped stats, empty filters, decode failures)
can be kept next to its records.
"""

import asyncio
import logging
from collections.abc import Coroutine
from typing import Any

from varnishstats.core.models import LogEntry
from varnishstats.core.ports import LogStoragePort

# Standard LogRecord attributes that should not be treated as extra fields
_STANDARD_LOGRECORD_ATTRS = frozenset(
    {
        "args",
        "asctime",
        "created",
        "exc_info",
        "exc_text",
        "filename",
        "funcName",
        "levelname",
        "levelno",
        "lineno",
        "message",
        "module",
        "msecs",
        "msg",
        "name",
        "pathname",
        "process",
        "processName",
        "relativeCreated",
        "stack_info",
        "taskName",
        "thread",
        "threadName",
    }
)

# Python level names mapped to the levels used by LogEntry
_LEVEL_NAMES = {"WARNING": "WARN"}


class LogStorageHandler(logging.Handler):
    """Logging handler that writes log records to a LogStoragePort.

    Example:
        ```python
        from varnishstats import InMemoryLogStorage, LogStorageHandler

        storage = InMemoryLogStorage()
        logging.getLogger("varnishstats").addHandler(LogStorageHandler(storage))
        ```

    Inside a running event loop the write is scheduled as a task; call
    ``drain()`` to wait for those writes.
    """

    def __init__(self, storage: LogStoragePort, level: int = logging.NOTSET) -> None:
        super().__init__(level)
        self._storage = storage
        self._pending: set[asyncio.Task[None]] = set()

    def emit(self, record: logging.LogRecord) -> None:
        """Emit a log record to the storage backend."""
        attributes: dict[str, str | int | float | bool] = {"logger": record.name}

        # Extra attributes passed via logging call, e.g. extra={"stat": ...}
        for key, value in record.__dict__.items():
            if key not in _STANDARD_LOGRECORD_ATTRS and isinstance(
                value, (str, int, float, bool)
            ):
                attributes[key] = value

        if record.exc_info and record.exc_info[1] is not None:
            exc_type, exc_value, _ = record.exc_info
            attributes["exc_type"] = exc_type.__name__ if exc_type else ""
            attributes["exc_message"] = str(exc_value)

        entry = LogEntry(
            timestamp=record.created,
            level=_LEVEL_NAMES.get(record.levelname, record.levelname),
            message=record.getMessage(),
            attributes=attributes,
        )
        self._submit(self._storage.write(entry))

    def _submit(self, coro: Coroutine[Any, Any, None]) -> None:
        try:
            loop = asyncio.get_running_loop()
        except RuntimeError:
            asyncio.run(coro)
            return
        task = loop.create_task(coro)
        self._pending.add(task)
        task.add_done_callback(self._pending.discard)

    async def drain(self) -> None:
        """Wait for writes scheduled from inside a running event loop."""
        if self._pending:
            await asyncio.gather(*self._pending)
