"""Varnish collector: one polling cycle from raw varnishstat output to storage."""

import asyncio
import logging
import time

from varnishstats.core.config import CollectorConfig
from varnishstats.core.encoding.varnishstat import decode
from varnishstats.core.exceptions import StatDecodeError
from varnishstats.core.logs import cycle_summary
from varnishstats.core.models import Cycle
from varnishstats.core.patterns import compile_patterns
from varnishstats.core.ports import LogStoragePort, RecordStoragePort
from varnishstats.core.regroup import regroup

logger = logging.getLogger(__name__)


class VarnishCollector:
    """Turns varnishstat output into records written to a storage port.

    The stat patterns are compiled once, when the collector is created.
    A payload that cannot be decoded raises StatDecodeError and nothing is
    written. Stats with unusable values are skipped with a warning.

    Example:
        ```python
        collector = VarnishCollector(
            CollectorConfig(stats=("MAIN.*", "MGT.uptime")),
            InMemoryRecordStorage(),
        )
        cycle = await collector.collect(varnishstat_json)
        ```
    """

    def __init__(
        self,
        config: CollectorConfig,
        record_storage: RecordStoragePort,
        log_storage: LogStoragePort | None = None,
    ) -> None:
        self._config = config
        self._matcher = compile_patterns(config.stats)
        if self._matcher.is_empty:
            logger.warning("no stats patterns configured, every cycle will be empty")
        self._record_storage = record_storage
        self._log_storage = log_storage

    @property
    def config(self) -> CollectorConfig:
        return self._config

    def _prepare(self, payload: str | bytes) -> Cycle:
        logger.debug("decoding varnishstat output of length %d", len(payload))
        try:
            entries = decode(payload)
        except StatDecodeError as exc:
            logger.error("varnishstat output could not be decoded: %s", exc)
            raise

        cycle = regroup(
            entries,
            self._matcher,
            measurement=self._config.measurement,
            timestamp=time.time(),
        )
        for diagnostic in cycle.diagnostics:
            logger.warning(
                diagnostic.message,
                extra={"stat": diagnostic.attributes["stat"]},
            )
        return cycle

    async def _store(self, cycle: Cycle) -> None:
        for record in cycle.records:
            await self._record_storage.write(record)
        if self._log_storage is not None:
            for diagnostic in cycle.diagnostics:
                await self._log_storage.write(diagnostic)
            await self._log_storage.write(
                cycle_summary(
                    records=len(cycle.records),
                    fields=cycle.field_count,
                    skipped=len(cycle.diagnostics),
                )
            )

    def _report(self, cycle: Cycle) -> None:
        if not cycle.records:
            # Patterns are never rejected, so an empty result is the only
            # sign of a mistyped filter.
            logger.warning(
                "stats patterns %s produced no records",
                list(self._config.stats),
            )
        logger.info(
            "collected %d fields in %d records (%d skipped)",
            cycle.field_count,
            len(cycle.records),
            len(cycle.diagnostics),
        )

    async def collect(self, payload: str | bytes) -> Cycle:
        """Run one collection cycle.

        Args:
            payload: Raw varnishstat output (JSON or ``-1`` text layout).

        Returns:
            The Cycle whose records were written to storage.

        Raises:
            StatDecodeError: If the payload cannot be decoded.
        """
        cycle = self._prepare(payload)
        await self._store(cycle)
        self._report(cycle)
        return cycle

    def collect_sync(self, payload: str | bytes) -> Cycle:
        """Synchronous collect for callers without an event loop."""
        cycle = self._prepare(payload)
        asyncio.run(self._store(cycle))
        self._report(cycle)
        return cycle
