"""Helpers for building diagnostic LogEntry objects."""

import time

from varnishstats.core.models import LogEntry


def log(
    level: str,
    message: str,
    **attributes: str | int | float | bool,
) -> LogEntry:
    """Create a log entry with automatic timestamp.

    Args:
        level: Log level (e.g., "INFO", "WARN", "DEBUG")
        message: The log message
        **attributes: Additional structured fields

    Returns:
        LogEntry with current timestamp
    """
    return LogEntry(
        timestamp=time.time(),
        level=level,
        message=message,
        attributes=dict(attributes),
    )


def skipped_stat(name: str, reason: str) -> LogEntry:
    """Create the WARN diagnostic recorded for a stat that was not emitted.

    Args:
        name: Dotted stat name
        reason: Why the stat could not be used

    Returns:
        LogEntry with WARN level and "stat"/"reason" attributes
    """
    return log("WARN", f"skipped stat {name}: {reason}", stat=name, reason=reason)


def cycle_summary(records: int, fields: int, skipped: int) -> LogEntry:
    """Create the INFO entry summarizing one collection cycle."""
    return log(
        "INFO",
        f"collected {fields} fields in {records} records",
        records=records,
        fields=fields,
        skipped=skipped,
    )
