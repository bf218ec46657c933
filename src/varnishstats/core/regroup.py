"""Regroup selected stats into one tagged record per section.

A stat named ``MEMPOOL.req0.live`` lands in the record tagged
``section=MEMPOOL`` as the field ``req0.live``. Records come back in the
order their section was first encountered.
"""

from collections.abc import Mapping

from varnishstats.core.logs import skipped_stat
from varnishstats.core.models import (
    Cycle,
    Flag,
    LogEntry,
    Numeric,
    Record,
    StatEntry,
    Unsupported,
)
from varnishstats.core.patterns import SEPARATOR, Matcher

DEFAULT_MEASUREMENT = "varnish"


def split_name(name: str) -> tuple[str, str]:
    """Split a dotted stat name into (section, field key).

    Names without a dot use the whole name as both section and field key.
    """
    segments = name.split(SEPARATOR, 1)
    if len(segments) == 1:
        return name, name
    return segments[0], segments[1]


def regroup(
    entries: Mapping[str, StatEntry],
    matcher: Matcher,
    measurement: str = DEFAULT_MEASUREMENT,
    timestamp: float = 0.0,
) -> Cycle:
    """Select stats with the matcher and regroup them by section.

    Args:
        entries: Decoded stat snapshot keyed by dotted name.
        matcher: Compiled selection patterns.
        measurement: Measurement name for every emitted record.
        timestamp: Collection time stamped on every record.

    Returns:
        Cycle holding the records and one diagnostic per unusable stat.
    """
    sections: dict[str, dict[str, int | float]] = {}
    diagnostics: list[LogEntry] = []

    for name, entry in entries.items():
        if not matcher.matches(name):
            continue

        match entry.value:
            case Numeric(value=value):
                section, key = split_name(name)
                sections.setdefault(section, {})[key] = value
            case Flag():
                # Bitmaps carry no numeric field.
                continue
            case Unsupported(raw=raw):
                diagnostics.append(
                    skipped_stat(name, f"unsupported value {raw!r}")
                )

    records = [
        Record(
            measurement=measurement,
            tags={"section": section},
            fields=fields,
            timestamp=timestamp,
        )
        for section, fields in sections.items()
    ]
    return Cycle(records=records, diagnostics=diagnostics)


def process(
    entries: Mapping[str, StatEntry],
    matcher: Matcher,
    measurement: str = DEFAULT_MEASUREMENT,
) -> list[Record]:
    """Return only the records of regrouping a stat snapshot."""
    return regroup(entries, matcher, measurement=measurement).records
