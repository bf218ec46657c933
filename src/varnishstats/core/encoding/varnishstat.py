"""Decoders for raw varnishstat output.

Three layouts are understood:

- ``varnishstat -j`` before Varnish 6.5: a flat object whose members are the
  stats, next to scalar members such as ``timestamp``.
- ``varnishstat -j`` from Varnish 6.5: ``{"version": 1, "counters": {...}}``.
- ``varnishstat -1``: one ``NAME VALUE RATE DESCRIPTION`` line per stat.

Values are classified into Numeric, Flag or Unsupported here so consumers never
inspect raw payload types.
"""

import json
from collections.abc import Mapping
from typing import Any

from varnishstats.core.exceptions import StatDecodeError
from varnishstats.core.models import Flag, Numeric, StatEntry, StatValue, Unsupported

# varnishstat marks bitmaps (e.g. VBE.*.happy) with flag or format "b"
BITMAP = "b"
# -1 output drops the flag column; the health-probe bitmap is known by name
BITMAP_SUFFIX = ".happy"


def _to_text(payload: str | bytes) -> str:
    if isinstance(payload, bytes):
        try:
            return payload.decode("utf-8")
        except UnicodeDecodeError as exc:
            raise StatDecodeError(f"varnishstat output is not UTF-8: {exc}") from exc
    return payload


def classify(data: Mapping[str, Any]) -> StatValue:
    """Classify the ``value`` of one varnishstat JSON stat object."""
    if "value" not in data:
        return Unsupported()
    value = data["value"]

    if isinstance(value, bool):
        return Flag(value)
    if BITMAP in (data.get("flag"), data.get("format")):
        if isinstance(value, int):
            return Flag(bool(value))
        return Unsupported(value)
    if isinstance(value, (int, float)):
        return Numeric(value)
    if isinstance(value, str):
        try:
            return Numeric(int(value))
        except ValueError:
            return Unsupported(value)
    return Unsupported(value)


def decode_json(payload: str | bytes) -> dict[str, StatEntry]:
    """Decode ``varnishstat -j`` output.

    Args:
        payload: Raw JSON output, either layout.

    Returns:
        Stat entries keyed by dotted name, in document order.

    Raises:
        StatDecodeError: If the payload is not a JSON object of stats.
    """
    try:
        document = json.loads(_to_text(payload))
    except json.JSONDecodeError as exc:
        raise StatDecodeError(f"invalid varnishstat JSON: {exc}") from exc

    if not isinstance(document, dict):
        raise StatDecodeError(
            f"varnishstat JSON must be an object, got {type(document).__name__}"
        )

    stats = document.get("counters", document)
    if not isinstance(stats, dict):
        raise StatDecodeError("varnishstat JSON 'counters' must be an object")

    entries: dict[str, StatEntry] = {}
    for name, data in stats.items():
        # Scalar members such as "timestamp" and "version" are not stats
        if not isinstance(data, dict):
            continue
        entries[name] = StatEntry(
            name=name,
            value=classify(data),
            description=str(data.get("description", "")),
            flag=str(data.get("flag", "")),
            format=str(data.get("format", "")),
        )
    return entries


def _classify_text(name: str, raw: str) -> StatValue:
    try:
        number = int(raw)
    except ValueError:
        return Unsupported(raw)
    if name.endswith(BITMAP_SUFFIX):
        return Flag(bool(number))
    return Numeric(number)


def decode_text(payload: str | bytes) -> dict[str, StatEntry]:
    """Decode ``varnishstat -1`` output.

    Lines with fewer than two columns, or whose first column has no dot,
    are ignored. The text layout has no flag column, so health-probe bitmaps
    (names ending in ``.happy``) are recognised by name and become Flag.
    """
    entries: dict[str, StatEntry] = {}
    for line in _to_text(payload).splitlines():
        columns = line.split()
        if len(columns) < 2 or "." not in columns[0]:
            continue
        name, raw = columns[0], columns[1]
        entries[name] = StatEntry(
            name=name,
            value=_classify_text(name, raw),
            description=" ".join(columns[3:]),
        )
    return entries


def decode(payload: str | bytes) -> dict[str, StatEntry]:
    """Decode varnishstat output, picking JSON or text layout by content.

    Raises:
        StatDecodeError: If the payload is empty or malformed.
    """
    text = _to_text(payload).strip()
    if not text:
        raise StatDecodeError("empty varnishstat output")
    if text.startswith("{"):
        return decode_json(text)
    return decode_text(text)
