"""Stat selection patterns.

A pattern is one of:

- ``*`` selects every stat.
- ``SECTION.*`` (any dotted string whose last segment is ``*``) selects every
  stat below that prefix. The prefix is segment-bounded: ``MGT.*`` matches
  ``MGT.uptime`` but neither ``MGTX.uptime`` nor ``MGT``.
- Anything else selects the stat with exactly that name.

Compiling never fails. A mistyped pattern simply selects nothing.
"""

from collections.abc import Iterable
from dataclasses import dataclass

WILDCARD = "*"
SEPARATOR = "."


@dataclass(frozen=True)
class Matcher:
    """Compiled set of stat selection patterns.

    Attributes:
        patterns: The source patterns, in configuration order.
        match_all: True when one of the patterns is the bare wildcard.
        exact: Stat names selected by literal patterns.
        prefixes: Segment-bounded prefixes from trailing-wildcard patterns.
    """

    patterns: tuple[str, ...] = ()
    match_all: bool = False
    exact: frozenset[str] = frozenset()
    prefixes: tuple[str, ...] = ()

    def matches(self, name: str) -> bool:
        """Return True if any compiled pattern selects the stat name."""
        if self.match_all:
            return True
        if name in self.exact:
            return True
        return any(name.startswith(prefix) for prefix in self.prefixes)

    @property
    def is_empty(self) -> bool:
        """True when no pattern was configured at all."""
        return not self.patterns


def _prefix_for(pattern: str) -> str | None:
    """Return the required prefix of a trailing-wildcard pattern, else None."""
    segments = pattern.split(SEPARATOR)
    if len(segments) < 2 or segments[-1] != WILDCARD:
        return None
    return SEPARATOR.join(segments[:-1]) + SEPARATOR


def compile_patterns(patterns: Iterable[str]) -> Matcher:
    """Compile user patterns into a Matcher.

    Args:
        patterns: Ordered pattern strings. May be empty (selects nothing).

    Returns:
        Matcher answering whether a stat name is selected.
    """
    source = tuple(patterns)
    if WILDCARD in source:
        return Matcher(patterns=source, match_all=True)

    exact: set[str] = set()
    prefixes: list[str] = []
    for pattern in source:
        prefix = _prefix_for(pattern)
        if prefix is None:
            exact.add(pattern)
        elif prefix not in prefixes:
            prefixes.append(prefix)

    return Matcher(
        patterns=source,
        exact=frozenset(exact),
        prefixes=tuple(prefixes),
    )
