"""Exceptions raised by varnishstats."""


class VarnishStatsError(Exception):
    """Base class for all varnishstats errors."""


class StatDecodeError(VarnishStatsError, ValueError):
    """Raised when a varnishstat payload cannot be decoded.

    A decode failure aborts the whole polling cycle: without a parsed stat
    set there is nothing to filter or regroup.
    """


class ConfigError(VarnishStatsError, ValueError):
    """Raised when collector configuration has the wrong shape."""
