"""Shared test fixtures for all test modules."""

from pathlib import Path

import pytest

from varnishstats.core.encoding.varnishstat import decode_json
from varnishstats.core.models import Flag, Numeric, StatEntry, Unsupported

FIXTURES = Path(__file__).parent / "fixtures"


@pytest.fixture
def small_output() -> str:
    """varnishstat -j output with MAIN, MGT and MEMPOOL stats (8 stats)."""
    return (FIXTURES / "varnishstat_small.json").read_text()


@pytest.fixture
def full_output() -> str:
    """Complete varnishstat -j output of a running varnishd (334 stats)."""
    return (FIXTURES / "varnishstat_full.json").read_text()


@pytest.fixture
def small_snapshot(small_output: str) -> dict[str, StatEntry]:
    """Decoded small fixture."""
    return decode_json(small_output)


@pytest.fixture
def full_snapshot(full_output: str) -> dict[str, StatEntry]:
    """Decoded full fixture."""
    return decode_json(full_output)


@pytest.fixture
def record_db_path(tmp_path: Path) -> str:
    """Provide a temporary database path for record storage tests."""
    return str(tmp_path / "records.db")


@pytest.fixture
def make_snapshot():
    """Factory fixture building a stat snapshot from name -> raw value pairs.

    Integers and floats become Numeric, booleans become Flag, anything else
    becomes Unsupported.
    """

    def _snapshot(values: dict[str, object]) -> dict[str, StatEntry]:
        snapshot: dict[str, StatEntry] = {}
        for name, raw in values.items():
            if isinstance(raw, bool):
                value = Flag(raw)
            elif isinstance(raw, (int, float)):
                value = Numeric(raw)
            else:
                value = Unsupported(raw)
            snapshot[name] = StatEntry(name=name, value=value)
        return snapshot

    return _snapshot
