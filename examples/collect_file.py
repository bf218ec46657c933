"""Example: collect a saved varnishstat snapshot and print NDJSON records.

Run with:
    varnishstat -j > snapshot.json
    python examples/collect_file.py snapshot.json --stats "MAIN.*,MGT.uptime"

Output:
    One JSON object per record on stdout, e.g.
    {"measurement": "varnish", "tags": {"section": "MAIN"}, "fields": {...}, ...}
    Skipped stats and the cycle summary are logged to stderr.
"""

import argparse
import logging
import sys
from pathlib import Path

from varnishstats import (
    CollectorConfig,
    InMemoryRecordStorage,
    StatDecodeError,
    VarnishCollector,
    encode_records,
)


def main() -> int:
    parser = argparse.ArgumentParser(
        description="Print varnishstat records as NDJSON"
    )
    parser.add_argument("snapshot", type=Path, help="varnishstat -j or -1 output")
    parser.add_argument(
        "--stats",
        default="*",
        help='comma-separated stat patterns (default: "*")',
    )
    args = parser.parse_args()

    logging.basicConfig(level=logging.INFO, stream=sys.stderr)

    config = CollectorConfig.from_mapping({"stats": args.stats})
    collector = VarnishCollector(config, InMemoryRecordStorage())
    try:
        cycle = collector.collect_sync(args.snapshot.read_bytes())
    except StatDecodeError as e:
        print(f"error: {e}", file=sys.stderr)
        return 1

    sys.stdout.write(encode_records(cycle.records))
    return 0


if __name__ == "__main__":
    sys.exit(main())
