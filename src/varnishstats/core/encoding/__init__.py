"""Encoders and decoders for varnishstat payloads and records."""

from varnishstats.core.encoding.ndjson import encode_records
from varnishstats.core.encoding.varnishstat import decode, decode_json, decode_text

__all__ = [
    "decode",
    "decode_json",
    "decode_text",
    "encode_records",
]
