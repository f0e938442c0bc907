"""Utility helpers for encoding and time operations."""

from .encoding import b64_decode_text, b64_encode_text, hex_to_bytes, js_json_dumps
from .time import epoch_ms, utc_now

__all__ = ["b64_encode_text", "b64_decode_text", "hex_to_bytes", "js_json_dumps", "epoch_ms", "utc_now"]
