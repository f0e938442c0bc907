"""Base64, hex and JSON helpers shared by the token codec and the signer."""

from __future__ import annotations

import base64
import binascii
import json
from typing import Any

from ..errors import BlobError


def js_json_dumps(value: Any) -> str:
    """Serialize like ``JSON.stringify``: compact, insertion order, raw unicode."""
    return json.dumps(value, separators=(",", ":"), ensure_ascii=False)


def b64_encode_text(value: str) -> str:
    """Return standard padded base64 of the UTF-8 bytes of ``value``."""
    return base64.b64encode(value.encode("utf-8")).decode("ascii")


def b64_decode_text(value: str) -> str:
    """Strictly decode standard base64 into UTF-8 text."""
    try:
        return base64.b64decode(value.encode("ascii"), validate=True).decode("utf-8")
    except (binascii.Error, UnicodeError, ValueError) as exc:
        raise BlobError("Invalid client token: content is not valid base64") from exc


def hex_to_bytes(value: str) -> bytes:
    """Decode a hex digest, rejecting odd lengths and non-hex characters."""
    if len(value) % 2 != 0:
        raise BlobError("Expected string to be an even number of characters")
    try:
        return binascii.unhexlify(value)
    except (binascii.Error, ValueError) as exc:
        raise BlobError("Expected string to contain only hexadecimal characters") from exc
