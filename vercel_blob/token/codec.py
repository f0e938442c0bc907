"""Client token wire format.

A client token reads ``vercel_blob_client_<storeId>_<blob>`` where ``blob`` is
``base64("<hex signature>.<base64 JSON payload>")`` and the signature covers
the base64 payload string exactly as embedded.
"""

from __future__ import annotations

import json
from typing import Any, Dict, Optional

from ..errors import BlobError
from ..utils.encoding import b64_decode_text, b64_encode_text, js_json_dumps
from .signer import Signer, get_signer
from .types import ClientTokenOptions, DecodedClientToken

CLIENT_TOKEN_PREFIX = "vercel_blob_client"
READ_WRITE_TOKEN_PREFIX = "vercel_blob_rw"


def store_id_from_token(token: str) -> Optional[str]:
    """Return the fourth ``_`` segment of a credential, if present."""
    parts = token.split("_")
    if len(parts) < 4 or not parts[3]:
        return None
    return parts[3]


async def encode_client_token(
    options: ClientTokenOptions,
    secret: str,
    store_id: str,
    *,
    signer: Optional[Signer] = None,
) -> str:
    payload = b64_encode_text(js_json_dumps(options.to_payload()))
    signature = await (signer or get_signer()).sign(payload, secret)
    if not signature:
        raise BlobError("Unable to sign client token")
    return f"{CLIENT_TOKEN_PREFIX}_{store_id}_{b64_encode_text(f'{signature}.{payload}')}"


def decode_client_token(client_token: str) -> DecodedClientToken:
    """Split a client token into its parts. Does not check the signature."""
    parts = str(client_token).split("_")
    if len(parts) != 5 or "_".join(parts[:3]) != CLIENT_TOKEN_PREFIX:
        raise BlobError("Invalid client token: expected `vercel_blob_client_<storeId>_<payload>`")

    store_id, encoded = parts[3], parts[4]
    if not store_id or not encoded:
        raise BlobError("Invalid client token: empty store id or payload")

    signature, separator, encoded_payload = b64_decode_text(encoded).partition(".")
    if not separator or not signature or not encoded_payload:
        raise BlobError("Invalid client token: missing signature separator")

    try:
        payload = json.loads(b64_decode_text(encoded_payload))
    except json.JSONDecodeError as exc:
        raise BlobError("Invalid client token: payload is not valid JSON") from exc
    if not isinstance(payload, dict):
        raise BlobError("Invalid client token: payload is not a JSON object")

    return DecodedClientToken(
        store_id=store_id,
        signature=signature,
        encoded_payload=encoded_payload,
        payload=payload,
    )


def get_payload_from_client_token(client_token: str) -> Dict[str, Any]:
    """Return the decoded policy payload of a client token."""
    return decode_client_token(client_token).payload


async def verify_client_token(
    client_token: str,
    secret: str,
    *,
    signer: Optional[Signer] = None,
) -> DecodedClientToken:
    """Decode a client token and check its signature against ``secret``."""
    decoded = decode_client_token(client_token)
    if not await (signer or get_signer()).verify(decoded.encoded_payload, secret, decoded.signature):
        raise BlobError("Invalid client token signature")
    return decoded
