"""Server-side router for client-upload events.

A ``handle_upload`` route receives two kinds of JSON events:

* ``blob.generate-client-token`` from the browser, answered with a client
  token scoped by ``on_before_generate_token``;
* ``blob.upload-completed`` from the blob service once the upload landed,
  authenticated by an HMAC-SHA256 of the raw body in ``x-vercel-signature``.
"""

from __future__ import annotations

import json
import logging
from typing import Any, Awaitable, Callable, Dict, Mapping, Optional, Tuple, Union

from . import runtime
from .config import get_token_from_options_or_env
from .errors import BlobError
from .token.issuer import ClientTokenIssuer
from .token.signer import get_signer
from .token.types import ClientTokenOptions, ClientTokenPolicy, OnUploadCompleted
from .types import EventType, UploadCompletedPayload
from .utils.encoding import js_json_dumps

logger = logging.getLogger(__name__)

SIGNATURE_HEADER = "x-vercel-signature"

BeforeGenerateToken = Callable[[str, Optional[str]], Awaitable[Union[ClientTokenPolicy, Mapping[str, Any], None]]]
UploadCompleted = Callable[[UploadCompletedPayload], Awaitable[None]]
HandleUploadBody = Union[Mapping[str, Any], str, bytes]


def _load_body(body: HandleUploadBody) -> Tuple[str, Dict[str, Any]]:
    """Return the exact JSON text that was signed and the parsed event."""
    if isinstance(body, (bytes, bytearray)):
        try:
            body = bytes(body).decode("utf-8")
        except UnicodeDecodeError as exc:
            raise BlobError("Invalid event body: not UTF-8") from exc
    if isinstance(body, str):
        try:
            event = json.loads(body)
        except json.JSONDecodeError as exc:
            raise BlobError("Invalid event body: not valid JSON") from exc
        raw = body
    elif isinstance(body, Mapping):
        event = dict(body)
        raw = js_json_dumps(event)
    else:
        raise BlobError("Invalid event body")

    if not isinstance(event, dict):
        raise BlobError("Invalid event body: expected a JSON object")
    return raw, event


def get_header(request: Any, name: str) -> str:
    """Case-insensitive header lookup on a request object or a header mapping."""
    headers = getattr(request, "headers", request)
    if headers is None:
        return ""

    value = headers.get(name) if hasattr(headers, "get") else None
    if value is None and hasattr(headers, "items"):
        for key, candidate in headers.items():
            if str(key).lower() == name:
                value = candidate
                break

    if isinstance(value, (list, tuple)):
        value = value[0] if value else None
    if isinstance(value, bytes):
        value = value.decode("latin-1")
    return value or ""


def _event_payload(event: Mapping[str, Any]) -> Dict[str, Any]:
    payload = event.get("payload")
    if not isinstance(payload, dict):
        raise BlobError("Invalid event payload")
    return payload


async def handle_upload(
    *,
    request: Any,
    body: HandleUploadBody,
    on_before_generate_token: BeforeGenerateToken,
    on_upload_completed: UploadCompleted,
    token: Optional[str] = None,
) -> Dict[str, str]:
    """Answer one client-upload event.

    ``body`` is the event as received: the raw request text/bytes, or the
    already-parsed JSON object. Returns the JSON response for the route.
    """
    runtime.require_server("handle_upload")
    resolved_token = get_token_from_options_or_env(token)
    raw, event = _load_body(body)
    event_type = event.get("type")

    if event_type == EventType.GENERATE_CLIENT_TOKEN.value:
        payload = _event_payload(event)
        pathname = payload.get("pathname")
        callback_url = payload.get("callbackUrl")
        if not pathname or not callback_url:
            raise BlobError("Invalid event payload: `pathname` and `callbackUrl` are required")
        client_payload = payload.get("clientPayload")

        policy = ClientTokenPolicy.from_value(await on_before_generate_token(pathname, client_payload))
        token_payload = policy.token_payload if policy.token_payload is not None else client_payload

        options = ClientTokenOptions(
            pathname=pathname,
            on_upload_completed=OnUploadCompleted(callback_url=callback_url, token_payload=token_payload),
            maximum_size_in_bytes=policy.maximum_size_in_bytes,
            allowed_content_types=policy.allowed_content_types,
            valid_until=policy.valid_until,
            add_random_suffix=policy.add_random_suffix,
            cache_control_max_age=policy.cache_control_max_age,
        )
        client_token = await ClientTokenIssuer(token=resolved_token).issue(options)
        return {"type": event_type, "clientToken": client_token}

    if event_type == EventType.UPLOAD_COMPLETED.value:
        signature = get_header(request, SIGNATURE_HEADER)
        if not signature:
            logger.warning("upload-completed callback rejected: missing signature")
            raise BlobError("Missing callback signature")

        if not await get_signer().verify(raw, resolved_token, signature):
            logger.warning("upload-completed callback rejected: signature mismatch")
            raise BlobError("Invalid callback signature")

        await on_upload_completed(UploadCompletedPayload.from_event(_event_payload(event)))
        return {"type": event_type, "response": "ok"}

    raise BlobError("Invalid event type")
