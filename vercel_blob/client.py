"""Client-side (browser) uploads.

Everything here runs in a browser-like host and never sees the read-write
token: uploads either carry a client token handed over by the developer, or
fetch one from the developer's ``handle_upload`` route first.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, Optional
from urllib.parse import urljoin, urlparse

import httpx

from . import api, runtime
from .errors import BlobError
from .put import PutCommandOptions, PutMethod
from .token.codec import CLIENT_TOKEN_PREFIX
from .types import EventType, PutBlobResult
from .utils.encoding import js_json_dumps

logger = logging.getLogger(__name__)

SERVER_SIDE_OPTIONS_MESSAGE = (
    "addRandomSuffix and cacheControlMaxAge are not supported in client uploads. "
    "Configure these options at the server side when generating client tokens."
)


def _reject_server_side_options(options: PutCommandOptions) -> None:
    if options.add_random_suffix is not None or options.cache_control_max_age is not None:
        raise BlobError(SERVER_SIDE_OPTIONS_MESSAGE)


def _check_client_put(options: PutCommandOptions) -> None:
    runtime.require_client("put")
    if not (options.token or "").startswith(f"{CLIENT_TOKEN_PREFIX}_"):
        raise BlobError("client/`put` must be called with a client token")
    _reject_server_side_options(options)


def _check_upload(options: PutCommandOptions) -> None:
    runtime.require_client("upload")
    if options.handle_upload_url is None:
        raise BlobError("Missing `handleUploadUrl` parameter")
    _reject_server_side_options(options)


async def _upload_token(pathname: str, options: PutCommandOptions) -> str:
    assert options.handle_upload_url is not None
    return await retrieve_client_token(
        pathname=pathname,
        handle_upload_url=options.handle_upload_url,
        client_payload=options.client_payload,
    )


_client_put = PutMethod(extra_checks=_check_client_put)
_upload = PutMethod(extra_checks=_check_upload, get_token=_upload_token)


async def put(
    pathname: str,
    body: Any,
    *,
    access: str,
    token: str,
    content_type: Optional[str] = None,
    add_random_suffix: Optional[bool] = None,
    cache_control_max_age: Optional[int] = None,
) -> PutBlobResult:
    """Upload from the browser with a client token minted by your server."""
    options = PutCommandOptions(
        access=access,
        token=token,
        content_type=content_type,
        add_random_suffix=add_random_suffix,
        cache_control_max_age=cache_control_max_age,
    )
    return await _client_put(pathname, body, options)


async def upload(
    pathname: str,
    body: Any,
    *,
    access: str,
    handle_upload_url: str,
    content_type: Optional[str] = None,
    client_payload: Optional[str] = None,
    add_random_suffix: Optional[bool] = None,
    cache_control_max_age: Optional[int] = None,
) -> PutBlobResult:
    """Fetch a client token from ``handle_upload_url``, then upload ``body``.

    ``client_payload`` is forwarded to the ``handle_upload`` route and ends up
    in ``on_before_generate_token``.
    """
    options = PutCommandOptions(
        access=access,
        handle_upload_url=handle_upload_url,
        content_type=content_type,
        client_payload=client_payload,
        add_random_suffix=add_random_suffix,
        cache_control_max_age=cache_control_max_age,
    )
    return await _upload(pathname, body, options)


def is_absolute_url(url: str) -> bool:
    parsed = urlparse(url)
    return bool(parsed.scheme and parsed.netloc)


def to_absolute_url(url: str) -> str:
    return urljoin(runtime.page_url(), url)


async def retrieve_client_token(
    *,
    pathname: str,
    handle_upload_url: str,
    client_payload: Optional[str] = None,
) -> str:
    """POST a generate-client-token event to ``handle_upload_url``."""
    runtime.require_client("retrieve_client_token")
    url = handle_upload_url if is_absolute_url(handle_upload_url) else to_absolute_url(handle_upload_url)

    payload: Dict[str, Any] = {"pathname": pathname, "callbackUrl": url}
    if client_payload is not None:
        payload["clientPayload"] = client_payload
    event = {"type": EventType.GENERATE_CLIENT_TOKEN.value, "payload": payload}

    logger.debug("retrieving client token pathname=%s url=%s", pathname, url)
    try:
        response = await api.send_request(
            "POST",
            url,
            content=js_json_dumps(event).encode("utf-8"),
            headers={"content-type": "application/json"},
        )
    except httpx.HTTPError as exc:
        raise BlobError("Failed to retrieve the client token") from exc

    if response.status_code >= 400:
        raise BlobError("Failed to retrieve the client token")

    try:
        body = response.json()
    except ValueError as exc:
        raise BlobError("Failed to retrieve the client token") from exc

    client_token = body.get("clientToken") if isinstance(body, dict) else None
    if not isinstance(client_token, str) or not client_token:
        raise BlobError("Failed to retrieve the client token")
    return client_token
