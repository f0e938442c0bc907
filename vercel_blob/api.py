"""HTTP plumbing shared by every blob API call."""

from __future__ import annotations

import logging
from typing import Any, Dict, Optional

import httpx

from . import runtime
from .config import BlobConfig
from .errors import BlobError
from .fetch import BrowserFetchTransport

logger = logging.getLogger(__name__)

ERROR_MESSAGES = {
    "store_suspended": "This store has been suspended",
    "store_not_found": "This store does not exist",
    "not_found": "The requested blob does not exist",
    "forbidden": "Access denied, please provide a valid token for this resource",
}
UNKNOWN_ERROR = "Unknown error, please visit https://vercel.com/help"


async def send_request(method: str, url: str, *, timeout: float = 30.0, **kwargs: Any) -> httpx.Response:
    """Send one HTTP request on a short-lived client, via fetch in a browser."""
    transport = BrowserFetchTransport() if runtime.is_browser() else None
    async with httpx.AsyncClient(timeout=timeout, transport=transport) as client:
        return await client.request(method, url, **kwargs)


async def blob_request(
    method: str,
    path: str = "",
    *,
    token: str,
    config: Optional[BlobConfig] = None,
    headers: Optional[Dict[str, str]] = None,
    **kwargs: Any,
) -> httpx.Response:
    """Call the blob API with authorization and version headers."""
    config = config or BlobConfig.from_env()
    url = f"{config.api_url}/{path}" if path else config.api_url
    request_headers = {
        "authorization": f"Bearer {token}",
        "x-api-version": config.api_version,
        **(headers or {}),
    }
    logger.debug("blob api request method=%s path=/%s", method, path)
    try:
        return await send_request(method, url, headers=request_headers, timeout=config.timeout_seconds, **kwargs)
    except httpx.HTTPError as exc:
        raise BlobError(f"Request to the blob API failed: {exc.__class__.__name__}") from exc


def error_details(response: httpx.Response) -> tuple[Optional[str], Optional[str]]:
    try:
        body = response.json()
    except ValueError:
        return None, None
    error = body.get("error") if isinstance(body, dict) else None
    if not isinstance(error, dict):
        return None, None
    return error.get("code"), error.get("message")


def raise_for_response(response: httpx.Response) -> None:
    """Map a non-2xx API response to a BlobError."""
    if response.is_success:
        return
    if response.status_code == 403:
        raise BlobError(ERROR_MESSAGES["forbidden"])

    code, message = error_details(response)
    logger.debug("blob api error status=%s code=%s", response.status_code, code)
    if code in ERROR_MESSAGES:
        raise BlobError(ERROR_MESSAGES[code])
    if code == "bad_request" and message:
        raise BlobError(message)
    raise BlobError(UNKNOWN_ERROR)


def json_body(response: httpx.Response) -> Any:
    try:
        return response.json()
    except ValueError as exc:
        raise BlobError("Invalid JSON in blob API response") from exc
