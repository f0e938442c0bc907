"""httpx transport that sends requests through the browser's ``fetch``.

Inside Pyodide/PyScript there are no sockets; requests go out through
``pyodide.http.pyfetch`` and come back as ordinary ``httpx.Response`` objects.
"""

from __future__ import annotations

import importlib
from typing import Any, Awaitable, Callable, Optional

import httpx

from .errors import BlobError

PyFetch = Callable[..., Awaitable[Any]]

# Managed by the browser; fetch() refuses or rewrites them.
FORBIDDEN_REQUEST_HEADERS = {"host", "content-length", "connection", "accept-encoding"}
# fetch() has already decoded the body.
STRIPPED_RESPONSE_HEADERS = {"content-encoding", "content-length", "transfer-encoding"}


def load_pyfetch() -> PyFetch:
    try:
        return importlib.import_module("pyodide.http").pyfetch
    except ImportError as exc:
        raise BlobError("Browser fetch is only available inside Pyodide") from exc


class BrowserFetchTransport(httpx.AsyncBaseTransport):
    """Send httpx requests with ``pyfetch``."""

    def __init__(self, fetch: Optional[PyFetch] = None) -> None:
        self._fetch = fetch

    async def handle_async_request(self, request: httpx.Request) -> httpx.Response:
        fetch = self._fetch or load_pyfetch()
        body = await request.aread()
        headers = {
            key: value for key, value in request.headers.items() if key.lower() not in FORBIDDEN_REQUEST_HEADERS
        }
        options: dict[str, Any] = {"method": request.method, "headers": headers}
        if body:
            options["body"] = body

        try:
            response = await fetch(str(request.url), **options)
            content = await response.bytes()
        except Exception as exc:
            raise httpx.TransportError(f"fetch failed: {exc}", request=request) from exc

        response_headers = [
            (key, value) for key, value in response.headers.items() if key.lower() not in STRIPPED_RESPONSE_HEADERS
        ]
        return httpx.Response(response.status, headers=response_headers, content=content, request=request)
