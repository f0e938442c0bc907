"""Runtime context probing.

Server-only operations (token issuance, callback handling) and client-only
operations (client uploads) live in separate modules; these probes are the
last-line assertion that each is running where it belongs. A browser-like host
is a Pyodide/PyScript interpreter exposing the page's ``window`` object.
"""

from __future__ import annotations

import importlib
import importlib.util
import sys

from .errors import BlobError


def is_browser() -> bool:
    """Return True when running inside a browser-like host."""
    if sys.platform != "emscripten" or importlib.util.find_spec("js") is None:
        return False
    js = importlib.import_module("js")
    return getattr(js, "window", None) is not None


def page_url() -> str:
    """Return the URL of the page hosting the interpreter."""
    if not is_browser():
        raise BlobError("A page URL is only available in a client environment")
    js = importlib.import_module("js")
    return str(js.window.location.href)


def require_server(operation: str) -> None:
    if is_browser():
        raise BlobError(f'"{operation}" must be called from a server environment')


def require_client(operation: str) -> None:
    if not is_browser():
        raise BlobError(f"client/`{operation}` must be called from a client environment")
