"""Object upload shared by server-side ``put`` and the client-side commands."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Awaitable, Callable, Dict, Optional

from . import api
from .config import get_token_from_options_or_env
from .errors import BlobError
from .types import PutBlobResult


@dataclass(frozen=True)
class PutCommandOptions:
    """Options accepted by the put-style commands."""

    access: str
    content_type: Optional[str] = None
    add_random_suffix: Optional[bool] = None
    cache_control_max_age: Optional[int] = None
    token: Optional[str] = None
    handle_upload_url: Optional[str] = None
    client_payload: Optional[str] = None


ExtraChecks = Callable[[PutCommandOptions], None]
GetToken = Callable[[str, PutCommandOptions], Awaitable[str]]


def put_headers(options: PutCommandOptions) -> Dict[str, str]:
    headers: Dict[str, str] = {}
    if options.content_type:
        headers["x-content-type"] = options.content_type
    if options.add_random_suffix is False:
        headers["x-add-random-suffix"] = "0"
    if options.cache_control_max_age is not None:
        headers["x-cache-control-max-age"] = str(options.cache_control_max_age)
    return headers


def _content(body: Any) -> Any:
    read = getattr(body, "read", None)
    if callable(read):
        return read()
    return body


@dataclass(frozen=True)
class PutMethod:
    """A put command with optional extra preconditions and token lookup."""

    extra_checks: Optional[ExtraChecks] = None
    get_token: Optional[GetToken] = None

    async def __call__(self, pathname: str, body: Any, options: PutCommandOptions) -> PutBlobResult:
        if not pathname:
            raise BlobError("pathname is required")
        if body is None:
            raise BlobError("body is required")
        if options.access != "public":
            raise BlobError('access must be "public"')
        if self.extra_checks is not None:
            self.extra_checks(options)

        if self.get_token is not None:
            token = await self.get_token(pathname, options)
        else:
            token = get_token_from_options_or_env(options.token)

        response = await api.blob_request(
            "PUT",
            pathname,
            token=token,
            headers=put_headers(options),
            content=_content(body),
        )
        api.raise_for_response(response)
        return PutBlobResult.from_response(api.json_body(response))


_server_put = PutMethod()


async def put(
    pathname: str,
    body: Any,
    *,
    access: str,
    content_type: Optional[str] = None,
    add_random_suffix: Optional[bool] = None,
    cache_control_max_age: Optional[int] = None,
    token: Optional[str] = None,
) -> PutBlobResult:
    """Upload ``body`` to ``pathname`` with a read-write token."""
    options = PutCommandOptions(
        access=access,
        content_type=content_type,
        add_random_suffix=add_random_suffix,
        cache_control_max_age=cache_control_max_age,
        token=token,
    )
    return await _server_put(pathname, body, options)
