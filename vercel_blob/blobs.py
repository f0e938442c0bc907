"""Server-side delete, head and list operations."""

from __future__ import annotations

from typing import List, Optional, Union

from . import api
from .config import get_token_from_options_or_env
from .types import HeadBlobResult, ListBlobResult


async def delete(url: Union[str, List[str]], *, token: Optional[str] = None) -> None:
    """Delete one blob or many blobs by URL."""
    urls = [url] if isinstance(url, str) else list(url)
    response = await api.blob_request(
        "POST",
        "delete",
        token=get_token_from_options_or_env(token),
        headers={"content-type": "application/json"},
        json={"urls": urls},
    )
    api.raise_for_response(response)


async def head(url: str, *, token: Optional[str] = None) -> Optional[HeadBlobResult]:
    """Return blob metadata, or None when the blob does not exist."""
    response = await api.blob_request(
        "GET",
        token=get_token_from_options_or_env(token),
        params={"url": url},
    )
    if response.status_code == 404 and api.error_details(response)[0] in (None, "not_found"):
        return None
    api.raise_for_response(response)
    return HeadBlobResult.from_response(api.json_body(response))


async def list_blobs(
    *,
    limit: Optional[int] = None,
    prefix: Optional[str] = None,
    cursor: Optional[str] = None,
    token: Optional[str] = None,
) -> ListBlobResult:
    """List blobs in the store, one page at a time."""
    params = {}
    if limit is not None:
        params["limit"] = str(limit)
    if prefix is not None:
        params["prefix"] = prefix
    if cursor is not None:
        params["cursor"] = cursor

    response = await api.blob_request("GET", token=get_token_from_options_or_env(token), params=params)
    api.raise_for_response(response)
    return ListBlobResult.from_response(api.json_body(response))
