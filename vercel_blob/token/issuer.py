"""Server-side issuance of client tokens from a read-write token."""

from __future__ import annotations

import logging
from dataclasses import replace
from typing import List, Optional

from .. import runtime
from ..config import get_token_from_options_or_env
from ..errors import BlobError
from ..utils.time import epoch_ms
from .codec import encode_client_token, store_id_from_token
from .signer import Signer
from .types import ClientTokenOptions, OnUploadCompleted

logger = logging.getLogger(__name__)

DEFAULT_TTL_MS = 30_000


class ClientTokenIssuer:
    """Issue client tokens signed with a read-write token."""

    def __init__(self, *, token: str | None = None, ttl_ms: int = DEFAULT_TTL_MS, signer: Signer | None = None) -> None:
        self._token = token
        self.ttl_ms = ttl_ms
        self._signer = signer

    async def issue(self, options: ClientTokenOptions) -> str:
        runtime.require_server("generate_client_token_from_read_write_token")

        read_write_token = get_token_from_options_or_env(self._token)
        store_id = store_id_from_token(read_write_token)
        if not store_id:
            raise BlobError("Invalid `token` parameter" if self._token else "Invalid `BLOB_READ_WRITE_TOKEN`")

        if options.valid_until is None:
            options = replace(options, valid_until=epoch_ms() + self.ttl_ms)

        client_token = await encode_client_token(options, read_write_token, store_id, signer=self._signer)
        logger.debug(
            "issued client token store_id=%s pathname=%s valid_until=%s",
            store_id,
            options.pathname,
            options.valid_until,
        )
        return client_token


async def generate_client_token_from_read_write_token(
    pathname: str,
    *,
    token: Optional[str] = None,
    on_upload_completed: Optional[OnUploadCompleted] = None,
    maximum_size_in_bytes: Optional[int] = None,
    allowed_content_types: Optional[List[str]] = None,
    valid_until: Optional[int] = None,
    add_random_suffix: Optional[bool] = None,
    cache_control_max_age: Optional[int] = None,
) -> str:
    """Return a client token scoped to ``pathname``, valid 30 seconds by default."""
    options = ClientTokenOptions(
        pathname=pathname,
        on_upload_completed=on_upload_completed,
        maximum_size_in_bytes=maximum_size_in_bytes,
        allowed_content_types=allowed_content_types,
        valid_until=valid_until,
        add_random_suffix=add_random_suffix,
        cache_control_max_age=cache_control_max_age,
    )
    return await ClientTokenIssuer(token=token).issue(options)
