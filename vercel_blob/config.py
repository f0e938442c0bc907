"""Environment-driven configuration for the blob API client."""

from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Optional

from .errors import BlobError

DEFAULT_API_URL = "https://blob.vercel-storage.com"
DEFAULT_API_VERSION = "4"


@dataclass(frozen=True)
class BlobConfig:
    """Settings read from the process environment at call time."""

    api_url: str = DEFAULT_API_URL
    api_version: str = DEFAULT_API_VERSION
    timeout_seconds: float = 30.0

    @classmethod
    def from_env(cls) -> "BlobConfig":
        api_url = os.getenv("VERCEL_BLOB_API_URL") or os.getenv("NEXT_PUBLIC_VERCEL_BLOB_API_URL") or DEFAULT_API_URL
        api_version = (
            os.getenv("VERCEL_BLOB_API_VERSION_OVERRIDE")
            or os.getenv("NEXT_PUBLIC_VERCEL_BLOB_API_VERSION_OVERRIDE")
            or DEFAULT_API_VERSION
        )
        try:
            timeout = float(os.getenv("VERCEL_BLOB_TIMEOUT_SECONDS", "30"))
        except ValueError as exc:
            raise BlobError("Invalid `VERCEL_BLOB_TIMEOUT_SECONDS`") from exc
        return cls(api_url=api_url.rstrip("/"), api_version=api_version, timeout_seconds=timeout)


def get_token_from_options_or_env(token: Optional[str] = None) -> str:
    """Return the per-call token, falling back to ``BLOB_READ_WRITE_TOKEN``."""
    if token:
        return token
    env_token = os.getenv("BLOB_READ_WRITE_TOKEN")
    if env_token:
        return env_token
    raise BlobError(
        "No token found. Either configure the `BLOB_READ_WRITE_TOKEN` environment variable, "
        "or pass a `token` option to your calls."
    )
