"""Mint a client token on the server and inspect what it allows."""

from __future__ import annotations

import asyncio
import json
import os

from vercel_blob import OnUploadCompleted, generate_client_token_from_read_write_token, get_payload_from_client_token


async def main() -> None:
    token = os.getenv("BLOB_READ_WRITE_TOKEN", "vercel_blob_rw_demostore_localsecret")
    client_token = await generate_client_token_from_read_write_token(
        "avatars/me.png",
        token=token,
        allowed_content_types=["image/png", "image/jpeg"],
        maximum_size_in_bytes=5 * 1024 * 1024,
        on_upload_completed=OnUploadCompleted(callback_url="https://example.com/api/avatar/upload"),
    )
    print(f"client token: {client_token[:48]}...")
    print(json.dumps(get_payload_from_client_token(client_token), indent=2))


if __name__ == "__main__":
    asyncio.run(main())
