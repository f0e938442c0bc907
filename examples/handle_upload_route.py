"""Framework-agnostic ``handle_upload`` route, driven here by two fake requests."""

from __future__ import annotations

import asyncio
import hashlib
import hmac
import json
import os
from types import SimpleNamespace

from vercel_blob import BlobError, ClientTokenPolicy, UploadCompletedPayload, handle_upload

READ_WRITE_TOKEN = os.getenv("BLOB_READ_WRITE_TOKEN", "vercel_blob_rw_demostore_localsecret")


async def on_before_generate_token(pathname: str, client_payload: str | None) -> ClientTokenPolicy:
    return ClientTokenPolicy(
        allowed_content_types=["image/png"],
        maximum_size_in_bytes=1024 * 1024,
        token_payload=json.dumps({"user_id": "u-42", "client_payload": client_payload}),
    )


async def on_upload_completed(payload: UploadCompletedPayload) -> None:
    print(f"stored {payload.blob.pathname} at {payload.blob.url} for {payload.token_payload}")


async def route(headers: dict, raw_body: bytes) -> tuple[int, dict]:
    try:
        result = await handle_upload(
            request=SimpleNamespace(headers=headers),
            body=raw_body,
            token=READ_WRITE_TOKEN,
            on_before_generate_token=on_before_generate_token,
            on_upload_completed=on_upload_completed,
        )
    except BlobError as exc:
        return 400, {"error": str(exc)}
    return 200, result


async def main() -> None:
    generate = json.dumps(
        {
            "type": "blob.generate-client-token",
            "payload": {"pathname": "avatar.png", "callbackUrl": "https://example.com/api/upload"},
        }
    ).encode()
    status, body = await route({"content-type": "application/json"}, generate)
    print(status, body["type"], body.get("clientToken", "")[:48])

    completed = json.dumps(
        {
            "type": "blob.upload-completed",
            "payload": {
                "blob": {"url": "https://demostore.public.blob.vercel-storage.com/avatar.png", "pathname": "avatar.png"},
                "tokenPayload": "u-42",
            },
        }
    ).encode()
    signature = hmac.new(READ_WRITE_TOKEN.encode(), completed, hashlib.sha256).hexdigest()
    print(*await route({"x-vercel-signature": signature}, completed))
    print(*await route({"x-vercel-signature": "00" * 32}, completed))


if __name__ == "__main__":
    asyncio.run(main())
