import asyncio
import base64
import random
import string

import pytest

from vercel_blob.errors import BlobError
from vercel_blob.token.codec import (
    decode_client_token,
    encode_client_token,
    get_payload_from_client_token,
    verify_client_token,
)
from vercel_blob.token.signer import DigestBackend, PrimitiveBackend, Signer
from vercel_blob.token.types import ClientTokenOptions, OnUploadCompleted

SECRET = "vercel_blob_rw_store123_s3cr3t"


def _b64(text: str) -> str:
    return base64.b64encode(text.encode("utf-8")).decode("ascii")


def test_encoded_token_layout_and_example_payload() -> None:
    options = ClientTokenOptions(pathname="a.txt", valid_until=1700000000000)
    token = asyncio.run(encode_client_token(options, SECRET, "store123"))

    assert token.startswith("vercel_blob_client_store123_")
    decoded = decode_client_token(token)
    assert decoded.store_id == "store123"
    assert decoded.payload == {"pathname": "a.txt", "validUntil": 1700000000000}
    assert base64.b64decode(decoded.encoded_payload).decode() == '{"pathname":"a.txt","validUntil":1700000000000}'
    assert len(decoded.signature) == 64


def test_full_policy_round_trips_and_verifies() -> None:
    options = ClientTokenOptions(
        pathname="avatars/me.png",
        on_upload_completed=OnUploadCompleted(callback_url="https://example.com/api/upload", token_payload="u-1"),
        maximum_size_in_bytes=5_000_000,
        allowed_content_types=["image/png", "image/jpeg"],
        valid_until=1700000030000,
        add_random_suffix=False,
        cache_control_max_age=3600,
    )

    async def run() -> None:
        token = await encode_client_token(options, SECRET, "store123")
        decoded = await verify_client_token(token, SECRET)
        assert decoded.payload == {
            "pathname": "avatars/me.png",
            "onUploadCompleted": {"callbackUrl": "https://example.com/api/upload", "tokenPayload": "u-1"},
            "maximumSizeInBytes": 5_000_000,
            "allowedContentTypes": ["image/png", "image/jpeg"],
            "validUntil": 1700000030000,
            "addRandomSuffix": False,
            "cacheControlMaxAge": 3600,
        }
        assert decoded.valid_until == 1700000030000
        assert get_payload_from_client_token(token) == decoded.payload

        with pytest.raises(BlobError, match="Invalid client token signature"):
            await verify_client_token(token, "vercel_blob_rw_store123_other")

    asyncio.run(run())


def test_backends_produce_identical_tokens() -> None:
    options = ClientTokenOptions(pathname="a.txt", valid_until=1700000000000)

    async def run() -> None:
        primitive = await encode_client_token(options, SECRET, "store123", signer=Signer(PrimitiveBackend()))
        digest = await encode_client_token(options, SECRET, "store123", signer=Signer(DigestBackend()))
        assert primitive == digest

    asyncio.run(run())


def test_payload_mutations_never_verify() -> None:
    options = ClientTokenOptions(pathname="docs/report.pdf", valid_until=1700000000000, maximum_size_in_bytes=1024)
    alphabet = string.ascii_letters + string.digits + "+/="
    rng = random.Random(20231114)

    async def run() -> None:
        signer = Signer(DigestBackend())
        decoded = decode_client_token(await encode_client_token(options, SECRET, "store123", signer=signer))
        encoded = decoded.encoded_payload
        for _ in range(10_000):
            index = rng.randrange(len(encoded))
            replacement = rng.choice(alphabet.replace(encoded[index], ""))
            mutated = encoded[:index] + replacement + encoded[index + 1 :]
            assert await signer.verify(mutated, SECRET, decoded.signature) is False

    asyncio.run(run())


def test_tampered_token_fails_verification() -> None:
    async def run() -> None:
        token = await encode_client_token(ClientTokenOptions(pathname="a.txt", valid_until=1), SECRET, "store123")
        decoded = decode_client_token(token)
        forged_payload = _b64('{"pathname":"a.txt","validUntil":99999999999999}')
        forged = f"vercel_blob_client_store123_{_b64(f'{decoded.signature}.{forged_payload}')}"
        assert get_payload_from_client_token(forged)["validUntil"] == 99999999999999
        with pytest.raises(BlobError, match="signature"):
            await verify_client_token(forged, SECRET)

    asyncio.run(run())


@pytest.mark.parametrize(
    "token",
    [
        "vercel_blob_client_store123",
        "not-a-token",
        "vercel_blob_rw_store123_" + _b64("sig." + _b64("{}")),
        "vercel_blob_client__" + _b64("sig." + _b64("{}")),
        "vercel_blob_client_store123_!!!notbase64!!!",
        "vercel_blob_client_store123_" + _b64("no-separator"),
        "vercel_blob_client_store123_" + _b64("sig." + _b64("{not json")),
        "vercel_blob_client_store123_" + _b64("sig." + _b64("[1, 2]")),
        "vercel_blob_client_store123_" + _b64("sig." + "%%%"),
    ],
)
def test_malformed_tokens_raise_decode_errors(token: str) -> None:
    with pytest.raises(BlobError, match="Invalid client token"):
        decode_client_token(token)
