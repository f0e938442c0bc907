"""HMAC-SHA256 signing with interchangeable backends.

Both backends key the HMAC with the UTF-8 bytes of the secret, hex-encode the
digest in lowercase, and decode the presented signature from hex before a
constant-time comparison.
"""

from __future__ import annotations

import hmac
import importlib.util
from abc import ABC, abstractmethod
from functools import lru_cache
from hashlib import sha256

from ..utils.encoding import hex_to_bytes


class SignerBackend(ABC):
    """One implementation of HMAC-SHA256 sign/verify."""

    name: str = "abstract"

    @abstractmethod
    async def sign(self, payload: str, secret: str) -> str:
        """Return the lowercase hex HMAC-SHA256 of ``payload``."""

    @abstractmethod
    async def verify(self, payload: str, secret: str, signature: str) -> bool:
        """Return True when ``signature`` is the hex HMAC of ``payload``."""


class PrimitiveBackend(SignerBackend):
    """HMAC primitive from ``cryptography``; its ``verify`` is constant-time."""

    name = "primitive"

    def _new_hmac(self, secret: str):
        from cryptography.hazmat.primitives import hashes, hmac as primitive_hmac

        return primitive_hmac.HMAC(secret.encode("utf-8"), hashes.SHA256())

    async def sign(self, payload: str, secret: str) -> str:
        mac = self._new_hmac(secret)
        mac.update(payload.encode("utf-8"))
        return mac.finalize().hex()

    async def verify(self, payload: str, secret: str, signature: str) -> bool:
        from cryptography.exceptions import InvalidSignature

        expected = hex_to_bytes(signature)
        mac = self._new_hmac(secret)
        mac.update(payload.encode("utf-8"))
        try:
            mac.verify(expected)
        except InvalidSignature:
            return False
        return True


class DigestBackend(SignerBackend):
    """Standard-library ``hmac`` digest with ``compare_digest``."""

    name = "digest"

    def _digest(self, payload: str, secret: str) -> bytes:
        return hmac.new(secret.encode("utf-8"), payload.encode("utf-8"), sha256).digest()

    async def sign(self, payload: str, secret: str) -> str:
        return self._digest(payload, secret).hex()

    async def verify(self, payload: str, secret: str, signature: str) -> bool:
        expected = hex_to_bytes(signature)
        return hmac.compare_digest(self._digest(payload, secret), expected)


def select_backend() -> SignerBackend:
    """Pick the primitive backend when ``cryptography`` is importable."""
    if importlib.util.find_spec("cryptography") is not None:
        return PrimitiveBackend()
    return DigestBackend()


class Signer:
    """Sign and verify payloads with the backend chosen at construction."""

    def __init__(self, backend: SignerBackend | None = None) -> None:
        self.backend = backend or select_backend()

    async def sign(self, payload: str, secret: str) -> str:
        return await self.backend.sign(payload, secret)

    async def verify(self, payload: str, secret: str, signature: str) -> bool:
        return await self.backend.verify(payload, secret, signature)


@lru_cache(maxsize=1)
def get_signer() -> Signer:
    """Return the process-wide signer."""
    return Signer()
