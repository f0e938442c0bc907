"""Client token signing, encoding and issuance."""

from .codec import decode_client_token, encode_client_token, get_payload_from_client_token, verify_client_token
from .issuer import ClientTokenIssuer, generate_client_token_from_read_write_token
from .signer import DigestBackend, PrimitiveBackend, Signer, SignerBackend, get_signer, select_backend
from .types import ClientTokenOptions, ClientTokenPolicy, DecodedClientToken, OnUploadCompleted

__all__ = [
    "ClientTokenIssuer",
    "ClientTokenOptions",
    "ClientTokenPolicy",
    "DecodedClientToken",
    "DigestBackend",
    "OnUploadCompleted",
    "PrimitiveBackend",
    "Signer",
    "SignerBackend",
    "decode_client_token",
    "encode_client_token",
    "generate_client_token_from_read_write_token",
    "get_payload_from_client_token",
    "get_signer",
    "select_backend",
    "verify_client_token",
]
