"""Python client for Vercel Blob.

Server-side API: ``put``, ``delete``, ``head``, ``list_blobs``,
``handle_upload`` and ``generate_client_token_from_read_write_token``.
Browser-side uploads live in :mod:`vercel_blob.client`.
"""

from .blobs import delete, head, list_blobs
from .errors import BlobError
from .handle_upload import handle_upload
from .put import put
from .token import (
    ClientTokenPolicy,
    OnUploadCompleted,
    generate_client_token_from_read_write_token,
    get_payload_from_client_token,
    verify_client_token,
)
from .types import (
    EventType,
    HeadBlobResult,
    ListBlobResult,
    ListBlobResultBlob,
    PutBlobResult,
    UploadCompletedPayload,
)

__all__ = [
    "BlobError",
    "ClientTokenPolicy",
    "EventType",
    "HeadBlobResult",
    "ListBlobResult",
    "ListBlobResultBlob",
    "OnUploadCompleted",
    "PutBlobResult",
    "UploadCompletedPayload",
    "delete",
    "generate_client_token_from_read_write_token",
    "get_payload_from_client_token",
    "handle_upload",
    "head",
    "list_blobs",
    "put",
    "verify_client_token",
]
