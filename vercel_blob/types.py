"""Blob API result datatypes."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Any, List, Mapping, Optional

from .errors import BlobError


class EventType(str, Enum):
    """Event types exchanged with a ``handle_upload`` route."""

    GENERATE_CLIENT_TOKEN = "blob.generate-client-token"
    UPLOAD_COMPLETED = "blob.upload-completed"


def parse_timestamp(value: str) -> datetime:
    return datetime.fromisoformat(value.replace("Z", "+00:00"))


@dataclass(frozen=True)
class PutBlobResult:
    url: str
    pathname: str
    content_type: str
    content_disposition: str

    @classmethod
    def from_response(cls, data: Mapping[str, Any]) -> "PutBlobResult":
        try:
            return cls(
                url=data["url"],
                pathname=data["pathname"],
                content_type=data.get("contentType", ""),
                content_disposition=data.get("contentDisposition", ""),
            )
        except (KeyError, TypeError) as exc:
            raise BlobError("Invalid blob descriptor in response") from exc


@dataclass(frozen=True)
class HeadBlobResult:
    url: str
    pathname: str
    size: int
    uploaded_at: datetime
    content_type: str
    content_disposition: str
    cache_control: str

    @classmethod
    def from_response(cls, data: Mapping[str, Any]) -> "HeadBlobResult":
        try:
            return cls(
                url=data["url"],
                pathname=data["pathname"],
                size=int(data["size"]),
                uploaded_at=parse_timestamp(data["uploadedAt"]),
                content_type=data.get("contentType", ""),
                content_disposition=data.get("contentDisposition", ""),
                cache_control=data.get("cacheControl", ""),
            )
        except (KeyError, TypeError, ValueError) as exc:
            raise BlobError("Invalid blob metadata in response") from exc


@dataclass(frozen=True)
class ListBlobResultBlob:
    url: str
    pathname: str
    size: int
    uploaded_at: datetime


@dataclass(frozen=True)
class ListBlobResult:
    blobs: List[ListBlobResultBlob]
    cursor: Optional[str]
    has_more: bool

    @classmethod
    def from_response(cls, data: Mapping[str, Any]) -> "ListBlobResult":
        try:
            blobs = [
                ListBlobResultBlob(
                    url=item["url"],
                    pathname=item["pathname"],
                    size=int(item["size"]),
                    uploaded_at=parse_timestamp(item["uploadedAt"]),
                )
                for item in data["blobs"]
            ]
            return cls(blobs=blobs, cursor=data.get("cursor"), has_more=bool(data.get("hasMore", False)))
        except (KeyError, TypeError, ValueError) as exc:
            raise BlobError("Invalid list response") from exc


@dataclass(frozen=True)
class UploadCompletedPayload:
    """Payload of a ``blob.upload-completed`` event."""

    blob: PutBlobResult
    token_payload: Optional[str] = None

    @classmethod
    def from_event(cls, payload: Mapping[str, Any]) -> "UploadCompletedPayload":
        blob = payload.get("blob")
        if not isinstance(blob, Mapping):
            raise BlobError("Invalid upload-completed payload: missing `blob`")
        return cls(blob=PutBlobResult.from_response(blob), token_payload=payload.get("tokenPayload"))
