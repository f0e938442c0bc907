"""Client token datatypes."""

from __future__ import annotations

from dataclasses import dataclass, fields
from typing import Any, Dict, List, Mapping, Optional

from ..errors import BlobError


@dataclass(frozen=True)
class OnUploadCompleted:
    """Callback descriptor embedded in a client token."""

    callback_url: str
    token_payload: Optional[str] = None

    def to_payload(self) -> Dict[str, Any]:
        payload: Dict[str, Any] = {"callbackUrl": self.callback_url}
        if self.token_payload is not None:
            payload["tokenPayload"] = self.token_payload
        return payload


@dataclass(frozen=True)
class ClientTokenOptions:
    """Scope of a client token: what a browser may upload and until when."""

    pathname: str
    on_upload_completed: Optional[OnUploadCompleted] = None
    maximum_size_in_bytes: Optional[int] = None
    allowed_content_types: Optional[List[str]] = None
    valid_until: Optional[int] = None
    add_random_suffix: Optional[bool] = None
    cache_control_max_age: Optional[int] = None

    def to_payload(self) -> Dict[str, Any]:
        """Return the camelCase wire payload, omitting unset fields."""
        candidates = {
            "pathname": self.pathname,
            "onUploadCompleted": self.on_upload_completed.to_payload() if self.on_upload_completed else None,
            "maximumSizeInBytes": self.maximum_size_in_bytes,
            "allowedContentTypes": list(self.allowed_content_types) if self.allowed_content_types is not None else None,
            "validUntil": self.valid_until,
            "addRandomSuffix": self.add_random_suffix,
            "cacheControlMaxAge": self.cache_control_max_age,
        }
        return {key: value for key, value in candidates.items() if value is not None}


@dataclass(frozen=True)
class ClientTokenPolicy:
    """Policy returned by an ``on_before_generate_token`` callback."""

    allowed_content_types: Optional[List[str]] = None
    maximum_size_in_bytes: Optional[int] = None
    valid_until: Optional[int] = None
    add_random_suffix: Optional[bool] = None
    cache_control_max_age: Optional[int] = None
    token_payload: Optional[str] = None

    @classmethod
    def from_value(cls, value: "ClientTokenPolicy | Mapping[str, Any] | None") -> "ClientTokenPolicy":
        if value is None:
            return cls()
        if isinstance(value, cls):
            return value
        if isinstance(value, Mapping):
            known = {f.name for f in fields(cls)}
            unknown = sorted(set(value) - known)
            if unknown:
                raise BlobError(f"Unsupported client token policy fields: {', '.join(unknown)}")
            return cls(**value)
        raise BlobError("`on_before_generate_token` must return a ClientTokenPolicy or a mapping")


@dataclass(frozen=True)
class DecodedClientToken:
    """Parts of a client token, as read without checking its signature."""

    store_id: str
    signature: str
    encoded_payload: str
    payload: Dict[str, Any]

    @property
    def valid_until(self) -> Optional[int]:
        value = self.payload.get("validUntil")
        return int(value) if value is not None else None
