"""Error type raised by every blob operation."""

from __future__ import annotations


class BlobError(Exception):
    """Raised for any failed blob or client-upload operation."""

    def __init__(self, message: str) -> None:
        super().__init__(f"Vercel Blob: {message}")
        self.reason = message
