"""Blob metadata and key helpers

A blob is identified only by the hex SHA-256 digest of its bytes. Any
other key found in the bucket is not a blob.
"""

from dataclasses import dataclass
from datetime import datetime
from typing import Any, Dict

BLOB_KEY_LENGTH = 64

_HEX_DIGITS = frozenset("0123456789abcdefABCDEF")


def is_valid_hex(value: str) -> bool:
    """Return True if every character is a hex digit (the empty string passes)."""
    return all(char in _HEX_DIGITS for char in value)


def is_blob_key(key: str) -> bool:
    """Return True if key looks like a SHA-256 digest: 64 hex characters, any case."""
    return len(key) == BLOB_KEY_LENGTH and is_valid_hex(key)


def blob_url(base_url: str, sha256: str) -> str:
    """Build the URL of a blob under a base URL."""
    return f"{base_url.rstrip('/')}/{sha256}"


@dataclass(frozen=True)
class BlobInfo:
    """A stored blob as reported by a listing

    Attributes:
        sha256: Hex digest, the blob's only identifier
        size: Byte length reported by the backend
        content_type: MIME type recorded at store time
        url: Where clients fetch the blob
        uploaded_at: Last modification time reported by the backend
    """

    sha256: str
    size: int
    content_type: str
    url: str
    uploaded_at: datetime

    @property
    def uploaded(self) -> int:
        """Upload time as Unix epoch seconds."""
        return int(self.uploaded_at.timestamp())

    def to_dict(self) -> Dict[str, Any]:
        """Convert to the JSON blob descriptor shape"""
        return {
            "sha256": self.sha256,
            "size": self.size,
            "type": self.content_type,
            "url": self.url,
            "uploaded": self.uploaded,
        }

    def __repr__(self) -> str:
        return f"BlobInfo(sha256={self.sha256}, size={self.size}, type={self.content_type})"
