"""Base storage interface

Defines the contract every blob backend follows. Blobs are addressed by
the hex SHA-256 digest the caller computed; backends never hash, and never
check the digest against the bytes.
"""

import threading
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import IO, List, Optional, Union

from blossom_store.exceptions import ValidationError

from .metadata import BlobInfo, is_blob_key


@dataclass(frozen=True)
class Redirect:
    """Load result: fetch the blob from ``url`` instead"""

    url: str


@dataclass(frozen=True)
class BlobStream:
    """Load result: the blob's bytes

    ``reader`` is a seekable io.BytesIO for buffered loads, otherwise the
    backend's unread response body, which the caller must close.
    """

    reader: IO[bytes]
    content_type: Optional[str] = None
    size: Optional[int] = None

    def read(self) -> bytes:
        """Read the remaining bytes and close the reader."""
        try:
            return self.reader.read()
        finally:
            self.reader.close()


LoadResult = Union[Redirect, BlobStream]


def require_blob_key(sha256: str, operation: str) -> str:
    """Reject identifiers that are not 64 hex characters.

    Raises:
        ValidationError: If sha256 is not a valid blob key
    """
    if not is_blob_key(sha256):
        raise ValidationError(
            "INVALID_BLOB_HASH",
            "Blob hash must be 64 hexadecimal characters",
            {"operation": operation, "key": sha256},
        )
    return sha256


class BlobStorage(ABC):
    """Abstract base class for content-addressed blob storage"""

    @abstractmethod
    def store_blob(self, sha256: str, data: bytes) -> str:
        """
        Store data under its digest, replacing any existing blob

        Args:
            sha256: Hex digest of data, computed by the caller
            data: Raw bytes to store

        Returns:
            The content type detected from data

        Raises:
            ValidationError: If sha256 is not 64 hex characters
            BackendWriteError: If the backend write fails
        """

    @abstractmethod
    def load_blob(self, sha256: str, buffered: bool = True) -> LoadResult:
        """
        Load a blob, either as a redirect or as its bytes

        Args:
            sha256: Hex digest of the blob
            buffered: Read the whole blob into memory and return a
                seekable stream; when False return the backend stream unread

        Returns:
            Redirect when a public URL fronts the store, else BlobStream

        Raises:
            NotFoundError: If no blob has this digest
            BackendReadError: If the backend read fails
            ConfigurationError: If the redirect URL is malformed
        """

    @abstractmethod
    def delete_blob(self, sha256: str) -> None:
        """
        Delete a blob. Deleting a missing blob follows the backend's policy.

        Raises:
            BackendWriteError: If the backend delete fails
        """

    @abstractmethod
    def list_blobs(self, cancel_event: Optional[threading.Event] = None) -> List[BlobInfo]:
        """
        List every blob in the store, in backend order

        Args:
            cancel_event: Set by the caller to abandon the listing

        Returns:
            BlobInfo for each blob key; non-blob keys are skipped

        Raises:
            BackendReadError: If fetching a page of keys fails
            OperationCancelledError: If cancel_event was set
        """

    @abstractmethod
    def blob_exists(self, sha256: str) -> bool:
        """Check whether a blob exists without reading it"""

    @abstractmethod
    def blob_url(self, sha256: str) -> str:
        """Public URL of a blob"""
