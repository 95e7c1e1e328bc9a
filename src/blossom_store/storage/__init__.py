"""Storage module for blossom-store

Content-addressed blob storage: magic-byte content type detection,
redirect-or-stream loads and filtered listing over an S3 bucket.
"""

from .base import BlobStorage, BlobStream, LoadResult, Redirect
from .content_type import (
    DEFAULT_CONTENT_TYPE,
    SNIFF_LENGTH,
    detect_content_type,
    sniff_content_type,
)
from .exceptions import (
    BackendReadError,
    BackendWriteError,
    NotFoundError,
    OperationCancelledError,
    StorageError,
)
from .metadata import BlobInfo, blob_url, is_blob_key, is_valid_hex
from .s3_storage import S3BlobStorage, create_s3_client

__all__ = [
    "BlobStorage",
    "S3BlobStorage",
    "create_s3_client",
    "BlobStream",
    "Redirect",
    "LoadResult",
    "BlobInfo",
    "blob_url",
    "is_blob_key",
    "is_valid_hex",
    "detect_content_type",
    "sniff_content_type",
    "DEFAULT_CONTENT_TYPE",
    "SNIFF_LENGTH",
    "StorageError",
    "BackendWriteError",
    "BackendReadError",
    "NotFoundError",
    "OperationCancelledError",
]
