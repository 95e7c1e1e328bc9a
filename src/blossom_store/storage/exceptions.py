"""Storage exceptions

All carry ``details`` with the failed operation, the key and the bucket.
"""

from typing import Any, Dict, Optional

from blossom_store.exceptions import BlossomError, ResourceNotFoundError


def _details(operation: str, key: Optional[str], bucket: Optional[str], **extra: Any) -> Dict[str, Any]:
    details: Dict[str, Any] = {"operation": operation}
    if key is not None:
        details["key"] = key
    if bucket is not None:
        details["bucket"] = bucket
    details.update(extra)
    return details


class StorageError(BlossomError):
    """Base class for storage exceptions"""

    code = "STORAGE_ERROR"

    def __init__(
        self,
        message: str,
        operation: str,
        key: Optional[str] = None,
        bucket: Optional[str] = None,
        **extra: Any,
    ):
        super().__init__(self.code, message, _details(operation, key, bucket, **extra))
        self.operation = operation
        self.key = key


class BackendWriteError(StorageError):
    """A put or delete against the backend failed"""

    code = "BACKEND_WRITE_FAILED"


class BackendReadError(StorageError):
    """A get, head or list against the backend failed"""

    code = "BACKEND_READ_FAILED"


class NotFoundError(StorageError, ResourceNotFoundError):
    """The requested blob does not exist"""

    code = "BLOB_NOT_FOUND"


class OperationCancelledError(StorageError):
    """The caller cancelled the operation; partial results were discarded"""

    code = "OPERATION_CANCELLED"
