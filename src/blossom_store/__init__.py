"""blossom-store - content-addressed blob storage for Blossom file servers.

Subpackages:
- storage: Blob storage interface, S3 backend and content type detection
- config: S3 settings loaded from the environment and .env files
- logger: Structured logging with text or JSON output
- exceptions: Exception classes with structured error info
"""

__version__ = "1.0.0"

from blossom_store.config import S3Settings

from blossom_store.exceptions import (
    BlossomError,
    ConfigurationError,
    ResourceNotFoundError,
    ValidationError,
)

from blossom_store.logger import (
    Logger,
    StructuredLogger,
    create_logger,
    get_logger,
)

from blossom_store.storage import (
    BackendReadError,
    BackendWriteError,
    BlobInfo,
    BlobStorage,
    BlobStream,
    NotFoundError,
    OperationCancelledError,
    Redirect,
    S3BlobStorage,
    StorageError,
    detect_content_type,
)

__all__ = [
    "__version__",
    # Config
    "S3Settings",
    # Exceptions
    "BlossomError",
    "ValidationError",
    "ResourceNotFoundError",
    "ConfigurationError",
    # Logger
    "Logger",
    "StructuredLogger",
    "get_logger",
    "create_logger",
    # Storage
    "BlobStorage",
    "S3BlobStorage",
    "BlobInfo",
    "BlobStream",
    "Redirect",
    "detect_content_type",
    "StorageError",
    "BackendWriteError",
    "BackendReadError",
    "NotFoundError",
    "OperationCancelledError",
]
