"""Configuration for blossom-store.

Example:
    from blossom_store.config import S3Settings

    settings = S3Settings.from_env()
    if settings is None:
        ...  # S3 storage not configured
"""

from blossom_store.config.env_loader import EnvLoader
from blossom_store.config.settings import (
    DEFAULT_CONNECT_TIMEOUT,
    DEFAULT_READ_TIMEOUT,
    DEFAULT_REGION,
    S3Settings,
    validate_base_url,
)

__all__ = [
    "EnvLoader",
    "S3Settings",
    "validate_base_url",
    "DEFAULT_REGION",
    "DEFAULT_CONNECT_TIMEOUT",
    "DEFAULT_READ_TIMEOUT",
]
