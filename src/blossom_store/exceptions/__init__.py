"""Common exception hierarchy for blossom-store."""

from blossom_store.exceptions.base import (
    BlossomError,
    ConfigurationError,
    ResourceNotFoundError,
    ValidationError,
)

__all__ = [
    "BlossomError",
    "ValidationError",
    "ResourceNotFoundError",
    "ConfigurationError",
]
