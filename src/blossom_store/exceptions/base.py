"""Base exception classes for blossom-store.

Every error carries structured information:
- code: Machine-readable error identifier
- message: Human-readable error description
- details: Context for diagnosis (operation, key, bucket). Never credentials.
"""

from typing import Any, Dict, Optional


class BlossomError(Exception):
    """Base exception for all blossom-store errors.

    Attributes:
        code: Machine-readable error code (e.g., "BACKEND_WRITE_FAILED")
        message: Human-readable error message
        details: Optional additional context for debugging
    """

    def __init__(self, code: str, message: str, details: Optional[Dict[str, Any]] = None):
        """Initialize error with structured information.

        Args:
            code: Machine-readable error code
            message: Human-readable error message
            details: Optional additional context
        """
        self.code = code
        self.message = message
        self.details = details or {}
        super().__init__(message)

    def __str__(self) -> str:
        if self.details:
            return f"{self.code}: {self.message} (details: {self.details})"
        return f"{self.code}: {self.message}"

    def to_dict(self) -> Dict[str, Any]:
        """Convert exception to a dictionary for JSON responses."""
        return {
            "code": self.code,
            "message": self.message,
            "details": self.details,
        }


class ValidationError(BlossomError):
    """Input failed validation, e.g. a hash that is not 64 hex characters."""

    pass


class ResourceNotFoundError(BlossomError):
    """A requested resource does not exist."""

    pass


class ConfigurationError(BlossomError):
    """Configuration is malformed or incomplete.

    Raised as soon as the bad value is used; never silently defaulted.
    """

    pass
