"""
Logger interface for blossom-store.

Storage components depend on this contract rather than on a concrete
logger, so tests and embedding servers can supply their own.
"""

from abc import ABC, abstractmethod
from typing import Any


class Logger(ABC):
    """Abstract logging interface.

    Each method takes a message plus arbitrary key-value context, e.g.
    ``logger.info("Blob stored", sha256=digest, size=1024)``.
    """

    @abstractmethod
    def debug(self, message: str, **kwargs: Any) -> None:
        """Log a debug message."""

    @abstractmethod
    def info(self, message: str, **kwargs: Any) -> None:
        """Log an info message."""

    @abstractmethod
    def warning(self, message: str, **kwargs: Any) -> None:
        """Log a warning message."""

    @abstractmethod
    def error(self, message: str, **kwargs: Any) -> None:
        """Log an error message."""

    @abstractmethod
    def critical(self, message: str, **kwargs: Any) -> None:
        """Log a critical message."""

    @abstractmethod
    def get_session_id(self) -> str:
        """Return the identifier shared by all entries of this logger instance."""
