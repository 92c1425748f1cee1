"""
Custom exceptions for the compression layer.

Only configuration problems are raised by this package. Failures of the
downstream application or of the codecs propagate unchanged.
"""
from typing import Optional, Dict, Any


class CompressionError(Exception):
    """Base exception for all compression-related errors."""

    def __init__(
        self,
        message: str,
        *,
        context: Optional[Dict[str, Any]] = None,
        original_exception: Optional[Exception] = None
    ) -> None:
        """Initialize the exception.

        Args:
            message: Human-readable error message
            context: Additional context about the error
            original_exception: The original exception that caused this error
        """
        super().__init__(message)
        self.context = context or {}
        self.original_exception = original_exception


class ConfigurationError(CompressionError):
    """Raised when the middleware or settings are configured with invalid values."""
    pass


class UnsupportedAlgorithmError(CompressionError):
    """Raised when an algorithm has no codec or a token is not recognized."""
    pass
