"""
Core infrastructure for the PackPal backend: database session, security,
error handling and logging.
"""

from .exceptions import (
    ErrorCode,
    PackPalException,
    NotFoundError,
    ForbiddenError,
    ConflictError,
    AuthenticationError,
    ValidationFailedError,
    ExternalServiceError,
    SuggestionFormatError,
    ServiceNotConfiguredError,
)

__all__ = [
    "ErrorCode",
    "PackPalException",
    "NotFoundError",
    "ForbiddenError",
    "ConflictError",
    "AuthenticationError",
    "ValidationFailedError",
    "ExternalServiceError",
    "SuggestionFormatError",
    "ServiceNotConfiguredError",
]
