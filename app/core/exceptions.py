"""
Custom exceptions for the PackPal backend.

Every exception carries a stable error code and the HTTP status the API
layer should answer with, so provider failures stay distinguishable from
internal errors.
"""

from typing import Optional, Dict, Any
from enum import Enum


class ErrorCode(str, Enum):
    """Standardized error codes for the application."""

    # Resource errors
    NOT_FOUND = "NOT_FOUND"
    FORBIDDEN = "FORBIDDEN"
    CONFLICT = "CONFLICT"

    # Authentication errors
    AUTHENTICATION_FAILED = "AUTHENTICATION_FAILED"

    # External provider errors
    AI_PROVIDER_ERROR = "AI_PROVIDER_ERROR"
    AI_RESPONSE_INVALID = "AI_RESPONSE_INVALID"
    WEATHER_PROVIDER_ERROR = "WEATHER_PROVIDER_ERROR"
    SERVICE_NOT_CONFIGURED = "SERVICE_NOT_CONFIGURED"

    # Generic errors
    VALIDATION_ERROR = "VALIDATION_ERROR"
    INTERNAL_SERVER_ERROR = "INTERNAL_SERVER_ERROR"


class PackPalException(Exception):
    """Base exception for the PackPal backend."""

    def __init__(
        self,
        message: str,
        error_code: ErrorCode,
        details: Optional[Dict[str, Any]] = None,
        status_code: int = 500
    ):
        super().__init__(message)
        self.message = message
        self.error_code = error_code
        self.details = details or {}
        self.status_code = status_code


class NotFoundError(PackPalException):
    """Raised when a trip, packing list, category, item or feedback is missing."""

    def __init__(self, resource: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(
            message=f"{resource} not found",
            error_code=ErrorCode.NOT_FOUND,
            details=details,
            status_code=404
        )


class ForbiddenError(PackPalException):
    """Raised when the requester does not own the resource."""

    def __init__(self, message: str = "Access denied", details: Optional[Dict[str, Any]] = None):
        super().__init__(
            message=message,
            error_code=ErrorCode.FORBIDDEN,
            details=details,
            status_code=403
        )


class ConflictError(PackPalException):
    """Raised on duplicate creation."""

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(
            message=message,
            error_code=ErrorCode.CONFLICT,
            details=details,
            status_code=409
        )


class AuthenticationError(PackPalException):
    """Raised when the session token or credentials are invalid."""

    def __init__(self, message: str = "Not authenticated"):
        super().__init__(
            message=message,
            error_code=ErrorCode.AUTHENTICATION_FAILED,
            status_code=401
        )


class ValidationFailedError(PackPalException):
    """Raised when input passes schema checks but is semantically invalid."""

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(
            message=message,
            error_code=ErrorCode.VALIDATION_ERROR,
            details=details,
            status_code=422
        )


class ExternalServiceError(PackPalException):
    """Raised when the weather or text-generation provider fails."""

    def __init__(
        self,
        service_name: str,
        message: Optional[str] = None,
        error_code: ErrorCode = ErrorCode.AI_PROVIDER_ERROR,
        details: Optional[Dict[str, Any]] = None
    ):
        super().__init__(
            message=message or f"Service '{service_name}' request failed",
            error_code=error_code,
            details={"service_name": service_name, **(details or {})},
            status_code=502
        )


class SuggestionFormatError(ExternalServiceError):
    """Raised when the provider's reply holds no valid packing-list JSON."""

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(
            service_name="gemini",
            message=message,
            error_code=ErrorCode.AI_RESPONSE_INVALID,
            details=details
        )


class ServiceNotConfiguredError(PackPalException):
    """Raised when a provider is called without an API key."""

    def __init__(self, service_name: str):
        super().__init__(
            message=f"Service '{service_name}' is not configured",
            error_code=ErrorCode.SERVICE_NOT_CONFIGURED,
            details={"service_name": service_name},
            status_code=503
        )
