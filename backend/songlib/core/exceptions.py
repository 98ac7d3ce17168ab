"""
Custom exception hierarchy for structured error handling.

WHAT: Every error the service raises on purpose derives from AppException,
which knows its HTTP status code and how to serialize itself.

WHY: Raising typed errors from services lets the API layer pick the
status code and response body without inspecting messages.

HOW: Exception handlers in core/exception_handlers.py turn these into JSON
responses of the form {"error", "message", "status_code", "details"}.
Context passed as keyword arguments ends up under "details".
"""

from typing import Any, Dict, Optional


class AppException(Exception):
    """
    Base exception class for all application exceptions.

    All custom exceptions should inherit from this class.
    """

    status_code: int = 500
    default_message: str = "An unexpected error occurred"

    def __init__(
        self,
        message: Optional[str] = None,
        status_code: Optional[int] = None,
        **context: Any,
    ):
        """
        Initialize exception with message and context.

        Args:
            message: Human-readable error message
            status_code: HTTP status code (overrides class default)
            **context: Additional context for debugging (filtered in to_dict)
        """
        self.message = message or self.default_message
        if status_code is not None:
            self.status_code = status_code
        self.context = context
        super().__init__(self.message)

    def to_dict(self) -> Dict[str, Any]:
        """
        Serialize exception to dictionary for JSON response.

        Returns:
            Dictionary with error details (sensitive fields filtered out)
        """
        sensitive_fields = {"password", "token", "secret", "key", "api_key"}
        filtered_context = {
            k: v for k, v in self.context.items() if k.lower() not in sensitive_fields
        }

        return {
            "error": self.__class__.__name__,
            "message": self.message,
            "status_code": self.status_code,
            "details": filtered_context if filtered_context else None,
        }


# ============================================================================
# Validation & Input Exceptions
# ============================================================================


class ValidationError(AppException):
    """
    Raised when input validation fails.

    HTTP Status: 400 Bad Request
    """

    status_code = 400
    default_message = "Validation failed"


class InvalidArgumentError(ValidationError):
    """
    Raised when a pagination argument is malformed or out of range.

    The offending parameter is always named in the context so the caller
    can tell "page" and "limit" failures apart.

    HTTP Status: 400 Bad Request
    """

    default_message = "Invalid argument"

    def __init__(self, parameter: str, value: Any = None, message: Optional[str] = None):
        super().__init__(
            message=message or f"invalid {parameter} number",
            parameter=parameter,
            value=value,
        )
        self.parameter = parameter


# ============================================================================
# Resource Exceptions
# ============================================================================


class ResourceNotFoundError(AppException):
    """
    Raised when a requested resource doesn't exist.

    HTTP Status: 404 Not Found
    """

    status_code = 404
    default_message = "Resource not found"


class SongNotFoundError(ResourceNotFoundError):
    """Raised when a song doesn't exist."""

    default_message = "Song not found"

    def __init__(self, song_id: Any, message: Optional[str] = None):
        super().__init__(message=message, song_id=song_id)
        self.song_id = song_id


# ============================================================================
# Storage Exceptions
# ============================================================================


class StorageError(AppException):
    """
    Raised when the song store fails for any reason other than a missing row.

    The DAO layer wraps SQLAlchemy errors in this class so no SQL or driver
    detail reaches the API response. The original exception is chained as
    __cause__ for logging.

    HTTP Status: 500 Internal Server Error
    """

    status_code = 500
    default_message = "Storage operation failed"


# ============================================================================
# External Service Exceptions
# ============================================================================


class ExternalServiceError(AppException):
    """
    Base exception for external service failures.

    HTTP Status: 502 Bad Gateway
    """

    status_code = 502
    default_message = "External service error"


class SongDetailsUnavailableError(ExternalServiceError):
    """
    Raised when the song details API can't enrich a new song.

    When the upstream answered with an error status, that status is
    propagated as this exception's status code.

    HTTP Status: 502 Bad Gateway (or the upstream status)
    """

    default_message = "External API returned an error"
