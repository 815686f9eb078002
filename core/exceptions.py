"""
Custom exception hierarchy for the application.

All exceptions inherit from AppException, which provides a consistent structure
for error responses. Domain-specific exceptions should inherit from the
appropriate base exception (BadRequestError, ExternalServiceError, etc.).

Usage:
    raise PlaceNotFoundError()
    raise PlaceNotFoundError("Custom message")
    raise PlaceNotFoundError(details={"attempted": ["Paris, France", "Paris"]})
"""

from typing import Any, Optional


class AppException(Exception):
    """
    Base application exception.

    All custom exceptions should inherit from this class.
    The exception handler will convert these to consistent JSON responses.

    Attributes:
        status_code: HTTP status code to return
        error_code: Machine-readable error identifier
        message: Human-readable error message
        details: Additional error context (optional)
    """

    status_code: int = 500
    error_code: str = "internal_error"
    message: str = "An unexpected error occurred"

    def __init__(
        self,
        message: Optional[str] = None,
        details: Optional[Any] = None,
    ):
        self.message = message or self.__class__.message
        self.details = details
        super().__init__(self.message)


# Base HTTP Exceptions

class BadRequestError(AppException):
    """Bad request (400)."""
    status_code = 400
    error_code = "bad_request"
    message = "Bad request"


class ExternalServiceError(AppException):
    """External service unavailable (502)."""
    status_code = 502
    error_code = "external_service_error"
    message = "External service unavailable"


class TimeoutError(AppException):
    """Request timed out (504)."""
    status_code = 504
    error_code = "timeout"
    message = "Request timed out"


# Domain-Specific Exceptions

class InvalidArgumentError(BadRequestError):
    """Malformed birth data or a non-finite degree."""
    error_code = "invalid_argument"
    message = "Invalid argument"


class PlaceNotFoundError(BadRequestError):
    """Every birthplace candidate query came back empty."""
    error_code = "place_not_found"
    message = "Birthplace not found"


class TimezoneUnresolvedError(ExternalServiceError):
    """Timezone provider returned no usable offset."""
    error_code = "timezone_unresolved"
    message = "Timezone lookup failed (no timezone returned)"


class EphemerisProviderError(ExternalServiceError):
    """Error from the ephemeris calculation API."""
    error_code = "ephemeris_provider_error"
    message = "Error calculating planetary positions"


class IncompleteEphemerisDataError(ExternalServiceError):
    """Ephemeris response lacks a value the chart depends on."""
    error_code = "incomplete_ephemeris_data"
    message = "Ephemeris response is missing required data"


class IncompletePlacementsError(ExternalServiceError):
    """Sun, Moon or Rising could not be determined."""
    error_code = "incomplete_placements"
    message = "Could not extract Sun/Moon/Rising from ephemeris responses"


class NotificationServiceError(ExternalServiceError):
    """Contact could not be created in the mailing service."""
    error_code = "notification_service_error"
    message = "Contact service error"
