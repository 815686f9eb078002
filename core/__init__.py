"""Core module containing shared utilities, exceptions, and clients."""

from core.exceptions import (
    AppException,
    BadRequestError,
    ExternalServiceError,
    TimeoutError,
    InvalidArgumentError,
    PlaceNotFoundError,
    TimezoneUnresolvedError,
    EphemerisProviderError,
    IncompleteEphemerisDataError,
    IncompletePlacementsError,
    NotificationServiceError,
)

__all__ = [
    "AppException",
    "BadRequestError",
    "ExternalServiceError",
    "TimeoutError",
    "InvalidArgumentError",
    "PlaceNotFoundError",
    "TimezoneUnresolvedError",
    "EphemerisProviderError",
    "IncompleteEphemerisDataError",
    "IncompletePlacementsError",
    "NotificationServiceError",
]
