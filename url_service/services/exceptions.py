"""Exceptions for the URL service layer.

This module contains the exception hierarchy for the service layer,
providing domain-specific exceptions that abstract underlying implementation details.
"""

from enum import Enum


class ServiceError(Exception):
    """Base exception for all service-level errors."""
    pass


class InvalidInputError(ServiceError):
    """The caller supplied input that can never succeed."""
    pass


class ValidationErrorKind(str, Enum):
    """Reasons a long URL is rejected, in the order they are checked."""
    EMPTY = "empty"
    MALFORMED = "malformed"
    UNSUPPORTED_SCHEME = "unsupported_scheme"
    MISSING_HOST = "missing_host"
    TOO_LONG = "too_long"
    SCHEME_ONLY = "scheme_only"


class URLValidationError(InvalidInputError):
    """URL failed validation checks."""

    def __init__(self, kind: ValidationErrorKind, message: str):
        self.kind = kind
        super().__init__(message)


class URLNotFoundError(ServiceError):
    """URL with the specified short code was not found."""
    pass


class URLCreationError(ServiceError):
    """Error occurred during URL creation."""
    pass


class StoreUnavailableError(ServiceError):
    """The persistence collaborator failed to answer."""
    pass
