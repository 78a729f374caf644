"""Exceptions for the URL shortener service layer.

This module contains the exception hierarchy for the service layer,
providing domain-specific exceptions that abstract underlying implementation details.
"""


class ServiceError(Exception):
    """Base exception for all service-level errors."""
    pass


class URLError(ServiceError):
    """Base exception for URL-related errors."""
    pass


class URLValidationError(URLError):
    """URL failed validation checks."""
    pass


class InvalidURLError(URLValidationError):
    """The URL format is invalid."""
    pass


class URLCreationError(URLError):
    """Error occurred during URL creation."""
    pass


class ShortCodeGenerationError(URLCreationError):
    """Every generated short code was already taken."""
    pass


class ShortCodeConflictError(URLCreationError):
    """Inserts kept losing short code races with concurrent requests."""
    pass


class URLNotFoundError(URLError):
    """No URL matches the given short code or id."""
    pass


class URLOwnershipError(URLError):
    """The requesting user does not own the URL."""
    pass


class URLDeletionError(URLError):
    """The store failed while deleting a URL."""
    pass
