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


class URLCreationError(URLError):
    """Error occurred during URL creation."""
    pass


class ShortUrlGenerationError(URLCreationError):
    """Every attempt to claim a fresh short identifier hit a conflict."""
    pass


class URLNotFoundError(URLError):
    """No URL is stored under the requested short identifier."""
    pass


class URLLookupError(URLError):
    """The store failed while resolving a short identifier."""
    pass


class MaintenanceError(ServiceError):
    """Error occurred while running an operator maintenance task."""
    pass
