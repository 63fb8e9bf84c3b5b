"""
Wetrocloud Client Exceptions

Exception hierarchy for the Wetrocloud API client. Every failure raised by
the client derives from WetrocloudError so callers can catch it in one place.
"""

from typing import Optional


class WetrocloudError(Exception):
    """Base exception for Wetrocloud client errors."""

    def __init__(self, message: str):
        self.message = message
        super().__init__(message)


class ConfigurationError(WetrocloudError):
    """Raised when the client configuration is invalid or missing."""

    pass


class TransportFailure(WetrocloudError):
    """Raised when the HTTP transport could not complete a request."""

    pass


class ResponseShapeError(WetrocloudError):
    """Raised when a response body is not a JSON object."""

    def __init__(self, message: str, body: str, status_code: Optional[int] = None):
        self.body = body
        self.status_code = status_code
        super().__init__(message)


class EncodingError(WetrocloudError):
    """Raised when an input value cannot be JSON-encoded before sending."""

    pass


class InvalidRequestError(WetrocloudError):
    """Raised when operation input is rejected before any request is made."""

    pass
