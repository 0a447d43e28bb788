"""
Exceptions raised by the Entrolytics client.
"""

from typing import Optional


class EntrolyticsError(Exception):
    """Base exception for the Entrolytics client."""

    def __init__(self, message: str = "Entrolytics request failed",
                 status_code: Optional[int] = None):
        super().__init__(message)
        self.message = message
        self.status_code = status_code


class AuthenticationError(EntrolyticsError):
    """Raised when the API key is missing or rejected."""

    def __init__(self, message: str = "Invalid API key",
                 status_code: Optional[int] = None):
        super().__init__(message, status_code)


class ValidationError(EntrolyticsError):
    """Raised when a required field is missing or the API rejects the request."""
    pass


class RateLimitError(EntrolyticsError):
    """Raised when the API answers 429."""

    def __init__(self, message: str = "Rate limit exceeded",
                 retry_after: Optional[int] = None):
        super().__init__(message, 429)
        self.retry_after = retry_after


class NetworkError(EntrolyticsError):
    """Raised when no response was received from the API."""

    def __init__(self, message: str, cause: Optional[BaseException] = None):
        super().__init__(message)
        self.cause = cause
