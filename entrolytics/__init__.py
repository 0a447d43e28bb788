"""
Entrolytics SDK

A Python client for sending events, page views and identify calls to Entrolytics.
"""

from .client import EntrolyticsClient
from .config import DEFAULT_HOST, DEFAULT_TIMEOUT, VERSION, ClientConfig
from .events import build_identify_payload, build_page_view_payload, build_track_payload
from .exceptions import (
    AuthenticationError,
    EntrolyticsError,
    NetworkError,
    RateLimitError,
    ValidationError,
)

__version__ = VERSION

__all__ = [
    "EntrolyticsClient",
    "ClientConfig",
    "DEFAULT_HOST",
    "DEFAULT_TIMEOUT",
    "build_track_payload",
    "build_page_view_payload",
    "build_identify_payload",
    "EntrolyticsError",
    "AuthenticationError",
    "ValidationError",
    "RateLimitError",
    "NetworkError",
]
