"""
Client configuration for the Entrolytics API.
"""

import os
from typing import Dict, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from .exceptions import AuthenticationError, EntrolyticsError

VERSION = "1.1.0"
DEFAULT_HOST = "https://entrolytics.click"
DEFAULT_TIMEOUT = 10.0
SEND_PATH = "/api/send"
USER_AGENT = f"entrolytics-python/{VERSION}"


class ClientConfig(BaseModel):
    """Immutable settings shared by every request of a client."""

    model_config = ConfigDict(frozen=True)

    api_key: str = Field(repr=False)
    host: str = DEFAULT_HOST
    timeout: float = DEFAULT_TIMEOUT

    @field_validator('host')
    @classmethod
    def strip_trailing_slash(cls, v):
        return v.rstrip('/')

    @field_validator('timeout')
    @classmethod
    def validate_timeout(cls, v):
        if v <= 0:
            raise ValueError('timeout must be positive')
        return v

    @classmethod
    def create(cls, api_key: str, host: Optional[str] = None,
               timeout: Optional[float] = None) -> "ClientConfig":
        """
        Build a config, rejecting a missing API key before anything else.

        Args:
            api_key: Entrolytics API key
            host: API base URL, defaults to DEFAULT_HOST
            timeout: Request timeout in seconds, defaults to DEFAULT_TIMEOUT

        Raises:
            AuthenticationError: if the API key is empty or blank
            EntrolyticsError: if host or timeout are invalid
        """
        if not api_key or not str(api_key).strip():
            raise AuthenticationError("API key is required")

        options = {}
        if host is not None:
            options['host'] = host
        if timeout is not None:
            options['timeout'] = timeout

        try:
            return cls(api_key=api_key, **options)
        except ValueError as e:
            # pydantic's ValidationError subclasses ValueError
            raise EntrolyticsError(f"Invalid client configuration: {e}") from e

    @classmethod
    def from_env(cls) -> "ClientConfig":
        """Build a config from ENTROLYTICS_* environment variables."""
        timeout = os.getenv("ENTROLYTICS_TIMEOUT")
        if timeout is not None:
            try:
                timeout = float(timeout)
            except ValueError as e:
                raise EntrolyticsError(
                    f"ENTROLYTICS_TIMEOUT must be a number, got {timeout!r}"
                ) from e
        return cls.create(
            api_key=os.getenv("ENTROLYTICS_API_KEY", ""),
            host=os.getenv("ENTROLYTICS_HOST"),
            timeout=timeout,
        )

    @property
    def send_url(self) -> str:
        return f"{self.host}{SEND_PATH}"

    def headers(self) -> Dict[str, str]:
        """Headers sent with every request."""
        return {
            'Authorization': f'Bearer {self.api_key}',
            'Content-Type': 'application/json',
            'User-Agent': USER_AGENT,
        }
