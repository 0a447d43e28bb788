"""
HTTP client for sending events to the Entrolytics API.
"""

import logging
from typing import Any, Dict, Optional

import requests

from .config import ClientConfig
from .events import build_identify_payload, build_page_view_payload, build_track_payload
from .exceptions import (
    AuthenticationError,
    EntrolyticsError,
    NetworkError,
    RateLimitError,
    ValidationError,
)

logger = logging.getLogger(__name__)

SUCCESS_STATUSES = (200, 201)


class EntrolyticsClient:
    """
    Client for sending events to the Entrolytics API.

    Every public call is a single POST to ``/api/send``. It returns True on
    success and raises an EntrolyticsError subclass otherwise; nothing is
    retried.

    Example:
        client = EntrolyticsClient("ent_xxx")
        client.track(website_id="abc123", event="purchase", data={"revenue": 99.99})
    """

    def __init__(self, api_key: str, host: Optional[str] = None,
                 timeout: Optional[float] = None,
                 session: Optional[requests.Session] = None):
        """
        Initialize the client.

        Args:
            api_key: Entrolytics API key
            host: API base URL, defaults to https://entrolytics.click
            timeout: Request timeout in seconds, defaults to 10
            session: Session used for requests, a new one is created if omitted

        Raises:
            AuthenticationError: if api_key is empty
        """
        self.config = ClientConfig.create(api_key, host=host, timeout=timeout)

        # Auth headers go on each request, never onto a caller-owned session
        self.session = session if session is not None else requests.Session()

    @classmethod
    def from_env(cls, session: Optional[requests.Session] = None) -> "EntrolyticsClient":
        """Create a client from ENTROLYTICS_API_KEY, ENTROLYTICS_HOST and ENTROLYTICS_TIMEOUT."""
        config = ClientConfig.from_env()
        return cls(config.api_key, host=config.host, timeout=config.timeout, session=session)

    @property
    def host(self) -> str:
        return self.config.host

    @property
    def timeout(self) -> float:
        return self.config.timeout

    def track(self, **params: Any) -> bool:
        """
        Track a custom event.

        Accepts the keyword arguments of build_track_payload: website_id,
        event, data, url, referrer, user_id, session_id, user_agent and
        ip_address.

        Returns:
            True on success

        Raises:
            EntrolyticsError: or one of its subclasses on failure
        """
        payload, headers = build_track_payload(**params)
        return self._send(payload, headers)

    def page_view(self, **params: Any) -> bool:
        """
        Track a page view.

        Accepts website_id, url, referrer, title, user_id, session_id,
        user_agent and ip_address.
        """
        payload, headers = build_page_view_payload(**params)
        return self._send(payload, headers)

    def identify(self, **params: Any) -> bool:
        """Identify a user with website_id, user_id and optional traits."""
        payload, headers = build_identify_payload(**params)
        return self._send(payload, headers)

    def close(self) -> None:
        self.session.close()

    def __enter__(self) -> "EntrolyticsClient":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()

    def _send(self, payload: Dict[str, Any], headers: Optional[Dict[str, str]] = None) -> bool:
        """Send payload to the API, raising a typed error on failure."""
        request_headers = self.config.headers()
        request_headers.update(headers or {})

        try:
            response = self.session.post(
                self.config.send_url,
                json=payload,
                headers=request_headers,
                timeout=self.config.timeout
            )
        except requests.RequestException as e:
            if e.response is None:
                logger.error(f"Request failed: {e}")
                raise NetworkError(f"Request failed: {e}", e) from e
            response = e.response

        if response.status_code in SUCCESS_STATUSES:
            logger.info(f"Event sent successfully: {payload.get('type')}")
            return True

        logger.warning(f"Failed to send event: {response.status_code}")
        raise _classify(response)


def _classify(response: requests.Response) -> EntrolyticsError:
    """Map a non-success response to the matching error."""
    status_code = response.status_code

    if status_code == 401:
        return AuthenticationError(status_code=401)
    if status_code == 400:
        return ValidationError(_error_message(response) or "Invalid request", 400)
    if status_code == 429:
        return RateLimitError("Rate limit exceeded", _retry_after(response))
    return EntrolyticsError(f"Request failed with status {status_code}", status_code)


def _error_message(response: requests.Response) -> Optional[str]:
    """Extract the "error" field from a JSON response body."""
    try:
        data = response.json()
    except ValueError:
        return None
    if isinstance(data, dict) and data.get('error'):
        return str(data['error'])
    return None


def _retry_after(response: requests.Response) -> Optional[int]:
    value = response.headers.get('Retry-After')
    if not value:
        return None
    try:
        return int(value)
    except ValueError:
        return None
