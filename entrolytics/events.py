"""
Payload builders for the Entrolytics SDK.

Each builder validates its required fields, shapes the JSON body sent to
``/api/send`` and derives the optional forwarding headers. Builders are pure
apart from reading the clock for the timestamp, and never touch the network.

Presence checks use truthiness: ``None``, ``""``, ``0``, ``False`` and empty
containers all count as missing. A ``website_id`` of ``0`` is therefore
rejected, matching the other Entrolytics clients.
"""

import json
import logging
from datetime import datetime
from typing import Any, Dict, Optional, Tuple

from pydantic import ValidationError as PydanticValidationError
from pydantic_core import PydanticSerializationError, to_jsonable_python

from .exceptions import ValidationError
from .models import EventBody, EventPayload, IdentifyBody, IdentifyPayload

logger = logging.getLogger(__name__)

PAGEVIEW_EVENT = "$pageview"

Payload = Dict[str, Any]
Headers = Dict[str, str]


def _timestamp() -> str:
    """Current local time as ISO-8601 with UTC offset."""
    return datetime.now().astimezone().isoformat(timespec='seconds')


def _require(**fields: Any) -> None:
    # Checked in keyword order, so the first missing field wins.
    for name, value in fields.items():
        if not value:
            raise ValidationError(f"{name} is required")


def _encode(payload: Payload) -> Payload:
    """Return payload as plain JSON types, rejecting values JSON cannot carry."""
    try:
        encoded = json.dumps(payload, allow_nan=False, default=to_jsonable_python)
    except (TypeError, ValueError, PydanticSerializationError) as e:
        raise ValidationError(f"Payload is not JSON serializable: {e}") from e
    return json.loads(encoded)


def _forwarded_headers(user_agent: Optional[str], ip_address: Optional[str]) -> Headers:
    headers = {}
    if user_agent:
        headers['X-Forwarded-User-Agent'] = user_agent
    if ip_address:
        headers['X-Forwarded-For'] = ip_address
    return headers


def _event_payload(website_id, name, data, url, referrer, user_id, session_id) -> Payload:
    body = {
        'website': website_id,
        'name': name,
        'data': data,
        'url': url,
        'referrer': referrer,
        'timestamp': _timestamp(),
    }
    if user_id:
        body['user_id'] = user_id
    if session_id:
        body['session_id'] = session_id

    try:
        payload = EventPayload(payload=EventBody(**body))
    except PydanticValidationError as e:
        raise ValidationError(f"Invalid event payload: {e}") from e
    return _encode(payload.to_dict())


def build_track_payload(website_id: Optional[str] = None,
                        event: Optional[str] = None,
                        data: Optional[Dict[str, Any]] = None,
                        url: Optional[str] = None,
                        referrer: Optional[str] = None,
                        user_id: Optional[str] = None,
                        session_id: Optional[str] = None,
                        user_agent: Optional[str] = None,
                        ip_address: Optional[str] = None) -> Tuple[Payload, Headers]:
    """
    Build the request for a custom event.

    Args:
        website_id: Website the event belongs to
        event: Event name, sent verbatim as ``name``
        data: Arbitrary event properties
        url: Page URL the event happened on
        referrer: Referring URL
        user_id: Identified user, sent as ``userId``
        session_id: Session, sent as ``sessionId``
        user_agent: Forwarded as ``X-Forwarded-User-Agent``
        ip_address: Forwarded as ``X-Forwarded-For``

    Returns:
        (payload, headers) tuple

    Raises:
        ValidationError: if website_id or event is missing
    """
    _require(website_id=website_id, event=event)

    payload = _event_payload(
        website_id, event, data if data is not None else {},
        url, referrer, user_id, session_id,
    )
    logger.debug(f"Built track payload for event {event!r}")
    return payload, _forwarded_headers(user_agent, ip_address)


def build_page_view_payload(website_id: Optional[str] = None,
                            url: Optional[str] = None,
                            referrer: Optional[str] = None,
                            title: Optional[str] = None,
                            user_id: Optional[str] = None,
                            session_id: Optional[str] = None,
                            user_agent: Optional[str] = None,
                            ip_address: Optional[str] = None) -> Tuple[Payload, Headers]:
    """
    Build the request for a page view.

    The event name is always ``$pageview``; ``title`` ends up in ``data``.

    Raises:
        ValidationError: if website_id or url is missing
    """
    _require(website_id=website_id, url=url)

    data = {}
    if title:
        data['title'] = title

    payload = _event_payload(
        website_id, PAGEVIEW_EVENT, data, url, referrer, user_id, session_id,
    )
    logger.debug(f"Built page view payload for {url}")
    return payload, _forwarded_headers(user_agent, ip_address)


def build_identify_payload(website_id: Optional[str] = None,
                           user_id: Optional[str] = None,
                           traits: Optional[Dict[str, Any]] = None) -> Tuple[Payload, Headers]:
    """
    Build the request for identifying a user.

    Identify never forwards user agent or IP headers.

    Raises:
        ValidationError: if website_id or user_id is missing
    """
    _require(website_id=website_id, user_id=user_id)

    try:
        body = IdentifyBody(
            website=website_id,
            user_id=user_id,
            traits=traits if traits is not None else {},
            timestamp=_timestamp(),
        )
    except PydanticValidationError as e:
        raise ValidationError(f"Invalid identify payload: {e}") from e

    logger.debug("Built identify payload")
    return _encode(IdentifyPayload(payload=body).to_dict()), {}
