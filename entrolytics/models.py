"""
Pydantic models for the Entrolytics wire format.
"""

from typing import Any, Dict, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field

# Ids are forwarded as given; integers are not coerced to strings.
Identifier = Union[str, int]


class EventBody(BaseModel):
    """Inner payload of a custom event or page view."""
    model_config = ConfigDict(populate_by_name=True)

    website: Identifier
    name: Identifier
    data: Dict[str, Any] = Field(default_factory=dict)
    url: Optional[str] = None
    referrer: Optional[str] = None
    timestamp: str
    user_id: Optional[Identifier] = Field(default=None, alias="userId")
    session_id: Optional[Identifier] = Field(default=None, alias="sessionId")

    def to_dict(self) -> Dict[str, Any]:
        data = self.model_dump(by_alias=True)
        # userId/sessionId are omitted, url/referrer are sent as null
        for key in ("userId", "sessionId"):
            if data[key] is None:
                del data[key]
        return data


class IdentifyBody(BaseModel):
    """Inner payload of an identify call."""
    model_config = ConfigDict(populate_by_name=True)

    website: Identifier
    user_id: Identifier = Field(alias="userId")
    traits: Dict[str, Any] = Field(default_factory=dict)
    timestamp: str

    def to_dict(self) -> Dict[str, Any]:
        return self.model_dump(by_alias=True)


class EventPayload(BaseModel):
    """Envelope for track and page view requests."""
    type: Literal["event"] = "event"
    payload: EventBody

    def to_dict(self) -> Dict[str, Any]:
        return {'type': self.type, 'payload': self.payload.to_dict()}


class IdentifyPayload(BaseModel):
    """Envelope for identify requests."""
    type: Literal["identify"] = "identify"
    payload: IdentifyBody

    def to_dict(self) -> Dict[str, Any]:
        return {'type': self.type, 'payload': self.payload.to_dict()}
