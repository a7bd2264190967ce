"""
Typed Event Payloads

ProposalEvent.details is stored as JSON, but every payload written by the
service is one of the variants below, tagged by event_type.
"""

from datetime import datetime
from typing import Annotated, Literal, Optional, Union
from uuid import UUID

from pydantic import BaseModel, Field, TypeAdapter


class ActorContext(BaseModel):
    """Who triggered an event and from where"""

    ip_address: Optional[str] = None
    user_agent: Optional[str] = None
    user_email: Optional[str] = None
    user_id: Optional[UUID] = None


class CreatedDetails(BaseModel):
    event_type: Literal["created"] = "created"
    public_id: str
    template_id: Optional[UUID] = None
    recipients_count: int


class SentDetails(BaseModel):
    event_type: Literal["sent"] = "sent"
    recipients_count: int
    expires_at: Optional[datetime] = None


class ViewDetails(BaseModel):
    event_type: Literal["view"] = "view"
    recipient_id: UUID
    recipient_email: str
    recipient_name: Optional[str] = None
    first_view: bool


class AcceptDetails(BaseModel):
    event_type: Literal["accept"] = "accept"
    recipient_id: UUID
    recipient_email: str
    recipient_name: Optional[str] = None


class RejectDetails(BaseModel):
    event_type: Literal["reject"] = "reject"
    recipient_id: UUID
    recipient_email: str
    recipient_name: Optional[str] = None
    rejection_reason: Optional[str] = None


class ExpiredDetails(BaseModel):
    event_type: Literal["expired"] = "expired"
    expires_at: datetime
    previous_status: str


EventDetails = Annotated[
    Union[
        CreatedDetails,
        SentDetails,
        ViewDetails,
        AcceptDetails,
        RejectDetails,
        ExpiredDetails,
    ],
    Field(discriminator="event_type"),
]

_event_details_adapter = TypeAdapter(EventDetails)


def parse_event_details(data: dict) -> EventDetails:
    """Rebuild the typed payload from a stored details dict."""
    return _event_details_adapter.validate_python(data)
