"""
Proposal Use Case DTOs (Data Transfer Objects)

Response classes returned to anonymous link holders.
Tokens never appear in any of these.
"""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel

from src.domain.entities import Proposal, ProposalRecipient


def to_iso(value: Optional[datetime]) -> Optional[str]:
    """Serialize a naive UTC timestamp the way every response does"""
    if value is None:
        return None
    return value.isoformat() + "Z"


class ProposalInfo(BaseModel):
    """Proposal content and lifecycle state as a recipient sees it"""

    id: str
    public_id: str
    title: str
    subject: str
    content: str
    currency: str
    total_amount: Optional[int]
    status: str
    is_expired: bool
    sent_at: Optional[str]
    expires_at: Optional[str]
    accepted_at: Optional[str]
    rejected_at: Optional[str]
    rejection_reason: Optional[str]

    @classmethod
    def from_entity(cls, proposal: Proposal, now: datetime) -> "ProposalInfo":
        return cls(
            id=str(proposal.id),
            public_id=proposal.public_id,
            title=proposal.title,
            subject=proposal.subject,
            content=proposal.content,
            currency=proposal.currency,
            total_amount=proposal.total_amount,
            status=proposal.effective_status(now).value,
            is_expired=proposal.is_expired(now),
            sent_at=to_iso(proposal.sent_at),
            expires_at=to_iso(proposal.expires_at),
            accepted_at=to_iso(proposal.accepted_at),
            rejected_at=to_iso(proposal.rejected_at),
            rejection_reason=proposal.rejection_reason,
        )


class RecipientInfo(BaseModel):
    """The recipient the presented token belongs to"""

    email: str
    name: Optional[str]
    role: str
    viewed_at: Optional[str]

    @classmethod
    def from_entity(
        cls, recipient: ProposalRecipient, viewed_at: Optional[datetime] = None
    ) -> "RecipientInfo":
        return cls(
            email=recipient.email,
            name=recipient.name,
            role=recipient.role.value,
            viewed_at=to_iso(viewed_at or recipient.viewed_at),
        )


class ProposalActionResponse(BaseModel):
    """Response for view/accept/reject"""

    action: str
    message: str
    proposal: ProposalInfo
    recipient: RecipientInfo
