"""
ProposalRecipient Entity

Holder of one access token for one proposal.
"""

from datetime import datetime
from typing import Optional
from uuid import UUID, uuid4

from sqlmodel import Column, DateTime, Field, Index, SQLModel

from src.domain.base import utc_now

from .enums import RecipientRole


class ProposalRecipient(SQLModel, table=True):
    """
    ProposalRecipient entity - capability binding of a token to a proposal.

    Business Rules:
    - token stores the SHA-256 digest of the issued bearer token
    - token is unique across all recipients of all proposals
    - viewed_at is first-write-wins
    """

    __tablename__ = "proposal_recipients"

    id: UUID = Field(default_factory=uuid4, primary_key=True)

    proposal_id: UUID = Field(foreign_key="proposals.id", nullable=False, index=True)
    email: str = Field(max_length=255, nullable=False)
    name: Optional[str] = Field(default=None, max_length=255)
    role: RecipientRole = Field(default=RecipientRole.primary)

    token: str = Field(unique=True, index=True, max_length=64)  # SHA-256 hash

    # Timestamps
    viewed_at: Optional[datetime] = Field(default=None, sa_column=Column(DateTime))
    created_at: datetime = Field(default_factory=utc_now, sa_column=Column(DateTime))

    __table_args__ = (
        Index("idx_recipient_proposal_token", "proposal_id", "token"),
    )
