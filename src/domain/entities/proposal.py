"""
Proposal Entity

Business proposal sent to external recipients.
"""

from datetime import datetime
from typing import Optional
from uuid import UUID

from sqlmodel import Column, DateTime, Field, Index, SQLModel, Text

from src.domain.base import utc_now

from .enums import ProposalStatus


class Proposal(SQLModel, table=True):
    """
    Proposal entity - content snapshot plus lifecycle state.

    Business Rules:
    - id is issued by TokenIssuer and is what recipient links carry
    - public_id (PR-<year>-<seq>) is a human reference only, never authorization
    - content is a snapshot rendered at creation; template edits never reach it
    - accepted/rejected are terminal; accepted_at/rejected_at never change once set
    - Never hard-deleted
    """

    __tablename__ = "proposals"

    id: UUID = Field(primary_key=True)
    public_id: str = Field(unique=True, index=True, max_length=32)

    template_id: Optional[UUID] = Field(default=None, foreign_key="proposal_templates.id")

    title: str = Field(max_length=255)
    subject: str = Field(max_length=255)
    content: str = Field(sa_column=Column(Text, nullable=False))

    currency: str = Field(default="usd", max_length=3)
    total_amount: Optional[int] = Field(default=None)  # minor units (cents)

    status: ProposalStatus = Field(default=ProposalStatus.draft)
    rejection_reason: Optional[str] = Field(default=None, sa_column=Column(Text))

    # Timestamps
    sent_at: Optional[datetime] = Field(default=None, sa_column=Column(DateTime))
    expires_at: Optional[datetime] = Field(default=None, sa_column=Column(DateTime))
    accepted_at: Optional[datetime] = Field(default=None, sa_column=Column(DateTime))
    rejected_at: Optional[datetime] = Field(default=None, sa_column=Column(DateTime))
    created_at: datetime = Field(default_factory=utc_now, sa_column=Column(DateTime))
    updated_at: datetime = Field(default_factory=utc_now, sa_column=Column(DateTime))

    __table_args__ = (
        Index("idx_proposal_status", "status"),
        Index("idx_proposal_expires_at", "expires_at"),
    )

    def is_expired(self, now: datetime) -> bool:
        if self.status == ProposalStatus.expired:
            return True
        return self.expires_at is not None and now > self.expires_at

    def effective_status(self, now: datetime) -> ProposalStatus:
        """Status as a reader should see it, with lazy expiry applied."""
        if self.status.is_terminal:
            return self.status
        if self.is_expired(now):
            return ProposalStatus.expired
        return self.status
