"""
ProposalEvent Entity

Immutable audit trail of proposal lifecycle actions.
"""

from datetime import datetime
from typing import Optional
from uuid import UUID, uuid4

from sqlmodel import JSON, Column, DateTime, Field, Index, SQLModel

from src.domain.base import utc_now

from .enums import ProposalEventType


class ProposalEvent(SQLModel, table=True):
    """
    ProposalEvent entity - append-only log row.

    Business Rules:
    - Immutable (never updated or deleted)
    - Written only for actions that were actually applied
    - details holds the typed payload for event_type (see event_details)
    """

    __tablename__ = "proposal_events"

    id: UUID = Field(default_factory=uuid4, primary_key=True)

    proposal_id: UUID = Field(foreign_key="proposals.id", nullable=False)
    event_type: ProposalEventType = Field(nullable=False)

    user_id: Optional[UUID] = Field(default=None)
    user_email: Optional[str] = Field(default=None, max_length=255)
    ip_address: Optional[str] = Field(default=None, max_length=64)
    user_agent: Optional[str] = Field(default=None, max_length=512)

    details: dict = Field(default_factory=dict, sa_column=Column(JSON, nullable=False))

    created_at: datetime = Field(default_factory=utc_now, sa_column=Column(DateTime))

    __table_args__ = (
        Index("idx_event_proposal_created_at", "proposal_id", "created_at"),
        Index("idx_event_type", "event_type"),
    )
