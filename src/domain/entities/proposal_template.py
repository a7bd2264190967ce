"""
ProposalTemplate Entity

Named content with {{variable}} placeholders.
"""

from datetime import datetime
from typing import List, Optional
from uuid import UUID, uuid4

from sqlmodel import JSON, Column, DateTime, Field, SQLModel, Text

from src.domain.base import utc_now


class ProposalTemplate(SQLModel, table=True):
    """
    ProposalTemplate entity - source for proposal content snapshots.

    variables holds a list of definitions:
    {"name", "label", "type", "default_value", "required", "description"}
    """

    __tablename__ = "proposal_templates"

    id: UUID = Field(default_factory=uuid4, primary_key=True)

    name: str = Field(max_length=255)
    subject: str = Field(max_length=255)
    content: str = Field(sa_column=Column(Text, nullable=False))
    variables: List[dict] = Field(default_factory=list, sa_column=Column(JSON, nullable=False))
    is_active: bool = Field(default=True)
    service_type: Optional[str] = Field(default=None, max_length=100)

    created_at: datetime = Field(default_factory=utc_now, sa_column=Column(DateTime))
    updated_at: datetime = Field(default_factory=utc_now, sa_column=Column(DateTime))
