"""
Admin Use Case DTOs (Data Transfer Objects)

Command and Response classes for the internal proposal workflow:
templates, drafts, issuance and the expiry sweep.
"""

from datetime import datetime
from typing import Any, Dict, List, Literal, Optional
from uuid import UUID

from pydantic import BaseModel, EmailStr, Field

from src.domain.entities import RecipientRole


# ============================================================================
# Command DTOs
# ============================================================================


class TemplateVariable(BaseModel):
    """Placeholder definition on a template"""

    name: str = Field(..., min_length=1, max_length=100, pattern=r"^[A-Za-z_][A-Za-z0-9_]*$")
    label: str = Field(..., min_length=1, max_length=255)
    type: Literal["text", "number", "date", "currency"] = "text"
    default_value: Optional[str] = None
    required: bool = False
    description: Optional[str] = None


class CreateTemplateCommand(BaseModel):
    """Create template command"""

    name: str = Field(..., min_length=1, max_length=255)
    subject: str = Field(..., min_length=1, max_length=255)
    content: str = Field(..., min_length=1)
    variables: List[TemplateVariable] = Field(default_factory=list)
    service_type: Optional[str] = Field(None, max_length=100)
    is_active: bool = True


class RecipientInput(BaseModel):
    """One recipient of a new proposal"""

    email: EmailStr
    name: Optional[str] = Field(None, max_length=255)
    role: RecipientRole = RecipientRole.primary


class CreateProposalCommand(BaseModel):
    """
    Create proposal command

    Either template_id (with variables) or literal subject + content.
    """

    title: str = Field(..., min_length=1, max_length=255)
    template_id: Optional[UUID] = None
    variables: Dict[str, Any] = Field(default_factory=dict)
    subject: Optional[str] = Field(None, max_length=255)
    content: Optional[str] = None
    currency: str = Field("usd", min_length=3, max_length=3)
    total_amount: Optional[int] = Field(None, ge=0)
    expires_at: Optional[datetime] = None
    recipients: List[RecipientInput] = Field(..., min_length=1)


# ============================================================================
# Response DTOs
# ============================================================================


class TemplateResponse(BaseModel):
    """Template as stored"""

    id: str
    name: str
    subject: str
    content: str
    variables: List[Dict[str, Any]]
    service_type: Optional[str]
    is_active: bool
    updated_at: str


class CreateProposalResponse(BaseModel):
    """Response for create proposal use case"""

    id: str
    public_id: str
    status: str
    recipients_count: int


class IssuedRecipientLink(BaseModel):
    """
    Links for one recipient, returned only by send.

    This is the only response that ever carries a plaintext token.
    """

    email: str
    name: Optional[str]
    role: str
    token: str
    view_url: str
    accept_url: str
    reject_url: str


class SendProposalResponse(BaseModel):
    """Response for send proposal use case"""

    id: str
    public_id: str
    status: str
    sent_at: str
    expires_at: Optional[str]
    recipients: List[IssuedRecipientLink]


class RecipientSummary(BaseModel):
    """Recipient without its token"""

    id: str
    email: str
    name: Optional[str]
    role: str
    viewed_at: Optional[str]


class ProposalDetailResponse(BaseModel):
    """Proposal with recipients for internal readers"""

    id: str
    public_id: str
    title: str
    subject: str
    content: str
    currency: str
    total_amount: Optional[int]
    status: str
    stored_status: str
    sent_at: Optional[str]
    expires_at: Optional[str]
    accepted_at: Optional[str]
    rejected_at: Optional[str]
    rejection_reason: Optional[str]
    created_at: str
    recipients: List[RecipientSummary]


class ExpireProposalsResponse(BaseModel):
    """Response for expiry sweep"""

    expired_count: int
    proposal_ids: List[str]
