"""Admin use cases for the internal proposal workflow."""

from .create_proposal_use_case import CreateProposalUseCase
from .create_template_use_case import CreateTemplateUseCase
from .dtos import (
    CreateProposalCommand,
    CreateProposalResponse,
    CreateTemplateCommand,
    ExpireProposalsResponse,
    IssuedRecipientLink,
    ProposalDetailResponse,
    RecipientInput,
    RecipientSummary,
    SendProposalResponse,
    TemplateResponse,
    TemplateVariable,
)
from .expire_proposals_use_case import ExpireProposalsUseCase
from .get_proposal_use_case import GetProposalUseCase
from .get_template_use_case import GetTemplateUseCase
from .send_proposal_use_case import SendProposalUseCase

__all__ = [
    "CreateTemplateUseCase",
    "GetTemplateUseCase",
    "CreateProposalUseCase",
    "SendProposalUseCase",
    "ExpireProposalsUseCase",
    "GetProposalUseCase",
    "TemplateVariable",
    "CreateTemplateCommand",
    "TemplateResponse",
    "RecipientInput",
    "CreateProposalCommand",
    "CreateProposalResponse",
    "IssuedRecipientLink",
    "SendProposalResponse",
    "RecipientSummary",
    "ProposalDetailResponse",
    "ExpireProposalsResponse",
]
