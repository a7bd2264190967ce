"""
Use Cases

Organized by caller:
- proposals/: Anonymous link holders (view, accept, reject)
- admin/: Internal sender tooling (templates, drafts, send, expiry sweep)
- audit/: Proposal event timeline

Import from subdirectories for better organization.
"""

from .proposals import (
    ProposalAccessGate,
    ProposalActionResponse,
)
from .admin import (
    CreateTemplateUseCase,
    CreateProposalUseCase,
    SendProposalUseCase,
    ExpireProposalsUseCase,
)
from .audit import (
    GetProposalEventsUseCase,
)

__all__ = [
    # Proposals
    "ProposalAccessGate",
    "ProposalActionResponse",
    # Admin
    "CreateTemplateUseCase",
    "CreateProposalUseCase",
    "SendProposalUseCase",
    "ExpireProposalsUseCase",
    # Audit
    "GetProposalEventsUseCase",
]
