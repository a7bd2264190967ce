"""
Proposal Access Use Cases

Everything an anonymous link holder can do with a proposal.
"""

from .access_gate import ProposalAccessGate
from .dtos import ProposalActionResponse, ProposalInfo, RecipientInfo
from .errors import ACCESS_DENIED, ALREADY_RESOLVED, PROPOSAL_EXPIRED, VALIDATION_ERROR
from .response_recorder import ResponseRecorder

__all__ = [
    "ProposalAccessGate",
    "ResponseRecorder",
    "ProposalActionResponse",
    "ProposalInfo",
    "RecipientInfo",
    "ACCESS_DENIED",
    "ALREADY_RESOLVED",
    "PROPOSAL_EXPIRED",
    "VALIDATION_ERROR",
]
