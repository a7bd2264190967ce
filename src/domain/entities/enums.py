"""
Proposal Domain Enums

All enumeration types used across domain entities.
"""

from enum import Enum


class ProposalStatus(str, Enum):
    """Proposal lifecycle status"""

    draft = "draft"
    sent = "sent"
    viewed = "viewed"
    accepted = "accepted"
    rejected = "rejected"
    expired = "expired"

    @property
    def is_terminal(self) -> bool:
        return self in TERMINAL_STATUSES


TERMINAL_STATUSES = frozenset({ProposalStatus.accepted, ProposalStatus.rejected})

# Statuses from which accept/reject may still be recorded
RESPONDABLE_STATUSES = frozenset(
    {ProposalStatus.draft, ProposalStatus.sent, ProposalStatus.viewed}
)


class RecipientRole(str, Enum):
    """Recipient role on a proposal"""

    primary = "primary"
    cc = "cc"
    approver = "approver"


class ProposalEventType(str, Enum):
    """Audit event types"""

    created = "created"
    sent = "sent"
    view = "view"
    accept = "accept"
    reject = "reject"
    expired = "expired"


class ProposalAction(str, Enum):
    """Actions an anonymous link holder may request"""

    view = "view"
    accept = "accept"
    reject = "reject"
