"""
Proposal Service Domain Entities

All domain entities organized by model.
Each entity in its own file for better maintainability.
"""

# Export all enums
from .enums import (
    RESPONDABLE_STATUSES,
    TERMINAL_STATUSES,
    ProposalAction,
    ProposalEventType,
    ProposalStatus,
    RecipientRole,
)

# Export all entities
from .proposal_template import ProposalTemplate
from .proposal import Proposal
from .proposal_recipient import ProposalRecipient
from .proposal_event import ProposalEvent

# Export event payloads
from .event_details import (
    AcceptDetails,
    ActorContext,
    CreatedDetails,
    EventDetails,
    ExpiredDetails,
    RejectDetails,
    SentDetails,
    ViewDetails,
    parse_event_details,
)

__all__ = [
    # Enums
    "ProposalStatus",
    "RecipientRole",
    "ProposalEventType",
    "ProposalAction",
    "TERMINAL_STATUSES",
    "RESPONDABLE_STATUSES",
    # Entities
    "ProposalTemplate",
    "Proposal",
    "ProposalRecipient",
    "ProposalEvent",
    # Event payloads
    "ActorContext",
    "EventDetails",
    "CreatedDetails",
    "SentDetails",
    "ViewDetails",
    "AcceptDetails",
    "RejectDetails",
    "ExpiredDetails",
    "parse_event_details",
]
