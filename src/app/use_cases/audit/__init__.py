"""
Audit Use Cases

Read access to the proposal event log.
"""

from .get_proposal_events_use_case import GetProposalEventsUseCase

__all__ = [
    "GetProposalEventsUseCase",
]
