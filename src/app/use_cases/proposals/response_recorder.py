"""
Response Recorder

Applies accept/reject to a proposal. Only the access gate calls this.
"""

import logging
from datetime import datetime
from typing import Optional

from libs.result import Result, Return
from src.app.services.unit_of_work import UnitOfWork
from src.domain.entities import (
    AcceptDetails,
    ActorContext,
    Proposal,
    ProposalAction,
    ProposalRecipient,
    ProposalStatus,
    RejectDetails,
)

from .errors import already_resolved, proposal_expired

logger = logging.getLogger(__name__)


class ResponseRecorder:
    """
    Writes the terminal state of a proposal.

    Business Rules:
    - Expiry is evaluated against `now`, at request time
    - accepted/rejected are terminal, first writer wins
    - The status write is a conditional update on "not yet terminal and not
      expired"; losing it yields ALREADY_RESOLVED, never a generic error
    - The accept/reject event is appended in the same transaction; the
      caller commits
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def record(
        self,
        proposal: Proposal,
        recipient: ProposalRecipient,
        action: ProposalAction,
        now: datetime,
        actor: ActorContext,
        rejection_reason: Optional[str] = None,
    ) -> Result[None]:
        if proposal.is_expired(now):
            return Return.err(proposal_expired())

        if proposal.status.is_terminal:
            return Return.err(already_resolved())

        if action == ProposalAction.accept:
            target_status = ProposalStatus.accepted
            details = AcceptDetails(
                recipient_id=recipient.id,
                recipient_email=recipient.email,
                recipient_name=recipient.name,
            )
        else:
            target_status = ProposalStatus.rejected
            details = RejectDetails(
                recipient_id=recipient.id,
                recipient_email=recipient.email,
                recipient_name=recipient.name,
                rejection_reason=rejection_reason,
            )

        applied = await self.uow.proposals.record_response(
            proposal.id, target_status, now, rejection_reason
        )

        if not applied:
            # Lost the race, or the row changed since it was read
            current = await self.uow.proposals.get_by_id(proposal.id)
            if current is not None and not current.status.is_terminal and current.is_expired(now):
                return Return.err(proposal_expired())
            logger.info(f"Proposal {proposal.id} already resolved, {action.value} not applied")
            return Return.err(already_resolved())

        await self.uow.events.append(proposal.id, details, actor, now)
        return Return.ok()
