"""
Get Proposal Use Case

Internal read of a proposal and its recipients. Tokens are never included.
"""

from datetime import datetime
from typing import Callable
from uuid import UUID

from libs.result import Error, Result, Return
from src.app.services.unit_of_work import UnitOfWork
from src.app.use_cases.proposals.dtos import to_iso
from src.domain.base import utc_now

from .dtos import ProposalDetailResponse, RecipientSummary


class GetProposalUseCase:
    def __init__(self, uow: UnitOfWork, clock: Callable[[], datetime] = utc_now):
        self.uow = uow
        self.clock = clock

    async def execute(self, proposal_id: UUID) -> Result[ProposalDetailResponse]:
        async with self.uow:
            proposal = await self.uow.proposals.get_by_id(proposal_id)
            if proposal is None:
                return Return.err(Error("PROPOSAL_NOT_FOUND", "Proposal not found"))

            recipients = await self.uow.recipients.list_by_proposal(proposal.id)

            return Return.ok(
                ProposalDetailResponse(
                    id=str(proposal.id),
                    public_id=proposal.public_id,
                    title=proposal.title,
                    subject=proposal.subject,
                    content=proposal.content,
                    currency=proposal.currency,
                    total_amount=proposal.total_amount,
                    status=proposal.effective_status(self.clock()).value,
                    stored_status=proposal.status.value,
                    sent_at=to_iso(proposal.sent_at),
                    expires_at=to_iso(proposal.expires_at),
                    accepted_at=to_iso(proposal.accepted_at),
                    rejected_at=to_iso(proposal.rejected_at),
                    rejection_reason=proposal.rejection_reason,
                    created_at=to_iso(proposal.created_at),
                    recipients=[
                        RecipientSummary(
                            id=str(r.id),
                            email=r.email,
                            name=r.name,
                            role=r.role.value,
                            viewed_at=to_iso(r.viewed_at),
                        )
                        for r in recipients
                    ],
                )
            )
