"""
Send Proposal Use Case

Issues recipient tokens and moves a draft to sent. Email delivery is the
caller's job; this returns the per-recipient links.
"""

import logging
from datetime import datetime, timedelta
from typing import Callable, Optional
from uuid import UUID

from libs.result import Error, Result, Return
from src.app.services.token_issuer import TokenIssueError, TokenIssuer, hash_token
from src.app.services.unit_of_work import UnitOfWork
from src.app.use_cases.proposals.dtos import to_iso
from src.domain.base import utc_now
from src.domain.entities import ActorContext, ProposalStatus, SentDetails

from .dtos import IssuedRecipientLink, SendProposalResponse

logger = logging.getLogger(__name__)


class SendProposalUseCase:
    """
    Use case for issuing a proposal to its recipients.

    Business Rules:
    - Only draft proposals can be sent (INVALID_STATUS otherwise)
    - Every recipient token is re-issued, so plaintext exists exactly once,
      in this response
    - expires_at defaults to sent_at + token TTL when not set
    - draft -> sent is a conditional update; a concurrent send loses with
      INVALID_STATUS
    - Appends a "sent" event
    """

    def __init__(
        self,
        uow: UnitOfWork,
        base_url: str,
        token_ttl_hours: int = 168,
        max_token_attempts: int = 5,
        clock: Callable[[], datetime] = utc_now,
    ):
        self.uow = uow
        self.base_url = base_url.rstrip("/")
        self.token_ttl_hours = token_ttl_hours
        self.max_token_attempts = max_token_attempts
        self.clock = clock

    async def execute(
        self, proposal_id: UUID, actor: Optional[ActorContext] = None
    ) -> Result[SendProposalResponse]:
        async with self.uow:
            now = self.clock()

            proposal = await self.uow.proposals.get_by_id(proposal_id)
            if proposal is None:
                return Return.err(Error("PROPOSAL_NOT_FOUND", "Proposal not found"))

            if proposal.status != ProposalStatus.draft:
                return Return.err(
                    Error(
                        "INVALID_STATUS",
                        f"Only draft proposals can be sent (current status: {proposal.status.value})",
                    )
                )

            recipients = await self.uow.recipients.list_by_proposal(proposal.id)
            if not recipients:
                return Return.err(
                    Error("VALIDATION_ERROR", "No recipients found for proposal")
                )

            expires_at = proposal.expires_at
            if expires_at is None:
                expires_at = now + timedelta(hours=self.token_ttl_hours)

            if not await self.uow.proposals.mark_sent(proposal.id, now, expires_at):
                return Return.err(
                    Error("INVALID_STATUS", "Proposal is no longer a draft")
                )

            issuer = TokenIssuer(self.uow.recipients, self.max_token_attempts)
            links = []
            for recipient in recipients:
                try:
                    token = await issuer.issue_recipient_token()
                except TokenIssueError as e:
                    logger.error(f"Token issuance failed for proposal {proposal.id}: {e}")
                    return Return.err(Error("TOKEN_ISSUE_FAILED", str(e)))
                await self.uow.recipients.replace_token(recipient.id, hash_token(token))
                links.append(
                    IssuedRecipientLink(
                        email=recipient.email,
                        name=recipient.name,
                        role=recipient.role.value,
                        token=token,
                        view_url=self._link(proposal.id, "view", token),
                        accept_url=self._link(proposal.id, "accept", token),
                        reject_url=self._link(proposal.id, "reject", token),
                    )
                )

            await self.uow.events.append(
                proposal.id,
                SentDetails(recipients_count=len(recipients), expires_at=expires_at),
                actor,
                now,
            )

            await self.uow.commit()

            logger.info(
                f"Proposal {proposal.public_id} sent to {len(recipients)} recipients"
            )

            return Return.ok(
                SendProposalResponse(
                    id=str(proposal.id),
                    public_id=proposal.public_id,
                    status=ProposalStatus.sent.value,
                    sent_at=to_iso(now),
                    expires_at=to_iso(expires_at),
                    recipients=links,
                )
            )

    def _link(self, proposal_id: UUID, action: str, token: str) -> str:
        return f"{self.base_url}/proposal/{proposal_id}/{action}?token={token}"
