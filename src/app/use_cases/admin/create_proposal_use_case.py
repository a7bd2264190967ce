"""
Create Proposal Use Case

Creates a draft proposal with a rendered content snapshot and its recipients.
"""

import logging
from datetime import datetime
from typing import Callable, Optional

from libs.result import Error, Result, Return
from src.app.services import template_renderer
from src.app.services.token_issuer import TokenIssueError, TokenIssuer, hash_token
from src.app.services.unit_of_work import UnitOfWork
from src.domain.base import to_naive_utc, utc_now
from src.domain.entities import (
    ActorContext,
    CreatedDetails,
    Proposal,
    ProposalRecipient,
    ProposalStatus,
)

from .dtos import CreateProposalCommand, CreateProposalResponse

logger = logging.getLogger(__name__)


class CreateProposalUseCase:
    """
    Use case for creating a draft proposal.

    Business Rules:
    - Proposal id comes from TokenIssuer, public_id is the next PR-<year>-<seq>
    - Content is rendered from the template now; later template edits do not
      reach this proposal
    - Every recipient gets a unique token at creation; plaintext tokens are
      discarded here and re-issued on send
    - Recipient emails must be unique within the proposal
    - Appends a "created" event
    """

    def __init__(
        self,
        uow: UnitOfWork,
        max_token_attempts: int = 5,
        clock: Callable[[], datetime] = utc_now,
    ):
        self.uow = uow
        self.max_token_attempts = max_token_attempts
        self.clock = clock

    async def execute(
        self, command: CreateProposalCommand, actor: Optional[ActorContext] = None
    ) -> Result[CreateProposalResponse]:
        emails = [r.email.strip().lower() for r in command.recipients]
        if len(set(emails)) != len(emails):
            return Return.err(
                Error("VALIDATION_ERROR", "Recipient emails must be unique")
            )

        async with self.uow:
            now = self.clock()

            template_id = None
            if command.template_id is not None:
                template = await self.uow.templates.get_by_id(command.template_id)
                if template is None:
                    return Return.err(Error("TEMPLATE_NOT_FOUND", "Template not found"))
                if not template.is_active:
                    return Return.err(
                        Error("TEMPLATE_INACTIVE", "Template is not active")
                    )

                resolved = template_renderer.resolve_variables(
                    template.variables or [], command.variables
                )
                if resolved.is_err():
                    return Return.err(resolved.error)

                subject = template_renderer.render(template.subject, resolved.value)
                content = template_renderer.render(template.content, resolved.value)
                template_id = template.id
            else:
                if not command.subject or not command.content:
                    return Return.err(
                        Error(
                            "VALIDATION_ERROR",
                            "Either template_id or both subject and content are required",
                        )
                    )
                subject = template_renderer.render(command.subject, command.variables)
                content = template_renderer.render(command.content, command.variables)

            expires_at = to_naive_utc(command.expires_at) if command.expires_at else None
            if expires_at is not None and expires_at <= now:
                return Return.err(
                    Error("VALIDATION_ERROR", "expires_at must be in the future")
                )

            proposal = Proposal(
                id=TokenIssuer.issue_proposal_id(),
                public_id=await self.uow.proposals.next_public_id(now.year),
                template_id=template_id,
                title=command.title,
                subject=subject,
                content=content,
                currency=command.currency.lower(),
                total_amount=command.total_amount,
                status=ProposalStatus.draft,
                expires_at=expires_at,
                created_at=now,
                updated_at=now,
            )
            proposal = await self.uow.proposals.create(proposal)

            issuer = TokenIssuer(self.uow.recipients, self.max_token_attempts)
            for recipient_input, email in zip(command.recipients, emails):
                try:
                    token = await issuer.issue_recipient_token()
                except TokenIssueError as e:
                    logger.error(f"Token issuance failed for proposal {proposal.id}: {e}")
                    return Return.err(Error("TOKEN_ISSUE_FAILED", str(e)))
                await self.uow.recipients.create(
                    ProposalRecipient(
                        proposal_id=proposal.id,
                        email=email,
                        name=recipient_input.name,
                        role=recipient_input.role,
                        token=hash_token(token),
                        created_at=now,
                    )
                )

            await self.uow.events.append(
                proposal.id,
                CreatedDetails(
                    public_id=proposal.public_id,
                    template_id=template_id,
                    recipients_count=len(emails),
                ),
                actor,
                now,
            )

            await self.uow.commit()

            logger.info(f"Proposal {proposal.public_id} created as draft ({proposal.id})")

            return Return.ok(
                CreateProposalResponse(
                    id=str(proposal.id),
                    public_id=proposal.public_id,
                    status=proposal.status.value,
                    recipients_count=len(emails),
                )
            )
