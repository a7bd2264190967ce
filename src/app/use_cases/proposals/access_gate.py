"""
Proposal Access Gate

The only place that decides whether an anonymous link holder may act on a
proposal. Possession of a recipient token is the whole authorization.
"""

import logging
from datetime import datetime
from typing import Callable, Optional, Tuple
from uuid import UUID

from libs.result import Result, Return
from src.app.services.token_issuer import (
    TOKEN_MAX_LENGTH,
    TOKEN_PATTERN,
    hash_token,
    token_reference,
)
from src.app.services.unit_of_work import UnitOfWork
from src.domain.base import utc_now
from src.domain.entities import (
    ActorContext,
    Proposal,
    ProposalAction,
    ProposalRecipient,
    ProposalStatus,
    ViewDetails,
)

from .dtos import ProposalActionResponse, ProposalInfo, RecipientInfo
from .errors import access_denied, validation_error
from .response_recorder import ResponseRecorder

logger = logging.getLogger(__name__)

REJECTION_REASON_MAX_LENGTH = 2000

ACTION_MESSAGES = {
    ProposalAction.view: "Proposal viewed",
    ProposalAction.accept: "Proposal accepted successfully!",
    ProposalAction.reject: "Proposal declined",
}


def _is_encodable(text: str) -> bool:
    try:
        text.encode("utf-8")
    except UnicodeEncodeError:
        return False
    return True


class ProposalAccessGate:
    """
    Handles view/accept/reject requests carrying (proposal_id, token).

    Business Rules:
    - Malformed input fails with VALIDATION_ERROR
    - Unknown token and unknown proposal are both ACCESS_DENIED; both
      lookups always run so the two cases do the same work
    - view is always allowed once the token resolves, including after expiry
      or a terminal response; viewed_at is set only once; sent -> viewed
    - accept/reject go through ResponseRecorder (expiry, terminal guard,
      conditional update)
    - Each applied action appends exactly one event; failures append none
    """

    def __init__(self, uow: UnitOfWork, clock: Callable[[], datetime] = utc_now):
        self.uow = uow
        self.clock = clock

    async def execute(
        self,
        proposal_id: str,
        token: Optional[str],
        action: str,
        actor: Optional[ActorContext] = None,
        rejection_reason: Optional[str] = None,
    ) -> Result[ProposalActionResponse]:
        """
        Execute a link holder action.

        Args:
            proposal_id: Proposal id from the link
            token: Recipient token from the link
            action: view, accept or reject
            actor: Caller IP and user agent
            rejection_reason: Free text, only used for reject

        Returns:
            Result with ProposalActionResponse, or Error with one of
            ACCESS_DENIED, PROPOSAL_EXPIRED, ALREADY_RESOLVED, VALIDATION_ERROR
        """
        validation = self._validate(proposal_id, token, action, rejection_reason)
        if validation.is_err():
            return Return.err(validation.error)
        proposal_uuid, proposal_action, reason = validation.value

        token_ref = token_reference(token)

        async with self.uow:
            now = self.clock()

            recipient = await self.uow.recipients.resolve_token(
                proposal_uuid, hash_token(token)
            )
            proposal = await self.uow.proposals.get_by_id(proposal_uuid)

            if recipient is None or proposal is None:
                logger.info(
                    f"Access denied for {proposal_action.value} (token ref {token_ref})"
                )
                return Return.err(access_denied())

            actor = (actor or ActorContext()).model_copy(
                update={"user_email": recipient.email}
            )

            if proposal_action == ProposalAction.view:
                viewed_at = await self._record_view(proposal, recipient, now, actor)
            else:
                recorded = await ResponseRecorder(self.uow).record(
                    proposal, recipient, proposal_action, now, actor, reason
                )
                if recorded.is_err():
                    logger.info(
                        f"Proposal {proposal.id} {proposal_action.value} refused: "
                        f"{recorded.error.code} (token ref {token_ref})"
                    )
                    return Return.err(recorded.error)
                viewed_at = recipient.viewed_at

            await self.uow.commit()

            logger.info(
                f"Proposal {proposal.id} {proposal_action.value} by recipient "
                f"{recipient.id} (token ref {token_ref})"
            )

            proposal = await self.uow.proposals.get_by_id(proposal_uuid)

            return Return.ok(
                ProposalActionResponse(
                    action=proposal_action.value,
                    message=ACTION_MESSAGES[proposal_action],
                    proposal=ProposalInfo.from_entity(proposal, now),
                    recipient=RecipientInfo.from_entity(recipient, viewed_at),
                )
            )

    async def _record_view(
        self,
        proposal: Proposal,
        recipient: ProposalRecipient,
        now: datetime,
        actor: ActorContext,
    ) -> datetime:
        first_view = await self.uow.recipients.mark_viewed(recipient.id, now)

        if proposal.status == ProposalStatus.sent and not proposal.is_expired(now):
            await self.uow.proposals.mark_viewed(proposal.id, now)

        await self.uow.events.append(
            proposal.id,
            ViewDetails(
                recipient_id=recipient.id,
                recipient_email=recipient.email,
                recipient_name=recipient.name,
                first_view=first_view,
            ),
            actor,
            now,
        )

        if first_view:
            return now
        if recipient.viewed_at is None:
            # A concurrent first view won; report the time it stored
            current = await self.uow.recipients.resolve_token(proposal.id, recipient.token)
            if current is not None:
                return current.viewed_at
        return recipient.viewed_at

    @staticmethod
    def _validate(
        proposal_id: str,
        token: Optional[str],
        action: str,
        rejection_reason: Optional[str],
    ) -> Result[Tuple[UUID, ProposalAction, Optional[str]]]:
        try:
            proposal_action = ProposalAction(action)
        except ValueError:
            return Return.err(
                validation_error(f"Invalid action: {action}. Must be one of: view, accept, reject")
            )

        if not token or not token.strip():
            return Return.err(validation_error("Token is required"))

        if len(token) > TOKEN_MAX_LENGTH or not TOKEN_PATTERN.fullmatch(token):
            return Return.err(validation_error("Token is malformed"))

        try:
            proposal_uuid = UUID(str(proposal_id))
        except ValueError:
            return Return.err(validation_error("Proposal ID is malformed"))

        reason = None
        if proposal_action == ProposalAction.reject and rejection_reason:
            reason = rejection_reason.strip() or None
            if reason and not _is_encodable(reason):
                return Return.err(validation_error("Rejection reason is not valid text"))
            if reason and len(reason) > REJECTION_REASON_MAX_LENGTH:
                return Return.err(
                    validation_error(
                        f"Rejection reason must be at most {REJECTION_REASON_MAX_LENGTH} characters"
                    )
                )

        return Return.ok((proposal_uuid, proposal_action, reason))
