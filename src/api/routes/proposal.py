"""
Proposal Link API Routes

Endpoints hit by anonymous recipients following their emailed link.
The token in the request body is the only credential.
"""

from typing import Optional

from fastapi import APIRouter, Depends, status
from pydantic import BaseModel, Field

from src.api.error import ClientError, ServerError
from src.app.services.unit_of_work import UnitOfWork
from src.app.use_cases.proposals import (
    ACCESS_DENIED,
    ALREADY_RESOLVED,
    PROPOSAL_EXPIRED,
    VALIDATION_ERROR,
    ProposalAccessGate,
    ProposalActionResponse,
)
from src.depends import get_actor_context, get_unit_of_work
from src.domain.entities import ActorContext, ProposalAction

router = APIRouter(prefix="/proposals", tags=["Proposals"])

ERROR_STATUS_CODES = {
    VALIDATION_ERROR: status.HTTP_400_BAD_REQUEST,
    ACCESS_DENIED: status.HTTP_404_NOT_FOUND,
    ALREADY_RESOLVED: status.HTTP_409_CONFLICT,
    PROPOSAL_EXPIRED: status.HTTP_410_GONE,
}


class ProposalTokenRequest(BaseModel):
    """View/accept request payload"""

    token: Optional[str] = Field(None, description="Recipient token from the proposal link")


class RejectProposalRequest(ProposalTokenRequest):
    """Reject request payload"""

    rejection_reason: Optional[str] = Field(
        None, description="Optional free-text reason for declining"
    )


async def _run_gate(
    uow: UnitOfWork,
    proposal_id: str,
    token: Optional[str],
    action: ProposalAction,
    actor: ActorContext,
    rejection_reason: Optional[str] = None,
) -> ProposalActionResponse:
    gate = ProposalAccessGate(uow)
    result = await gate.execute(
        proposal_id,
        token,
        action.value,
        actor=actor,
        rejection_reason=rejection_reason,
    )

    if result.is_err():
        error = result.error
        status_code = ERROR_STATUS_CODES.get(error.code)
        if status_code is not None:
            raise ClientError(error, status_code=status_code)
        raise ServerError(error)

    return result.value


@router.post(
    "/{proposal_id}/view",
    status_code=status.HTTP_200_OK,
    response_model=ProposalActionResponse,
)
async def view_proposal(
    proposal_id: str,
    request: ProposalTokenRequest,
    actor: ActorContext = Depends(get_actor_context),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """
    View Proposal

    Returns the proposal snapshot for the recipient the token belongs to.
    Allowed any number of times, also after expiry or a response.

    Raises:
        - 400 Bad Request: VALIDATION_ERROR
        - 404 Not Found: ACCESS_DENIED (unknown token or proposal)
        - 500 Internal Server Error: Server error
    """
    return await _run_gate(uow, proposal_id, request.token, ProposalAction.view, actor)


@router.post(
    "/{proposal_id}/accept",
    status_code=status.HTTP_200_OK,
    response_model=ProposalActionResponse,
)
async def accept_proposal(
    proposal_id: str,
    request: ProposalTokenRequest,
    actor: ActorContext = Depends(get_actor_context),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """
    Accept Proposal

    Raises:
        - 400 Bad Request: VALIDATION_ERROR
        - 404 Not Found: ACCESS_DENIED
        - 409 Conflict: ALREADY_RESOLVED
        - 410 Gone: PROPOSAL_EXPIRED
        - 500 Internal Server Error: Server error
    """
    return await _run_gate(uow, proposal_id, request.token, ProposalAction.accept, actor)


@router.post(
    "/{proposal_id}/reject",
    status_code=status.HTTP_200_OK,
    response_model=ProposalActionResponse,
)
async def reject_proposal(
    proposal_id: str,
    request: RejectProposalRequest,
    actor: ActorContext = Depends(get_actor_context),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """
    Reject Proposal

    Raises:
        - 400 Bad Request: VALIDATION_ERROR
        - 404 Not Found: ACCESS_DENIED
        - 409 Conflict: ALREADY_RESOLVED
        - 410 Gone: PROPOSAL_EXPIRED
        - 500 Internal Server Error: Server error
    """
    return await _run_gate(
        uow,
        proposal_id,
        request.token,
        ProposalAction.reject,
        actor,
        rejection_reason=request.rejection_reason,
    )
