"""
Audit API Routes

Read-only access to a proposal's event timeline.
"""

from typing import Any, Dict, List, Optional
from uuid import UUID

from fastapi import APIRouter, Depends, Query, status
from pydantic import BaseModel

from src.api.error import ClientError, ServerError
from src.api.utils.admin_auth import verify_admin_api_key
from src.app.services.unit_of_work import UnitOfWork
from src.app.use_cases.audit import GetProposalEventsUseCase
from src.depends import get_unit_of_work

router = APIRouter(prefix="/admin/proposals", tags=["Audit"])


class ProposalEventResponse(BaseModel):
    """Single event in response"""

    id: str
    event_type: str
    timestamp: str
    user_id: Optional[str]
    user_email: Optional[str]
    ip_address: Optional[str]
    user_agent: Optional[str]
    details: Dict[str, Any]


class ProposalEventsResponse(BaseModel):
    """GET /admin/proposals/{proposal_id}/events response payload"""

    events: List[ProposalEventResponse]
    next_cursor: Optional[str]


@router.get(
    "/{proposal_id}/events",
    status_code=status.HTTP_200_OK,
    response_model=ProposalEventsResponse,
    dependencies=[Depends(verify_admin_api_key)],
)
async def get_proposal_events(
    proposal_id: UUID,
    uow: UnitOfWork = Depends(get_unit_of_work),
    limit: int = Query(50, ge=1, le=100, description="Maximum number of events to return"),
    cursor: Optional[str] = Query(None, description="Pagination cursor"),
):
    """
    Get Proposal Timeline

    Query Parameters:
        - limit: Maximum number of events to return (1-100, default 50)
        - cursor: Pagination cursor for fetching next page

    Returns:
        - events: Events ordered oldest first
        - next_cursor: Cursor for next page (null if no more events)

    Raises:
        - 401 Unauthorized: Missing or invalid admin API key
        - 404 Not Found: PROPOSAL_NOT_FOUND
    """
    use_case = GetProposalEventsUseCase(uow)
    result = await use_case.execute(proposal_id, limit=limit, cursor=cursor)

    if result.is_err():
        error = result.error
        if error.code == "PROPOSAL_NOT_FOUND":
            raise ClientError(error, status_code=status.HTTP_404_NOT_FOUND)
        raise ServerError(error)

    return result.value
