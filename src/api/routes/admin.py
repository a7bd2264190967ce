"""
Admin API Routes - Internal Proposal Workflow

Template management, draft creation, issuance and the expiry sweep.
Authentication is via Admin API Key.
"""

from uuid import UUID

from fastapi import APIRouter, Depends, status

from config import ApplicationConfig
from src.api.error import ClientError, ServerError
from src.api.utils.admin_auth import verify_admin_api_key
from src.app.services.unit_of_work import UnitOfWork
from src.app.use_cases.admin import (
    CreateProposalCommand,
    CreateProposalResponse,
    CreateProposalUseCase,
    CreateTemplateCommand,
    CreateTemplateUseCase,
    ExpireProposalsResponse,
    ExpireProposalsUseCase,
    GetProposalUseCase,
    GetTemplateUseCase,
    ProposalDetailResponse,
    SendProposalResponse,
    SendProposalUseCase,
    TemplateResponse,
)
from src.depends import get_actor_context, get_unit_of_work
from src.domain.entities import ActorContext

router = APIRouter(prefix="/admin", tags=["Admin"])


@router.post(
    "/templates",
    status_code=status.HTTP_201_CREATED,
    response_model=TemplateResponse,
    dependencies=[Depends(verify_admin_api_key)],
)
async def create_template(
    request: CreateTemplateCommand,
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """
    Create Template

    Requires: X-Admin-API-Key header
    """
    use_case = CreateTemplateUseCase(uow)
    result = await use_case.execute(request)

    if result.is_err():
        raise ServerError(result.error)

    return result.value


@router.get(
    "/templates/{template_id}",
    status_code=status.HTTP_200_OK,
    response_model=TemplateResponse,
    dependencies=[Depends(verify_admin_api_key)],
)
async def get_template(
    template_id: UUID,
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """
    Get Template

    Raises:
        - 401 Unauthorized: Missing or invalid admin API key
        - 404 Not Found: TEMPLATE_NOT_FOUND
    """
    use_case = GetTemplateUseCase(uow)
    result = await use_case.execute(template_id)

    if result.is_err():
        error = result.error
        if error.code == "TEMPLATE_NOT_FOUND":
            raise ClientError(error, status_code=status.HTTP_404_NOT_FOUND)
        raise ServerError(error)

    return result.value


@router.post(
    "/proposals",
    status_code=status.HTTP_201_CREATED,
    response_model=CreateProposalResponse,
    dependencies=[Depends(verify_admin_api_key)],
)
async def create_proposal(
    request: CreateProposalCommand,
    actor: ActorContext = Depends(get_actor_context),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """
    Create Proposal

    Renders the content snapshot and stores the draft with its recipients.

    Requires: X-Admin-API-Key header

    Raises:
        - 400 Bad Request: VALIDATION_ERROR
        - 401 Unauthorized: Missing or invalid admin API key
        - 404 Not Found: TEMPLATE_NOT_FOUND
        - 409 Conflict: TEMPLATE_INACTIVE
        - 500 Internal Server Error: Server error
    """
    use_case = CreateProposalUseCase(
        uow, max_token_attempts=ApplicationConfig.TOKEN_ISSUE_MAX_ATTEMPTS
    )
    result = await use_case.execute(request, actor)

    if result.is_err():
        error = result.error
        if error.code == "VALIDATION_ERROR":
            raise ClientError(error, status_code=status.HTTP_400_BAD_REQUEST)
        elif error.code == "TEMPLATE_NOT_FOUND":
            raise ClientError(error, status_code=status.HTTP_404_NOT_FOUND)
        elif error.code == "TEMPLATE_INACTIVE":
            raise ClientError(error, status_code=status.HTTP_409_CONFLICT)
        raise ServerError(error)

    return result.value


@router.get(
    "/proposals/{proposal_id}",
    status_code=status.HTTP_200_OK,
    response_model=ProposalDetailResponse,
    dependencies=[Depends(verify_admin_api_key)],
)
async def get_proposal(
    proposal_id: UUID,
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """
    Get Proposal

    Raises:
        - 401 Unauthorized: Missing or invalid admin API key
        - 404 Not Found: PROPOSAL_NOT_FOUND
    """
    use_case = GetProposalUseCase(uow)
    result = await use_case.execute(proposal_id)

    if result.is_err():
        error = result.error
        if error.code == "PROPOSAL_NOT_FOUND":
            raise ClientError(error, status_code=status.HTTP_404_NOT_FOUND)
        raise ServerError(error)

    return result.value


@router.post(
    "/proposals/{proposal_id}/send",
    status_code=status.HTTP_200_OK,
    response_model=SendProposalResponse,
    dependencies=[Depends(verify_admin_api_key)],
)
async def send_proposal(
    proposal_id: UUID,
    actor: ActorContext = Depends(get_actor_context),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """
    Send Proposal

    Issues recipient tokens and returns their links for delivery.

    Requires: X-Admin-API-Key header

    Raises:
        - 400 Bad Request: VALIDATION_ERROR (no recipients)
        - 401 Unauthorized: Missing or invalid admin API key
        - 404 Not Found: PROPOSAL_NOT_FOUND
        - 409 Conflict: INVALID_STATUS (not a draft)
        - 500 Internal Server Error: Server error
    """
    use_case = SendProposalUseCase(
        uow,
        base_url=ApplicationConfig.PUBLIC_BASE_URL,
        token_ttl_hours=ApplicationConfig.PROPOSAL_TOKEN_TTL_HOURS,
        max_token_attempts=ApplicationConfig.TOKEN_ISSUE_MAX_ATTEMPTS,
    )
    result = await use_case.execute(proposal_id, actor)

    if result.is_err():
        error = result.error
        if error.code == "VALIDATION_ERROR":
            raise ClientError(error, status_code=status.HTTP_400_BAD_REQUEST)
        elif error.code == "PROPOSAL_NOT_FOUND":
            raise ClientError(error, status_code=status.HTTP_404_NOT_FOUND)
        elif error.code == "INVALID_STATUS":
            raise ClientError(error, status_code=status.HTTP_409_CONFLICT)
        raise ServerError(error)

    return result.value


@router.post(
    "/proposals/expire",
    status_code=status.HTTP_200_OK,
    response_model=ExpireProposalsResponse,
    dependencies=[Depends(verify_admin_api_key)],
)
async def expire_proposals(
    actor: ActorContext = Depends(get_actor_context),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """
    Expire Proposals

    Writes status=expired for every unanswered proposal past its deadline.

    Requires: X-Admin-API-Key header
    """
    use_case = ExpireProposalsUseCase(uow)
    result = await use_case.execute(actor)

    if result.is_err():
        raise ServerError(result.error)

    return result.value
