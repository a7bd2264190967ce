from uuid import uuid4

import pytest

from src.app.use_cases.audit import GetProposalEventsUseCase
from src.domain.entities import ProposalEvent, ProposalEventType
from tests.unit.factories import NOW, make_proposal


@pytest.mark.asyncio
async def test_returns_timeline_with_cursor(mock_uow):
    proposal = make_proposal()
    event = ProposalEvent(
        id=uuid4(),
        proposal_id=proposal.id,
        event_type=ProposalEventType.view,
        user_email="client@example.com",
        ip_address="203.0.113.7",
        user_agent="Mozilla/5.0",
        details={"event_type": "view", "first_view": True},
        created_at=NOW,
    )
    mock_uow.proposals.get_by_id.return_value = proposal
    mock_uow.events.get_by_proposal_paginated.return_value = ([event], "next-page")

    result = await GetProposalEventsUseCase(mock_uow).execute(proposal.id, limit=1)

    assert result.is_ok()
    assert result.value["next_cursor"] == "next-page"
    item = result.value["events"][0]
    assert item["event_type"] == "view"
    assert item["timestamp"] == NOW.isoformat() + "Z"
    assert item["user_email"] == "client@example.com"
    assert item["details"]["first_view"] is True
    mock_uow.events.get_by_proposal_paginated.assert_called_once_with(
        proposal.id, limit=1, cursor=None
    )


@pytest.mark.asyncio
async def test_unknown_proposal(mock_uow):
    mock_uow.proposals.get_by_id.return_value = None

    result = await GetProposalEventsUseCase(mock_uow).execute(uuid4())

    assert result.error.code == "PROPOSAL_NOT_FOUND"
