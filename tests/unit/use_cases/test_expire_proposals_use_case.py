from datetime import timedelta

import pytest

from src.app.use_cases.admin import ExpireProposalsUseCase
from src.domain.entities import ExpiredDetails, ProposalStatus
from tests.unit.factories import NOW, make_proposal


@pytest.mark.asyncio
async def test_sweep_expires_and_logs_each_proposal(mock_uow):
    overdue = make_proposal(status=ProposalStatus.viewed, expires_at=NOW - timedelta(days=2))
    raced = make_proposal(status=ProposalStatus.sent, expires_at=NOW - timedelta(days=1))
    mock_uow.proposals.get_expirable.return_value = [overdue, raced]
    # Second one was accepted between the read and the write
    mock_uow.proposals.mark_expired.side_effect = [True, False]

    use_case = ExpireProposalsUseCase(mock_uow, clock=lambda: NOW)
    result = await use_case.execute()

    assert result.is_ok()
    assert result.value.expired_count == 1
    assert result.value.proposal_ids == [str(overdue.id)]

    mock_uow.events.append.assert_called_once()
    proposal_id, details = mock_uow.events.append.call_args[0][:2]
    assert proposal_id == overdue.id
    assert isinstance(details, ExpiredDetails)
    assert details.previous_status == "viewed"
    mock_uow.commit.assert_called_once()


@pytest.mark.asyncio
async def test_sweep_with_nothing_to_expire(mock_uow):
    use_case = ExpireProposalsUseCase(mock_uow, clock=lambda: NOW)
    result = await use_case.execute()

    assert result.value.expired_count == 0
    mock_uow.events.append.assert_not_called()
