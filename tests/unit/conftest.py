import pytest
from unittest.mock import AsyncMock, MagicMock
from uuid import uuid4


@pytest.fixture
def mock_uow():
    uow = MagicMock()
    uow.__aenter__ = AsyncMock(return_value=uow)
    uow.__aexit__ = AsyncMock(return_value=False)  # Must return False to not suppress exceptions
    uow.commit = AsyncMock()
    uow.rollback = AsyncMock()

    uow.proposals = MagicMock()
    uow.proposals.get_by_id = AsyncMock()
    uow.proposals.next_public_id = AsyncMock(return_value="PR-2025-0001")
    uow.proposals.create = AsyncMock(side_effect=lambda proposal: proposal)
    uow.proposals.record_response = AsyncMock(return_value=True)
    uow.proposals.mark_viewed = AsyncMock(return_value=True)
    uow.proposals.mark_sent = AsyncMock(return_value=True)
    uow.proposals.get_expirable = AsyncMock(return_value=[])
    uow.proposals.mark_expired = AsyncMock(return_value=True)

    uow.recipients = MagicMock()
    uow.recipients.resolve_token = AsyncMock()
    uow.recipients.token_exists = AsyncMock(return_value=False)
    uow.recipients.create = AsyncMock(side_effect=lambda recipient: recipient)
    uow.recipients.list_by_proposal = AsyncMock(return_value=[])
    uow.recipients.mark_viewed = AsyncMock(return_value=True)
    uow.recipients.replace_token = AsyncMock()

    uow.events = MagicMock()
    uow.events.append = AsyncMock(side_effect=lambda *args, **kwargs: uuid4())
    uow.events.get_by_proposal_paginated = AsyncMock(return_value=([], None))

    uow.templates = MagicMock()
    uow.templates.get_by_id = AsyncMock()
    uow.templates.create = AsyncMock(side_effect=lambda template: template)
    return uow
