from datetime import timedelta
from uuid import UUID, uuid4

import pytest

from src.app.use_cases.admin import (
    CreateProposalCommand,
    CreateProposalUseCase,
    RecipientInput,
)
from src.domain.entities import (
    CreatedDetails,
    ProposalStatus,
    ProposalTemplate,
    RecipientRole,
)
from tests.unit.factories import NOW


def make_template(**overrides):
    fields = dict(
        id=uuid4(),
        name="Web Development",
        subject="Proposal for {{client_name}}",
        content="<p>Hi {{client_name}}, total {{amount}} in {{timeline}}</p>",
        variables=[
            {"name": "client_name", "label": "Client", "type": "text", "required": True},
            {"name": "amount", "label": "Amount", "type": "currency", "required": True},
            {"name": "timeline", "label": "Timeline", "type": "text", "default_value": "6 weeks"},
        ],
        is_active=True,
    )
    fields.update(overrides)
    return ProposalTemplate(**fields)


def make_command(**overrides):
    fields = dict(
        title="Website Redesign",
        recipients=[
            RecipientInput(email="Buyer@Example.com", name="Buyer"),
            RecipientInput(email="cfo@example.com", role=RecipientRole.approver),
        ],
    )
    fields.update(overrides)
    return CreateProposalCommand(**fields)


def make_use_case(uow):
    return CreateProposalUseCase(uow, clock=lambda: NOW)


@pytest.mark.asyncio
async def test_create_from_template_renders_snapshot(mock_uow):
    template = make_template()
    mock_uow.templates.get_by_id.return_value = template

    command = make_command(
        template_id=template.id,
        variables={"client_name": "Acme", "amount": "$5,000"},
        total_amount=500000,
    )
    result = await make_use_case(mock_uow).execute(command)

    assert result.is_ok()
    assert result.value.public_id == "PR-2025-0001"
    assert result.value.status == "draft"
    assert result.value.recipients_count == 2

    proposal = mock_uow.proposals.create.call_args[0][0]
    assert isinstance(proposal.id, UUID)
    assert proposal.status == ProposalStatus.draft
    assert proposal.subject == "Proposal for Acme"
    assert proposal.content == "<p>Hi Acme, total $5,000 in 6 weeks</p>"
    assert proposal.template_id == template.id
    mock_uow.proposals.next_public_id.assert_called_once_with(2025)

    # Each recipient has its own stored token digest
    created = [call[0][0] for call in mock_uow.recipients.create.call_args_list]
    assert [r.email for r in created] == ["buyer@example.com", "cfo@example.com"]
    assert created[1].role == RecipientRole.approver
    assert len({r.token for r in created}) == 2
    assert all(len(r.token) == 64 for r in created)

    details = mock_uow.events.append.call_args[0][1]
    assert isinstance(details, CreatedDetails)
    assert details.recipients_count == 2
    mock_uow.commit.assert_called_once()


@pytest.mark.asyncio
async def test_template_edit_after_creation_does_not_change_snapshot(mock_uow):
    template = make_template()
    mock_uow.templates.get_by_id.return_value = template

    await make_use_case(mock_uow).execute(
        make_command(template_id=template.id, variables={"client_name": "Acme", "amount": "1"})
    )
    proposal = mock_uow.proposals.create.call_args[0][0]

    template.content = "<p>Completely different</p>"

    assert proposal.content == "<p>Hi Acme, total 1 in 6 weeks</p>"


@pytest.mark.asyncio
async def test_missing_required_variable(mock_uow):
    template = make_template()
    mock_uow.templates.get_by_id.return_value = template

    result = await make_use_case(mock_uow).execute(
        make_command(template_id=template.id, variables={"client_name": "Acme"})
    )

    assert result.is_err()
    assert result.error.code == "VALIDATION_ERROR"
    assert "amount" in result.error.message
    mock_uow.proposals.create.assert_not_called()


@pytest.mark.asyncio
async def test_unknown_template(mock_uow):
    mock_uow.templates.get_by_id.return_value = None

    result = await make_use_case(mock_uow).execute(make_command(template_id=uuid4()))

    assert result.error.code == "TEMPLATE_NOT_FOUND"


@pytest.mark.asyncio
async def test_inactive_template(mock_uow):
    template = make_template(is_active=False)
    mock_uow.templates.get_by_id.return_value = template

    result = await make_use_case(mock_uow).execute(make_command(template_id=template.id))

    assert result.error.code == "TEMPLATE_INACTIVE"


@pytest.mark.asyncio
async def test_literal_content_without_template(mock_uow):
    result = await make_use_case(mock_uow).execute(
        make_command(subject="Offer", content="<p>Body</p>", currency="EUR")
    )

    assert result.is_ok()
    proposal = mock_uow.proposals.create.call_args[0][0]
    assert proposal.template_id is None
    assert proposal.currency == "eur"


@pytest.mark.asyncio
async def test_requires_template_or_content(mock_uow):
    result = await make_use_case(mock_uow).execute(make_command(subject="Only subject"))

    assert result.error.code == "VALIDATION_ERROR"


@pytest.mark.asyncio
async def test_duplicate_recipient_emails(mock_uow):
    command = make_command(
        subject="Offer",
        content="Body",
        recipients=[
            RecipientInput(email="a@example.com"),
            RecipientInput(email="A@example.com"),
        ],
    )

    result = await make_use_case(mock_uow).execute(command)

    assert result.error.code == "VALIDATION_ERROR"
    mock_uow.proposals.create.assert_not_called()


@pytest.mark.asyncio
async def test_expiry_in_the_past_rejected(mock_uow):
    result = await make_use_case(mock_uow).execute(
        make_command(subject="Offer", content="Body", expires_at=NOW - timedelta(minutes=1))
    )

    assert result.error.code == "VALIDATION_ERROR"
