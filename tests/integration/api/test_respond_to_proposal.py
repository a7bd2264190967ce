import asyncio
import pytest
from datetime import timedelta
from uuid import UUID
from httpx import AsyncClient
from sqlmodel import update

from src.domain.base import utc_now
from src.domain.entities import Proposal


async def set_expires_at(session_factory, proposal_id, expires_at):
    async with session_factory() as session:
        await session.execute(
            update(Proposal).where(Proposal.id == UUID(proposal_id)).values(expires_at=expires_at)
        )
        await session.commit()


async def event_types(client, proposal_id, admin_headers):
    response = await client.get(
        f"/admin/proposals/{proposal_id}/events", headers=admin_headers
    )
    assert response.status_code == 200
    return [event["event_type"] for event in response.json()["events"]]


@pytest.mark.asyncio
async def test_recipient_accepts_proposal(
    client: AsyncClient, create_sent_proposal, admin_headers
):
    """Accept Proposal

    Given a sent proposal
    When the recipient accepts
    Then the proposal is accepted with accepted_at set
    And exactly one accept event is logged with the caller's IP
    """
    sent = await create_sent_proposal()

    response = await client.post(
        f"/proposals/{sent['id']}/accept",
        json={"token": sent["recipients"][0]["token"]},
        headers={"X-Forwarded-For": "203.0.113.7, 10.0.0.1", "User-Agent": "pytest-client"},
    )

    assert response.status_code == 200
    data = response.json()
    assert data["action"] == "accept"
    assert data["message"] == "Proposal accepted successfully!"
    assert data["proposal"]["status"] == "accepted"
    assert data["proposal"]["accepted_at"] is not None
    assert data["proposal"]["rejected_at"] is None

    events = (
        await client.get(f"/admin/proposals/{sent['id']}/events", headers=admin_headers)
    ).json()["events"]
    accept_events = [e for e in events if e["event_type"] == "accept"]
    assert len(accept_events) == 1
    assert accept_events[0]["ip_address"] == "203.0.113.7"
    assert accept_events[0]["user_agent"] == "pytest-client"
    assert accept_events[0]["user_email"] == "client@example.com"
    assert accept_events[0]["details"]["recipient_email"] == "client@example.com"


@pytest.mark.asyncio
async def test_recipient_rejects_with_reason(
    client: AsyncClient, create_sent_proposal, admin_headers
):
    """Reject Proposal

    Given a sent proposal
    When the recipient declines with reason "budget"
    Then the proposal is rejected and the reason is stored
    And the reject event carries the reason
    """
    sent = await create_sent_proposal()

    response = await client.post(
        f"/proposals/{sent['id']}/reject",
        json={"token": sent["recipients"][0]["token"], "rejection_reason": "budget"},
    )

    assert response.status_code == 200
    data = response.json()
    assert data["message"] == "Proposal declined"
    assert data["proposal"]["status"] == "rejected"
    assert data["proposal"]["rejection_reason"] == "budget"
    assert data["proposal"]["rejected_at"] is not None

    events = (
        await client.get(f"/admin/proposals/{sent['id']}/events", headers=admin_headers)
    ).json()["events"]
    assert events[-1]["event_type"] == "reject"
    assert events[-1]["details"]["rejection_reason"] == "budget"


@pytest.mark.asyncio
async def test_second_response_is_already_resolved(
    client: AsyncClient, create_sent_proposal, admin_headers
):
    """Already Resolved

    Given a proposal that was accepted
    When the same recipient tries to reject it
    Then the request fails with 409 ALREADY_RESOLVED
    And the proposal stays accepted without a new event
    And the recipient can still view it
    """
    sent = await create_sent_proposal()
    token = sent["recipients"][0]["token"]
    await client.post(f"/proposals/{sent['id']}/accept", json={"token": token})

    response = await client.post(
        f"/proposals/{sent['id']}/reject", json={"token": token, "rejection_reason": "changed mind"}
    )

    assert response.status_code == 409
    assert response.json()["error"]["code"] == "ALREADY_RESOLVED"

    view = await client.post(f"/proposals/{sent['id']}/view", json={"token": token})
    assert view.status_code == 200
    assert view.json()["proposal"]["status"] == "accepted"
    assert view.json()["proposal"]["rejection_reason"] is None

    types = await event_types(client, sent["id"], admin_headers)
    assert types.count("accept") == 1
    assert "reject" not in types


@pytest.mark.asyncio
async def test_accept_after_deadline_is_expired(
    client: AsyncClient, create_sent_proposal, session_factory, admin_headers
):
    """Expired Proposal

    Given a proposal whose deadline was yesterday
    When the recipient tries to accept it
    Then the request fails with 410 PROPOSAL_EXPIRED
    And the stored status is still sent
    And no accept event is logged
    """
    sent = await create_sent_proposal()
    await set_expires_at(session_factory, sent["id"], utc_now() - timedelta(days=1))

    response = await client.post(
        f"/proposals/{sent['id']}/accept", json={"token": sent["recipients"][0]["token"]}
    )

    assert response.status_code == 410
    assert response.json()["error"]["code"] == "PROPOSAL_EXPIRED"

    detail = await client.get(f"/admin/proposals/{sent['id']}", headers=admin_headers)
    assert detail.json()["status"] == "expired"
    assert detail.json()["stored_status"] == "sent"
    assert detail.json()["accepted_at"] is None
    assert "accept" not in await event_types(client, sent["id"], admin_headers)


@pytest.mark.asyncio
async def test_concurrent_accept_and_reject_have_one_winner(
    client: AsyncClient, create_sent_proposal, test_data, admin_headers
):
    """Concurrent Responses

    Given a proposal with two approvers
    When one accepts while the other rejects at the same moment
    Then exactly one request succeeds and the other gets ALREADY_RESOLVED
    And exactly one terminal event is logged
    """
    sent = await create_sent_proposal(recipients=test_data.get_copy("two_recipients"))
    ceo, cfo = sent["recipients"]

    accept, reject = await asyncio.gather(
        client.post(f"/proposals/{sent['id']}/accept", json={"token": ceo["token"]}),
        client.post(
            f"/proposals/{sent['id']}/reject",
            json={"token": cfo["token"], "rejection_reason": "budget"},
        ),
    )

    assert sorted([accept.status_code, reject.status_code]) == [200, 409]
    loser = accept if accept.status_code == 409 else reject
    assert loser.json()["error"]["code"] == "ALREADY_RESOLVED"

    detail = (
        await client.get(f"/admin/proposals/{sent['id']}", headers=admin_headers)
    ).json()
    if accept.status_code == 200:
        assert detail["status"] == "accepted"
        assert detail["rejected_at"] is None
    else:
        assert detail["status"] == "rejected"
        assert detail["accepted_at"] is None

    types = await event_types(client, sent["id"], admin_headers)
    assert types.count("accept") + types.count("reject") == 1


@pytest.mark.asyncio
@pytest.mark.parametrize("count", [5, 6])
async def test_many_recipients_racing_have_one_winner(
    client: AsyncClient, create_sent_proposal, admin_headers, count
):
    """Concurrent Responses

    Given a proposal with several approvers
    When all of them accept or reject at the same moment
    Then exactly one request succeeds and every other one gets ALREADY_RESOLVED
    And exactly one terminal event is logged
    """
    recipients = [
        {"email": f"approver{i}@example.com", "name": f"Approver {i}", "role": "approver"}
        for i in range(count)
    ]
    sent = await create_sent_proposal(recipients=recipients)
    tokens = [link["token"] for link in sent["recipients"]]

    responses = await asyncio.gather(
        *[
            client.post(f"/proposals/{sent['id']}/accept", json={"token": token})
            if i % 2 == 0
            else client.post(
                f"/proposals/{sent['id']}/reject",
                json={"token": token, "rejection_reason": "budget"},
            )
            for i, token in enumerate(tokens)
        ]
    )

    codes = sorted(response.status_code for response in responses)
    assert codes == [200] + [409] * (count - 1)
    for response in responses:
        if response.status_code == 409:
            assert response.json()["error"]["code"] == "ALREADY_RESOLVED"

    winner = next(response for response in responses if response.status_code == 200)
    detail = (
        await client.get(f"/admin/proposals/{sent['id']}", headers=admin_headers)
    ).json()
    assert detail["status"] == winner.json()["proposal"]["status"]

    types = await event_types(client, sent["id"], admin_headers)
    assert types.count("accept") + types.count("reject") == 1


@pytest.mark.asyncio
async def test_unencodable_rejection_reason_is_validation_error(
    client: AsyncClient, create_sent_proposal, admin_headers
):
    """Invalid Rejection Reason

    Given a sent proposal
    When the recipient declines with a reason holding an unpaired surrogate escape
    Then the request fails with VALIDATION_ERROR
    And the proposal is not rejected
    """
    sent = await create_sent_proposal()
    token = sent["recipients"][0]["token"]

    response = await client.post(
        f"/proposals/{sent['id']}/reject",
        content=('{"token": "%s", "rejection_reason": "\\ud800"}' % token).encode(),
        headers={"Content-Type": "application/json"},
    )

    assert response.status_code == 400
    assert response.json()["error"]["code"] == "VALIDATION_ERROR"

    detail = (
        await client.get(f"/admin/proposals/{sent['id']}", headers=admin_headers)
    ).json()
    assert detail["status"] == "sent"
    assert "reject" not in await event_types(client, sent["id"], admin_headers)
