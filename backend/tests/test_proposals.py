import pytest
from httpx import AsyncClient

from sponsorhub.models.collaboration import Collaboration
from sponsorhub.models.event import EventStatus
from sponsorhub.models.notification import Notification
from sponsorhub.models.proposal import SponsorshipProposal, ProposalStatus
from sponsorhub.models.user import UserRole
from conftest import TestSessionLocal, auth_headers_for, create_event, create_user, fetch
from sqlalchemy import select
from sqlalchemy.exc import IntegrityError


async def notifications_for(user_id: str):
    async with TestSessionLocal() as session:
        result = await session.execute(select(Notification).where(Notification.user_id == user_id))
        return list(result.scalars().all())


@pytest.mark.asyncio
async def test_submit_proposal(client: AsyncClient, public_event, organizer_user, sponsor_user, sponsor_headers):
    response = await client.post(
        "/api/proposals",
        json={
            "event_id": public_event.id,
            "proposed_amount": 5000,
            "proposed_benefits": ["Logo on stage"],
            "message": "Happy to help",
        },
        headers=sponsor_headers,
    )

    assert response.status_code == 201
    proposal = response.json()["data"]
    assert proposal["status"] == "pending"
    assert proposal["sponsor"]["id"] == sponsor_user.id
    assert proposal["event"]["id"] == public_event.id

    notifications = await notifications_for(organizer_user.id)
    assert len(notifications) == 1
    assert notifications[0].type.value == "proposal"
    assert notifications[0].related_entity_id == proposal["id"]


@pytest.mark.asyncio
async def test_submit_proposal_for_missing_event(client: AsyncClient, sponsor_headers):
    response = await client.post(
        "/api/proposals",
        json={"event_id": "0f8fad5b-d9cb-469f-a165-70867728950e", "proposed_amount": 100},
        headers=sponsor_headers,
    )

    assert response.status_code == 404


@pytest.mark.asyncio
async def test_submit_proposal_invalid_event_id(client: AsyncClient, sponsor_headers):
    response = await client.post(
        "/api/proposals", json={"event_id": "abc", "proposed_amount": 100}, headers=sponsor_headers
    )

    assert response.status_code == 400
    assert response.json()["message"] == "Invalid event ID"


@pytest.mark.asyncio
async def test_submit_proposal_for_unapproved_event(client: AsyncClient, db_session, organizer_user, sponsor_headers):
    event = await create_event(db_session, organizer_user, status=EventStatus.PUBLISHED, is_approved=False)
    response = await client.post(
        "/api/proposals", json={"event_id": event.id, "proposed_amount": 100}, headers=sponsor_headers
    )

    assert response.status_code == 400


@pytest.mark.asyncio
async def test_submit_negative_amount(client: AsyncClient, public_event, sponsor_headers):
    response = await client.post(
        "/api/proposals", json={"event_id": public_event.id, "proposed_amount": -5}, headers=sponsor_headers
    )

    assert response.status_code == 400


@pytest.mark.asyncio
async def test_duplicate_open_proposal(client: AsyncClient, pending_proposal, sponsor_headers):
    response = await client.post(
        "/api/proposals",
        json={"event_id": pending_proposal.event_id, "proposed_amount": 100},
        headers=sponsor_headers,
    )

    assert response.status_code == 409


@pytest.mark.asyncio
async def test_new_proposal_allowed_after_rejection(client: AsyncClient, db_session, pending_proposal, sponsor_headers):
    pending_proposal.status = ProposalStatus.REJECTED
    await db_session.commit()

    response = await client.post(
        "/api/proposals",
        json={"event_id": pending_proposal.event_id, "proposed_amount": 100},
        headers=sponsor_headers,
    )

    assert response.status_code == 201


@pytest.mark.asyncio
async def test_no_new_proposal_after_acceptance(
    client: AsyncClient, pending_proposal, sponsor_headers, organizer_headers
):
    accepted = await client.patch(f"/api/proposals/{pending_proposal.id}/accept", headers=organizer_headers)
    assert accepted.status_code == 200

    response = await client.post(
        "/api/proposals",
        json={"event_id": pending_proposal.event_id, "proposed_amount": 100},
        headers=sponsor_headers,
    )

    assert response.status_code == 409
    assert response.json()["message"] == "You already have a proposal for this event"

    async with TestSessionLocal() as session:
        result = await session.execute(
            select(Collaboration).where(Collaboration.event_id == pending_proposal.event_id)
        )
        assert len(result.scalars().all()) == 1


@pytest.mark.asyncio
async def test_live_proposal_unique_per_sponsor_and_event(db_session, pending_proposal):
    """The database refuses a second live proposal even if the service check is bypassed"""
    event_id, sponsor_id = pending_proposal.event_id, pending_proposal.sponsor_id
    db_session.add(SponsorshipProposal(
        event_id=event_id,
        sponsor_id=sponsor_id,
        proposed_amount=10,
        proposed_benefits=[],
        status=ProposalStatus.ACCEPTED,
    ))

    with pytest.raises(IntegrityError):
        await db_session.commit()
    await db_session.rollback()

    db_session.add(SponsorshipProposal(
        event_id=event_id,
        sponsor_id=sponsor_id,
        proposed_amount=10,
        proposed_benefits=[],
        status=ProposalStatus.REJECTED,
    ))
    await db_session.commit()


@pytest.mark.asyncio
async def test_organizer_cannot_submit(client: AsyncClient, public_event, organizer_headers):
    response = await client.post(
        "/api/proposals", json={"event_id": public_event.id, "proposed_amount": 100}, headers=organizer_headers
    )

    assert response.status_code == 403


@pytest.mark.asyncio
async def test_list_event_proposals(client: AsyncClient, pending_proposal, organizer_headers, other_organizer_headers):
    response = await client.get(
        "/api/proposals", params={"event_id": pending_proposal.event_id}, headers=organizer_headers
    )
    assert response.status_code == 200
    assert [p["id"] for p in response.json()["data"]] == [pending_proposal.id]

    filtered = await client.get(
        "/api/proposals",
        params={"event_id": pending_proposal.event_id, "status": "accepted"},
        headers=organizer_headers,
    )
    assert filtered.json()["data"] == []

    stranger = await client.get(
        "/api/proposals", params={"event_id": pending_proposal.event_id}, headers=other_organizer_headers
    )
    assert stranger.status_code == 403


@pytest.mark.asyncio
async def test_list_requires_event_id(client: AsyncClient, organizer_headers):
    response = await client.get("/api/proposals", headers=organizer_headers)

    assert response.status_code == 400


@pytest.mark.asyncio
async def test_my_proposals(client: AsyncClient, pending_proposal, sponsor_headers, other_sponsor_headers):
    mine = await client.get("/api/proposals/my-proposals", headers=sponsor_headers)
    assert [p["id"] for p in mine.json()["data"]] == [pending_proposal.id]

    theirs = await client.get("/api/proposals/my-proposals", headers=other_sponsor_headers)
    assert theirs.json()["data"] == []


@pytest.mark.asyncio
async def test_get_proposal_access(
    client: AsyncClient, pending_proposal, sponsor_headers, organizer_headers,
    admin_headers, other_sponsor_headers
):
    for headers in (sponsor_headers, organizer_headers, admin_headers):
        response = await client.get(f"/api/proposals/{pending_proposal.id}", headers=headers)
        assert response.status_code == 200

    response = await client.get(f"/api/proposals/{pending_proposal.id}", headers=other_sponsor_headers)
    assert response.status_code == 403


@pytest.mark.asyncio
async def test_accept_creates_collaboration(client: AsyncClient, pending_proposal, sponsor_user, organizer_headers):
    response = await client.patch(f"/api/proposals/{pending_proposal.id}/accept", headers=organizer_headers)

    assert response.status_code == 200
    data = response.json()["data"]
    assert data["status"] == "accepted"
    assert data["collaboration"]["status"] == "pending"

    collaboration = await fetch(Collaboration, data["collaboration"]["id"])
    assert collaboration.proposal_id == pending_proposal.id
    assert collaboration.sponsor_id == sponsor_user.id

    notifications = await notifications_for(sponsor_user.id)
    assert [n.title for n in notifications] == ["Proposal Accepted"]


@pytest.mark.asyncio
async def test_accept_twice_rejected(client: AsyncClient, pending_proposal, organizer_headers):
    await client.patch(f"/api/proposals/{pending_proposal.id}/accept", headers=organizer_headers)
    response = await client.patch(f"/api/proposals/{pending_proposal.id}/accept", headers=organizer_headers)

    assert response.status_code == 400


@pytest.mark.asyncio
async def test_accept_by_other_organizer(client: AsyncClient, pending_proposal, other_organizer_headers):
    response = await client.patch(
        f"/api/proposals/{pending_proposal.id}/accept", headers=other_organizer_headers
    )

    assert response.status_code == 403


@pytest.mark.asyncio
async def test_negotiate_then_accept(client: AsyncClient, pending_proposal, organizer_headers):
    negotiated = await client.patch(
        f"/api/proposals/{pending_proposal.id}/negotiate",
        json={"response_note": "Could you do 3000?"},
        headers=organizer_headers,
    )
    assert negotiated.status_code == 200
    assert negotiated.json()["data"]["status"] == "negotiation"
    assert negotiated.json()["data"]["response_note"] == "Could you do 3000?"

    again = await client.patch(f"/api/proposals/{pending_proposal.id}/negotiate", headers=organizer_headers)
    assert again.status_code == 400

    accepted = await client.patch(f"/api/proposals/{pending_proposal.id}/accept", headers=organizer_headers)
    assert accepted.status_code == 200


@pytest.mark.asyncio
async def test_reject_proposal(client: AsyncClient, pending_proposal, sponsor_user, organizer_headers):
    response = await client.patch(
        f"/api/proposals/{pending_proposal.id}/reject",
        json={"response_note": "Budget is covered"},
        headers=organizer_headers,
    )

    assert response.status_code == 200
    assert response.json()["data"]["status"] == "rejected"

    stored = await fetch(SponsorshipProposal, pending_proposal.id)
    assert stored.response_note == "Budget is covered"

    accept = await client.patch(f"/api/proposals/{pending_proposal.id}/accept", headers=organizer_headers)
    assert accept.status_code == 400


@pytest.mark.asyncio
async def test_organizer_received_proposals(client: AsyncClient, db_session, pending_proposal, organizer_headers):
    sponsor = await create_user(db_session, UserRole.SPONSOR)
    await client.post(
        "/api/proposals",
        json={"event_id": pending_proposal.event_id, "proposed_amount": 900},
        headers=auth_headers_for(sponsor),
    )

    response = await client.get("/api/organizer/proposals", headers=organizer_headers)
    assert response.status_code == 200
    assert len(response.json()["data"]) == 2

    pending = await client.get(
        "/api/organizer/proposals", params={"status": "pending"}, headers=organizer_headers
    )
    assert len(pending.json()["data"]) == 2
