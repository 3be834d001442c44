import pytest
from httpx import AsyncClient

from sponsorhub.models.event import Event, EventMode, EventStatus
from sponsorhub.models.proposal import SponsorshipProposal
from conftest import create_event, fetch


@pytest.fixture
def event_payload() -> dict:
    return {
        "title": "PyCon Hyderabad",
        "description": "Regional Python conference",
        "category": "technology",
        "start_date": "2030-03-10T09:00:00Z",
        "end_date": "2030-03-12T18:00:00Z",
        "amount_required": 20000,
        "location": "Hyderabad",
        "event_mode": "hybrid",
        "sponsorship_needs": {
            "tiers": [{"name": "Gold", "amount": 10000, "benefits": ["Keynote slot"]}],
            "categories": ["tech"],
            "custom_benefits": [],
        },
    }


@pytest.mark.asyncio
async def test_create_event(client: AsyncClient, organizer_user, organizer_headers, event_payload):
    response = await client.post("/api/events", json=event_payload, headers=organizer_headers)

    assert response.status_code == 201
    event = response.json()["data"]
    assert event["status"] == "draft"
    assert event["is_approved"] is False
    assert event["organizer_id"] == organizer_user.id
    assert event["organizer"]["email"] == organizer_user.email
    assert event["sponsorship_needs"]["tiers"][0]["name"] == "Gold"
    assert event["start_date"].startswith("2030-03-10T09:00:00")


@pytest.mark.asyncio
async def test_create_event_rejects_bad_date_order(client: AsyncClient, organizer_headers, event_payload):
    event_payload["end_date"] = "2030-03-09T09:00:00Z"
    response = await client.post("/api/events", json=event_payload, headers=organizer_headers)

    assert response.status_code == 400
    assert response.json()["message"] == "End date must be after start date"


@pytest.mark.asyncio
async def test_create_event_missing_title(client: AsyncClient, organizer_headers, event_payload):
    event_payload.pop("title")
    response = await client.post("/api/events", json=event_payload, headers=organizer_headers)

    assert response.status_code == 400


@pytest.mark.asyncio
async def test_sponsor_cannot_create_event(client: AsyncClient, sponsor_headers, event_payload):
    response = await client.post("/api/events", json=event_payload, headers=sponsor_headers)

    assert response.status_code == 403
    assert "Required role(s): organizer" in response.json()["message"]
    assert "Your role: sponsor" in response.json()["message"]


@pytest.mark.asyncio
async def test_public_listing_only_shows_approved_published(
    client: AsyncClient, db_session, organizer_user, public_event, draft_event
):
    await create_event(db_session, organizer_user, status=EventStatus.PUBLISHED, is_approved=False)

    response = await client.get("/api/events")

    assert response.status_code == 200
    ids = [e["id"] for e in response.json()["data"]]
    assert ids == [public_event.id]


@pytest.mark.asyncio
async def test_public_listing_filters(client: AsyncClient, db_session, organizer_user):
    await create_event(
        db_session, organizer_user, title="Hackathon Nights", category="technology",
        event_mode=EventMode.ONLINE, status=EventStatus.PUBLISHED, is_approved=True,
    )
    await create_event(
        db_session, organizer_user, title="Food Carnival", category="culture",
        event_mode=EventMode.OFFLINE, status=EventStatus.PUBLISHED, is_approved=True,
    )

    by_category = await client.get("/api/events", params={"category": "culture"})
    assert [e["title"] for e in by_category.json()["data"]] == ["Food Carnival"]

    by_mode = await client.get("/api/events", params={"event_mode": "online"})
    assert [e["title"] for e in by_mode.json()["data"]] == ["Hackathon Nights"]

    by_search = await client.get("/api/events", params={"search": "hackathon"})
    assert [e["title"] for e in by_search.json()["data"]] == ["Hackathon Nights"]


@pytest.mark.asyncio
async def test_my_events(client: AsyncClient, organizer_headers, draft_event, public_event):
    response = await client.get("/api/events/my", headers=organizer_headers)

    assert response.status_code == 200
    assert {e["id"] for e in response.json()["data"]} == {draft_event.id, public_event.id}


@pytest.mark.asyncio
async def test_get_event_visibility(
    client: AsyncClient, draft_event, organizer_headers, other_organizer_headers, admin_headers
):
    anonymous = await client.get(f"/api/events/{draft_event.id}")
    assert anonymous.status_code == 403

    stranger = await client.get(f"/api/events/{draft_event.id}", headers=other_organizer_headers)
    assert stranger.status_code == 403

    owner = await client.get(f"/api/events/{draft_event.id}", headers=organizer_headers)
    assert owner.status_code == 200

    admin = await client.get(f"/api/events/{draft_event.id}", headers=admin_headers)
    assert admin.status_code == 200


@pytest.mark.asyncio
async def test_get_public_event_anonymously(client: AsyncClient, public_event):
    response = await client.get(f"/api/events/{public_event.id}")

    assert response.status_code == 200
    assert response.json()["data"]["title"] == public_event.title


@pytest.mark.asyncio
async def test_get_event_invalid_id(client: AsyncClient, db_session):
    response = await client.get("/api/events/not-a-uuid")

    assert response.status_code == 400
    assert response.json()["message"] == "Invalid event ID"


@pytest.mark.asyncio
async def test_get_event_not_found(client: AsyncClient, db_session):
    response = await client.get("/api/events/7d3c5a2e-8f4b-4c1e-9a6d-0b2f3e4d5c6a")

    assert response.status_code == 404
    assert response.json()["message"] == "Event not found"


@pytest.mark.asyncio
async def test_update_draft_event(client: AsyncClient, draft_event, organizer_headers):
    response = await client.put(
        f"/api/events/{draft_event.id}",
        json={"title": "Renamed", "amount_required": 999},
        headers=organizer_headers,
    )

    assert response.status_code == 200
    data = response.json()["data"]
    assert data["title"] == "Renamed"
    assert data["amount_required"] == 999
    assert data["description"] == draft_event.description


@pytest.mark.asyncio
async def test_update_rechecks_date_order(client: AsyncClient, draft_event, organizer_headers):
    response = await client.put(
        f"/api/events/{draft_event.id}",
        json={"end_date": "2000-01-01T00:00:00"},
        headers=organizer_headers,
    )

    assert response.status_code == 400


@pytest.mark.asyncio
async def test_update_published_event_rejected(client: AsyncClient, public_event, organizer_headers):
    response = await client.put(
        f"/api/events/{public_event.id}", json={"title": "Nope"}, headers=organizer_headers
    )

    assert response.status_code == 400


@pytest.mark.asyncio
async def test_update_by_non_owner(client: AsyncClient, draft_event, other_organizer_headers):
    response = await client.put(
        f"/api/events/{draft_event.id}", json={"title": "Mine now"}, headers=other_organizer_headers
    )

    assert response.status_code == 403


@pytest.mark.asyncio
async def test_delete_draft_event(client: AsyncClient, draft_event, organizer_headers):
    response = await client.delete(f"/api/events/{draft_event.id}", headers=organizer_headers)

    assert response.status_code == 200
    assert await fetch(Event, draft_event.id) is None


@pytest.mark.asyncio
async def test_delete_published_event_rejected(client: AsyncClient, public_event, organizer_headers):
    response = await client.delete(f"/api/events/{public_event.id}", headers=organizer_headers)

    assert response.status_code == 400


@pytest.mark.asyncio
async def test_delete_event_with_collaboration_rejected(
    client: AsyncClient, db_session, collaboration, organizer_headers
):
    event = collaboration.event
    event.status = EventStatus.DRAFT
    await db_session.commit()

    response = await client.delete(f"/api/events/{event.id}", headers=organizer_headers)

    assert response.status_code == 400
    assert await fetch(SponsorshipProposal, collaboration.proposal_id) is not None


@pytest.mark.asyncio
async def test_publish_and_close(client: AsyncClient, draft_event, organizer_headers):
    published = await client.patch(f"/api/events/{draft_event.id}/publish", headers=organizer_headers)
    assert published.status_code == 200
    assert published.json()["data"]["status"] == "published"

    again = await client.patch(f"/api/events/{draft_event.id}/publish", headers=organizer_headers)
    assert again.status_code == 400

    closed = await client.patch(f"/api/events/{draft_event.id}/close", headers=organizer_headers)
    assert closed.status_code == 200
    assert closed.json()["data"]["status"] == "closed"


@pytest.mark.asyncio
async def test_close_draft_rejected(client: AsyncClient, draft_event, organizer_headers):
    response = await client.patch(f"/api/events/{draft_event.id}/close", headers=organizer_headers)

    assert response.status_code == 400


@pytest.mark.asyncio
async def test_admin_sets_approval(client: AsyncClient, draft_event, admin_headers, organizer_headers):
    forbidden = await client.post(
        f"/api/events/{draft_event.id}/approve", json={"is_approved": True}, headers=organizer_headers
    )
    assert forbidden.status_code == 403

    response = await client.post(
        f"/api/events/{draft_event.id}/approve", json={"is_approved": True}, headers=admin_headers
    )
    assert response.status_code == 200
    assert response.json()["data"]["is_approved"] is True


@pytest.mark.asyncio
async def test_update_sponsorship_requirements(client: AsyncClient, public_event, organizer_headers):
    response = await client.put(
        f"/api/events/{public_event.id}/sponsorship-requirements",
        json={
            "sponsorship_needs": {
                "tiers": [{"name": "Silver", "amount": 3000, "benefits": ["Stall"]}],
                "categories": ["food"],
                "custom_benefits": ["Shout-out"],
            },
            "amount_required": 12000,
        },
        headers=organizer_headers,
    )

    assert response.status_code == 200
    data = response.json()["data"]
    assert data["sponsorship_needs"]["tiers"][0]["name"] == "Silver"
    assert data["amount_required"] == 12000


@pytest.mark.asyncio
async def test_requirements_of_closed_event_rejected(
    client: AsyncClient, db_session, organizer_user, organizer_headers
):
    event = await create_event(db_session, organizer_user, status=EventStatus.CLOSED)
    response = await client.put(
        f"/api/events/{event.id}/sponsorship-requirements",
        json={"sponsorship_needs": {"tiers": []}},
        headers=organizer_headers,
    )

    assert response.status_code == 400
