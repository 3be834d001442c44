import pytest
from httpx import AsyncClient

from sponsorhub.models.collaboration import CollaborationStatus


async def send(client, collaboration_id, headers, content="Hello there", **extra):
    return await client.post(
        f"/api/messages/{collaboration_id}", json={"content": content, **extra}, headers=headers
    )


@pytest.mark.asyncio
async def test_send_message(client: AsyncClient, collaboration, sponsor_user, sponsor_headers):
    response = await send(
        client, collaboration.id, sponsor_headers, content="  Draft MoU attached  ",
        attachments=[{"file_name": "mou.pdf", "file_url": "https://files.example/mou.pdf"}],
    )

    assert response.status_code == 201
    message = response.json()["data"]
    assert message["content"] == "Draft MoU attached"
    assert message["sender"]["id"] == sponsor_user.id
    assert message["is_read"] is False
    assert message["attachments"][0]["file_name"] == "mou.pdf"


@pytest.mark.asyncio
async def test_send_blank_message(client: AsyncClient, collaboration, sponsor_headers):
    response = await send(client, collaboration.id, sponsor_headers, content="   ")

    assert response.status_code == 400
    assert response.json()["message"] == "Message content is required"


@pytest.mark.asyncio
async def test_send_too_long_message(client: AsyncClient, collaboration, sponsor_headers):
    response = await send(client, collaboration.id, sponsor_headers, content="x" * 5001)

    assert response.status_code == 400


@pytest.mark.asyncio
async def test_outsiders_cannot_message(client: AsyncClient, collaboration, other_sponsor_headers, admin_headers):
    for headers in (other_sponsor_headers, admin_headers):
        response = await send(client, collaboration.id, headers)
        assert response.status_code == 403


@pytest.mark.asyncio
async def test_terminated_collaboration_blocks_messages(
    client: AsyncClient, db_session, collaboration, sponsor_headers
):
    collaboration.status = CollaborationStatus.TERMINATED
    await db_session.commit()

    response = await send(client, collaboration.id, sponsor_headers)

    assert response.status_code == 400


@pytest.mark.asyncio
async def test_list_messages_oldest_first(client: AsyncClient, collaboration, sponsor_headers, organizer_headers):
    for index in range(3):
        await send(client, collaboration.id, sponsor_headers, content=f"message {index}")

    response = await client.get(
        f"/api/messages/{collaboration.id}", params={"page": 1, "limit": 2}, headers=organizer_headers
    )

    assert response.status_code == 200
    body = response.json()
    assert [m["content"] for m in body["data"]] == ["message 0", "message 1"]
    assert body["pagination"] == {"page": 1, "limit": 2, "total": 3, "pages": 2}

    second = await client.get(
        f"/api/messages/{collaboration.id}", params={"page": 2, "limit": 2}, headers=organizer_headers
    )
    assert [m["content"] for m in second.json()["data"]] == ["message 2"]


@pytest.mark.asyncio
async def test_list_messages_limit_capped(client: AsyncClient, collaboration, sponsor_headers):
    response = await client.get(
        f"/api/messages/{collaboration.id}", params={"limit": 500}, headers=sponsor_headers
    )

    assert response.status_code == 400


@pytest.mark.asyncio
async def test_unread_count_and_mark_read(client: AsyncClient, collaboration, sponsor_headers, organizer_headers):
    sent = await send(client, collaboration.id, sponsor_headers)
    await send(client, collaboration.id, organizer_headers, content="Reply")
    message_id = sent.json()["data"]["id"]

    organizer_count = await client.get(
        f"/api/messages/{collaboration.id}/unread-count", headers=organizer_headers
    )
    assert organizer_count.json()["data"]["unread_count"] == 1

    sponsor_count = await client.get(
        f"/api/messages/{collaboration.id}/unread-count", headers=sponsor_headers
    )
    assert sponsor_count.json()["data"]["unread_count"] == 1

    read = await client.patch(f"/api/messages/{message_id}/read", headers=organizer_headers)
    assert read.status_code == 200
    assert read.json()["data"]["is_read"] is True

    organizer_count = await client.get(
        f"/api/messages/{collaboration.id}/unread-count", headers=organizer_headers
    )
    assert organizer_count.json()["data"]["unread_count"] == 0


@pytest.mark.asyncio
async def test_mark_read_by_outsider(client: AsyncClient, collaboration, sponsor_headers, other_sponsor_headers):
    sent = await send(client, collaboration.id, sponsor_headers)
    response = await client.patch(
        f"/api/messages/{sent.json()['data']['id']}/read", headers=other_sponsor_headers
    )

    assert response.status_code == 403
