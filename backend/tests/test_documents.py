import pytest
from httpx import AsyncClient

from sponsorhub.core.config import settings
from sponsorhub.models.document import Document
from conftest import fetch

PDF_BYTES = b"%PDF-1.4\n1 0 obj<<>>endobj\ntrailer<<>>\n%%EOF"


async def upload(client, collaboration_id, headers, content=PDF_BYTES,
                 filename="agreement.pdf", content_type="application/pdf", **data):
    return await client.post(
        f"/api/documents/{collaboration_id}",
        files={"file": (filename, content, content_type)},
        data=data,
        headers=headers,
    )


@pytest.mark.asyncio
async def test_upload_document(client: AsyncClient, collaboration, sponsor_user, sponsor_headers):
    response = await upload(client, collaboration.id, sponsor_headers, document_type="agreement")

    assert response.status_code == 201
    document = response.json()["data"]
    assert document["file_name"] == "agreement.pdf"
    assert document["file_type"] == "application/pdf"
    assert document["file_size"] == len(PDF_BYTES)
    assert document["document_type"] == "agreement"
    assert document["uploaded_by"]["id"] == sponsor_user.id
    assert document["download_url"] == f"/api/documents/download/{document['id']}"

    stored = await fetch(Document, document["id"])
    assert stored.file_path.startswith(f"documents/{collaboration.id}/")
    assert stored.file_path.endswith(".pdf")
    assert (settings.UPLOAD_DIR / stored.file_path).read_bytes() == PDF_BYTES


@pytest.mark.asyncio
async def test_upload_defaults_to_other(client: AsyncClient, collaboration, organizer_headers):
    response = await upload(
        client, collaboration.id, organizer_headers,
        content=b"\x89PNG\r\n\x1a\n", filename="logo.png", content_type="image/png",
    )

    assert response.status_code == 201
    assert response.json()["data"]["document_type"] == "other"


@pytest.mark.asyncio
async def test_upload_rejects_disallowed_type(client: AsyncClient, collaboration, sponsor_headers):
    response = await upload(
        client, collaboration.id, sponsor_headers,
        content=b"MZ", filename="tool.exe", content_type="application/x-msdownload",
    )

    assert response.status_code == 400
    assert response.json()["code"] == "INVALID_FILE_TYPE"


@pytest.mark.asyncio
async def test_upload_too_large(client: AsyncClient, collaboration, sponsor_headers, monkeypatch):
    monkeypatch.setattr(settings, "MAX_DOCUMENT_SIZE", 16)
    response = await upload(client, collaboration.id, sponsor_headers, content=b"x" * 17)

    assert response.status_code == 413


@pytest.mark.asyncio
async def test_upload_by_outsider(client: AsyncClient, collaboration, other_sponsor_headers):
    response = await upload(client, collaboration.id, other_sponsor_headers)

    assert response.status_code == 403


@pytest.mark.asyncio
async def test_list_documents_newest_first(client: AsyncClient, collaboration, sponsor_headers, organizer_headers):
    first = await upload(client, collaboration.id, sponsor_headers, filename="first.pdf")
    second = await upload(client, collaboration.id, organizer_headers, filename="second.pdf")

    response = await client.get(f"/api/documents/{collaboration.id}", headers=sponsor_headers)

    assert response.status_code == 200
    body = response.json()
    assert {d["id"] for d in body["data"]} == {first.json()["data"]["id"], second.json()["data"]["id"]}
    assert body["pagination"]["total"] == 2


@pytest.mark.asyncio
async def test_download_document(client: AsyncClient, collaboration, sponsor_headers, organizer_headers):
    uploaded = await upload(client, collaboration.id, sponsor_headers)
    document_id = uploaded.json()["data"]["id"]

    response = await client.get(f"/api/documents/download/{document_id}", headers=organizer_headers)

    assert response.status_code == 200
    assert response.content == PDF_BYTES
    assert "agreement.pdf" in response.headers["content-disposition"]


@pytest.mark.asyncio
async def test_download_missing_file(client: AsyncClient, collaboration, sponsor_headers):
    uploaded = await upload(client, collaboration.id, sponsor_headers)
    document_id = uploaded.json()["data"]["id"]
    stored = await fetch(Document, document_id)
    (settings.UPLOAD_DIR / stored.file_path).unlink()

    response = await client.get(f"/api/documents/download/{document_id}", headers=sponsor_headers)

    assert response.status_code == 404
    assert response.json()["message"] == "File not found"


@pytest.mark.asyncio
async def test_delete_document(client: AsyncClient, collaboration, sponsor_headers, organizer_headers):
    uploaded = await upload(client, collaboration.id, sponsor_headers)
    document_id = uploaded.json()["data"]["id"]
    stored = await fetch(Document, document_id)
    path = settings.UPLOAD_DIR / stored.file_path

    response = await client.delete(f"/api/documents/{document_id}", headers=organizer_headers)

    assert response.status_code == 200
    assert await fetch(Document, document_id) is None
    assert not path.exists()


@pytest.mark.asyncio
async def test_delete_document_forbidden(
    client: AsyncClient, collaboration, organizer_headers, other_sponsor_headers
):
    uploaded = await upload(client, collaboration.id, organizer_headers)
    response = await client.delete(
        f"/api/documents/{uploaded.json()['data']['id']}", headers=other_sponsor_headers
    )

    assert response.status_code == 403


@pytest.mark.asyncio
async def test_stored_extension_follows_content_type(client: AsyncClient, collaboration, sponsor_headers):
    response = await upload(client, collaboration.id, sponsor_headers, filename="report.html")

    assert response.status_code == 201
    assert response.json()["data"]["file_name"] == "report.html"

    stored = await fetch(Document, response.json()["data"]["id"])
    assert stored.file_path.endswith(".pdf")


@pytest.mark.asyncio
async def test_delete_document_already_gone_from_disk(client: AsyncClient, collaboration, sponsor_headers):
    uploaded = await upload(client, collaboration.id, sponsor_headers)
    document_id = uploaded.json()["data"]["id"]
    stored = await fetch(Document, document_id)
    (settings.UPLOAD_DIR / stored.file_path).unlink()

    response = await client.delete(f"/api/documents/{document_id}", headers=sponsor_headers)

    assert response.status_code == 200
    assert await fetch(Document, document_id) is None
