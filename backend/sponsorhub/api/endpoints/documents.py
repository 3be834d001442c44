"""
Collaboration document endpoints.

Uploads are multipart/form-data with a ``file`` part and an optional
``document_type`` field. Downloads stream the stored file back under its
original name.
"""
from fastapi import APIRouter, Depends, File, Form, Query, Request, UploadFile, status
from fastapi.responses import FileResponse
from sqlalchemy.ext.asyncio import AsyncSession

from sponsorhub.core.database import get_db
from sponsorhub.core.rate_limiter import limiter, UPLOAD_LIMIT
from sponsorhub.models.document import DocumentType
from sponsorhub.models.user import User
from sponsorhub.modules.auth.dependencies import get_current_user
from sponsorhub.schemas.common import APIResponse, MessageResponse, PaginatedResponse
from sponsorhub.schemas.document import DocumentResponse
from sponsorhub.services.document_service import DocumentService
from sponsorhub.utils.pagination import MAX_PAGE_SIZE

router = APIRouter()


@router.get("/download/{document_id}")
async def download_document(
    document_id: str,
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    document, path = await DocumentService(db).get_for_download(document_id, current_user)
    return FileResponse(
        path,
        media_type=document.file_type,
        filename=document.file_name,
    )


@router.post("/{collaboration_id}", response_model=APIResponse[DocumentResponse],
             status_code=status.HTTP_201_CREATED)
@limiter.limit(UPLOAD_LIMIT)
async def upload_document(
    request: Request,
    collaboration_id: str,
    file: UploadFile = File(...),
    document_type: DocumentType = Form(DocumentType.OTHER),
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    """Upload a document to a collaboration (rate limited: 10/min)"""
    document = await DocumentService(db).upload(collaboration_id, current_user, file, document_type)
    return {
        "success": True,
        "message": "Document uploaded successfully",
        "data": DocumentResponse.model_validate(document),
    }


@router.get("/{collaboration_id}", response_model=PaginatedResponse[DocumentResponse])
async def list_documents(
    collaboration_id: str,
    page: int = Query(1, ge=1),
    limit: int = Query(20, ge=1, le=MAX_PAGE_SIZE),
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    documents, pagination = await DocumentService(db).list_documents(collaboration_id, current_user, page, limit)
    return {
        "success": True,
        "data": [DocumentResponse.model_validate(d) for d in documents],
        "pagination": pagination,
    }


@router.delete("/{document_id}", response_model=MessageResponse)
async def delete_document(
    document_id: str,
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    await DocumentService(db).delete(document_id, current_user)
    return {"success": True, "message": "Document deleted successfully"}
