"""
Document Service - files exchanged inside a collaboration

Files are stored on local disk under UPLOAD_PATH:

    <UPLOAD_PATH>/documents/<collaboration_id>/<uuid>.<ext>

The database row keeps the path relative to UPLOAD_PATH plus the original
file name, which is restored on download.
"""

import uuid
from pathlib import Path
from typing import List, Tuple

import aiofiles
import aiofiles.os
from fastapi import UploadFile
from sqlalchemy import select

from sponsorhub.core.config import settings
from sponsorhub.core.exceptions import (
    AuthorizationError,
    FileTooLargeError,
    InvalidFileTypeError,
    ResourceNotFoundError,
    StorageError,
    ValidationError,
)
from sponsorhub.core.logging_config import logger
from sponsorhub.models.document import Document, DocumentType
from sponsorhub.models.user import User, UserRole
from sponsorhub.services.base import BaseService
from sponsorhub.services.collaboration_service import CollaborationService
from sponsorhub.utils.pagination import paginate

MIME_EXTENSIONS = {
    "application/pdf": ".pdf",
    "image/jpeg": ".jpg",
    "image/png": ".png",
    "application/vnd.openxmlformats-officedocument.wordprocessingml.document": ".docx",
}


def resolve_document_path(relative_path: str) -> Path:
    return settings.UPLOAD_DIR / relative_path


class DocumentService(BaseService):

    def __init__(self, db):
        super().__init__(db)
        self.collaborations = CollaborationService(db)

    async def upload(
        self,
        collaboration_id: str,
        user: User,
        file: UploadFile,
        document_type: DocumentType = DocumentType.OTHER,
    ) -> Document:
        collaboration = await self.collaborations.get_for_participant(collaboration_id, user)

        if not file or not file.filename:
            raise ValidationError("No file uploaded", field="file")

        content_type = (file.content_type or "").split(";")[0].strip().lower()
        allowed = settings.ALLOWED_DOCUMENT_TYPES
        if content_type not in allowed:
            raise InvalidFileTypeError(content_type or "unknown", allowed)

        content = await file.read()
        if len(content) > settings.MAX_DOCUMENT_SIZE:
            raise FileTooLargeError(settings.MAX_DOCUMENT_SIZE)
        if not content:
            raise ValidationError("Uploaded file is empty", field="file")

        # Stored name follows the checked MIME type, never the client file name
        extension = MIME_EXTENSIONS.get(content_type, "")
        target_dir = settings.get_collaboration_docs_dir(str(collaboration.id))
        stored_name = f"{uuid.uuid4().hex}{extension}"
        target = target_dir / stored_name

        try:
            async with aiofiles.open(target, "wb") as out:
                await out.write(content)
        except OSError as e:
            logger.log_error_with_context(e, "document_upload", collaboration_id=str(collaboration.id))
            raise StorageError("Failed to store uploaded file")

        document = Document(
            collaboration_id=collaboration.id,
            uploaded_by_id=str(user.id),
            file_name=Path(file.filename).name,
            file_type=content_type,
            file_size=len(content),
            file_path=target.relative_to(settings.UPLOAD_DIR).as_posix(),
            document_type=document_type,
        )
        self.db.add(document)
        await self.db.commit()

        logger.info(
            f"Document uploaded: {document.file_name} ({document.file_size} bytes) "
            f"to collaboration {collaboration.id}"
        )
        return await self.reload(document)

    async def list_documents(
        self, collaboration_id: str, user: User, page: int, limit: int
    ) -> Tuple[List[Document], dict]:
        collaboration = await self.collaborations.get_for_participant(collaboration_id, user)
        query = (
            select(Document)
            .where(Document.collaboration_id == collaboration.id)
            .order_by(Document.created_at.desc())
        )
        return await paginate(self.db, query, page, limit)

    async def get_for_download(self, document_id: str, user: User) -> Tuple[Document, Path]:
        document = await self.get_or_404(Document, document_id, "Document")
        await self.collaborations.get_for_participant(document.collaboration_id, user)

        path = resolve_document_path(document.file_path)
        if not path.is_file():
            logger.warning(f"Document {document.id} missing on disk: {path}")
            raise ResourceNotFoundError("File")
        return document, path

    async def delete(self, document_id: str, user: User) -> None:
        document = await self.get_or_404(Document, document_id, "Document")
        collaboration = await self.collaborations.get_collaboration(document.collaboration_id)

        allowed = (
            user.role == UserRole.ADMIN
            or str(document.uploaded_by_id) == str(user.id)
            or str(collaboration.organizer_id) == str(user.id)
        )
        if not allowed:
            raise AuthorizationError("You do not have permission to delete this document")

        path = resolve_document_path(document.file_path)
        await self.db.delete(document)
        await self.db.commit()

        try:
            await aiofiles.os.remove(path)
        except FileNotFoundError:
            logger.warning(f"Document {document_id} was already gone from disk: {path}")
        logger.info(f"Document deleted: {document_id} by user {user.id}")
