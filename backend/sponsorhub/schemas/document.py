from pydantic import BaseModel, computed_field
from typing import Optional
from datetime import datetime

from sponsorhub.models.document import DocumentType
from sponsorhub.schemas.auth import UserSummary


class DocumentResponse(BaseModel):
    id: str
    collaboration_id: str
    uploaded_by_id: str
    file_name: str
    file_type: str
    file_size: int
    document_type: DocumentType
    uploaded_by: Optional[UserSummary] = None
    created_at: datetime

    @computed_field
    @property
    def download_url(self) -> str:
        return f"/api/documents/download/{self.id}"

    class Config:
        from_attributes = True
