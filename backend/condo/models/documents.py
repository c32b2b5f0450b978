"""Document library models."""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field

from backend.condo.models.common import DocumentCategory


class CreateDocumentRequest(BaseModel):
    """Request body for POST /api/documents."""

    title: str = Field(..., min_length=1, max_length=255)
    file_path: str = Field(..., min_length=1, max_length=500)
    category: DocumentCategory


class UpdateDocumentRequest(BaseModel):
    title: str | None = Field(None, min_length=1, max_length=255)
    file_path: str | None = Field(None, min_length=1, max_length=500)
    category: DocumentCategory | None = None


class DocumentOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    title: str
    file_path: str
    category: DocumentCategory
    uploaded_by: UUID | None = None
    uploaded_at: datetime


class DocumentListResponse(BaseModel):
    success: bool = True
    data: list[DocumentOut]


class CategoryOption(BaseModel):
    value: DocumentCategory
    label: str


class CategoryListResponse(BaseModel):
    categories: list[CategoryOption]
