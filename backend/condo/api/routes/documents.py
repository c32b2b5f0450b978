"""Document library endpoints."""

import uuid
from typing import Annotated, Any

from fastapi import APIRouter, Depends, Query, status
from fastapi.responses import FileResponse
from sqlalchemy.ext.asyncio import AsyncSession

from backend.condo.api.auth import CurrentContext, OptionalContext
from backend.condo.config import Settings, get_settings
from backend.condo.db.engine import get_session
from backend.condo.models.common import DOCUMENT_CATEGORY_LABELS, DocumentCategory
from backend.condo.models.documents import (
    CategoryListResponse,
    CategoryOption,
    CreateDocumentRequest,
    DocumentListResponse,
    DocumentOut,
    UpdateDocumentRequest,
)
from backend.condo.workflows import documents

router = APIRouter(prefix="/documents", tags=["documents"])

Session = Annotated[AsyncSession, Depends(get_session)]


@router.get("/categories", response_model=CategoryListResponse)
async def list_categories(ctx: CurrentContext) -> CategoryListResponse:
    return CategoryListResponse(
        categories=[
            CategoryOption(value=category, label=label)
            for category, label in DOCUMENT_CATEGORY_LABELS.items()
        ]
    )


@router.get("", response_model=DocumentListResponse)
async def list_documents(
    ctx: CurrentContext,
    session: Session,
    category: DocumentCategory | None = None,
    search: Annotated[str | None, Query(max_length=255)] = None,
) -> DocumentListResponse:
    rows = await documents.list_documents(session, category=category, search=search)
    return DocumentListResponse(data=[DocumentOut.model_validate(d) for d in rows])


@router.get("/{document_id}", response_model=DocumentOut)
async def get_document(
    document_id: uuid.UUID, ctx: CurrentContext, session: Session
) -> DocumentOut:
    document = await documents.get_document(session, document_id)
    return DocumentOut.model_validate(document)


@router.get("/{document_id}/download")
async def download_document(
    document_id: uuid.UUID,
    ctx: CurrentContext,
    session: Session,
    settings: Annotated[Settings, Depends(get_settings)],
) -> FileResponse:
    """Raw file bytes as an attachment."""
    document = await documents.get_document(session, document_id)
    path = documents.resolve_file(document, settings)
    return FileResponse(path, filename=path.name)


@router.post("", response_model=DocumentOut, status_code=status.HTTP_201_CREATED)
async def create_document(
    body: CreateDocumentRequest, ctx: OptionalContext, session: Session
) -> DocumentOut:
    document = await documents.create_document(session, ctx, body)
    return DocumentOut.model_validate(document)


@router.put("/{document_id}", response_model=DocumentOut)
async def update_document(
    document_id: uuid.UUID,
    body: UpdateDocumentRequest,
    ctx: OptionalContext,
    session: Session,
) -> DocumentOut:
    document = await documents.update_document(session, ctx, document_id, body)
    return DocumentOut.model_validate(document)


@router.delete("/{document_id}")
async def delete_document(
    document_id: uuid.UUID, ctx: OptionalContext, session: Session
) -> dict[str, Any]:
    await documents.delete_document(session, ctx, document_id)
    return {"success": True, "message": "Document deleted successfully"}
