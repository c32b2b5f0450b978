"""Document library: admin-managed, readable by every authenticated user."""

import uuid
from datetime import datetime, timezone
from pathlib import Path

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from backend.condo.auth.security import require_role
from backend.condo.config import Settings, get_settings
from backend.condo.db.context import RequestContext
from backend.condo.db.models import Document
from backend.condo.db.repository import Repository
from backend.condo.errors import NotFound
from backend.condo.models.common import DocumentCategory, Role
from backend.condo.models.documents import CreateDocumentRequest, UpdateDocumentRequest
from backend.condo.utils.logging import audit_log


def _repo(session: AsyncSession) -> Repository[Document]:
    return Repository(session, Document, label="Document")


async def list_documents(
    session: AsyncSession,
    category: DocumentCategory | None = None,
    search: str | None = None,
) -> list[Document]:
    query = select(Document)
    if category:
        query = query.where(Document.category == category)
    if search:
        query = query.where(Document.title.ilike(f"%{search}%"))
    result = await session.execute(query.order_by(Document.uploaded_at.desc()))
    return list(result.scalars().all())


async def get_document(session: AsyncSession, document_id: uuid.UUID) -> Document:
    return await _repo(session).get_or_raise(document_id)


async def create_document(
    session: AsyncSession, ctx: RequestContext | None, request: CreateDocumentRequest
) -> Document:
    ctx = require_role(ctx, [Role.admin])
    document = Document(
        id=uuid.uuid4(),
        title=request.title,
        file_path=request.file_path,
        category=request.category,
        uploaded_by=ctx.user_id,
        uploaded_at=datetime.now(timezone.utc),
    )
    await _repo(session).add(document)
    await session.commit()

    audit_log.log_action(ctx, "document", document.id, "create", "success")
    return document


async def update_document(
    session: AsyncSession,
    ctx: RequestContext | None,
    document_id: uuid.UUID,
    patch: UpdateDocumentRequest,
) -> Document:
    ctx = require_role(ctx, [Role.admin])
    document = await _repo(session).get_or_raise(document_id)

    for field, value in patch.model_dump(exclude_unset=True, exclude_none=True).items():
        setattr(document, field, value)
    await session.commit()

    audit_log.log_action(ctx, "document", document_id, "update", "success")
    return document


async def delete_document(
    session: AsyncSession, ctx: RequestContext | None, document_id: uuid.UUID
) -> None:
    ctx = require_role(ctx, [Role.admin])
    repo = _repo(session)
    document = await repo.get_or_raise(document_id)
    await repo.delete(document)
    await session.commit()

    audit_log.log_action(ctx, "document", document_id, "delete", "success")


def resolve_file(document: Document, settings: Settings | None = None) -> Path:
    """Locate the stored file; relative paths live under ``upload_dir``.

    Raises:
        NotFound: If the file is missing on disk, or a relative path
            points outside ``upload_dir``
    """
    settings = settings or get_settings()
    path = Path(document.file_path)
    if not path.is_absolute():
        upload_root = Path(settings.upload_dir).resolve()
        path = (upload_root / path).resolve()
        if not path.is_relative_to(upload_root):
            raise NotFound("File not found")
    if not path.is_file():
        raise NotFound("File not found")
    return path
