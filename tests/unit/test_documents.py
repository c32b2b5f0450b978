"""Unit tests for the document library."""

from pathlib import Path
from typing import Any

import pytest
from sqlalchemy.ext.asyncio import AsyncSession

from backend.condo.config import Settings
from backend.condo.errors import Forbidden, NotFound
from backend.condo.models.common import DocumentCategory
from backend.condo.models.documents import CreateDocumentRequest, UpdateDocumentRequest
from backend.condo.workflows import documents


async def _upload(session: AsyncSession, ctx: Any, title: str, category: DocumentCategory, path: str = "file.pdf"):
    return await documents.create_document(
        session, ctx, CreateDocumentRequest(title=title, file_path=path, category=category)
    )


@pytest.mark.asyncio
async def test_filter_by_category_and_search(session: AsyncSession, users: dict[str, Any]) -> None:
    admin = users["ADMIN"].ctx
    await _upload(session, admin, "Ata Assembleia Janeiro", DocumentCategory.meeting_minutes)
    await _upload(session, admin, "Ata Assembleia Fevereiro", DocumentCategory.meeting_minutes)
    await _upload(session, admin, "Boleto Janeiro", DocumentCategory.bills)

    minutes = await documents.list_documents(session, category=DocumentCategory.meeting_minutes)
    assert len(minutes) == 2

    january = await documents.list_documents(session, search="janeiro")
    assert {d.title for d in january} == {"Ata Assembleia Janeiro", "Boleto Janeiro"}

    both = await documents.list_documents(
        session, category=DocumentCategory.bills, search="JANEIRO"
    )
    assert [d.title for d in both] == ["Boleto Janeiro"]


@pytest.mark.asyncio
@pytest.mark.parametrize("apartment", ["101", "PORT"])
async def test_only_admin_uploads(session: AsyncSession, users: dict[str, Any], apartment: str) -> None:
    with pytest.raises(Forbidden):
        await _upload(session, users[apartment].ctx, "Regimento", DocumentCategory.regulations)


@pytest.mark.asyncio
async def test_partial_update(session: AsyncSession, users: dict[str, Any]) -> None:
    admin = users["ADMIN"].ctx
    document = await _upload(session, admin, "Regimento", DocumentCategory.regulations)

    updated = await documents.update_document(
        session, admin, document.id, UpdateDocumentRequest(title="Regimento Interno")
    )
    assert updated.title == "Regimento Interno"
    assert updated.category == DocumentCategory.regulations


@pytest.mark.asyncio
async def test_delete_missing_document(session: AsyncSession, users: dict[str, Any]) -> None:
    admin = users["ADMIN"].ctx
    document = await _upload(session, admin, "Comunicado", DocumentCategory.announcements)

    await documents.delete_document(session, admin, document.id)
    with pytest.raises(NotFound):
        await documents.get_document(session, document.id)


@pytest.mark.asyncio
async def test_resolve_relative_path_under_upload_dir(
    session: AsyncSession, users: dict[str, Any], tmp_path: Path
) -> None:
    (tmp_path / "ata.pdf").write_bytes(b"%PDF-1.4")
    document = await _upload(session, users["ADMIN"].ctx, "Ata", DocumentCategory.meeting_minutes, "ata.pdf")

    path = documents.resolve_file(document, Settings(upload_dir=str(tmp_path)))
    assert path == (tmp_path / "ata.pdf").resolve()


@pytest.mark.asyncio
async def test_resolve_missing_file(session: AsyncSession, users: dict[str, Any], tmp_path: Path) -> None:
    document = await _upload(session, users["ADMIN"].ctx, "Ata", DocumentCategory.meeting_minutes, "gone.pdf")

    with pytest.raises(NotFound):
        documents.resolve_file(document, Settings(upload_dir=str(tmp_path)))


@pytest.mark.asyncio
async def test_relative_path_cannot_leave_upload_dir(
    session: AsyncSession, users: dict[str, Any], tmp_path: Path
) -> None:
    upload_dir = tmp_path / "uploads"
    upload_dir.mkdir()
    (tmp_path / "secret.txt").write_text("not for download")
    document = await _upload(
        session, users["ADMIN"].ctx, "Escape", DocumentCategory.announcements, "../secret.txt"
    )

    with pytest.raises(NotFound):
        documents.resolve_file(document, Settings(upload_dir=str(upload_dir)))
