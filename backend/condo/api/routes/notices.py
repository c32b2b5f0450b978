"""Notice board endpoints."""

import uuid
from typing import Annotated, Any

from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from backend.condo.api.auth import OptionalContext
from backend.condo.db.engine import get_session
from backend.condo.models.notices import (
    CreateNoticeRequest,
    NoticeListResponse,
    NoticeOut,
    NoticeResponse,
)
from backend.condo.workflows import notices

router = APIRouter(prefix="/notices", tags=["notices"])

Session = Annotated[AsyncSession, Depends(get_session)]


@router.get("", response_model=NoticeListResponse)
async def list_notices(ctx: OptionalContext, session: Session) -> NoticeListResponse:
    """Active notices, newest first."""
    rows = await notices.list_active_notices(session)
    return NoticeListResponse(data=[NoticeOut.model_validate(n) for n in rows])


@router.post("", response_model=NoticeResponse, status_code=status.HTTP_201_CREATED)
async def create_notice(
    body: CreateNoticeRequest, ctx: OptionalContext, session: Session
) -> NoticeResponse:
    notice = await notices.create_notice(
        session,
        ctx,
        title=body.title,
        content=body.content,
        type=body.type,
        priority=body.priority,
        expires_at=body.expires_at,
    )
    return NoticeResponse(
        message="Notice created successfully", data=NoticeOut.model_validate(notice)
    )


@router.delete("/{notice_id}")
async def delete_notice(
    notice_id: uuid.UUID, ctx: OptionalContext, session: Session
) -> dict[str, Any]:
    await notices.delete_notice(session, ctx, notice_id)
    return {"success": True, "message": "Notice deleted successfully"}
