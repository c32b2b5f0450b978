"""Notice board."""

import uuid
from datetime import date, datetime, time, timezone

from sqlalchemy import or_, select
from sqlalchemy.ext.asyncio import AsyncSession

from backend.condo.auth.security import require_role
from backend.condo.db.context import RequestContext
from backend.condo.db.models import Notice
from backend.condo.db.repository import Repository
from backend.condo.models.common import NoticePriority, NoticeType, Role
from backend.condo.utils.logging import audit_log


def _repo(session: AsyncSession) -> Repository[Notice]:
    return Repository(session, Notice, label="Notice")


async def list_active_notices(session: AsyncSession, today: date | None = None) -> list[Notice]:
    """Notices without expiry or expiring today or later, newest first."""
    start_of_day = datetime.combine(
        today or datetime.now(timezone.utc).date(), time.min, tzinfo=timezone.utc
    )
    result = await session.execute(
        select(Notice)
        .where(or_(Notice.expires_at.is_(None), Notice.expires_at >= start_of_day))
        .order_by(Notice.created_at.desc())
    )
    return list(result.scalars().all())


async def create_notice(
    session: AsyncSession,
    ctx: RequestContext | None,
    *,
    title: str,
    content: str,
    type: NoticeType,
    priority: NoticePriority = NoticePriority.medium,
    expires_at: datetime | None = None,
) -> Notice:
    """Admin-only."""
    ctx = require_role(ctx, [Role.admin])
    notice = Notice(
        id=uuid.uuid4(),
        title=title,
        content=content,
        type=type,
        priority=priority,
        created_by=ctx.user_id,
        created_at=datetime.now(timezone.utc),
        expires_at=expires_at,
    )
    await _repo(session).add(notice)
    await session.commit()

    audit_log.log_action(ctx, "notice", notice.id, "create", "success")
    return notice


async def delete_notice(
    session: AsyncSession, ctx: RequestContext | None, notice_id: uuid.UUID
) -> None:
    """Admin-only; NotFound if absent."""
    ctx = require_role(ctx, [Role.admin])
    repo = _repo(session)
    notice = await repo.get_or_raise(notice_id)
    await repo.delete(notice)
    await session.commit()

    audit_log.log_action(ctx, "notice", notice_id, "delete", "success")
