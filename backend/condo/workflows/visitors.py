"""Visitor request workflow.

Requests are raised by residents and start ``pending``. Only an admin may
approve; the admin or the requester may reject. Nothing leaves ``approved``
or ``rejected``.
"""

import uuid
from datetime import date, datetime, time, timezone

from sqlalchemy.ext.asyncio import AsyncSession

from backend.condo.auth.security import require_owner_or_admin, require_role
from backend.condo.db.context import RequestContext
from backend.condo.db.models import VisitorRequest
from backend.condo.db.repository import Repository
from backend.condo.errors import Forbidden, InvalidTransition
from backend.condo.models.common import RequestStatus, Role
from backend.condo.models.visitors import UpdateVisitorRequest
from backend.condo.utils.logging import audit_log
from backend.condo.utils.metrics import metrics
from backend.condo.workflows.bookings import parse_clock

ENTITY = "visitor"

MIDNIGHT = time(0, 0)

ALLOWED_TRANSITIONS: dict[RequestStatus, frozenset[RequestStatus]] = {
    RequestStatus.pending: frozenset({RequestStatus.approved, RequestStatus.rejected}),
    RequestStatus.approved: frozenset(),
    RequestStatus.rejected: frozenset(),
}


def _repo(session: AsyncSession) -> Repository[VisitorRequest]:
    return Repository(
        session, VisitorRequest, owner_column=VisitorRequest.requester_id, label="Visitor"
    )


def _record(
    ctx: RequestContext | None,
    visitor_id: uuid.UUID | None,
    action: str,
    outcome: str,
    reason: str | None = None,
) -> None:
    audit_log.log_action(ctx, ENTITY, visitor_id, action, outcome, reason)
    metrics.inc_action(ENTITY, action, outcome)


def ensure_transition(current: RequestStatus, target: RequestStatus) -> None:
    if current == target:
        return
    if target not in ALLOWED_TRANSITIONS[current]:
        raise InvalidTransition(f"Visitor request cannot go from {current.value} to {target.value}")


async def create_visitor(
    session: AsyncSession,
    ctx: RequestContext,
    *,
    visitor_name: str,
    visit_date: date,
    visitor_document: str | None = None,
    visit_time: str | None = None,
) -> VisitorRequest:
    """Register a visitor for the caller; status is always pending."""
    visitor = VisitorRequest(
        id=uuid.uuid4(),
        requester_id=ctx.user_id,
        visitor_name=visitor_name,
        visitor_document=visitor_document,
        visit_date=visit_date,
        visit_time=parse_clock(visit_time) if visit_time else MIDNIGHT,
        status=RequestStatus.pending,
        created_at=datetime.now(timezone.utc),
    )
    await _repo(session).add(visitor)
    await session.commit()

    _record(ctx, visitor.id, "create", "success")
    return visitor


async def get_visitor(
    session: AsyncSession, ctx: RequestContext, visitor_id: uuid.UUID
) -> VisitorRequest:
    visitor = await _repo(session).get_or_raise(visitor_id)
    require_owner_or_admin(ctx, visitor.requester_id)
    return visitor


async def list_visitors(session: AsyncSession, ctx: RequestContext) -> list[VisitorRequest]:
    """Admins see every request; residents see their own. Oldest first."""
    repo = _repo(session)
    return await repo.all(repo.select_scoped(ctx).order_by(VisitorRequest.created_at.asc()))


async def update_visitor(
    session: AsyncSession,
    ctx: RequestContext,
    visitor_id: uuid.UUID,
    patch: UpdateVisitorRequest,
) -> VisitorRequest:
    """Apply a partial update.

    Raises:
        NotFound: Request absent
        Forbidden: Caller is neither admin nor requester, or a non-admin sent ``status``
        InvalidTransition: Requester editing a request that is no longer pending,
            or an admin status change outside the transition table
    """
    visitor = await _repo(session).get_or_raise(visitor_id)
    try:
        require_owner_or_admin(ctx, visitor.requester_id)
        if patch.status is not None and not ctx.is_admin:
            raise Forbidden("Only admins can update the status")
    except Forbidden as e:
        _record(ctx, visitor_id, "update", "denied", e.message)
        raise

    if not ctx.is_admin and visitor.status != RequestStatus.pending:
        raise InvalidTransition("Only pending requests can be edited")
    if patch.status is not None:
        ensure_transition(visitor.status, patch.status)
        visitor.status = patch.status

    if patch.visitor_name is not None:
        visitor.visitor_name = patch.visitor_name
    if patch.visitor_document is not None:
        visitor.visitor_document = patch.visitor_document
    if patch.visit_date is not None:
        visitor.visit_date = patch.visit_date
    if patch.visit_time is not None:
        visitor.visit_time = parse_clock(patch.visit_time)

    await session.commit()

    _record(ctx, visitor_id, "update", "success")
    return visitor


async def approve_visitor(
    session: AsyncSession, ctx: RequestContext, visitor_id: uuid.UUID
) -> VisitorRequest:
    """Admin-only, regardless of ownership."""
    try:
        require_role(ctx, [Role.admin])
    except Forbidden:
        _record(ctx, visitor_id, "approve", "denied", "admin only")
        raise
    visitor = await _repo(session).get_or_raise(visitor_id)
    ensure_transition(visitor.status, RequestStatus.approved)

    visitor.status = RequestStatus.approved
    await session.commit()

    _record(ctx, visitor_id, "approve", "success")
    return visitor


async def reject_visitor(
    session: AsyncSession, ctx: RequestContext, visitor_id: uuid.UUID
) -> VisitorRequest:
    """Admin or requester."""
    visitor = await _repo(session).get_or_raise(visitor_id)
    try:
        require_owner_or_admin(ctx, visitor.requester_id)
    except Forbidden:
        _record(ctx, visitor_id, "reject", "denied", "not requester")
        raise
    ensure_transition(visitor.status, RequestStatus.rejected)

    visitor.status = RequestStatus.rejected
    await session.commit()

    _record(ctx, visitor_id, "reject", "success")
    return visitor


async def delete_visitor(
    session: AsyncSession, ctx: RequestContext, visitor_id: uuid.UUID
) -> None:
    repo = _repo(session)
    visitor = await repo.get_or_raise(visitor_id)
    try:
        require_owner_or_admin(ctx, visitor.requester_id)
    except Forbidden:
        _record(ctx, visitor_id, "delete", "denied", "not requester")
        raise

    await repo.delete(visitor)
    await session.commit()

    _record(ctx, visitor_id, "delete", "success")
