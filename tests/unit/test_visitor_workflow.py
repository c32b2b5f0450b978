"""Unit tests for the visitor request workflow."""

from datetime import date, time
from typing import Any

import pytest
from sqlalchemy.ext.asyncio import AsyncSession

from backend.condo.errors import Forbidden, InvalidTransition
from backend.condo.models.common import RequestStatus
from backend.condo.models.visitors import UpdateVisitorRequest
from backend.condo.workflows import visitors

VISIT_DAY = date(2024, 3, 10)


async def _register(session: AsyncSession, user: Any, name: str = "Carlos Pereira", **kwargs: Any):
    return await visitors.create_visitor(
        session, user.ctx, visitor_name=name, visit_date=VISIT_DAY, **kwargs
    )


@pytest.mark.asyncio
async def test_create_is_always_pending(session: AsyncSession, users: dict[str, Any]) -> None:
    visitor = await _register(session, users["101"], visitor_document="12345678901", visit_time="8:15")

    assert visitor.status == RequestStatus.pending
    assert visitor.requester_id == users["101"].id
    assert visitor.visit_time == time(8, 15)


@pytest.mark.asyncio
async def test_missing_visit_time_defaults_to_midnight(
    session: AsyncSession, users: dict[str, Any]
) -> None:
    visitor = await _register(session, users["101"])
    assert visitor.visit_time == visitors.MIDNIGHT


@pytest.mark.asyncio
async def test_approve_is_admin_only_even_for_owner(
    session: AsyncSession, users: dict[str, Any]
) -> None:
    visitor = await _register(session, users["101"])

    with pytest.raises(Forbidden):
        await visitors.approve_visitor(session, users["101"].ctx, visitor.id)
    with pytest.raises(Forbidden):
        await visitors.approve_visitor(session, users["PORT"].ctx, visitor.id)

    approved = await visitors.approve_visitor(session, users["ADMIN"].ctx, visitor.id)
    assert approved.status == RequestStatus.approved


@pytest.mark.asyncio
async def test_owner_can_reject_but_stranger_cannot(
    session: AsyncSession, users: dict[str, Any]
) -> None:
    visitor = await _register(session, users["101"])

    with pytest.raises(Forbidden):
        await visitors.reject_visitor(session, users["202"].ctx, visitor.id)

    rejected = await visitors.reject_visitor(session, users["101"].ctx, visitor.id)
    assert rejected.status == RequestStatus.rejected


@pytest.mark.asyncio
async def test_decided_request_cannot_flip(session: AsyncSession, users: dict[str, Any]) -> None:
    admin = users["ADMIN"]
    visitor = await _register(session, users["101"])
    await visitors.approve_visitor(session, admin.ctx, visitor.id)

    with pytest.raises(InvalidTransition):
        await visitors.reject_visitor(session, admin.ctx, visitor.id)


@pytest.mark.asyncio
async def test_non_admin_cannot_set_status(session: AsyncSession, users: dict[str, Any]) -> None:
    visitor = await _register(session, users["101"])

    with pytest.raises(Forbidden):
        await visitors.update_visitor(
            session,
            users["101"].ctx,
            visitor.id,
            UpdateVisitorRequest(status=RequestStatus.approved),
        )


@pytest.mark.asyncio
async def test_owner_edits_only_while_pending(session: AsyncSession, users: dict[str, Any]) -> None:
    owner = users["101"]
    visitor = await _register(session, owner)

    edited = await visitors.update_visitor(
        session, owner.ctx, visitor.id, UpdateVisitorRequest(visitor_name="Carla Pereira")
    )
    assert edited.visitor_name == "Carla Pereira"

    await visitors.approve_visitor(session, users["ADMIN"].ctx, visitor.id)
    with pytest.raises(InvalidTransition):
        await visitors.update_visitor(
            session, owner.ctx, visitor.id, UpdateVisitorRequest(visitor_name="Someone Else")
        )


@pytest.mark.asyncio
async def test_listing_scoped_and_oldest_first(session: AsyncSession, users: dict[str, Any]) -> None:
    first = await _register(session, users["101"], name="First")
    second = await _register(session, users["101"], name="Second")
    other = await _register(session, users["202"], name="Other")

    mine = await visitors.list_visitors(session, users["101"].ctx)
    assert [v.id for v in mine] == [first.id, second.id]

    everyone = await visitors.list_visitors(session, users["ADMIN"].ctx)
    assert [v.id for v in everyone] == [first.id, second.id, other.id]


@pytest.mark.asyncio
async def test_delete_by_stranger_forbidden(session: AsyncSession, users: dict[str, Any]) -> None:
    visitor = await _register(session, users["101"])

    with pytest.raises(Forbidden):
        await visitors.delete_visitor(session, users["202"].ctx, visitor.id)

    await visitors.delete_visitor(session, users["ADMIN"].ctx, visitor.id)
    assert await visitors.list_visitors(session, users["ADMIN"].ctx) == []
