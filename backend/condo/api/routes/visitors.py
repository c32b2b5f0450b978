"""Visitor request endpoints."""

import uuid
from typing import Annotated, Any

from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from backend.condo.api.auth import CurrentContext
from backend.condo.db.engine import get_session
from backend.condo.models.visitors import (
    CreateVisitorRequest,
    UpdateVisitorRequest,
    Visitor,
    VisitorListResponse,
    VisitorResponse,
)
from backend.condo.workflows import visitors

router = APIRouter(prefix="/visitors", tags=["visitors"])

Session = Annotated[AsyncSession, Depends(get_session)]


@router.get("", response_model=VisitorListResponse)
async def list_visitors(ctx: CurrentContext, session: Session) -> VisitorListResponse:
    rows = await visitors.list_visitors(session, ctx)
    return VisitorListResponse(data=[Visitor.model_validate(v) for v in rows])


@router.get("/{visitor_id}", response_model=VisitorResponse)
async def get_visitor(
    visitor_id: uuid.UUID, ctx: CurrentContext, session: Session
) -> VisitorResponse:
    visitor = await visitors.get_visitor(session, ctx, visitor_id)
    return VisitorResponse(data=Visitor.model_validate(visitor))


@router.post("", response_model=VisitorResponse, status_code=status.HTTP_201_CREATED)
async def create_visitor(
    body: CreateVisitorRequest, ctx: CurrentContext, session: Session
) -> VisitorResponse:
    visitor = await visitors.create_visitor(
        session,
        ctx,
        visitor_name=body.visitor_name,
        visitor_document=body.visitor_document,
        visit_date=body.visit_date,
        visit_time=body.visit_time,
    )
    return VisitorResponse(
        message="Visitor created successfully", data=Visitor.model_validate(visitor)
    )


@router.put("/{visitor_id}", response_model=VisitorResponse)
async def update_visitor(
    visitor_id: uuid.UUID,
    body: UpdateVisitorRequest,
    ctx: CurrentContext,
    session: Session,
) -> VisitorResponse:
    visitor = await visitors.update_visitor(session, ctx, visitor_id, body)
    return VisitorResponse(
        message="Visitor request updated successfully", data=Visitor.model_validate(visitor)
    )


@router.delete("/{visitor_id}")
async def delete_visitor(
    visitor_id: uuid.UUID, ctx: CurrentContext, session: Session
) -> dict[str, Any]:
    await visitors.delete_visitor(session, ctx, visitor_id)
    return {"success": True, "message": "Visitor request deleted successfully"}


@router.patch("/{visitor_id}/approve", response_model=VisitorResponse)
async def approve_visitor(
    visitor_id: uuid.UUID, ctx: CurrentContext, session: Session
) -> VisitorResponse:
    """Admin-only, whoever owns the request."""
    visitor = await visitors.approve_visitor(session, ctx, visitor_id)
    return VisitorResponse(
        message="Visitor request approved successfully", data=Visitor.model_validate(visitor)
    )


@router.patch("/{visitor_id}/reject", response_model=VisitorResponse)
async def reject_visitor(
    visitor_id: uuid.UUID, ctx: CurrentContext, session: Session
) -> VisitorResponse:
    visitor = await visitors.reject_visitor(session, ctx, visitor_id)
    return VisitorResponse(
        message="Visitor request rejected successfully", data=Visitor.model_validate(visitor)
    )
