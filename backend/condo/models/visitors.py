"""Visitor request models."""

from datetime import date, datetime, time
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field

from backend.condo.models.common import CLOCK_PATTERN, RequestStatus


class CreateVisitorRequest(BaseModel):
    """Request body for POST /api/visitors. Status is always forced to pending."""

    visitor_name: str = Field(..., min_length=1, max_length=255)
    visitor_document: str | None = Field(None, min_length=11, max_length=14)
    visit_date: date
    visit_time: str | None = Field(None, pattern=CLOCK_PATTERN)


class UpdateVisitorRequest(BaseModel):
    """Partial update for PUT /api/visitors/{id}."""

    visitor_name: str | None = Field(None, min_length=1, max_length=255)
    visitor_document: str | None = Field(None, min_length=11, max_length=14)
    visit_date: date | None = None
    visit_time: str | None = Field(None, pattern=CLOCK_PATTERN)
    status: RequestStatus | None = None


class Visitor(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    requester_id: UUID
    visitor_name: str
    visitor_document: str | None = None
    visit_date: date
    visit_time: time | None = None
    status: RequestStatus
    created_at: datetime


class VisitorResponse(BaseModel):
    success: bool = True
    message: str | None = None
    data: Visitor


class VisitorListResponse(BaseModel):
    success: bool = True
    data: list[Visitor]
