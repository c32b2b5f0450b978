"""Space booking models."""

import datetime as dt
from datetime import date, datetime, time
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field

from backend.condo.models.common import CLOCK_PATTERN, RequestStatus


class CreateBookingRequest(BaseModel):
    """Request body for POST /api/bookings."""

    space_name: str = Field(..., min_length=1, max_length=255)
    booking_date: date
    start_time: str = Field(..., pattern=CLOCK_PATTERN, description="HH:MM, 24h")
    end_time: str = Field(..., pattern=CLOCK_PATTERN, description="HH:MM, 24h")


class UpdateBookingRequest(BaseModel):
    """Partial update for PUT /api/bookings/{id}."""

    space_name: str | None = Field(None, min_length=1, max_length=255)
    booking_date: date | None = None
    start_time: str | None = Field(None, pattern=CLOCK_PATTERN)
    end_time: str | None = Field(None, pattern=CLOCK_PATTERN)
    status: RequestStatus | None = None


class Booking(BaseModel):
    """Space booking as returned by the API."""

    model_config = ConfigDict(from_attributes=True)

    id: UUID
    user_id: UUID
    space_name: str
    booking_date: date
    start_time: time
    end_time: time
    status: RequestStatus
    created_at: datetime


class BookingResponse(BaseModel):
    success: bool = True
    message: str | None = None
    data: Booking


class BookingListResponse(BaseModel):
    success: bool = True
    data: list[Booking]


class AvailabilityResponse(BaseModel):
    """Response for GET /api/bookings/availability/{space_name}."""

    success: bool = True
    data: str
    date: dt.date
    available: bool
    existing_bookings: list[Booking]
