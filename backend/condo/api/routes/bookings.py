"""Space booking endpoints."""

import uuid
from datetime import date
from typing import Annotated, Any

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from backend.condo.api.auth import CurrentContext
from backend.condo.db.engine import get_session
from backend.condo.models.bookings import (
    AvailabilityResponse,
    Booking,
    BookingListResponse,
    BookingResponse,
    CreateBookingRequest,
    UpdateBookingRequest,
)
from backend.condo.workflows import bookings

router = APIRouter(prefix="/bookings", tags=["bookings"])

Session = Annotated[AsyncSession, Depends(get_session)]


@router.get("", response_model=BookingListResponse)
async def list_bookings(ctx: CurrentContext, session: Session) -> BookingListResponse:
    """Admins see all bookings; residents see their own."""
    rows = await bookings.list_bookings(session, ctx)
    return BookingListResponse(data=[Booking.model_validate(b) for b in rows])


@router.get("/availability/{space_name}", response_model=AvailabilityResponse)
async def availability(
    space_name: str,
    ctx: CurrentContext,
    session: Session,
    booking_date: Annotated[date, Query(alias="date")],
) -> AvailabilityResponse:
    available, blocking = await bookings.check_availability(session, space_name, booking_date)
    return AvailabilityResponse(
        data=space_name,
        date=booking_date,
        available=available,
        existing_bookings=[Booking.model_validate(b) for b in blocking],
    )


@router.get("/{booking_id}", response_model=BookingResponse)
async def get_booking(
    booking_id: uuid.UUID, ctx: CurrentContext, session: Session
) -> BookingResponse:
    booking = await bookings.get_booking(session, ctx, booking_id)
    return BookingResponse(data=Booking.model_validate(booking))


@router.post("", response_model=BookingResponse, status_code=status.HTTP_201_CREATED)
async def create_booking(
    body: CreateBookingRequest, ctx: CurrentContext, session: Session
) -> BookingResponse:
    booking = await bookings.create_booking(
        session,
        ctx,
        space_name=body.space_name,
        booking_date=body.booking_date,
        start_time=body.start_time,
        end_time=body.end_time,
    )
    return BookingResponse(
        message="Booking created successfully", data=Booking.model_validate(booking)
    )


@router.put("/{booking_id}", response_model=BookingResponse)
async def update_booking(
    booking_id: uuid.UUID,
    body: UpdateBookingRequest,
    ctx: CurrentContext,
    session: Session,
) -> BookingResponse:
    booking = await bookings.update_booking(session, ctx, booking_id, body)
    return BookingResponse(
        message="Booking updated successfully", data=Booking.model_validate(booking)
    )


@router.delete("/{booking_id}")
async def delete_booking(
    booking_id: uuid.UUID, ctx: CurrentContext, session: Session
) -> dict[str, Any]:
    await bookings.delete_booking(session, ctx, booking_id)
    return {"success": True, "message": "Booking deleted successfully"}


@router.patch("/{booking_id}/confirm", response_model=BookingResponse)
async def confirm_booking(
    booking_id: uuid.UUID, ctx: CurrentContext, session: Session
) -> BookingResponse:
    """Admin-only approval."""
    booking = await bookings.confirm_booking(session, ctx, booking_id)
    return BookingResponse(
        message="Booking approved successfully", data=Booking.model_validate(booking)
    )


@router.patch("/{booking_id}/cancel", response_model=BookingResponse)
async def cancel_booking(
    booking_id: uuid.UUID, ctx: CurrentContext, session: Session
) -> BookingResponse:
    booking = await bookings.cancel_booking(session, ctx, booking_id)
    return BookingResponse(
        message="Booking rejected successfully", data=Booking.model_validate(booking)
    )
