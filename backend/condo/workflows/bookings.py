"""Space booking workflow.

Booking exclusivity is per slot, the (space_name, booking_date) pair: any
pending or approved booking blocks the whole day for that space regardless of
the requested hours. Rejected bookings never block, so cancelling frees the
slot.

Status transitions:
    pending  -> approved   (admin confirm)
    pending  -> rejected   (admin or owner cancel)
    approved -> rejected   (admin or owner cancel)
Nothing leaves ``rejected``.
"""

import uuid
from datetime import date, datetime, time, timezone

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from backend.condo.auth.security import require_owner_or_admin, require_role
from backend.condo.config import Settings, get_settings
from backend.condo.db.context import RequestContext
from backend.condo.db.models import SpaceBooking
from backend.condo.db.repository import Repository
from backend.condo.errors import (
    Forbidden,
    InvalidTransition,
    SlotConflict,
    ValidationError,
)
from backend.condo.models.bookings import UpdateBookingRequest
from backend.condo.models.common import RequestStatus, Role
from backend.condo.utils.logging import audit_log
from backend.condo.utils.metrics import metrics

ENTITY = "booking"

SLOT_INDEX = "uq_booking_active_slot"
SLOT_COLUMNS = "space_bookings.space_name, space_bookings.booking_date"

ALLOWED_TRANSITIONS: dict[RequestStatus, frozenset[RequestStatus]] = {
    RequestStatus.pending: frozenset({RequestStatus.approved, RequestStatus.rejected}),
    RequestStatus.approved: frozenset({RequestStatus.rejected}),
    RequestStatus.rejected: frozenset(),
}


def _repo(session: AsyncSession) -> Repository[SpaceBooking]:
    return Repository(session, SpaceBooking, owner_column=SpaceBooking.user_id, label="Booking")


def _record(
    ctx: RequestContext | None,
    booking_id: uuid.UUID | None,
    action: str,
    outcome: str,
    reason: str | None = None,
) -> None:
    audit_log.log_action(ctx, ENTITY, booking_id, action, outcome, reason)
    metrics.inc_action(ENTITY, action, outcome)


def parse_clock(value: str) -> time:
    """Parse an "H:MM" / "HH:MM[:SS]" 24h string into a zero-padded clock value.

    Raises:
        ValidationError: If the value is not a valid 24h time
    """
    try:
        parts = [int(p) for p in value.split(":")]
        if len(parts) not in (2, 3):
            raise ValueError(value)
        return time(*parts)
    except (ValueError, TypeError) as e:
        raise ValidationError(f"Invalid time '{value}', expected HH:MM") from e


def ensure_time_order(start: time, end: time) -> None:
    if start >= end:
        raise ValidationError("Start time must be before end time")


def ensure_known_space(space_name: str, settings: Settings) -> None:
    if space_name not in settings.space_catalog:
        raise ValidationError(f"Unknown space '{space_name}'")


def ensure_transition(current: RequestStatus, target: RequestStatus) -> None:
    """Allow table transitions and same-state no-ops; reject everything else."""
    if current == target:
        return
    if target not in ALLOWED_TRANSITIONS[current]:
        raise InvalidTransition(f"Booking cannot go from {current.value} to {target.value}")


async def find_active_bookings(
    session: AsyncSession,
    space_name: str,
    booking_date: date,
    exclude_id: uuid.UUID | None = None,
) -> list[SpaceBooking]:
    """Non-rejected bookings holding the (space, date) slot."""
    query = select(SpaceBooking).where(
        SpaceBooking.space_name == space_name,
        SpaceBooking.booking_date == booking_date,
        SpaceBooking.status != RequestStatus.rejected,
    )
    if exclude_id is not None:
        query = query.where(SpaceBooking.id != exclude_id)
    result = await session.execute(query.order_by(SpaceBooking.created_at.asc()))
    return list(result.scalars().all())


def is_slot_violation(error: IntegrityError) -> bool:
    """True when the error comes from the active-slot unique index.

    PostgreSQL names the index; SQLite reports the indexed columns.
    """
    message = str(error.orig)
    return SLOT_INDEX in message or SLOT_COLUMNS in message


async def _commit_slot(session: AsyncSession) -> None:
    # The partial unique index closes the check-then-write gap
    try:
        await session.commit()
    except IntegrityError as e:
        await session.rollback()
        if not is_slot_violation(e):
            raise
        raise SlotConflict() from e


async def create_booking(
    session: AsyncSession,
    ctx: RequestContext,
    *,
    space_name: str,
    booking_date: date,
    start_time: str,
    end_time: str,
    settings: Settings | None = None,
) -> SpaceBooking:
    """Reserve a space for a whole day on behalf of the caller.

    Raises:
        ValidationError: Bad time ordering or unknown space
        SlotConflict: Another non-rejected booking holds the slot
    """
    settings = settings or get_settings()
    start, end = parse_clock(start_time), parse_clock(end_time)
    ensure_time_order(start, end)
    ensure_known_space(space_name, settings)

    if await find_active_bookings(session, space_name, booking_date):
        _record(ctx, None, "create", "conflict", f"{space_name} on {booking_date}")
        raise SlotConflict()

    booking = SpaceBooking(
        id=uuid.uuid4(),
        user_id=ctx.user_id,
        space_name=space_name,
        booking_date=booking_date,
        start_time=start,
        end_time=end,
        status=RequestStatus.pending,
        created_at=datetime.now(timezone.utc),
    )
    try:
        await _repo(session).add(booking)
    except IntegrityError as e:
        await session.rollback()
        if not is_slot_violation(e):
            raise
        _record(ctx, None, "create", "conflict", "unique slot index")
        raise SlotConflict() from e
    await _commit_slot(session)

    _record(ctx, booking.id, "create", "success")
    return booking


async def get_booking(
    session: AsyncSession, ctx: RequestContext, booking_id: uuid.UUID
) -> SpaceBooking:
    """Fetch one booking visible to the caller (admin or owner)."""
    booking = await _repo(session).get_or_raise(booking_id)
    require_owner_or_admin(ctx, booking.user_id)
    return booking


async def list_bookings(session: AsyncSession, ctx: RequestContext) -> list[SpaceBooking]:
    """Admins see every booking; everyone else sees their own. Newest first."""
    repo = _repo(session)
    return await repo.all(repo.select_scoped(ctx).order_by(SpaceBooking.created_at.desc()))


async def check_availability(
    session: AsyncSession, space_name: str, booking_date: date
) -> tuple[bool, list[SpaceBooking]]:
    """Return (available, blocking_bookings) for a slot."""
    blocking = await find_active_bookings(session, space_name, booking_date)
    return (not blocking, blocking)


async def update_booking(
    session: AsyncSession,
    ctx: RequestContext,
    booking_id: uuid.UUID,
    patch: UpdateBookingRequest,
    settings: Settings | None = None,
) -> SpaceBooking:
    """Apply a partial update.

    Raises:
        NotFound: Booking absent
        Forbidden: Caller is neither admin nor owner, or a non-admin sent ``status``
        ValidationError: Resulting times out of order or unknown space
        InvalidTransition: ``status`` change not in the transition table
        SlotConflict: New (space, date) already held by another booking
    """
    settings = settings or get_settings()
    booking = await _repo(session).get_or_raise(booking_id)
    try:
        require_owner_or_admin(ctx, booking.user_id)
        if patch.status is not None and not ctx.is_admin:
            raise Forbidden("Only admins can change the booking status")
    except Forbidden as e:
        _record(ctx, booking_id, "update", "denied", e.message)
        raise

    start = parse_clock(patch.start_time) if patch.start_time else booking.start_time
    end = parse_clock(patch.end_time) if patch.end_time else booking.end_time
    ensure_time_order(start, end)

    new_space = patch.space_name or booking.space_name
    new_date = patch.booking_date or booking.booking_date
    if patch.space_name is not None:
        ensure_known_space(new_space, settings)

    new_status = patch.status or booking.status
    if patch.status is not None:
        ensure_transition(booking.status, patch.status)

    slot_changed = patch.space_name is not None or patch.booking_date is not None
    if slot_changed and new_status != RequestStatus.rejected:
        if await find_active_bookings(session, new_space, new_date, exclude_id=booking.id):
            _record(ctx, booking_id, "update", "conflict", f"{new_space} on {new_date}")
            raise SlotConflict()

    booking.space_name = new_space
    booking.booking_date = new_date
    booking.start_time = start
    booking.end_time = end
    booking.status = new_status
    await _commit_slot(session)

    _record(ctx, booking_id, "update", "success")
    return booking


async def confirm_booking(
    session: AsyncSession, ctx: RequestContext, booking_id: uuid.UUID
) -> SpaceBooking:
    """Admin approval: pending -> approved."""
    try:
        require_role(ctx, [Role.admin])
    except Forbidden:
        _record(ctx, booking_id, "confirm", "denied", "admin only")
        raise
    booking = await _repo(session).get_or_raise(booking_id)
    ensure_transition(booking.status, RequestStatus.approved)

    booking.status = RequestStatus.approved
    await _commit_slot(session)

    _record(ctx, booking_id, "confirm", "success")
    return booking


async def cancel_booking(
    session: AsyncSession, ctx: RequestContext, booking_id: uuid.UUID
) -> SpaceBooking:
    """Admin or owner cancellation; frees the slot."""
    booking = await _repo(session).get_or_raise(booking_id)
    try:
        require_owner_or_admin(ctx, booking.user_id)
    except Forbidden:
        _record(ctx, booking_id, "cancel", "denied", "not owner")
        raise

    booking.status = RequestStatus.rejected
    await session.commit()

    _record(ctx, booking_id, "cancel", "success")
    return booking


async def delete_booking(
    session: AsyncSession, ctx: RequestContext, booking_id: uuid.UUID
) -> None:
    """Hard delete by admin or owner."""
    repo = _repo(session)
    booking = await repo.get_or_raise(booking_id)
    try:
        require_owner_or_admin(ctx, booking.user_id)
    except Forbidden:
        _record(ctx, booking_id, "delete", "denied", "not owner")
        raise

    await repo.delete(booking)
    await session.commit()

    _record(ctx, booking_id, "delete", "success")
