"""SQLAlchemy ORM models for the condominium store."""

import uuid
from datetime import date, datetime, time

from sqlalchemy import (
    Boolean,
    Date,
    DateTime,
    Enum,
    ForeignKey,
    Index,
    String,
    Text,
    Time,
    Uuid,
    text,
)
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column, relationship
from sqlalchemy.sql import func

from backend.condo.models.common import (
    DocumentCategory,
    NoticePriority,
    NoticeType,
    RequestStatus,
    Role,
)


class Base(DeclarativeBase):
    """Base class for all SQLAlchemy models."""

    pass


def _enum(enum_cls: type, name: str) -> Enum:
    # Store the value ("pending"), not the member name
    return Enum(
        enum_cls,
        name=name,
        values_callable=lambda members: [m.value for m in members],
        validate_strings=True,
    )


class User(Base):
    """User table - residents and staff, keyed by apartment for login."""

    __tablename__ = "users"

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    apartment: Mapped[str] = mapped_column(String(10), unique=True, nullable=False)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    email: Mapped[str | None] = mapped_column(String(255), unique=True, nullable=True)
    phone: Mapped[str | None] = mapped_column(String(20), nullable=True)
    password_hash: Mapped[str] = mapped_column(String(255), nullable=False)
    role: Mapped[Role] = mapped_column(
        _enum(Role, "user_role"), nullable=False, default=Role.resident
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), nullable=False
    )


class Notice(Base):
    """Notice board announcement."""

    __tablename__ = "notices"
    __table_args__ = (Index("idx_notice_created", "created_at"),)

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    title: Mapped[str] = mapped_column(String(255), nullable=False)
    content: Mapped[str] = mapped_column(Text, nullable=False)
    type: Mapped[NoticeType] = mapped_column(_enum(NoticeType, "notice_type"), nullable=False)
    priority: Mapped[NoticePriority] = mapped_column(
        _enum(NoticePriority, "notice_priority"), nullable=False, default=NoticePriority.medium
    )
    created_by: Mapped[uuid.UUID | None] = mapped_column(
        Uuid, ForeignKey("users.id"), nullable=True
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), nullable=False
    )
    expires_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)

    author: Mapped["User | None"] = relationship("User")


class ChatMessage(Base):
    """Direct message between two users."""

    __tablename__ = "chat_messages"
    __table_args__ = (
        Index("idx_chat_pair", "from_user_id", "to_user_id", "created_at"),
        Index("idx_chat_unread", "to_user_id", "is_read"),
    )

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    from_user_id: Mapped[uuid.UUID] = mapped_column(Uuid, ForeignKey("users.id"), nullable=False)
    to_user_id: Mapped[uuid.UUID] = mapped_column(Uuid, ForeignKey("users.id"), nullable=False)
    message: Mapped[str] = mapped_column(Text, nullable=False)
    is_read: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)


class VisitorRequest(Base):
    """Visitor registration raised by a resident."""

    __tablename__ = "visitor_requests"
    __table_args__ = (Index("idx_visitor_requester", "requester_id", "created_at"),)

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    requester_id: Mapped[uuid.UUID] = mapped_column(Uuid, ForeignKey("users.id"), nullable=False)
    visitor_name: Mapped[str] = mapped_column(String(255), nullable=False)
    visitor_document: Mapped[str | None] = mapped_column(String(50), nullable=True)
    visit_date: Mapped[date] = mapped_column(Date, nullable=False)
    visit_time: Mapped[time | None] = mapped_column(Time, nullable=True)
    status: Mapped[RequestStatus] = mapped_column(
        _enum(RequestStatus, "visitor_status"), nullable=False, default=RequestStatus.pending
    )
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)

    requester: Mapped["User"] = relationship("User")


class SpaceBooking(Base):
    """Shared-space reservation.

    At most one non-rejected booking may exist per (space_name, booking_date);
    the partial unique index enforces it at the store so two concurrent
    check-then-insert sequences cannot both succeed.
    """

    __tablename__ = "space_bookings"
    __table_args__ = (
        Index(
            "uq_booking_active_slot",
            "space_name",
            "booking_date",
            unique=True,
            postgresql_where=text("status <> 'rejected'"),
            sqlite_where=text("status <> 'rejected'"),
        ),
        Index("idx_booking_user", "user_id", "created_at"),
    )

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    user_id: Mapped[uuid.UUID] = mapped_column(Uuid, ForeignKey("users.id"), nullable=False)
    space_name: Mapped[str] = mapped_column(String(255), nullable=False)
    booking_date: Mapped[date] = mapped_column(Date, nullable=False)
    start_time: Mapped[time] = mapped_column(Time, nullable=False)
    end_time: Mapped[time] = mapped_column(Time, nullable=False)
    status: Mapped[RequestStatus] = mapped_column(
        _enum(RequestStatus, "booking_status"), nullable=False, default=RequestStatus.pending
    )
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)

    user: Mapped["User"] = relationship("User")


class Document(Base):
    """Condominium document (minutes, bills, regulations, announcements)."""

    __tablename__ = "documents"
    __table_args__ = (Index("idx_document_category", "category", "uploaded_at"),)

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    title: Mapped[str] = mapped_column(String(255), nullable=False)
    file_path: Mapped[str] = mapped_column(String(500), nullable=False)
    category: Mapped[DocumentCategory] = mapped_column(
        _enum(DocumentCategory, "document_category"), nullable=False
    )
    uploaded_by: Mapped[uuid.UUID | None] = mapped_column(
        Uuid, ForeignKey("users.id"), nullable=True
    )
    uploaded_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)
