"""Initial schema

Revision ID: 001
Revises:
Create Date: 2026-10-17

Creates users, notices, chat_messages, visitor_requests, space_bookings and
documents, plus the partial unique index that allows a single non-rejected
booking per (space_name, booking_date).
"""

from collections.abc import Sequence

import sqlalchemy as sa
from alembic import op

# revision identifiers, used by Alembic.
revision: str = "001"
down_revision: str | None = None
branch_labels: str | Sequence[str] | None = None
depends_on: str | Sequence[str] | None = None

user_role = sa.Enum("resident", "admin", "doorman", name="user_role")
notice_type = sa.Enum("maintenance", "general", "meeting", name="notice_type")
notice_priority = sa.Enum("low", "medium", "high", name="notice_priority")
visitor_status = sa.Enum("pending", "approved", "rejected", name="visitor_status")
booking_status = sa.Enum("pending", "approved", "rejected", name="booking_status")
document_category = sa.Enum(
    "meeting_minutes", "bills", "regulations", "announcements", name="document_category"
)


def upgrade() -> None:
    """Create all tables."""
    op.create_table(
        "users",
        sa.Column("id", sa.Uuid(), primary_key=True),
        sa.Column("apartment", sa.String(10), nullable=False),
        sa.Column("name", sa.String(255), nullable=False),
        sa.Column("email", sa.String(255), nullable=True),
        sa.Column("phone", sa.String(20), nullable=True),
        sa.Column("password_hash", sa.String(255), nullable=False),
        sa.Column("role", user_role, nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.UniqueConstraint("apartment", name="uq_users_apartment"),
        sa.UniqueConstraint("email", name="uq_users_email"),
    )

    op.create_table(
        "notices",
        sa.Column("id", sa.Uuid(), primary_key=True),
        sa.Column("title", sa.String(255), nullable=False),
        sa.Column("content", sa.Text(), nullable=False),
        sa.Column("type", notice_type, nullable=False),
        sa.Column("priority", notice_priority, nullable=False),
        sa.Column("created_by", sa.Uuid(), nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.Column("expires_at", sa.DateTime(timezone=True), nullable=True),
        sa.ForeignKeyConstraint(["created_by"], ["users.id"]),
    )
    op.create_index("idx_notice_created", "notices", ["created_at"])

    op.create_table(
        "chat_messages",
        sa.Column("id", sa.Uuid(), primary_key=True),
        sa.Column("from_user_id", sa.Uuid(), nullable=False),
        sa.Column("to_user_id", sa.Uuid(), nullable=False),
        sa.Column("message", sa.Text(), nullable=False),
        sa.Column("is_read", sa.Boolean(), server_default=sa.false(), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.ForeignKeyConstraint(["from_user_id"], ["users.id"]),
        sa.ForeignKeyConstraint(["to_user_id"], ["users.id"]),
    )
    op.create_index("idx_chat_pair", "chat_messages", ["from_user_id", "to_user_id", "created_at"])
    op.create_index("idx_chat_unread", "chat_messages", ["to_user_id", "is_read"])

    op.create_table(
        "visitor_requests",
        sa.Column("id", sa.Uuid(), primary_key=True),
        sa.Column("requester_id", sa.Uuid(), nullable=False),
        sa.Column("visitor_name", sa.String(255), nullable=False),
        sa.Column("visitor_document", sa.String(50), nullable=True),
        sa.Column("visit_date", sa.Date(), nullable=False),
        sa.Column("visit_time", sa.Time(), nullable=True),
        sa.Column("status", visitor_status, nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.ForeignKeyConstraint(["requester_id"], ["users.id"]),
    )
    op.create_index("idx_visitor_requester", "visitor_requests", ["requester_id", "created_at"])

    op.create_table(
        "space_bookings",
        sa.Column("id", sa.Uuid(), primary_key=True),
        sa.Column("user_id", sa.Uuid(), nullable=False),
        sa.Column("space_name", sa.String(255), nullable=False),
        sa.Column("booking_date", sa.Date(), nullable=False),
        sa.Column("start_time", sa.Time(), nullable=False),
        sa.Column("end_time", sa.Time(), nullable=False),
        sa.Column("status", booking_status, nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.ForeignKeyConstraint(["user_id"], ["users.id"]),
    )
    op.create_index(
        "uq_booking_active_slot",
        "space_bookings",
        ["space_name", "booking_date"],
        unique=True,
        postgresql_where=sa.text("status <> 'rejected'"),
        sqlite_where=sa.text("status <> 'rejected'"),
    )
    op.create_index("idx_booking_user", "space_bookings", ["user_id", "created_at"])

    op.create_table(
        "documents",
        sa.Column("id", sa.Uuid(), primary_key=True),
        sa.Column("title", sa.String(255), nullable=False),
        sa.Column("file_path", sa.String(500), nullable=False),
        sa.Column("category", document_category, nullable=False),
        sa.Column("uploaded_by", sa.Uuid(), nullable=True),
        sa.Column("uploaded_at", sa.DateTime(timezone=True), nullable=False),
        sa.ForeignKeyConstraint(["uploaded_by"], ["users.id"]),
    )
    op.create_index("idx_document_category", "documents", ["category", "uploaded_at"])


def downgrade() -> None:
    """Drop all tables in reverse dependency order."""
    op.drop_table("documents")
    op.drop_table("space_bookings")
    op.drop_table("visitor_requests")
    op.drop_table("chat_messages")
    op.drop_table("notices")
    op.drop_table("users")

    bind = op.get_bind()
    for enum_type in (
        document_category,
        booking_status,
        visitor_status,
        notice_priority,
        notice_type,
        user_role,
    ):
        enum_type.drop(bind, checkfirst=True)
