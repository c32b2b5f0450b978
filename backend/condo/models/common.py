"""Common types and enums shared across all models."""

from enum import Enum


class Role(str, Enum):
    """User role."""

    resident = "resident"
    admin = "admin"
    doorman = "doorman"


# Roles that make up the front desk contact pool
FRONT_DESK_ROLES = (Role.admin, Role.doorman)


class RequestStatus(str, Enum):
    """Lifecycle status shared by visitor requests and space bookings."""

    pending = "pending"
    approved = "approved"
    rejected = "rejected"


class NoticeType(str, Enum):
    """Notice type."""

    maintenance = "maintenance"
    general = "general"
    meeting = "meeting"


class NoticePriority(str, Enum):
    """Notice priority."""

    low = "low"
    medium = "medium"
    high = "high"


class DocumentCategory(str, Enum):
    """Document category."""

    meeting_minutes = "meeting_minutes"
    bills = "bills"
    regulations = "regulations"
    announcements = "announcements"


DOCUMENT_CATEGORY_LABELS: dict[DocumentCategory, str] = {
    DocumentCategory.meeting_minutes: "Atas de Reuniões",
    DocumentCategory.bills: "Boletos e Taxas",
    DocumentCategory.regulations: "Regulamentos",
    DocumentCategory.announcements: "Comunicados",
}

# 24h clock, hour may be a single digit ("9:30")
CLOCK_PATTERN = r"^([01]?[0-9]|2[0-3]):[0-5][0-9](:[0-5][0-9])?$"
