"""Models package - re-exports for convenience."""

from backend.condo.models.bookings import Booking, CreateBookingRequest, UpdateBookingRequest
from backend.condo.models.chat import ConversationSummary, Message, SendMessageRequest
from backend.condo.models.common import (
    DOCUMENT_CATEGORY_LABELS,
    FRONT_DESK_ROLES,
    DocumentCategory,
    NoticePriority,
    NoticeType,
    RequestStatus,
    Role,
)
from backend.condo.models.documents import (
    CreateDocumentRequest,
    DocumentOut,
    UpdateDocumentRequest,
)
from backend.condo.models.notices import CreateNoticeRequest, NoticeOut
from backend.condo.models.users import ContactSummary, UserProfile
from backend.condo.models.visitors import CreateVisitorRequest, UpdateVisitorRequest, Visitor

__all__ = [
    # Common
    "Role",
    "FRONT_DESK_ROLES",
    "RequestStatus",
    "NoticeType",
    "NoticePriority",
    "DocumentCategory",
    "DOCUMENT_CATEGORY_LABELS",
    # Users
    "UserProfile",
    "ContactSummary",
    # Bookings
    "Booking",
    "CreateBookingRequest",
    "UpdateBookingRequest",
    # Visitors
    "Visitor",
    "CreateVisitorRequest",
    "UpdateVisitorRequest",
    # Chat
    "Message",
    "SendMessageRequest",
    "ConversationSummary",
    # Notices
    "NoticeOut",
    "CreateNoticeRequest",
    # Documents
    "DocumentOut",
    "CreateDocumentRequest",
    "UpdateDocumentRequest",
]
