"""Chat models."""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field

from backend.condo.models.users import ContactSummary


class SendMessageRequest(BaseModel):
    """Request body for POST /api/chat/send."""

    to_user_id: UUID
    message: str = Field(..., min_length=1)


class Message(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    from_user_id: UUID
    to_user_id: UUID
    message: str
    is_read: bool
    created_at: datetime


class SendMessageResponse(BaseModel):
    success: bool = True
    message: str
    chat_message: Message


class ThreadResponse(BaseModel):
    messages: list[Message]


class ContactListResponse(BaseModel):
    users: list[ContactSummary]


class ConversationSummary(BaseModel):
    """Latest message and unread count for one chat partner."""

    user_id: UUID
    last_message: Message
    unread_count: int


class ConversationListResponse(BaseModel):
    conversations: list[ConversationSummary]
