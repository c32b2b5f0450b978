"""Chat endpoints.

Clients poll ``GET /messages/{user_id}`` for new messages; the fetch doubles
as the read receipt.
"""

import logging
import uuid
from typing import Annotated

from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from backend.condo.api.auth import CurrentContext
from backend.condo.db.engine import get_session
from backend.condo.models.chat import (
    ContactListResponse,
    ConversationListResponse,
    Message,
    SendMessageRequest,
    SendMessageResponse,
    ThreadResponse,
)
from backend.condo.models.users import ContactSummary
from backend.condo.workflows import chat

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/chat", tags=["chat"])

Session = Annotated[AsyncSession, Depends(get_session)]


@router.get("/users", response_model=ContactListResponse)
async def list_contacts(ctx: CurrentContext, session: Session) -> ContactListResponse:
    """Front desk staff the caller can message."""
    users = await chat.list_eligible_contacts(session, ctx)
    return ContactListResponse(users=[ContactSummary.model_validate(u) for u in users])


@router.get("/conversations", response_model=ConversationListResponse)
async def list_conversations(ctx: CurrentContext, session: Session) -> ConversationListResponse:
    summaries = await chat.list_conversation_summaries(session, ctx)
    return ConversationListResponse(conversations=summaries)


@router.get("/messages/{user_id}", response_model=ThreadResponse)
async def get_thread(user_id: uuid.UUID, ctx: CurrentContext, session: Session) -> ThreadResponse:
    """Thread with one user, oldest first. Marks their messages to the caller as read."""
    try:
        messages = await chat.fetch_thread(session, ctx, user_id)
    except Exception:
        logger.exception(
            "Chat thread fetch failed",
            extra={"structured": {"user_id": str(ctx.user_id), "other_user_id": str(user_id)}},
        )
        raise
    return ThreadResponse(messages=messages)


@router.post("/send", response_model=SendMessageResponse, status_code=status.HTTP_201_CREATED)
async def send_message(
    body: SendMessageRequest, ctx: CurrentContext, session: Session
) -> SendMessageResponse:
    chat_message = await chat.send_message(session, ctx, body.to_user_id, body.message)
    return SendMessageResponse(
        message="Message sent successfully", chat_message=Message.model_validate(chat_message)
    )
