"""Direct messages between residents and the front desk.

There is no push channel: clients poll ``fetch_thread`` on an interval.
Fetching a thread is also the read receipt, every unread message addressed to
the caller from the other party flips to read. The sender's own fetch never
touches the flag.
"""

import uuid
from datetime import datetime, timezone

from sqlalchemy import and_, or_, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from backend.condo.db.context import RequestContext
from backend.condo.db.models import ChatMessage, User
from backend.condo.errors import InvalidRecipient, NotFound
from backend.condo.models.chat import ConversationSummary, Message
from backend.condo.models.common import FRONT_DESK_ROLES
from backend.condo.utils.logging import audit_log
from backend.condo.utils.metrics import metrics


async def list_eligible_contacts(session: AsyncSession, ctx: RequestContext) -> list[User]:
    """Front desk staff (admins and doormen), excluding the caller."""
    result = await session.execute(
        select(User)
        .where(User.role.in_(FRONT_DESK_ROLES), User.id != ctx.user_id)
        .order_by(User.name.asc())
    )
    return list(result.scalars().all())


async def send_message(
    session: AsyncSession,
    ctx: RequestContext,
    recipient_id: uuid.UUID,
    body: str,
) -> ChatMessage:
    """Store a new unread message from the caller.

    Raises:
        InvalidRecipient: Caller addressed themselves
        NotFound: Recipient does not exist
    """
    if recipient_id == ctx.user_id:
        audit_log.log_action(ctx, "chat_message", None, "send", "denied", "self recipient")
        raise InvalidRecipient()
    if await session.get(User, recipient_id) is None:
        audit_log.log_action(ctx, "chat_message", None, "send", "denied", "unknown recipient")
        raise NotFound("Recipient not found")

    chat_message = ChatMessage(
        id=uuid.uuid4(),
        from_user_id=ctx.user_id,
        to_user_id=recipient_id,
        message=body,
        is_read=False,
        created_at=datetime.now(timezone.utc),
    )
    session.add(chat_message)
    await session.commit()

    audit_log.log_action(ctx, "chat_message", chat_message.id, "send", "success")
    metrics.inc_message_sent()
    return chat_message


async def fetch_thread(
    session: AsyncSession, ctx: RequestContext, other_user_id: uuid.UUID
) -> list[Message]:
    """Messages between the caller and one other user, oldest first.

    The returned snapshot reflects read flags as they were before this fetch;
    afterwards every unread message from ``other_user_id`` to the caller is
    marked read.
    """
    result = await session.execute(
        select(ChatMessage)
        .where(
            or_(
                and_(
                    ChatMessage.from_user_id == ctx.user_id,
                    ChatMessage.to_user_id == other_user_id,
                ),
                and_(
                    ChatMessage.from_user_id == other_user_id,
                    ChatMessage.to_user_id == ctx.user_id,
                ),
            )
        )
        .order_by(ChatMessage.created_at.asc())
    )
    messages = [Message.model_validate(m) for m in result.scalars().all()]

    marked = await session.execute(
        update(ChatMessage)
        .where(
            ChatMessage.to_user_id == ctx.user_id,
            ChatMessage.from_user_id == other_user_id,
            ChatMessage.is_read.is_(False),
        )
        .values(is_read=True)
        .execution_options(synchronize_session="fetch")
    )
    await session.commit()

    read_count = marked.rowcount or 0
    if read_count:
        audit_log.log_action(
            ctx, "chat_thread", other_user_id, "mark_read", "success", f"{read_count} message(s)"
        )
    metrics.inc_messages_read(read_count)
    return messages


async def list_conversation_summaries(
    session: AsyncSession, ctx: RequestContext
) -> list[ConversationSummary]:
    """One entry per chat partner: latest message and unread count, most recent first."""
    result = await session.execute(
        select(ChatMessage)
        .where(or_(ChatMessage.from_user_id == ctx.user_id, ChatMessage.to_user_id == ctx.user_id))
        .order_by(ChatMessage.created_at.desc())
    )

    latest: dict[uuid.UUID, ChatMessage] = {}
    unread: dict[uuid.UUID, int] = {}
    for msg in result.scalars().all():
        other_id = msg.to_user_id if msg.from_user_id == ctx.user_id else msg.from_user_id
        # Rows arrive newest first, so the first one seen per partner wins
        latest.setdefault(other_id, msg)
        unread.setdefault(other_id, 0)
        if msg.to_user_id == ctx.user_id and not msg.is_read:
            unread[other_id] += 1

    return [
        ConversationSummary(
            user_id=other_id,
            last_message=Message.model_validate(msg),
            unread_count=unread[other_id],
        )
        for other_id, msg in latest.items()
    ]
