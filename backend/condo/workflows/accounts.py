"""Login and profile management."""

import logging

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from backend.condo.auth.security import hash_password, issue_token, verify_password
from backend.condo.config import Settings, get_settings
from backend.condo.db.context import RequestContext
from backend.condo.db.models import User
from backend.condo.errors import InvalidCredentials, NotFound, ValidationError
from backend.condo.models.users import UpdateProfileRequest
from backend.condo.utils.metrics import metrics

logger = logging.getLogger(__name__)


async def login(
    session: AsyncSession,
    apartment: str,
    password: str,
    settings: Settings | None = None,
) -> tuple[str, User]:
    """Verify credentials and issue a bearer token.

    Unknown apartment and wrong password fail identically.

    Raises:
        InvalidCredentials: If the apartment is unknown or the password does not match
    """
    settings = settings or get_settings()
    result = await session.execute(select(User).where(User.apartment == apartment).limit(1))
    user = result.scalar_one_or_none()

    if user is None or not verify_password(password, user.password_hash, settings):
        logger.info(f"Login rejected for apartment {apartment}")
        metrics.inc_login("rejected")
        raise InvalidCredentials()

    metrics.inc_login("success")
    token = issue_token(user.id, user.apartment, user.role, settings)
    return token, user


async def get_profile(session: AsyncSession, ctx: RequestContext) -> User:
    user = await session.get(User, ctx.user_id)
    if user is None:
        raise NotFound("User not found")
    return user


async def update_profile(
    session: AsyncSession,
    ctx: RequestContext,
    patch: UpdateProfileRequest,
    settings: Settings | None = None,
) -> User:
    """Partial update of name/email/phone/password for the caller.

    Raises:
        NotFound: If the caller's user row is gone
        ValidationError: If the email already belongs to another user
    """
    user = await get_profile(session, ctx)

    if patch.name:
        user.name = patch.name
    if patch.email:
        user.email = str(patch.email)
    if patch.phone:
        user.phone = patch.phone
    if patch.password:
        user.password_hash = hash_password(patch.password, settings)

    try:
        await session.commit()
    except IntegrityError as e:
        await session.rollback()
        raise ValidationError("Email already in use") from e

    await session.refresh(user)
    logger.info(f"Profile updated for user {user.id}")
    return user
