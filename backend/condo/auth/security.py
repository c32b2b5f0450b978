"""Password digests, bearer tokens and role guards."""

import hashlib
import hmac
import uuid
from collections.abc import Iterable
from datetime import datetime, timedelta, timezone

import jwt

from backend.condo.config import Settings, get_settings
from backend.condo.db.context import RequestContext
from backend.condo.errors import Forbidden, InvalidToken
from backend.condo.models.common import Role


def hash_password(password: str, settings: Settings | None = None) -> str:
    """Salted SHA-256 hex digest of a plaintext password."""
    salt = (settings or get_settings()).password_salt
    return hashlib.sha256(f"{password}{salt}".encode("utf-8")).hexdigest()


def verify_password(password: str, password_hash: str, settings: Settings | None = None) -> bool:
    """Recompute the digest and compare in constant time."""
    return hmac.compare_digest(hash_password(password, settings), password_hash)


def issue_token(
    user_id: uuid.UUID,
    apartment: str,
    role: Role,
    settings: Settings | None = None,
    now: datetime | None = None,
) -> str:
    """Sign a bearer token binding {userId, apartment, role}.

    Args:
        user_id: User ID
        apartment: Apartment number
        role: User role
        settings: Settings override (tests)
        now: Issue time override (tests)

    Returns:
        Encoded JWT
    """
    settings = settings or get_settings()
    issued_at = now or datetime.now(timezone.utc)
    payload = {
        "userId": str(user_id),
        "apartment": apartment,
        "role": role.value,
        "iat": issued_at,
        "exp": issued_at + timedelta(hours=settings.token_ttl_hours),
    }
    return jwt.encode(payload, settings.jwt_secret, algorithm=settings.jwt_algorithm)


def decode_token(token: str, settings: Settings | None = None) -> RequestContext:
    """Check signature and expiry and return the bound identity.

    Raises:
        InvalidToken: If the token is malformed, tampered with or expired
    """
    settings = settings or get_settings()
    try:
        payload = jwt.decode(token, settings.jwt_secret, algorithms=[settings.jwt_algorithm])
    except jwt.ExpiredSignatureError as e:
        raise InvalidToken("Token expired") from e
    except jwt.InvalidTokenError as e:
        raise InvalidToken() from e

    try:
        return RequestContext(
            user_id=uuid.UUID(payload["userId"]),
            apartment=payload["apartment"],
            role=Role(payload["role"]),
        )
    except (KeyError, ValueError, TypeError) as e:
        raise InvalidToken("Token claims are incomplete") from e


def require_role(ctx: RequestContext | None, allowed: Iterable[Role]) -> RequestContext:
    """Fail with Forbidden unless the caller holds one of the allowed roles."""
    if ctx is None or ctx.role not in tuple(allowed):
        raise Forbidden()
    return ctx


def require_owner_or_admin(ctx: RequestContext, owner_id: uuid.UUID | None) -> None:
    """Fail with Forbidden unless the caller is an admin or owns the entity."""
    if not (ctx.is_admin or ctx.owns(owner_id)):
        raise Forbidden("Unauthorized access")
