"""Auth endpoints - login, profile, token verification."""

from datetime import datetime
from typing import Annotated, Any

from fastapi import APIRouter, Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession

from backend.condo.api.auth import CurrentContext
from backend.condo.config import Settings, get_settings
from backend.condo.db.engine import get_session
from backend.condo.errors import RateLimited
from backend.condo.models.users import (
    LoginRequest,
    LoginResponse,
    ProfileResponse,
    UpdateProfileRequest,
    UpdateProfileResponse,
    UserProfile,
)
from backend.condo.ratelimit import RateLimiter, get_login_limiter, make_rate_limit_key
from backend.condo.workflows import accounts

router = APIRouter(prefix="/auth", tags=["auth"])


def client_address(request: Request, settings: Settings) -> str:
    """Socket peer, or X-Real-IP when the deployment trusts its proxy."""
    if settings.trust_proxy_headers:
        forwarded = request.headers.get("x-real-ip")
        if forwarded:
            return forwarded
    return request.client.host if request.client else "unknown"


@router.post("/login", response_model=LoginResponse)
async def login(
    body: LoginRequest,
    request: Request,
    session: Annotated[AsyncSession, Depends(get_session)],
    limiter: Annotated[RateLimiter, Depends(get_login_limiter)],
    settings: Annotated[Settings, Depends(get_settings)],
) -> LoginResponse:
    """Exchange apartment + password for a 24h bearer token."""
    retry_after = limiter.check_quota(
        make_rate_limit_key("login", client_address(request, settings)), datetime.now()
    )
    if retry_after is not None:
        raise RateLimited(retry_after.seconds)

    token, user = await accounts.login(session, body.apartment, body.password)
    return LoginResponse(token=token, user=UserProfile.model_validate(user))


@router.get("/profile", response_model=ProfileResponse)
async def get_profile(
    ctx: CurrentContext,
    session: Annotated[AsyncSession, Depends(get_session)],
) -> ProfileResponse:
    user = await accounts.get_profile(session, ctx)
    return ProfileResponse(user=UserProfile.model_validate(user))


@router.put("/profile", response_model=UpdateProfileResponse)
async def update_profile(
    body: UpdateProfileRequest,
    ctx: CurrentContext,
    session: Annotated[AsyncSession, Depends(get_session)],
) -> UpdateProfileResponse:
    user = await accounts.update_profile(session, ctx, body)
    return UpdateProfileResponse(
        message="Profile updated successfully", user=UserProfile.model_validate(user)
    )


@router.get("/verify")
async def verify(ctx: CurrentContext) -> dict[str, Any]:
    """Echo the identity bound to the presented token."""
    return {
        "valid": True,
        "user": {"userId": str(ctx.user_id), "apartment": ctx.apartment, "role": ctx.role.value},
    }
