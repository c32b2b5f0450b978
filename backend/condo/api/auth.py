"""Bearer-token auth dependencies.

A missing token is rejected with 401. In development (``allow_anonymous_dev``)
a request without a token is let through with no identity so read-only views
can be exercised locally; operations that need an identity still refuse it.
A present but bad token is always rejected with 403.
"""

from typing import Annotated

from fastapi import Depends, Header

from backend.condo.auth.security import decode_token
from backend.condo.config import Settings, get_settings
from backend.condo.db.context import RequestContext
from backend.condo.errors import InvalidToken, Unauthenticated


async def get_optional_context(
    authorization: Annotated[str | None, Header()] = None,
    settings: Settings = Depends(get_settings),
) -> RequestContext | None:
    """Decode the bearer token, or return None for anonymous dev requests.

    Raises:
        Unauthenticated: No token outside the development relaxation
        InvalidToken: Malformed header or bad signature/expiry
    """
    if not authorization:
        if settings.is_development and settings.allow_anonymous_dev:
            return None
        raise Unauthenticated()

    scheme, _, token = authorization.partition(" ")
    if scheme.lower() != "bearer" or not token:
        raise InvalidToken("Invalid authorization header format")

    return decode_token(token.strip(), settings)


async def get_current_context(
    ctx: Annotated[RequestContext | None, Depends(get_optional_context)],
) -> RequestContext:
    """Require an authenticated identity."""
    if ctx is None:
        raise Unauthenticated()
    return ctx


CurrentContext = Annotated[RequestContext, Depends(get_current_context)]
OptionalContext = Annotated[RequestContext | None, Depends(get_optional_context)]
