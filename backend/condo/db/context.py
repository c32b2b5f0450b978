"""Request context carrying the authenticated identity."""

from dataclasses import dataclass
from uuid import UUID

from backend.condo.models.common import Role


@dataclass(frozen=True)
class RequestContext:
    """Identity decoded from the bearer token.

    Passed explicitly into every workflow call; nothing reads the caller's
    identity from ambient state.
    """

    user_id: UUID
    apartment: str
    role: Role

    @property
    def is_admin(self) -> bool:
        return self.role is Role.admin

    def owns(self, owner_id: UUID | None) -> bool:
        return owner_id is not None and owner_id == self.user_id
