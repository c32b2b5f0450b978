"""User and session models."""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, ConfigDict, EmailStr, Field

from backend.condo.models.common import Role


class UserProfile(BaseModel):
    """Public view of a user (never carries the password hash)."""

    model_config = ConfigDict(from_attributes=True)

    id: UUID
    apartment: str
    name: str
    email: str | None = None
    phone: str | None = None
    role: Role
    created_at: datetime | None = None


class LoginRequest(BaseModel):
    """Request body for POST /api/auth/login."""

    apartment: str = Field(..., min_length=1, description="Apartment number")
    password: str = Field(..., min_length=1)


class LoginResponse(BaseModel):
    """Response for POST /api/auth/login."""

    token: str
    user: UserProfile


class ProfileResponse(BaseModel):
    user: UserProfile


class UpdateProfileRequest(BaseModel):
    """Partial profile update; omitted fields are left untouched."""

    name: str | None = Field(None, min_length=1, max_length=255)
    email: EmailStr | None = None
    phone: str | None = Field(None, max_length=20)
    password: str | None = Field(None, min_length=6)


class UpdateProfileResponse(BaseModel):
    message: str
    user: UserProfile


class ContactSummary(BaseModel):
    """Chat contact (front desk staff)."""

    model_config = ConfigDict(from_attributes=True)

    id: UUID
    name: str
    role: Role
    apartment: str
