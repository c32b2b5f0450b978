"""Notice board models."""

from datetime import datetime
from typing import Any
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field, field_validator

from backend.condo.models.common import NoticePriority, NoticeType


class CreateNoticeRequest(BaseModel):
    """Request body for POST /api/notices."""

    title: str = Field(..., min_length=1, max_length=255)
    content: str = Field(..., min_length=1)
    type: NoticeType
    priority: NoticePriority = NoticePriority.medium
    expires_at: datetime | None = None

    @field_validator("expires_at", mode="before")
    @classmethod
    def parse_expiry(cls, value: Any) -> Any:
        """Accept plain dates ("2024-02-01") as well as full timestamps."""
        if isinstance(value, str) and value:
            try:
                return datetime.fromisoformat(value.replace("Z", "+00:00"))
            except ValueError as e:
                raise ValueError("expires_at must be an ISO date or timestamp") from e
        if value == "":
            return None
        return value


class NoticeOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    title: str
    content: str
    type: NoticeType
    priority: NoticePriority
    created_by: UUID | None = None
    created_at: datetime
    expires_at: datetime | None = None


class NoticeResponse(BaseModel):
    success: bool = True
    message: str | None = None
    data: NoticeOut


class NoticeListResponse(BaseModel):
    success: bool = True
    data: list[NoticeOut]
