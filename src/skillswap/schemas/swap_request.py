"""Pydantic schemas for swap requests."""

import uuid
from datetime import datetime
from typing import Optional

from skillswap.schemas.base import ApiModel
from skillswap.schemas.user import UserRead


class SwapRequestCreate(ApiModel):
    to_user_id: Optional[str] = None
    message: Optional[str] = None


class SwapRequestStatusUpdate(ApiModel):
    status: Optional[str] = None


class SwapRequestRead(ApiModel):
    id: uuid.UUID
    from_user_id: uuid.UUID
    to_user_id: uuid.UUID
    message: str
    status: str
    created_at: datetime
    updated_at: datetime
    from_user: Optional[UserRead] = None
    to_user: Optional[UserRead] = None


class SwapRequestEnvelope(ApiModel):
    request: SwapRequestRead


class SwapRequestList(ApiModel):
    requests: list[SwapRequestRead]
