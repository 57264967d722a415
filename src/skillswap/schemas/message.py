"""Pydantic schemas for request conversations."""

import uuid
from datetime import datetime
from typing import Optional

from skillswap.schemas.base import ApiModel
from skillswap.schemas.user import UserRead


class MessageCreate(ApiModel):
    text: Optional[str] = None


class MessageRead(ApiModel):
    id: uuid.UUID
    request_id: uuid.UUID
    sender_id: uuid.UUID
    text: str
    created_at: datetime
    sender: Optional[UserRead] = None


class MessageEnvelope(ApiModel):
    message: MessageRead


class MessageList(ApiModel):
    messages: list[MessageRead]
