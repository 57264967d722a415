"""Domain records passed between services and stores.

Records are frozen dataclasses. Updating one means building a new value
with ``dataclasses.replace`` and handing it back to the store; a record
that another request may be reading is never mutated in place.
"""

import uuid
from dataclasses import dataclass, field
from datetime import datetime, timezone

REQUEST_STATUSES = ("pending", "accepted", "rejected", "completed")
INITIAL_STATUS = "pending"


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


def new_id() -> uuid.UUID:
    return uuid.uuid4()


def parse_id(value) -> uuid.UUID | None:
    """Parse an opaque id string. Returns None if it isn't one of ours."""
    if isinstance(value, uuid.UUID):
        return value
    try:
        return uuid.UUID(str(value))
    except (ValueError, TypeError, AttributeError):
        return None


@dataclass(frozen=True)
class Profile:
    bio: str = ""
    skills_offering: str = ""
    skills_seeking: str = ""
    availability: str = ""


@dataclass(frozen=True)
class UserRecord:
    id: uuid.UUID
    email: str
    email_lower: str
    name: str
    password_hash: str
    created_at: datetime
    updated_at: datetime
    profile: Profile = field(default_factory=Profile)


@dataclass(frozen=True)
class SwapRequestRecord:
    id: uuid.UUID
    from_user_id: uuid.UUID
    to_user_id: uuid.UUID
    message: str
    status: str
    created_at: datetime
    updated_at: datetime

    def is_participant(self, user_id: uuid.UUID) -> bool:
        return user_id in (self.from_user_id, self.to_user_id)


@dataclass(frozen=True)
class MessageRecord:
    id: uuid.UUID
    request_id: uuid.UUID
    sender_id: uuid.UUID
    text: str
    created_at: datetime
