"""Pydantic schemas for users, auth, and profiles.

Learn: ``UserRead`` is the only shape a user ever leaves the service in.
It has no password hash and no lowercase-email field, so forgetting to
strip them is impossible.
"""

import uuid
from datetime import datetime
from typing import Optional

from skillswap.schemas.base import ApiModel
from skillswap.storage.records import UserRecord


# ─── Requests ───────────────────────────────────────────

class RegisterRequest(ApiModel):
    email: Optional[str] = None
    password: Optional[str] = None
    name: Optional[str] = None


class LoginRequest(ApiModel):
    email: Optional[str] = None
    password: Optional[str] = None


class ProfileUpdate(ApiModel):
    """Whole-profile replacement. Omitted fields are cleared."""
    bio: Optional[str] = None
    skills_offering: Optional[str] = None
    skills_seeking: Optional[str] = None
    availability: Optional[str] = None


# ─── Responses ──────────────────────────────────────────

class ProfileRead(ApiModel):
    bio: str = ""
    skills_offering: str = ""
    skills_seeking: str = ""
    availability: str = ""


class UserRead(ApiModel):
    id: uuid.UUID
    email: str
    name: str
    profile: ProfileRead
    created_at: datetime
    updated_at: datetime


class AuthResponse(ApiModel):
    token: str
    user: UserRead


class UserEnvelope(ApiModel):
    user: UserRead


class UserList(ApiModel):
    users: list[UserRead]


def sanitize_user(user: UserRecord) -> UserRead:
    """Outward view of a user record."""
    return UserRead(
        id=user.id,
        email=user.email,
        name=user.name,
        profile=ProfileRead(
            bio=user.profile.bio,
            skills_offering=user.profile.skills_offering,
            skills_seeking=user.profile.skills_seeking,
            availability=user.profile.availability,
        ),
        created_at=user.created_at,
        updated_at=user.updated_at,
    )
