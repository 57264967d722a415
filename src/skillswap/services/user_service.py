"""User service — registration, login, profiles, and the member directory.

Learn: Service layer separates business logic from HTTP routing.
API routes call services, services call the store. Services only ever
return domain records; routes turn them into sanitized ``UserRead``
payloads.
"""

import uuid
from typing import Callable, Optional

import structlog

from skillswap.auth.password import hash_password, verify_password
from skillswap.errors import AuthenticationError, ConflictError, ValidationError
from skillswap.storage.base import DuplicateEmailError, Store
from skillswap.storage.records import Profile, UserRecord, new_id, utcnow

logger = structlog.get_logger()

INVALID_CREDENTIALS = "Invalid credentials"


class UserService:
    """Business logic for user accounts."""

    def __init__(self, store: Store, clock: Callable = utcnow):
        self.store = store
        self.clock = clock

    async def register(
        self,
        email: Optional[str],
        password: Optional[str],
        name: Optional[str],
    ) -> UserRecord:
        """Create an account with an empty profile.

        Learn: The duplicate check is the store's unique key on the
        lowercase email, not a lookup beforehand, so two concurrent
        registrations can't both win.
        """
        if not email or not password or not name:
            raise ValidationError("Email, password and name are required")

        now = self.clock()
        user = UserRecord(
            id=new_id(),
            email=email,
            email_lower=email.lower(),
            name=name,
            password_hash=hash_password(password),
            profile=Profile(),
            created_at=now,
            updated_at=now,
        )
        try:
            user = await self.store.insert_user(user)
        except DuplicateEmailError:
            raise ConflictError("Email already registered")

        logger.info("user.registered", user_id=str(user.id))
        return user

    async def authenticate(
        self, email: Optional[str], password: Optional[str]
    ) -> UserRecord:
        """Check credentials. Unknown email and wrong password fail the same way."""
        if not email or not password:
            raise ValidationError("Email and password are required")

        user = await self.store.get_user_by_email(email.lower())
        if user is None or not verify_password(password, user.password_hash):
            logger.info("user.login_failed")
            raise AuthenticationError(INVALID_CREDENTIALS)
        return user

    async def update_profile(
        self,
        user_id: uuid.UUID,
        *,
        bio: Optional[str] = None,
        skills_offering: Optional[str] = None,
        skills_seeking: Optional[str] = None,
        availability: Optional[str] = None,
    ) -> UserRecord:
        """Replace the whole profile. Anything not supplied becomes ""."""
        profile = Profile(
            bio=bio or "",
            skills_offering=skills_offering or "",
            skills_seeking=skills_seeking or "",
            availability=availability or "",
        )
        user = await self.store.replace_profile(user_id, profile, self.clock())
        if user is None:
            raise AuthenticationError("Invalid or expired token")
        logger.info("user.profile_updated", user_id=str(user_id))
        return user

    async def list_others(self, user_id: uuid.UUID) -> list[UserRecord]:
        return await self.store.list_users_except(user_id)

    async def find_by_id(self, user_id: uuid.UUID) -> UserRecord | None:
        return await self.store.get_user(user_id)
