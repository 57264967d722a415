"""SQLAlchemy-backed store.

Learn: One ``SqlStore`` wraps one AsyncSession (one per HTTP request, see
``skillswap.storage.get_store``). Every write commits immediately, so an
operation either fully lands or raises.

Email uniqueness is enforced by the unique index on ``users.email_lower``:
we just insert and translate the IntegrityError.
"""

import uuid
from datetime import datetime, timezone

from sqlalchemy import or_, select, text, update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from skillswap.db.models import RequestMessage, SwapRequest, User
from skillswap.storage.base import DuplicateEmailError, Store
from skillswap.storage.records import (
    MessageRecord,
    Profile,
    SwapRequestRecord,
    UserRecord,
)


def _aware(value: datetime) -> datetime:
    # SQLite hands back naive datetimes even for timezone=True columns.
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def _user_record(row: User) -> UserRecord:
    return UserRecord(
        id=row.id,
        email=row.email,
        email_lower=row.email_lower,
        name=row.name,
        password_hash=row.password_hash,
        profile=Profile(
            bio=row.bio,
            skills_offering=row.skills_offering,
            skills_seeking=row.skills_seeking,
            availability=row.availability,
        ),
        created_at=_aware(row.created_at),
        updated_at=_aware(row.updated_at),
    )


def _request_record(row: SwapRequest) -> SwapRequestRecord:
    return SwapRequestRecord(
        id=row.id,
        from_user_id=row.from_user_id,
        to_user_id=row.to_user_id,
        message=row.message,
        status=row.status,
        created_at=_aware(row.created_at),
        updated_at=_aware(row.updated_at),
    )


def _message_record(row: RequestMessage) -> MessageRecord:
    return MessageRecord(
        id=row.id,
        request_id=row.request_id,
        sender_id=row.sender_id,
        text=row.text,
        created_at=_aware(row.created_at),
    )


class SqlStore(Store):
    """Store backed by an async SQLAlchemy session."""

    def __init__(self, db: AsyncSession):
        self.db = db

    # ─── Users ──────────────────────────────────────────

    async def insert_user(self, user: UserRecord) -> UserRecord:
        row = User(
            id=user.id,
            email=user.email,
            email_lower=user.email_lower,
            name=user.name,
            password_hash=user.password_hash,
            bio=user.profile.bio,
            skills_offering=user.profile.skills_offering,
            skills_seeking=user.profile.skills_seeking,
            availability=user.profile.availability,
            created_at=user.created_at,
            updated_at=user.updated_at,
        )
        self.db.add(row)
        try:
            await self.db.commit()
        except IntegrityError as e:
            await self.db.rollback()
            raise DuplicateEmailError(user.email_lower) from e
        return user

    async def get_user(self, user_id: uuid.UUID) -> UserRecord | None:
        row = await self.db.get(User, user_id, populate_existing=True)
        return _user_record(row) if row else None

    async def get_user_by_email(self, email_lower: str) -> UserRecord | None:
        result = await self.db.execute(
            select(User).where(User.email_lower == email_lower)
        )
        row = result.scalars().first()
        return _user_record(row) if row else None

    async def get_users(self, user_ids: set[uuid.UUID]) -> list[UserRecord]:
        if not user_ids:
            return []
        result = await self.db.execute(select(User).where(User.id.in_(list(user_ids))))
        return [_user_record(row) for row in result.scalars().all()]

    async def list_users_except(self, user_id: uuid.UUID) -> list[UserRecord]:
        result = await self.db.execute(
            select(User)
            .where(User.id != user_id)
            .order_by(User.created_at.desc(), User.id.desc())
        )
        return [_user_record(row) for row in result.scalars().all()]

    async def replace_profile(
        self, user_id: uuid.UUID, profile: Profile, updated_at: datetime
    ) -> UserRecord | None:
        await self.db.execute(
            update(User)
            .where(User.id == user_id)
            .values(
                bio=profile.bio,
                skills_offering=profile.skills_offering,
                skills_seeking=profile.skills_seeking,
                availability=profile.availability,
                updated_at=updated_at,
            )
        )
        await self.db.commit()
        return await self.get_user(user_id)

    # ─── Swap requests ──────────────────────────────────

    async def insert_request(self, request: SwapRequestRecord) -> SwapRequestRecord:
        self.db.add(
            SwapRequest(
                id=request.id,
                from_user_id=request.from_user_id,
                to_user_id=request.to_user_id,
                message=request.message,
                status=request.status,
                created_at=request.created_at,
                updated_at=request.updated_at,
            )
        )
        await self.db.commit()
        return request

    async def get_request(self, request_id: uuid.UUID) -> SwapRequestRecord | None:
        row = await self.db.get(SwapRequest, request_id, populate_existing=True)
        return _request_record(row) if row else None

    async def list_requests_for_user(
        self, user_id: uuid.UUID
    ) -> list[SwapRequestRecord]:
        result = await self.db.execute(
            select(SwapRequest)
            .where(
                or_(
                    SwapRequest.from_user_id == user_id,
                    SwapRequest.to_user_id == user_id,
                )
            )
            .order_by(SwapRequest.created_at.desc(), SwapRequest.id.desc())
        )
        return [_request_record(row) for row in result.scalars().all()]

    async def set_request_status(
        self, request_id: uuid.UUID, status: str, updated_at: datetime
    ) -> SwapRequestRecord | None:
        await self.db.execute(
            update(SwapRequest)
            .where(SwapRequest.id == request_id)
            .values(status=status, updated_at=updated_at)
        )
        await self.db.commit()
        return await self.get_request(request_id)

    # ─── Messages ───────────────────────────────────────

    async def insert_message(self, message: MessageRecord) -> MessageRecord:
        self.db.add(
            RequestMessage(
                id=message.id,
                request_id=message.request_id,
                sender_id=message.sender_id,
                text=message.text,
                created_at=message.created_at,
            )
        )
        await self.db.commit()
        return message

    async def list_messages(self, request_id: uuid.UUID) -> list[MessageRecord]:
        result = await self.db.execute(
            select(RequestMessage)
            .where(RequestMessage.request_id == request_id)
            .order_by(RequestMessage.created_at, RequestMessage.id)
        )
        return [_message_record(row) for row in result.scalars().all()]

    # ─── Health ─────────────────────────────────────────

    async def ping(self) -> None:
        await self.db.execute(text("SELECT 1"))
