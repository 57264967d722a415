"""In-memory store — an arena of records keyed by generated id.

Learn: Handy for local development and tests. Everything lives in plain
dicts owned by one ``MemoryStore`` instance; records are frozen, so
readers can't observe a half-applied update.
"""

import dataclasses
import uuid
from datetime import datetime

from skillswap.storage.base import DuplicateEmailError, Store
from skillswap.storage.records import (
    MessageRecord,
    Profile,
    SwapRequestRecord,
    UserRecord,
)


class MemoryStore(Store):
    """Process-local store. Not shared between workers."""

    def __init__(self):
        self._users: dict[uuid.UUID, UserRecord] = {}
        self._user_ids_by_email: dict[str, uuid.UUID] = {}
        self._requests: dict[uuid.UUID, SwapRequestRecord] = {}
        self._messages: dict[uuid.UUID, MessageRecord] = {}

    # ─── Users ──────────────────────────────────────────

    async def insert_user(self, user: UserRecord) -> UserRecord:
        # Check and write without awaiting in between, so no other
        # coroutine can slip in a user with the same email.
        if user.email_lower in self._user_ids_by_email:
            raise DuplicateEmailError(user.email_lower)
        self._users[user.id] = user
        self._user_ids_by_email[user.email_lower] = user.id
        return user

    async def get_user(self, user_id: uuid.UUID) -> UserRecord | None:
        return self._users.get(user_id)

    async def get_user_by_email(self, email_lower: str) -> UserRecord | None:
        user_id = self._user_ids_by_email.get(email_lower)
        return self._users.get(user_id) if user_id else None

    async def get_users(self, user_ids: set[uuid.UUID]) -> list[UserRecord]:
        return [self._users[uid] for uid in user_ids if uid in self._users]

    async def list_users_except(self, user_id: uuid.UUID) -> list[UserRecord]:
        others = [u for u in self._users.values() if u.id != user_id]
        return sorted(others, key=lambda u: (u.created_at, u.id), reverse=True)

    async def replace_profile(
        self, user_id: uuid.UUID, profile: Profile, updated_at: datetime
    ) -> UserRecord | None:
        current = self._users.get(user_id)
        if current is None:
            return None
        updated = dataclasses.replace(current, profile=profile, updated_at=updated_at)
        self._users[user_id] = updated
        return updated

    # ─── Swap requests ──────────────────────────────────

    async def insert_request(self, request: SwapRequestRecord) -> SwapRequestRecord:
        self._requests[request.id] = request
        return request

    async def get_request(self, request_id: uuid.UUID) -> SwapRequestRecord | None:
        return self._requests.get(request_id)

    async def list_requests_for_user(
        self, user_id: uuid.UUID
    ) -> list[SwapRequestRecord]:
        mine = [r for r in self._requests.values() if r.is_participant(user_id)]
        return sorted(mine, key=lambda r: (r.created_at, r.id), reverse=True)

    async def set_request_status(
        self, request_id: uuid.UUID, status: str, updated_at: datetime
    ) -> SwapRequestRecord | None:
        current = self._requests.get(request_id)
        if current is None:
            return None
        updated = dataclasses.replace(current, status=status, updated_at=updated_at)
        self._requests[request_id] = updated
        return updated

    # ─── Messages ───────────────────────────────────────

    async def insert_message(self, message: MessageRecord) -> MessageRecord:
        self._messages[message.id] = message
        return message

    async def list_messages(self, request_id: uuid.UUID) -> list[MessageRecord]:
        thread = [m for m in self._messages.values() if m.request_id == request_id]
        return sorted(thread, key=lambda m: (m.created_at, m.id))
