"""Storage contract shared by every backend.

Learn: Services talk to a ``Store``, never to a database driver. The
in-memory and SQL backends implement the same coroutine API and run the
same test suite, so either can sit behind the API.

Contract notes:
- ``insert_user`` must reject a duplicate ``email_lower`` atomically by
  raising ``DuplicateEmailError``; callers never check-then-insert.
- List methods return fully ordered results: by ``created_at``, ties
  broken by ``id`` in the same direction, so every backend agrees.
- Update methods return the stored record after the write, or None when
  the id is unknown.
"""

import abc
import uuid
from datetime import datetime

from skillswap.storage.records import (
    MessageRecord,
    Profile,
    SwapRequestRecord,
    UserRecord,
)


class DuplicateEmailError(Exception):
    """Raised by a store when a user's lowercase email is already taken."""


class Store(abc.ABC):
    """Persistence operations for users, swap requests, and messages."""

    # ─── Users ──────────────────────────────────────────

    @abc.abstractmethod
    async def insert_user(self, user: UserRecord) -> UserRecord: ...

    @abc.abstractmethod
    async def get_user(self, user_id: uuid.UUID) -> UserRecord | None: ...

    @abc.abstractmethod
    async def get_user_by_email(self, email_lower: str) -> UserRecord | None: ...

    @abc.abstractmethod
    async def get_users(self, user_ids: set[uuid.UUID]) -> list[UserRecord]:
        """Batch lookup. Unknown ids are skipped."""

    @abc.abstractmethod
    async def list_users_except(self, user_id: uuid.UUID) -> list[UserRecord]:
        """All other users, newest created first."""

    @abc.abstractmethod
    async def replace_profile(
        self, user_id: uuid.UUID, profile: Profile, updated_at: datetime
    ) -> UserRecord | None: ...

    # ─── Swap requests ──────────────────────────────────

    @abc.abstractmethod
    async def insert_request(self, request: SwapRequestRecord) -> SwapRequestRecord: ...

    @abc.abstractmethod
    async def get_request(self, request_id: uuid.UUID) -> SwapRequestRecord | None: ...

    @abc.abstractmethod
    async def list_requests_for_user(
        self, user_id: uuid.UUID
    ) -> list[SwapRequestRecord]:
        """Requests the user sent or received, newest created first."""

    @abc.abstractmethod
    async def set_request_status(
        self, request_id: uuid.UUID, status: str, updated_at: datetime
    ) -> SwapRequestRecord | None: ...

    # ─── Messages ───────────────────────────────────────

    @abc.abstractmethod
    async def insert_message(self, message: MessageRecord) -> MessageRecord: ...

    @abc.abstractmethod
    async def list_messages(self, request_id: uuid.UUID) -> list[MessageRecord]:
        """Messages on a request, oldest first."""

    # ─── Health ─────────────────────────────────────────

    async def ping(self) -> None:
        """Raise if the backend is unreachable."""
