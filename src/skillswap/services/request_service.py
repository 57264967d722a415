"""Swap request service — creation, status changes, and access rules.

Learn: A request has one state field, ``status``. Only the recipient
(``to_user_id``) may change it, and any of the four statuses may follow
any other: there is no forward-only rule, so a completed request can be
put back to pending. Participants (sender or recipient) are the only
users who may see the request's conversation.
"""

import uuid
from typing import Callable, Optional

import structlog

from skillswap.errors import AuthorizationError, NotFoundError, ValidationError
from skillswap.schemas.swap_request import SwapRequestRead
from skillswap.schemas.user import UserRead, sanitize_user
from skillswap.storage.base import Store
from skillswap.storage.records import (
    INITIAL_STATUS,
    REQUEST_STATUSES,
    SwapRequestRecord,
    UserRecord,
    new_id,
    parse_id,
    utcnow,
)

logger = structlog.get_logger()

REQUEST_NOT_FOUND = "Request not found"


def to_read(
    request: SwapRequestRecord, users: dict[uuid.UUID, UserRead]
) -> SwapRequestRead:
    return SwapRequestRead(
        id=request.id,
        from_user_id=request.from_user_id,
        to_user_id=request.to_user_id,
        message=request.message,
        status=request.status,
        created_at=request.created_at,
        updated_at=request.updated_at,
        from_user=users.get(request.from_user_id),
        to_user=users.get(request.to_user_id),
    )


class RequestService:
    """Business logic for the swap request lifecycle."""

    def __init__(self, store: Store, clock: Callable = utcnow):
        self.store = store
        self.clock = clock

    async def _participants(
        self, requests: list[SwapRequestRecord]
    ) -> dict[uuid.UUID, UserRead]:
        """Sanitized snapshots of every sender/recipient, in one lookup."""
        ids = {r.from_user_id for r in requests} | {r.to_user_id for r in requests}
        users = await self.store.get_users(ids)
        return {u.id: sanitize_user(u) for u in users}

    async def get(self, request_id) -> SwapRequestRecord | None:
        """Load a request by id. Malformed ids are simply not found."""
        parsed = parse_id(request_id)
        if parsed is None:
            return None
        return await self.store.get_request(parsed)

    async def require_participant(
        self, caller: UserRecord, request_id
    ) -> SwapRequestRecord:
        """Load a request the caller sent or received, or raise."""
        request = await self.get(request_id)
        if request is None:
            raise NotFoundError(REQUEST_NOT_FOUND)
        if not request.is_participant(caller.id):
            raise AuthorizationError("You do not have access to this request")
        return request

    async def create(
        self,
        caller: UserRecord,
        to_user_id: Optional[str],
        message: Optional[str] = None,
    ) -> SwapRequestRead:
        if not to_user_id:
            raise ValidationError("Recipient is required")
        recipient_id = parse_id(to_user_id)
        if recipient_id is None:
            raise ValidationError("Invalid recipient id")

        recipient = await self.store.get_user(recipient_id)
        if recipient is None:
            raise NotFoundError("Recipient does not exist")
        if recipient.id == caller.id:
            raise ValidationError("You cannot send a request to yourself")

        now = self.clock()
        request = await self.store.insert_request(
            SwapRequestRecord(
                id=new_id(),
                from_user_id=caller.id,
                to_user_id=recipient.id,
                message=message or "",
                status=INITIAL_STATUS,
                created_at=now,
                updated_at=now,
            )
        )
        logger.info(
            "swap_request.created",
            request_id=str(request.id),
            from_user_id=str(caller.id),
            to_user_id=str(recipient.id),
        )
        users = {caller.id: sanitize_user(caller), recipient.id: sanitize_user(recipient)}
        return to_read(request, users)

    async def set_status(
        self, caller: UserRecord, request_id, status: Optional[str]
    ) -> SwapRequestRead:
        """Recipient sets a new status. Any status may follow any status."""
        if status not in REQUEST_STATUSES:
            raise ValidationError("Invalid status")

        request = await self.get(request_id)
        if request is None:
            raise NotFoundError(REQUEST_NOT_FOUND)
        if request.to_user_id != caller.id:
            raise AuthorizationError("Only the recipient can update the status")

        updated = await self.store.set_request_status(request.id, status, self.clock())
        if updated is None:
            raise NotFoundError(REQUEST_NOT_FOUND)

        logger.info(
            "swap_request.status_changed",
            request_id=str(request.id),
            old_status=request.status,
            new_status=status,
        )
        return to_read(updated, await self._participants([updated]))

    async def list_for_user(self, caller: UserRecord) -> list[SwapRequestRead]:
        """Requests the caller sent or received, newest first."""
        requests = await self.store.list_requests_for_user(caller.id)
        users = await self._participants(requests)
        return [to_read(r, users) for r in requests]
