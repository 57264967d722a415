"""Message service — the conversation attached to each swap request.

Learn: Messages are append-only. Both reading and writing require the
caller to be a participant of the request, checked through
``RequestService.require_participant``.
"""

from typing import Callable, Optional

import structlog

from skillswap.errors import ValidationError
from skillswap.schemas.message import MessageRead
from skillswap.schemas.user import sanitize_user
from skillswap.services.request_service import RequestService
from skillswap.storage.base import Store
from skillswap.storage.records import MessageRecord, UserRecord, new_id, utcnow

logger = structlog.get_logger()


class MessageService:
    """Business logic for request conversations."""

    def __init__(self, store: Store, clock: Callable = utcnow):
        self.store = store
        self.clock = clock
        self.requests = RequestService(store, clock)

    async def append(
        self, caller: UserRecord, request_id, text: Optional[str]
    ) -> MessageRead:
        if not text:
            raise ValidationError("Message text cannot be empty")

        request = await self.requests.require_participant(caller, request_id)
        message = await self.store.insert_message(
            MessageRecord(
                id=new_id(),
                request_id=request.id,
                sender_id=caller.id,
                text=text,
                created_at=self.clock(),
            )
        )
        logger.info(
            "message.sent",
            message_id=str(message.id),
            request_id=str(request.id),
            sender_id=str(caller.id),
        )
        return MessageRead(
            id=message.id,
            request_id=message.request_id,
            sender_id=message.sender_id,
            text=message.text,
            created_at=message.created_at,
            sender=sanitize_user(caller),
        )

    async def list_messages(
        self, caller: UserRecord, request_id
    ) -> list[MessageRead]:
        """Conversation for a request, oldest first."""
        request = await self.requests.require_participant(caller, request_id)
        messages = await self.store.list_messages(request.id)

        senders = await self.store.get_users({m.sender_id for m in messages})
        by_id = {u.id: sanitize_user(u) for u in senders}
        return [
            MessageRead(
                id=m.id,
                request_id=m.request_id,
                sender_id=m.sender_id,
                text=m.text,
                created_at=m.created_at,
                sender=by_id.get(m.sender_id),
            )
            for m in messages
        ]
