"""Request conversation API.

- POST /requests/:id/messages → participant posts a message
- GET /requests/:id/messages → participant reads the thread, oldest first

Clients poll the GET route; there is no push channel.
"""

from fastapi import APIRouter, Depends

from skillswap.auth.dependencies import get_current_user
from skillswap.schemas.message import MessageCreate, MessageEnvelope, MessageList
from skillswap.services.message_service import MessageService
from skillswap.storage import Store, get_store
from skillswap.storage.records import UserRecord

router = APIRouter()


def _svc(store: Store = Depends(get_store)) -> MessageService:
    return MessageService(store)


@router.post(
    "/requests/{request_id}/messages",
    response_model=MessageEnvelope,
    status_code=201,
)
async def create_message(
    request_id: str,
    body: MessageCreate,
    user: UserRecord = Depends(get_current_user),
    svc: MessageService = Depends(_svc),
):
    message = await svc.append(user, request_id, body.text)
    return MessageEnvelope(message=message)


@router.get("/requests/{request_id}/messages", response_model=MessageList)
async def list_messages(
    request_id: str,
    user: UserRecord = Depends(get_current_user),
    svc: MessageService = Depends(_svc),
):
    return MessageList(messages=await svc.list_messages(user, request_id))
