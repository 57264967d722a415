"""Swap request API — create, list, and respond to requests.

Learn: Routes for the request lifecycle:
- POST /requests → caller sends a request (status starts as "pending")
- GET /requests → requests the caller sent or received
- POST /requests/:id/status → recipient sets the status
"""

from fastapi import APIRouter, Depends

from skillswap.auth.dependencies import get_current_user
from skillswap.schemas.swap_request import (
    SwapRequestCreate,
    SwapRequestEnvelope,
    SwapRequestList,
    SwapRequestStatusUpdate,
)
from skillswap.services.request_service import RequestService
from skillswap.storage import Store, get_store
from skillswap.storage.records import UserRecord

router = APIRouter()


def _svc(store: Store = Depends(get_store)) -> RequestService:
    return RequestService(store)


@router.post("/requests", response_model=SwapRequestEnvelope, status_code=201)
async def create_request(
    body: SwapRequestCreate,
    user: UserRecord = Depends(get_current_user),
    svc: RequestService = Depends(_svc),
):
    request = await svc.create(user, to_user_id=body.to_user_id, message=body.message)
    return SwapRequestEnvelope(request=request)


@router.get("/requests", response_model=SwapRequestList)
async def list_requests(
    user: UserRecord = Depends(get_current_user),
    svc: RequestService = Depends(_svc),
):
    return SwapRequestList(requests=await svc.list_for_user(user))


@router.post("/requests/{request_id}/status", response_model=SwapRequestEnvelope)
async def set_request_status(
    request_id: str,
    body: SwapRequestStatusUpdate,
    user: UserRecord = Depends(get_current_user),
    svc: RequestService = Depends(_svc),
):
    """Only the recipient may change the status, to any of the four values."""
    request = await svc.set_status(user, request_id, body.status)
    return SwapRequestEnvelope(request=request)
