"""Member directory API.

- GET /users → everyone except the caller, newest first
"""

from fastapi import APIRouter, Depends

from skillswap.auth.dependencies import get_current_user
from skillswap.schemas.user import UserList, sanitize_user
from skillswap.services.user_service import UserService
from skillswap.storage import Store, get_store
from skillswap.storage.records import UserRecord

router = APIRouter()


@router.get("/users", response_model=UserList)
async def list_users(
    user: UserRecord = Depends(get_current_user),
    store: Store = Depends(get_store),
):
    others = await UserService(store).list_others(user.id)
    return UserList(users=[sanitize_user(u) for u in others])
