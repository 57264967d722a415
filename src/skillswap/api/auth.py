"""Auth API — registration, login, and the caller's own account.

Learn: Routes for the account lifecycle:
- POST /register → create an account, returns {token, user}
- POST /login → email/password → {token, user}
- GET /me → the authenticated user
- POST|PUT /profile → replace the caller's profile
"""

from fastapi import APIRouter, Depends

from skillswap.auth.dependencies import get_current_user
from skillswap.auth.jwt import issue_token
from skillswap.schemas.user import (
    AuthResponse,
    LoginRequest,
    ProfileUpdate,
    RegisterRequest,
    UserEnvelope,
    sanitize_user,
)
from skillswap.services.user_service import UserService
from skillswap.storage import Store, get_store
from skillswap.storage.records import UserRecord

router = APIRouter()


def _svc(store: Store = Depends(get_store)) -> UserService:
    return UserService(store)


# ─── Register / login ───────────────────────────────────

@router.post("/register", response_model=AuthResponse, status_code=201)
async def register(body: RegisterRequest, svc: UserService = Depends(_svc)):
    """Create an account and log it in."""
    user = await svc.register(email=body.email, password=body.password, name=body.name)
    return AuthResponse(token=issue_token(str(user.id)), user=sanitize_user(user))


@router.post("/login", response_model=AuthResponse)
async def login(body: LoginRequest, svc: UserService = Depends(_svc)):
    """Login with email and password → bearer token."""
    user = await svc.authenticate(email=body.email, password=body.password)
    return AuthResponse(token=issue_token(str(user.id)), user=sanitize_user(user))


# ─── Current user ───────────────────────────────────────

@router.get("/me", response_model=UserEnvelope)
async def get_me(user: UserRecord = Depends(get_current_user)):
    return UserEnvelope(user=sanitize_user(user))


@router.api_route("/profile", methods=["POST", "PUT"], response_model=UserEnvelope)
async def update_profile(
    body: ProfileUpdate,
    user: UserRecord = Depends(get_current_user),
    svc: UserService = Depends(_svc),
):
    """Replace the caller's profile. Omitted fields are cleared."""
    updated = await svc.update_profile(
        user.id,
        bio=body.bio,
        skills_offering=body.skills_offering,
        skills_seeking=body.skills_seeking,
        availability=body.availability,
    )
    return UserEnvelope(user=sanitize_user(updated))
