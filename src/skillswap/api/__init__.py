"""API route aggregation.

All routers registered here get mounted in main.py under /api.

Learn: Health, register and login are open. Every other route takes
``get_current_user`` as a parameter, so the handler receives the
authenticated user record directly.
"""

from fastapi import APIRouter

from skillswap.api.auth import router as auth_router
from skillswap.api.health import router as health_router
from skillswap.api.messages import router as messages_router
from skillswap.api.requests import router as requests_router
from skillswap.api.users import router as users_router

api_router = APIRouter(prefix="/api")

api_router.include_router(health_router, tags=["health"])
api_router.include_router(auth_router, tags=["auth"])
api_router.include_router(users_router, tags=["users"])
api_router.include_router(requests_router, tags=["requests"])
api_router.include_router(messages_router, tags=["messages"])
