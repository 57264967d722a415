"""FastAPI auth dependencies.

Learn: ``get_current_user`` is used as Depends() in every protected route.
It turns the ``Authorization: Bearer <token>`` header into a user record:

1. No header (or not a Bearer header) → 401 "Authentication token missing"
2. Bad signature, malformed or expired token → 401 "Invalid or expired token"
3. Token for a user that no longer exists → the same 401 as (2)

Cases 2 and 3 share one message so callers can't tell them apart.
"""

from typing import Optional

import structlog
from fastapi import Depends, Header

from skillswap.auth.jwt import TokenError, verify_token
from skillswap.errors import AuthenticationError
from skillswap.storage import Store, get_store
from skillswap.storage.records import UserRecord, parse_id

logger = structlog.get_logger()

MISSING_TOKEN = "Authentication token missing"
INVALID_TOKEN = "Invalid or expired token"


def extract_bearer_token(authorization: Optional[str]) -> Optional[str]:
    """Return the token from a ``Bearer <token>`` header value, if any."""
    if not authorization:
        return None
    scheme, _, token = authorization.partition(" ")
    if scheme.lower() != "bearer" or not token.strip():
        return None
    return token.strip()


async def resolve_user(token: str, store: Store) -> UserRecord:
    """Verify a token and load the user it names."""
    try:
        subject = verify_token(token)
    except TokenError as e:
        logger.info("auth.token_rejected", reason=str(e))
        raise AuthenticationError(INVALID_TOKEN)

    user_id = parse_id(subject)
    user = await store.get_user(user_id) if user_id else None
    if user is None:
        logger.info("auth.token_user_missing")
        raise AuthenticationError(INVALID_TOKEN)
    return user


async def get_current_user(
    authorization: Optional[str] = Header(None),
    store: Store = Depends(get_store),
) -> UserRecord:
    """Resolve the caller (required — 401 if no valid token)."""
    token = extract_bearer_token(authorization)
    if token is None:
        raise AuthenticationError(MISSING_TOKEN)
    user = await resolve_user(token, store)
    structlog.contextvars.bind_contextvars(user_id=str(user.id))
    return user
