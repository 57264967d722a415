"""JWT token creation and verification.

Learn: JWT (JSON Web Token) provides stateless authentication.
One kind of token: an access token valid for 7 days by default.
The token carries the user id in ``sub``; verifying it proves we issued
it, not that the user still exists (the auth dependency checks that).
"""

from datetime import datetime, timedelta, timezone
from typing import Optional

import jwt

from skillswap.config import settings


class TokenError(Exception):
    """Raised when token verification fails."""


def issue_token(user_id: str, expires_delta: Optional[timedelta] = None) -> str:
    """Create a signed access token for a user."""
    now = datetime.now(timezone.utc)
    expires = now + (
        expires_delta
        if expires_delta is not None
        else timedelta(days=settings.access_token_expire_days)
    )
    payload = {
        "sub": str(user_id),
        "type": "access",
        "exp": expires,
        "iat": now,
    }
    return jwt.encode(payload, settings.jwt_secret, algorithm=settings.jwt_algorithm)


def verify_token(token: str) -> str:
    """Verify a token and return the user id it was issued for.

    Raises TokenError on failure.
    """
    try:
        payload = jwt.decode(
            token,
            settings.jwt_secret,
            algorithms=[settings.jwt_algorithm],
            options={"require": ["exp", "sub"]},
        )
    except jwt.ExpiredSignatureError:
        raise TokenError("Token has expired")
    except jwt.InvalidTokenError as e:
        raise TokenError(f"Invalid token: {e}")

    if payload.get("type") != "access":
        raise TokenError("Not an access token")
    return payload["sub"]
