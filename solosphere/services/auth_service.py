"""
Authentication service.
Signs and verifies the HS256 session token carried in the `token` cookie.
"""

import logging
from datetime import datetime, timedelta, timezone
from typing import Any

import jwt
from fastapi import Cookie, HTTPException, status

from solosphere.config import settings

logger = logging.getLogger(__name__)

TOKEN_COOKIE = "token"
_ALGORITHM = "HS256"


def cookie_options() -> dict[str, Any]:
    """Cookie flags: cross-site in production, strict same-site locally."""
    if settings.cookie_secure:
        return {"httponly": True, "secure": True, "samesite": "none"}
    return {"httponly": True, "secure": False, "samesite": "strict"}


def create_access_token(claims: dict[str, Any]) -> str:
    """Sign the given claims with an expiry of `access_token_ttl_days`."""
    payload = dict(claims)
    payload["exp"] = datetime.now(timezone.utc) + timedelta(
        days=settings.access_token_ttl_days
    )
    return jwt.encode(payload, settings.access_token_secret, algorithm=_ALGORITHM)


def verify_access_token(token: str) -> dict[str, Any]:
    """Decode and verify a session token, raising 401 on any failure."""
    try:
        return jwt.decode(
            token,
            settings.access_token_secret,
            algorithms=[_ALGORITHM],
            leeway=30,  # 30-second tolerance for clock drift
        )
    except jwt.ExpiredSignatureError:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Unauthorized Access",
        )
    except jwt.InvalidTokenError as e:
        logger.info(f"Rejected session token: {e}")
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Unauthorized Access",
        )


async def get_current_email(token: str | None = Cookie(default=None)) -> str:
    """
    FastAPI dependency returning the verified email of the caller.
    The core only ever sees this string.
    """
    if not token:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Unauthorized Access",
        )

    payload = verify_access_token(token)
    email = payload.get("email")
    if not email:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Token missing email claim",
        )
    return email
