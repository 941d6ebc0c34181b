"""
Auth endpoints — issue and clear the session cookie.
"""

import logging
from typing import Any

from fastapi import APIRouter, Body, Response

from solosphere.domain.models import SuccessResponse, TokenRequest
from solosphere.services.auth_service import (
    TOKEN_COOKIE,
    cookie_options,
    create_access_token,
)

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Auth"])


@router.post("/jwt", response_model=SuccessResponse)
async def issue_token(body: TokenRequest, response: Response):
    """Sign the posted user claims into the httpOnly `token` cookie."""
    token = create_access_token(body.model_dump())
    response.set_cookie(TOKEN_COOKIE, token, **cookie_options())
    return SuccessResponse()


@router.post("/logOut", response_model=SuccessResponse)
async def log_out(response: Response, body: dict[str, Any] | None = Body(None)):
    logger.info(f"Logged out: {(body or {}).get('email')}")
    response.delete_cookie(TOKEN_COOKIE, **cookie_options())
    return SuccessResponse()
