"""
Catalog Backend: Login Route
============================

What:  POST /api/login, trading the admin password for the admin token.
How:   Delegates to Authorizer.login(); the token returned is the configured
       static secret, the same for every successful login.
"""

import logging
from typing import Optional

from fastapi import APIRouter, Body, Depends

from catalog.dependencies import get_authorizer
from catalog.schemas.product import ErrorResponse, LoginRequest, LoginResponse
from catalog.services.auth_service import Authorizer

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["Auth"])


@router.post(
    "/login",
    response_model=LoginResponse,
    responses={
        400: {"description": "Missing password", "model": ErrorResponse},
        401: {"description": "Wrong password", "model": ErrorResponse},
    },
    summary="Exchange the admin password for the admin token",
)
async def login(
    payload: Optional[LoginRequest] = Body(default=None),
    authorizer: Authorizer = Depends(get_authorizer),
) -> LoginResponse:
    password = payload.password if payload else None
    token = authorizer.login(password)
    return LoginResponse(token=token)
