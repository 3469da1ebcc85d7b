"""
Catalog Backend: FastAPI Dependencies
=====================================

What:  Providers that hand app-scoped collaborators to route handlers, and
       the admin gate.
How:   `create_app()` and the lifespan put the collaborators on `app.state`;
       these functions read them back per request. Tests may replace any of
       them through `app.dependency_overrides`.

Admin gate:
    Token from header `x-admin-token`, else query parameter `token`.
    Missing and wrong tokens are rejected identically (401 "Unauthorized")
    before the handler runs.
"""

import logging
from typing import Optional

from fastapi import Depends, Header, Query, Request

from catalog.config import Settings
from catalog.exceptions import AuthorizationError
from catalog.middleware.request_id import request_id_var
from catalog.services.auth_service import Authorizer
from catalog.services.file_service import StagingService
from catalog.services.media_base import MediaHost
from catalog.services.store_base import ProductStore
from catalog.services.upload_service import ImageUploadService

logger = logging.getLogger(__name__)

ADMIN_TOKEN_HEADER = "x-admin-token"
ADMIN_TOKEN_QUERY = "token"


def get_settings(request: Request) -> Settings:
    return request.app.state.settings


def get_authorizer(request: Request) -> Authorizer:
    return request.app.state.authorizer


def get_product_store(request: Request) -> ProductStore:
    return request.app.state.store


def get_media_host(request: Request) -> MediaHost:
    return request.app.state.media_host


def get_staging_service(request: Request) -> StagingService:
    return request.app.state.staging


def get_upload_service(
    settings: Settings = Depends(get_settings),
    staging: StagingService = Depends(get_staging_service),
    media_host: MediaHost = Depends(get_media_host),
) -> ImageUploadService:
    return ImageUploadService(
        staging=staging,
        media_host=media_host,
        folder=settings.cloudinary_folder,
    )


async def require_admin(
    header_token: Optional[str] = Header(default=None, alias=ADMIN_TOKEN_HEADER),
    query_token: Optional[str] = Query(default=None, alias=ADMIN_TOKEN_QUERY),
    authorizer: Authorizer = Depends(get_authorizer),
) -> None:
    """
    Reject the request unless it carries the admin token.

    The header wins when both are present and non-empty.
    """
    candidate = header_token or query_token
    if not authorizer.check(candidate):
        logger.warning(
            "[%s] Admin check failed (token %s)",
            request_id_var.get(""),
            "absent" if not candidate else "present",
        )
        raise AuthorizationError()
