"""
Catalog Backend: Upload Route Handler
=====================================

What:  POST /api/upload, hosting a product image on the media host.
How:   Admin gate first, then multipart field `image` is handed to
       ImageUploadService (stage → forward → clean up).
Who:   Called by the admin UI before creating/updating a product with the
       returned `url` as `imageUrl`.

Request Flow:
    1. Client sends multipart/form-data with an `image` field
    2. require_admin rejects missing/wrong tokens (401)
    3. Missing file → 400 "No file uploaded"
    4. Service stages, uploads, removes the staging file
    5. 200 {"ok": true, "url": ..., "public_id": ...}
"""

import logging
from typing import Optional

from fastapi import APIRouter, Depends, File, UploadFile

from catalog.dependencies import get_upload_service, require_admin
from catalog.schemas.product import ErrorResponse, UploadResponse
from catalog.services.upload_service import ImageUploadService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["Upload"])


@router.post(
    "/upload",
    response_model=UploadResponse,
    dependencies=[Depends(require_admin)],
    responses={
        400: {"description": "No file uploaded", "model": ErrorResponse},
        401: {"description": "Missing or wrong admin token", "model": ErrorResponse},
        500: {"description": "Upload failed", "model": ErrorResponse},
    },
    summary="Upload a product image (admin)",
)
async def upload_image(
    image: Optional[UploadFile] = File(default=None, description="Image file"),
    upload_service: ImageUploadService = Depends(get_upload_service),
) -> UploadResponse:
    try:
        return await upload_service.upload_image(image)
    finally:
        if image is not None:
            await image.close()
