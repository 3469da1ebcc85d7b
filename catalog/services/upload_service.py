"""
Catalog Backend: Image Upload Service
=====================================

What:  Orchestrates POST /api/upload: require file → stage → forward → clean up.
How:   Composes StagingService (local transient copy) and a MediaHost.
Who:   Called by the upload route after the admin gate has passed.

Flow:
    ┌──────────┐    ┌─────────────┐    ┌──────────────┐    ┌───────────┐
    │  Upload  │───▶│   Stage     │───▶│  Media host  │───▶│  Cleanup  │
    │  (Route) │    │  (tmp file) │    │  (folder)    │    │  (always) │
    └──────────┘    └─────────────┘    └──────────────┘    └───────────┘

Errors:
    no file             → ValidationError   (400 "No file uploaded")
    staging write fails → FileStorageError  (500 "Upload failed")
    media host fails    → MediaUploadError  (500 "Upload failed")
The staging file is gone after every one of these outcomes.
"""

import logging
from typing import Optional

from fastapi import UploadFile

from catalog.exceptions import CatalogError, MediaUploadError, ValidationError
from catalog.schemas.product import UploadResponse
from catalog.services.file_service import StagingService
from catalog.services.media_base import MediaHost

logger = logging.getLogger(__name__)


class ImageUploadService:
    """
    Forwards uploaded images to the media host.

    Args:
        staging:    Transient file handling.
        media_host: Where images end up.
        folder:     Media host folder, identical for every upload.
    """

    def __init__(self, staging: StagingService, media_host: MediaHost, folder: str):
        self.staging = staging
        self.media_host = media_host
        self.folder = folder

    async def upload_image(self, upload: Optional[UploadFile]) -> UploadResponse:
        """
        Host one uploaded image.

        Raises:
            ValidationError: no file attached (or an empty file input)
            FileStorageError: staging failed
            MediaUploadError: the media host failed
        """
        if upload is None or not upload.filename:
            raise ValidationError(message="No file uploaded", field="image")

        logger.info(
            "Received upload: filename=%s, content_type=%s",
            upload.filename,
            upload.content_type,
        )

        async with self.staging.staged(upload) as path:
            try:
                result = await self.media_host.upload(path, self.folder)
            except CatalogError:
                raise
            except Exception as e:
                logger.error("Unexpected media host error: %s", str(e), exc_info=True)
                raise MediaUploadError(context={"error_type": type(e).__name__}) from e

        return UploadResponse(url=result.url, public_id=result.public_id)
