"""
Catalog Backend: Cloudinary Media Host
======================================

What:  MediaHost implementation using the Cloudinary Python SDK.
How:   The SDK is configured once with the account credentials. Its upload
       call is blocking HTTP, so it runs in Starlette's threadpool and the
       event loop keeps serving other requests meanwhile.
Who:   Built in the application lifespan; used by ImageUploadService.

Failure handling:
    No retries. Any SDK or network error becomes MediaUploadError (→ 500
    "Upload failed"); the SDK message is kept in the log context only.
"""

import logging
import time
from pathlib import Path

import cloudinary
import cloudinary.api
import cloudinary.uploader
from starlette.concurrency import run_in_threadpool

from catalog.config import Settings
from catalog.exceptions import MediaUploadError
from catalog.services.media_base import MediaHost, UploadResult

logger = logging.getLogger(__name__)


class CloudinaryService(MediaHost):
    """
    Cloudinary-backed image hosting.

    Returned URLs are always the HTTPS `secure_url`.
    """

    def __init__(self, settings: Settings):
        cloudinary.config(
            cloud_name=settings.cloudinary_cloud_name,
            api_key=settings.cloudinary_api_key,
            api_secret=settings.cloudinary_api_secret,
            secure=True,
        )
        logger.info(
            "CloudinaryService initialized for cloud=%s",
            settings.cloudinary_cloud_name or "<unset>",
        )

    async def upload(self, file_path: str, folder: str) -> UploadResult:
        start_time = time.perf_counter()
        try:
            result = await run_in_threadpool(
                cloudinary.uploader.upload,
                file_path,
                folder=folder,
            )
        except Exception as e:
            logger.error(
                "Cloudinary upload of %s failed: %s",
                Path(file_path).name,
                str(e),
            )
            raise MediaUploadError(
                context={"error_type": type(e).__name__, "error": str(e)}
            ) from e

        secure_url = result.get("secure_url")
        public_id = result.get("public_id")
        if not secure_url or not public_id:
            raise MediaUploadError(
                context={"reason": "incomplete response", "keys": sorted(result)}
            )

        duration_ms = (time.perf_counter() - start_time) * 1000
        logger.info(
            "Cloudinary upload completed in %.0fms: %s (%s bytes)",
            duration_ms,
            public_id,
            result.get("bytes", "?"),
        )
        return UploadResult(url=secure_url, public_id=public_id)

    async def health_check(self) -> bool:
        try:
            response = await run_in_threadpool(cloudinary.api.ping)
            return response.get("status") == "ok"
        except Exception as e:
            logger.warning("Cloudinary health check failed: %s", str(e))
            return False
