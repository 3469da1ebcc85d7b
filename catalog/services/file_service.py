"""
Catalog Backend: Upload Staging Service
=======================================

What:  Writes an uploaded file to a transient local path and removes it again.
How:   The upload is streamed to `<staging_root>/<uuid><ext>` with async file
       I/O. `staged()` is an async context manager that yields the path and
       deletes the file on exit, whether the body succeeded or raised.
Who:   Used by ImageUploadService around the media host call.

Lifecycle of a staging file:
    1. Client sends multipart upload → route hands the UploadFile over
    2. staged(): random name generated, bytes streamed to disk
    3. Caller forwards the path to the media host
    4. Context exit: file removed (success, failure, cancellation alike)

A staging file belongs to exactly one request; names are UUIDs so concurrent
uploads never collide and no client input ends up in a path.
"""

import logging
import os
import uuid
from contextlib import asynccontextmanager
from pathlib import Path
from typing import AsyncIterator, Optional

import aiofiles
from fastapi import UploadFile

from catalog.exceptions import FileStorageError

logger = logging.getLogger(__name__)

# Streamed in 1 MiB chunks so large images never sit in memory whole
CHUNK_SIZE = 1024 * 1024


class StagingService:
    """
    Manages the transient local copies of uploaded files.

    Args:
        staging_root: Directory for staging files (created if missing).
    """

    def __init__(self, staging_root: str):
        self.staging_root = Path(staging_root).resolve()
        self.staging_root.mkdir(parents=True, exist_ok=True)
        logger.info("StagingService initialized with staging_root=%s", self.staging_root)

    def _generate_staging_path(self, filename: Optional[str]) -> Path:
        """
        Unique path for one upload: `<uuid><original extension>`.

        Only the extension of the client filename is kept, lowercased.
        """
        extension = Path(filename or "").suffix.lower()
        return self.staging_root / f"{uuid.uuid4().hex}{extension}"

    async def write_upload(self, upload: UploadFile, path: Path) -> int:
        """
        Stream the upload to `path`.

        Returns:
            Number of bytes written.

        Raises:
            FileStorageError: the file could not be written.
        """
        written = 0
        try:
            async with aiofiles.open(path, "wb") as f:
                while chunk := await upload.read(CHUNK_SIZE):
                    await f.write(chunk)
                    written += len(chunk)
        except OSError as e:
            logger.error("Failed to stage upload at %s: %s", path, str(e))
            raise FileStorageError(
                context={"path": str(path), "os_error": str(e)}
            ) from e

        logger.info("Upload staged: %s (%d bytes)", path.name, written)
        return written

    async def cleanup_file(self, file_path: str) -> None:
        """
        Remove a staging file if it exists.

        Missing files are fine (the write may never have started). Other
        failures are logged, not raised, so they cannot mask the outcome of
        the upload itself.
        """
        try:
            path = Path(file_path)
            if path.exists():
                os.remove(path)
                logger.info("Cleaned up staging file: %s", path.name)
            else:
                logger.debug("Cleanup: staging file already gone: %s", path.name)
        except OSError as e:
            logger.warning("Failed to clean up staging file %s: %s", file_path, str(e))

    @asynccontextmanager
    async def staged(self, upload: UploadFile) -> AsyncIterator[str]:
        """
        Stage `upload` for the duration of the `async with` block.

        Usage:
            async with staging.staged(upload) as path:
                await media_host.upload(path, folder)
        """
        path = self._generate_staging_path(upload.filename)
        try:
            await self.write_upload(upload, path)
            yield str(path)
        finally:
            await self.cleanup_file(str(path))
