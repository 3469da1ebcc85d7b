"""
Catalog Backend: Abstract Media Host Interface
==============================================

What:  Contract for the third-party service that hosts product images.
How:   CloudinaryService implements it; tests substitute a fake. The upload
       service only depends on this interface.

Contract:
    upload(path, folder) → UploadResult(url, public_id)
        `path` is a complete local file; `folder` is the logical namespace the
        image is filed under. Failures are raised as MediaUploadError.
    health_check() → bool, never raises.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass


@dataclass(frozen=True)
class UploadResult:
    """Where the media host put the image."""
    url: str
    public_id: str


class MediaHost(ABC):
    """Abstract interface for image hosting providers."""

    @abstractmethod
    async def upload(self, file_path: str, folder: str) -> UploadResult:
        """
        Send a local file to the media host.

        Args:
            file_path: Absolute path of a fully written local file.
            folder:    Logical folder on the host; constant across uploads.

        Raises:
            MediaUploadError: the host rejected the file or was unreachable.
        """
        ...

    @abstractmethod
    async def health_check(self) -> bool:
        """Lightweight reachability test used by GET /health."""
        ...
