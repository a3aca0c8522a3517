"""
Media Service Abstract Base Class

Hosts the dish photos uploaded from the admin panel and hands back a
public URL to store in the item's `i` field.

Version: 1.0.0
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Optional


@dataclass
class UploadResult:
    """
    Standardized result from an image upload.

    Attributes:
        success: Whether the file is now hosted
        url: Public HTTPS URL of the hosted file
        public_id: Provider-side identifier
        error_message: Error description if the upload failed
        error_code: Machine-readable error code
    """
    success: bool
    url: Optional[str] = None
    public_id: Optional[str] = None
    error_message: Optional[str] = None
    error_code: Optional[str] = None


def empty_file_result() -> UploadResult:
    return UploadResult(
        success=False,
        error_message="No file provided",
        error_code="empty_file",
    )


class BaseMediaService(ABC):
    """Abstract base class for image hosting."""

    @property
    @abstractmethod
    def provider_name(self) -> str:
        pass

    @abstractmethod
    async def upload_image(
        self,
        data: bytes,
        filename: str,
        content_type: str = "application/octet-stream",
    ) -> UploadResult:
        """
        Upload one file.

        Args:
            data: Raw file contents (must not be empty)
            filename: Original file name
            content_type: MIME type reported by the browser

        Returns:
            UploadResult: Hosted URL or the failure reason
        """
        pass

    async def health_check(self) -> bool:
        return True
