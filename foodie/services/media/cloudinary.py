"""
Cloudinary Media Service Implementation

Used when ENV_MODE=production or ENV_MODE=staging.

Requirements:
    - CLOUDINARY_CLOUD_NAME, CLOUDINARY_API_KEY, CLOUDINARY_API_SECRET

The file is sent as a base64 data URI with resource_type="auto", so
Cloudinary detects the media type itself.
"""

import base64
import logging
from datetime import datetime
from typing import Optional

import cloudinary
import cloudinary.uploader
from cloudinary.exceptions import Error as CloudinaryError

from foodie.core.config import get_settings
from foodie.services.media.base import BaseMediaService, UploadResult, empty_file_result

logger = logging.getLogger(__name__)


class CloudinaryMediaService(BaseMediaService):
    """
    Production image host.

    Raises:
        ValueError: If the Cloudinary credentials are not configured
    """

    def __init__(self, folder: Optional[str] = None):
        settings = get_settings()

        if not settings.cloudinary_configured:
            raise ValueError(
                "CLOUDINARY_CLOUD_NAME, CLOUDINARY_API_KEY and CLOUDINARY_API_SECRET "
                "are required for image uploads outside development mode."
            )

        cloudinary.config(
            cloud_name=settings.cloudinary_cloud_name,
            api_key=settings.cloudinary_api_key,
            api_secret=settings.cloudinary_api_secret,
            secure=True,
        )
        self.folder = folder or settings.cloudinary_folder

        logger.info(f"CloudinaryMediaService initialized (folder={self.folder})")

    @property
    def provider_name(self) -> str:
        return "cloudinary"

    async def upload_image(
        self,
        data: bytes,
        filename: str,
        content_type: str = "application/octet-stream",
    ) -> UploadResult:
        if not data:
            return empty_file_result()

        start_time = datetime.now()
        data_uri = f"data:{content_type};base64,{base64.b64encode(data).decode('ascii')}"

        try:
            result = cloudinary.uploader.upload(
                data_uri,
                folder=self.folder,
                resource_type="auto",
            )
        except CloudinaryError as e:
            logger.error(f"Cloudinary: Upload of {filename} failed - {e}")
            return UploadResult(
                success=False,
                error_message="Failed to upload image",
                error_code="upload_failed",
            )

        elapsed_ms = (datetime.now() - start_time).total_seconds() * 1000
        logger.info(
            f"Cloudinary: Uploaded {filename} -> {result.get('public_id')} "
            f"({elapsed_ms:.0f}ms)"
        )

        return UploadResult(
            success=True,
            url=result.get("secure_url"),
            public_id=result.get("public_id"),
        )

    async def health_check(self) -> bool:
        return get_settings().cloudinary_configured
