"""
Mock Media Service

Development stand-in for Cloudinary. Files are not stored anywhere; the
returned URL is derived from the file's content hash so the same image
always maps to the same placeholder.
"""

import hashlib
import logging

from foodie.services.media.base import BaseMediaService, UploadResult, empty_file_result

logger = logging.getLogger(__name__)


class MockMediaService(BaseMediaService):
    def __init__(self, folder: str = "foodie-menu"):
        self.folder = folder
        self.uploads: list[str] = []
        logger.info("MockMediaService initialized")

    @property
    def provider_name(self) -> str:
        return "mock"

    async def upload_image(
        self,
        data: bytes,
        filename: str,
        content_type: str = "application/octet-stream",
    ) -> UploadResult:
        if not data:
            return empty_file_result()

        digest = hashlib.sha1(data).hexdigest()[:16]
        public_id = f"{self.folder}/{digest}"
        url = f"https://res.cloudinary.com/demo/image/upload/{public_id}"

        self.uploads.append(public_id)
        logger.info(f"Mock: Uploaded {filename} ({len(data)} bytes) -> {public_id}")

        return UploadResult(success=True, url=url, public_id=public_id)
