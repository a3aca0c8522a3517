"""
Media Service Factory

Environment Switching:
    - ENV_MODE=development → MockMediaService
    - ENV_MODE=staging/production → CloudinaryMediaService
"""

import logging
from functools import lru_cache

from foodie.core.config import get_settings
from foodie.services.media.base import BaseMediaService, UploadResult
from foodie.services.media.cloudinary import CloudinaryMediaService
from foodie.services.media.mock import MockMediaService

logger = logging.getLogger(__name__)


@lru_cache()
def get_media_service() -> BaseMediaService:
    settings = get_settings()

    if settings.is_development:
        logger.info("Media Service: Using MockMediaService (development mode)")
        return MockMediaService(folder=settings.cloudinary_folder)

    logger.info(f"Media Service: Using CloudinaryMediaService ({settings.env_mode.value} mode)")
    return CloudinaryMediaService()


def reset_media_service() -> None:
    get_media_service.cache_clear()
    logger.debug("Media service cache cleared")


__all__ = [
    "get_media_service",
    "reset_media_service",
    "BaseMediaService",
    "UploadResult",
    "CloudinaryMediaService",
    "MockMediaService",
]
