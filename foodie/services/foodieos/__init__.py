"""
FoodieOS Service Factory

Environment Switching:
    - ENV_MODE=development → MockFoodieService (built-in sample menu)
    - ENV_MODE=staging/production → HttpFoodieService

Usage:
    from foodie.services.foodieos import get_foodie_service

    service = get_foodie_service()
    result = await service.fetch_outlet_food(200, OutletLocation())
"""

import logging
from functools import lru_cache

from foodie.core.config import get_settings
from foodie.services.foodieos.base import (
    BaseFoodieService,
    MenuFetchResult,
    OutletLocation,
    SyncResult,
    build_outlet_food_request,
    build_sync_envelope,
    parse_outlet_food,
)
from foodie.services.foodieos.http import HttpFoodieService
from foodie.services.foodieos.mock import MockFoodieService

logger = logging.getLogger(__name__)


@lru_cache()
def get_foodie_service() -> BaseFoodieService:
    """
    Get the configured FoodieOS client.

    Returns:
        BaseFoodieService: Mock or HTTP client depending on ENV_MODE
    """
    settings = get_settings()

    if settings.is_development:
        logger.info("FoodieOS Service: Using MockFoodieService (development mode)")
        return MockFoodieService(failure_rate=settings.mock_failure_rate)

    logger.info(
        f"FoodieOS Service: Using HttpFoodieService "
        f"({settings.env_mode.value} mode)"
    )
    return HttpFoodieService()


def reset_foodie_service() -> None:
    """Clear the cached FoodieOS client."""
    get_foodie_service.cache_clear()
    logger.debug("FoodieOS service cache cleared")


__all__ = [
    "get_foodie_service",
    "reset_foodie_service",
    "BaseFoodieService",
    "MenuFetchResult",
    "OutletLocation",
    "SyncResult",
    "build_outlet_food_request",
    "build_sync_envelope",
    "parse_outlet_food",
    "HttpFoodieService",
    "MockFoodieService",
]
