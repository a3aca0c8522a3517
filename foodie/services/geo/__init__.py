"""
Geo Service Factory

Provides a single entry point for obtaining a reverse-geocoding service.

Selection:
    - ENV_MODE=development → MockGeoService
    - GOOGLE_MAPS_API_KEY set → GoogleGeoService
    - otherwise → NominatimGeoService

Usage:
    from foodie.services.geo import get_geo_service

    geo_service = get_geo_service()
    result = await geo_service.reverse_geocode(25.4358, 81.8463)
"""

import logging
from functools import lru_cache

from foodie.core.config import get_settings
from foodie.services.geo.base import BaseGeoService, GeoLocationResult
from foodie.services.geo.mock import MockGeoService
from foodie.services.geo.google import GoogleGeoService
from foodie.services.geo.nominatim import NominatimGeoService

logger = logging.getLogger(__name__)


@lru_cache()
def get_geo_service() -> BaseGeoService:
    """
    Get the configured geo service instance.

    Returns:
        BaseGeoService: Configured geo service instance
    """
    settings = get_settings()

    if settings.is_development:
        logger.info("Geo Service: Using MockGeoService (development mode)")
        return MockGeoService(failure_rate=settings.mock_failure_rate)

    if settings.google_maps_api_key:
        logger.info(
            f"Geo Service: Using GoogleGeoService "
            f"({settings.env_mode.value} mode)"
        )
        return GoogleGeoService()

    logger.info(
        f"Geo Service: Using NominatimGeoService "
        f"({settings.env_mode.value} mode)"
    )
    return NominatimGeoService()


def reset_geo_service() -> None:
    """
    Clear the cached geo service instance.

    Useful for testing or when configuration changes at runtime.
    """
    get_geo_service.cache_clear()
    logger.debug("Geo service cache cleared")


__all__ = [
    "get_geo_service",
    "reset_geo_service",
    "BaseGeoService",
    "GeoLocationResult",
    "MockGeoService",
    "GoogleGeoService",
    "NominatimGeoService",
]
