"""
Google Maps Geo Service Implementation

Reverse geocoding through the Google Maps Geocoding API.
Used outside development mode when GOOGLE_MAPS_API_KEY is configured.

API Documentation:
    https://developers.google.com/maps/documentation/geocoding/requests-reverse-geocoding

Version: 1.0.0
"""

import logging
from datetime import datetime
from typing import Optional

import googlemaps
from googlemaps.exceptions import ApiError, Timeout, TransportError

from foodie.core.config import get_settings
from foodie.services.geo.base import BaseGeoService, GeoLocationResult

logger = logging.getLogger(__name__)

FAILURES = {
    Timeout: ("Reverse geocoding timed out", "timeout"),
    ApiError: ("Reverse geocoding service error", "api_error"),
    TransportError: ("Unable to reach reverse geocoding service", "transport_error"),
}


class GoogleGeoService(BaseGeoService):
    """
    Production Google Maps reverse-geocoding implementation.

    Configuration:
        Requires GOOGLE_MAPS_API_KEY environment variable.
    """

    def __init__(self, client: Optional[googlemaps.Client] = None):
        """
        Initialize Google Maps client with API key.

        Raises:
            ValueError: If GOOGLE_MAPS_API_KEY is not configured
        """
        if client is None:
            settings = get_settings()
            if not settings.google_maps_api_key:
                raise ValueError(
                    "GOOGLE_MAPS_API_KEY is required for the Google geo service. "
                    "Set it in your .env file or environment variables."
                )
            client = googlemaps.Client(key=settings.google_maps_api_key)

        self._client = client

        logger.info("GoogleGeoService initialized")

    @property
    def provider_name(self) -> str:
        """Return the provider name."""
        return "google"

    def _extract_address_components(
        self,
        components: list,
    ) -> dict[str, Optional[str]]:
        """
        Extract city, state and country from Google's address components.

        Args:
            components: List of address_components from Google API

        Returns:
            dict with city, state, country
        """
        result = {
            "city": None,
            "state": None,
            "country": None,
        }

        for component in components:
            types = component.get("types", [])

            if "locality" in types:
                result["city"] = component.get("long_name")
            elif "administrative_area_level_2" in types and not result["city"]:
                result["city"] = component.get("long_name")
            elif "administrative_area_level_1" in types:
                result["state"] = component.get("long_name")
            elif "country" in types:
                result["country"] = component.get("long_name")

        return result

    async def reverse_geocode(
        self,
        latitude: float,
        longitude: float,
    ) -> GeoLocationResult:
        """Resolve coordinates with a Geocoding API reverse lookup."""
        start_time = datetime.now()

        logger.debug(f"Google: Reverse geocoding {latitude}, {longitude}")

        try:
            # googlemaps is synchronous; a reverse lookup is a single short request
            results = self._client.reverse_geocode((latitude, longitude))

            elapsed_ms = (datetime.now() - start_time).total_seconds() * 1000

            if not results:
                logger.warning(f"Google: No address for {latitude}, {longitude}")
                return GeoLocationResult(
                    success=False,
                    latitude=latitude,
                    longitude=longitude,
                    error_message="No address found for these coordinates",
                    error_code="address_not_found",
                    response_time_ms=elapsed_ms,
                )

            best = results[0]
            components = self._extract_address_components(
                best.get("address_components", [])
            )

            logger.info(
                f"Google: Resolved {latitude}, {longitude} -> "
                f"{components['city']}, {components['state']}"
            )

            return GeoLocationResult(
                success=True,
                latitude=latitude,
                longitude=longitude,
                city=components["city"],
                state=components["state"],
                country=components["country"],
                formatted_address=best.get("formatted_address"),
                response_time_ms=elapsed_ms,
            )

        except (Timeout, ApiError, TransportError) as e:
            elapsed_ms = (datetime.now() - start_time).total_seconds() * 1000
            message, code = next(v for cls, v in FAILURES.items() if isinstance(e, cls))
            logger.error(f"Google: {code} - {e}")
            return GeoLocationResult(
                success=False,
                latitude=latitude,
                longitude=longitude,
                error_message=message,
                error_code=code,
                response_time_ms=elapsed_ms,
            )

    async def health_check(self) -> bool:
        """Verify credentials and connectivity with a known lookup."""
        try:
            result = self._client.reverse_geocode((25.4358, 81.8463))
            return bool(result)
        except (ApiError, Timeout, TransportError) as e:
            logger.error(f"Google: Health check failed - {e}")
            return False
