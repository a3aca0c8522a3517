"""
Nominatim Geo Service Implementation

Keyless reverse geocoding against an OpenStreetMap Nominatim server.
Used outside development mode when no Google key is configured.

API Documentation:
    https://nominatim.org/release-docs/latest/api/Reverse/
"""

import logging
from datetime import datetime
from typing import Optional

import httpx

from foodie.core.config import get_settings
from foodie.services.geo.base import BaseGeoService, GeoLocationResult

logger = logging.getLogger(__name__)


class NominatimGeoService(BaseGeoService):
    """Reverse geocoding via GET /reverse?format=json&addressdetails=1."""

    def __init__(
        self,
        base_url: Optional[str] = None,
        user_agent: Optional[str] = None,
        timeout: float = 10.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        settings = get_settings()
        self._base_url = (base_url or settings.nominatim_base_url).rstrip("/")
        self._headers = {
            "User-Agent": user_agent or settings.nominatim_user_agent,
            "Accept": "application/json",
        }
        self._timeout = timeout
        self._transport = transport

        logger.info(f"NominatimGeoService initialized ({self._base_url})")

    @property
    def provider_name(self) -> str:
        return "nominatim"

    def _client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(
            base_url=self._base_url,
            headers=self._headers,
            timeout=self._timeout,
            transport=self._transport,
        )

    @staticmethod
    def _city_from_address(address: dict) -> Optional[str]:
        return address.get("city") or address.get("town") or address.get("village")

    async def reverse_geocode(
        self,
        latitude: float,
        longitude: float,
    ) -> GeoLocationResult:
        start_time = datetime.now()
        params = {
            "format": "json",
            "lat": latitude,
            "lon": longitude,
            "addressdetails": 1,
        }

        try:
            async with self._client() as client:
                response = await client.get("/reverse", params=params)
            elapsed_ms = (datetime.now() - start_time).total_seconds() * 1000

            if response.status_code != 200:
                logger.warning(f"Nominatim: HTTP {response.status_code}")
                return GeoLocationResult(
                    success=False,
                    latitude=latitude,
                    longitude=longitude,
                    error_message=f"Reverse geocoding failed with status {response.status_code}",
                    error_code="bad_status",
                    response_time_ms=elapsed_ms,
                )

            data = response.json()
            address = data.get("address") or {}

            if "error" in data or not address:
                return GeoLocationResult(
                    success=False,
                    latitude=latitude,
                    longitude=longitude,
                    error_message=data.get("error", "No address found for these coordinates"),
                    error_code="address_not_found",
                    response_time_ms=elapsed_ms,
                )

            city = self._city_from_address(address) or ""
            state = address.get("state") or ""

            logger.info(f"Nominatim: Resolved {latitude}, {longitude} -> {city}, {state}")

            return GeoLocationResult(
                success=True,
                latitude=latitude,
                longitude=longitude,
                city=city,
                state=state,
                country=address.get("country"),
                formatted_address=data.get("display_name"),
                response_time_ms=elapsed_ms,
            )

        except (httpx.HTTPError, ValueError) as e:
            elapsed_ms = (datetime.now() - start_time).total_seconds() * 1000
            logger.error(f"Nominatim: Request failed - {e}")
            return GeoLocationResult(
                success=False,
                latitude=latitude,
                longitude=longitude,
                error_message="Unable to reach reverse geocoding service",
                error_code="network_error",
                response_time_ms=elapsed_ms,
            )

    async def health_check(self) -> bool:
        result = await self.reverse_geocode(25.4358, 81.8463)
        return result.success
