"""
Geo Service Abstract Base Class

Defines the interface contract for all reverse-geocoding implementations.
MockGeoService, GoogleGeoService and NominatimGeoService implement it.

Use Cases:
    - Turning the diner's device coordinates into city/state before the
      menu is fetched from FoodieOS
    - Enriching the redirect built after a successful QR scan

Version: 1.0.0
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Optional


@dataclass
class GeoLocationResult:
    """
    Standardized result from reverse geocoding.

    Attributes:
        success: Whether the coordinates could be resolved
        latitude: Latitude that was looked up
        longitude: Longitude that was looked up
        city: City, town or village name
        state: State / first-level administrative area
        country: Country name or code
        formatted_address: Human-readable address if the provider gives one
        error_message: Error description if the lookup failed
        error_code: Machine-readable error code
        response_time_ms: API response time
    """
    success: bool
    latitude: Optional[float] = None
    longitude: Optional[float] = None
    city: Optional[str] = None
    state: Optional[str] = None
    country: Optional[str] = None
    formatted_address: Optional[str] = None
    error_message: Optional[str] = None
    error_code: Optional[str] = None
    response_time_ms: float = 0.0


class BaseGeoService(ABC):
    """
    Abstract base class for reverse-geocoding services.

    Implementations must never raise for provider failures: a failed
    lookup is reported through GeoLocationResult so callers can fall
    back to coordinates only.

    Example:
        >>> service = get_geo_service()
        >>> result = await service.reverse_geocode(25.4358, 81.8463)
        >>> if result.success:
        ...     print(result.city, result.state)
    """

    @property
    @abstractmethod
    def provider_name(self) -> str:
        """
        Return the name of the geo provider.

        Returns:
            str: Provider name (e.g., "mock", "google", "nominatim")
        """
        pass

    @abstractmethod
    async def reverse_geocode(
        self,
        latitude: float,
        longitude: float,
    ) -> GeoLocationResult:
        """
        Resolve coordinates into city and state.

        Args:
            latitude: Device latitude
            longitude: Device longitude

        Returns:
            GeoLocationResult: Resolved place names or the failure reason
        """
        pass

    @abstractmethod
    async def health_check(self) -> bool:
        """
        Verify connectivity to the geo service.

        Returns:
            bool: True if service is operational
        """
        pass
