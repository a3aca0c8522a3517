"""
Mock Geo Service Implementation

Simulates reverse geocoding without making real API calls.
Used in development mode (ENV_MODE=development) for local testing.

Behavior:
    - Resolves coordinates to the nearest city of a small built-in table
    - Simulates network latency
    - Optional random failure rate for testing the coordinates-only fallback

Version: 1.0.0
"""

import asyncio
import logging
import random
from typing import Optional

from foodie.services.geo.base import BaseGeoService, GeoLocationResult

logger = logging.getLogger(__name__)


class MockGeoService(BaseGeoService):
    """
    Mock implementation of the geo service.

    Attributes:
        failure_rate: Probability of simulated API failure (0.0-1.0)
        min_latency: Minimum response time in seconds
        max_latency: Maximum response time in seconds

    Example:
        >>> service = MockGeoService(failure_rate=0.0)
        >>> result = await service.reverse_geocode(25.44, 81.85)
        >>> print(result.city)
        Prayagraj
    """

    # (city, state, lat, lon)
    KNOWN_CITIES = [
        ("Prayagraj", "Uttar Pradesh", 25.4358, 81.8463),
        ("Lucknow", "Uttar Pradesh", 26.8467, 80.9462),
        ("New Delhi", "Delhi", 28.6139, 77.2090),
        ("Mumbai", "Maharashtra", 19.0760, 72.8777),
        ("Bengaluru", "Karnataka", 12.9716, 77.5946),
    ]

    def __init__(
        self,
        failure_rate: float = 0.0,
        min_latency: float = 0.05,
        max_latency: float = 0.2,
    ):
        self.failure_rate = failure_rate
        self.min_latency = min_latency
        self.max_latency = max_latency

        logger.info(
            f"MockGeoService initialized "
            f"(failure_rate={failure_rate:.0%}, "
            f"cities={len(self.KNOWN_CITIES)})"
        )

    @property
    def provider_name(self) -> str:
        """Return the provider name."""
        return "mock"

    async def _simulate_latency(self) -> float:
        """
        Simulate network latency.

        Returns:
            float: Latency in milliseconds
        """
        latency = random.uniform(self.min_latency, self.max_latency)
        await asyncio.sleep(latency)
        return latency * 1000

    def _should_fail(self) -> bool:
        """Determine if this request should simulate a failure."""
        return random.random() < self.failure_rate

    def _nearest_city(self, latitude: float, longitude: float) -> tuple[str, str]:
        best: Optional[tuple[str, str]] = None
        best_distance = float("inf")
        for city, state, lat, lon in self.KNOWN_CITIES:
            distance = (lat - latitude) ** 2 + (lon - longitude) ** 2
            if distance < best_distance:
                best, best_distance = (city, state), distance
        return best

    async def reverse_geocode(
        self,
        latitude: float,
        longitude: float,
    ) -> GeoLocationResult:
        """Resolve coordinates against the built-in city table."""
        logger.debug(f"Mock: Reverse geocoding {latitude}, {longitude}")

        latency_ms = await self._simulate_latency()

        if self._should_fail():
            logger.debug("Mock: Simulated API failure")
            return GeoLocationResult(
                success=False,
                latitude=latitude,
                longitude=longitude,
                error_message="Geocoding service temporarily unavailable",
                error_code="service_unavailable",
                response_time_ms=latency_ms,
            )

        city, state = self._nearest_city(latitude, longitude)

        logger.info(f"Mock: Resolved {latitude}, {longitude} -> {city}, {state}")

        return GeoLocationResult(
            success=True,
            latitude=latitude,
            longitude=longitude,
            city=city,
            state=state,
            country="India",
            formatted_address=f"{city}, {state}, India",
            response_time_ms=latency_ms,
        )

    async def health_check(self) -> bool:
        """Mock health check always returns True."""
        logger.debug("Mock: Geo health check passed")
        return True
