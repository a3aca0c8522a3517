"""
FoodieOS Service Abstract Base Class

Defines the interface contract for talking to the external FoodieOS
backend, which owns the authoritative outlet menus.

Operations:
    - fetch_outlet_food: menu listing for one outlet (getOutletFood)
    - update_outlet_food: push the admin's local menu (updateOutletFood)

Both MockFoodieService and HttpFoodieService implement this interface
and report failures through result objects instead of raising.

Version: 1.0.0
"""

import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Optional

from pydantic import ValidationError

from foodie.schemas import MenuItem

logger = logging.getLogger(__name__)

EMPTY_MENU_MESSAGE = "No food items available at the moment."
FETCH_FAILED_MESSAGE = "Failed to load menu. Please try again later."


@dataclass
class OutletLocation:
    """Location context sent with every menu request."""
    lat: float = 0.0
    lon: float = 0.0
    city: str = ""
    state: str = ""
    country: str = "India"


@dataclass
class MenuFetchResult:
    """
    Standardized result of a menu fetch.

    Attributes:
        success: Whether a usable menu came back
        outlet_id: Outlet that was requested
        items: Menu items, deduplicated by id
        error_message: User-facing error text
        error_code: Machine-readable error code
        response_time_ms: Upstream response time
    """
    success: bool
    outlet_id: int
    items: list[MenuItem] = field(default_factory=list)
    error_message: Optional[str] = None
    error_code: Optional[str] = None
    response_time_ms: float = 0.0


@dataclass
class SyncResult:
    """Result of pushing the local menu to FoodieOS."""
    success: bool
    outlet_id: int
    synced_items: int = 0
    error_message: Optional[str] = None
    error_code: Optional[str] = None
    response_time_ms: float = 0.0


def build_outlet_food_request(
    outlet_id: int,
    location: OutletLocation,
    food_category: str = "",
    platform: str = "web",
    now: Optional[datetime] = None,
) -> dict[str, Any]:
    """Body of a getOutletFood request."""
    now = now or datetime.now(timezone.utc)
    return {
        "platform": platform,
        "country": location.country,
        "city": location.city,
        "state": location.state,
        "lat": location.lat,
        "lon": location.lon,
        "outletid": int(outlet_id),
        "foodCategory": food_category or "",
        "date": now.isoformat(),
    }


def build_sync_envelope(
    outlet_id: int,
    items: list[MenuItem],
    categories: list[str],
    now: Optional[datetime] = None,
) -> dict[str, Any]:
    """Body of an updateOutletFood request."""
    now = now or datetime.now(timezone.utc)
    return {
        "outletid": int(outlet_id),
        "date": now.isoformat(),
        "food": {
            "r": [item.to_wire() for item in items],
            "cat": list(categories),
        },
    }


def parse_outlet_food(payload: Any) -> Optional[list[MenuItem]]:
    """
    Extract menu items from a getOutletFood response.

    Expects {"status": 200, "output": {"r": [...]}}. Returns None when the
    envelope does not have that shape. Items are deduplicated by id: a
    later duplicate replaces the earlier one but keeps its position.
    Entries that cannot be parsed are skipped.
    """
    if not isinstance(payload, dict) or payload.get("status") != 200:
        return None

    output = payload.get("output")
    if not isinstance(output, dict) or not isinstance(output.get("r"), list):
        return None

    unique: dict[str, MenuItem] = {}
    for raw in output["r"]:
        try:
            item = MenuItem.model_validate(raw)
        except ValidationError as e:
            logger.warning(f"Skipping malformed menu entry: {e.errors()[:1]}")
            continue
        unique[item.id] = item

    return list(unique.values())


class BaseFoodieService(ABC):
    """
    Abstract base class for FoodieOS clients.

    Example:
        >>> service = get_foodie_service()
        >>> result = await service.fetch_outlet_food(200, OutletLocation())
        >>> if result.success:
        ...     print(len(result.items))
    """

    @property
    @abstractmethod
    def provider_name(self) -> str:
        """Return the provider name ("mock" or "http")."""
        pass

    @abstractmethod
    async def fetch_outlet_food(
        self,
        outlet_id: int,
        location: OutletLocation,
        food_category: str = "",
    ) -> MenuFetchResult:
        """
        Fetch the menu of one outlet.

        Args:
            outlet_id: Numeric outlet id
            location: Device location context (zeros when unknown)
            food_category: Optional category scope from the QR code

        Returns:
            MenuFetchResult: Items or the failure reason
        """
        pass

    @abstractmethod
    async def update_outlet_food(
        self,
        outlet_id: int,
        items: list[MenuItem],
        categories: list[str],
    ) -> SyncResult:
        """
        Replace the outlet's menu on FoodieOS with the given items.

        Args:
            outlet_id: Numeric outlet id
            items: Full local menu
            categories: Category list to publish with the menu

        Returns:
            SyncResult: Whether FoodieOS accepted the update
        """
        pass

    @abstractmethod
    async def health_check(self) -> bool:
        """Verify connectivity to FoodieOS."""
        pass
