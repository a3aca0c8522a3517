"""
Mock FoodieOS Service Implementation

Serves a built-in sample menu without calling FoodieOS.
Used in development mode (ENV_MODE=development) to:
    - Browse, customise and check out without network access
    - Exercise the admin sync without touching the real backend

Behavior:
    - Simulates network latency
    - Randomly fails at the configured rate
    - Remembers every sync envelope it receives (see `synced`)

Version: 1.0.0
"""

import asyncio
import copy
import logging
import random
from datetime import datetime
from typing import Any, Optional

from foodie.schemas import MenuItem
from foodie.services.foodieos.base import (
    FETCH_FAILED_MESSAGE,
    BaseFoodieService,
    MenuFetchResult,
    OutletLocation,
    SyncResult,
    build_outlet_food_request,
    build_sync_envelope,
    parse_outlet_food,
)

logger = logging.getLogger(__name__)


SAMPLE_MENU: list[dict[str, Any]] = [
    {
        "id": "P00001",
        "h": "Margherita Pizza",
        "op": 45000,
        "dp": 45000,
        "ct": "PIZZA",
        "veg": True,
        "bestSeller": True,
        "i": "/static/margherita-pizza.png",
        "wt": "350g",
        "en": "520 kcal",
    },
    {
        "id": "P00002",
        "h": "Chicken Caesar Salad",
        "op": 38000,
        "dp": 38000,
        "ct": "SALAD",
        "veg": False,
        "bestSeller": False,
        "i": "/static/chicken-caesar-salad.png",
        "wt": "280g",
        "en": "420 kcal",
        "comboItems": [
            {"name": "Grilled Chicken Breast", "calories": "180 kcal"},
            {"name": "Fresh Romaine Lettuce", "calories": "15 kcal"},
            {"name": "Caesar Dressing", "calories": "120 kcal"},
        ],
        "addOns": [
            {"id": "extra-chicken", "name": "Extra Chicken", "price": 8000},
            {"id": "extra-cheese", "name": "Extra Parmesan", "price": 5000},
        ],
    },
    {
        "id": "P00003",
        "h": "Truffle Mushroom Pasta",
        "op": 52000,
        "dp": 52000,
        "ct": "PASTA",
        "veg": True,
        "bestSeller": True,
        "i": "/static/truffle-mushroom-pasta.jpg",
        "wt": "320g",
        "en": "680 kcal",
    },
    {
        "id": "P00004",
        "h": "Grilled Salmon Bowl",
        "op": 65000,
        "dp": 65000,
        "ct": "BOWL",
        "veg": False,
        "bestSeller": False,
        "i": "/static/grilled-salmon-bowl.jpg",
        "wt": "400g",
        "en": "580 kcal",
    },
    {
        "id": "P00005",
        "h": "Gourmet Burger",
        "op": 42000,
        "dp": 42000,
        "ct": "BURGER",
        "veg": False,
        "bestSeller": True,
        "i": "/static/gourmet-burger.png",
        "wt": "380g",
        "en": "720 kcal",
        "comboItems": [
            {"name": "Beef Patty", "calories": "280 kcal"},
            {"name": "Brioche Bun", "calories": "180 kcal"},
            {"name": "Fresh Vegetables", "calories": "25 kcal"},
        ],
        "addOns": [
            {"id": "extra-patty", "name": "Extra Patty", "price": 15000},
            {"id": "bacon", "name": "Crispy Bacon", "price": 8000},
        ],
    },
    {
        "id": "P00006",
        "h": "Mediterranean Wrap",
        "op": 35000,
        "dp": 35000,
        "ct": "WRAP",
        "veg": True,
        "bestSeller": False,
        "i": "/static/mediterranean-wrap.png",
        "wt": "250g",
        "en": "480 kcal",
    },
]


class MockFoodieService(BaseFoodieService):
    """
    Mock implementation of the FoodieOS client.

    Attributes:
        failure_rate: Probability of a simulated upstream failure (0.0-1.0)
        min_latency: Minimum simulated response time in seconds
        max_latency: Maximum simulated response time in seconds
        menu: Raw FoodieOS-format entries served for every outlet
        requests: getOutletFood bodies received, newest last
        synced: updateOutletFood envelopes received, newest last
    """

    def __init__(
        self,
        failure_rate: float = 0.0,
        min_latency: float = 0.05,
        max_latency: float = 0.3,
        menu: Optional[list[dict[str, Any]]] = None,
    ):
        self.failure_rate = failure_rate
        self.min_latency = min_latency
        self.max_latency = max_latency
        self.menu = copy.deepcopy(menu if menu is not None else SAMPLE_MENU)
        self.requests: list[dict[str, Any]] = []
        self.synced: list[dict[str, Any]] = []

        logger.info(
            f"MockFoodieService initialized "
            f"(failure_rate={failure_rate:.0%}, items={len(self.menu)})"
        )

    @property
    def provider_name(self) -> str:
        return "mock"

    async def _simulate_latency(self) -> float:
        latency = random.uniform(self.min_latency, self.max_latency)
        await asyncio.sleep(latency)
        return latency * 1000

    def _should_fail(self) -> bool:
        return random.random() < self.failure_rate

    async def fetch_outlet_food(
        self,
        outlet_id: int,
        location: OutletLocation,
        food_category: str = "",
    ) -> MenuFetchResult:
        self.requests.append(build_outlet_food_request(outlet_id, location, food_category))
        latency_ms = await self._simulate_latency()

        if self._should_fail():
            logger.debug("Mock: Simulated FoodieOS failure")
            return MenuFetchResult(
                success=False,
                outlet_id=outlet_id,
                error_message=FETCH_FAILED_MESSAGE,
                error_code="service_unavailable",
                response_time_ms=latency_ms,
            )

        payload = {"status": 200, "output": {"r": copy.deepcopy(self.menu)}}
        items = parse_outlet_food(payload) or []

        logger.info(f"Mock: Served {len(items)} items for outlet {outlet_id}")

        return MenuFetchResult(
            success=True,
            outlet_id=outlet_id,
            items=items,
            response_time_ms=latency_ms,
        )

    async def update_outlet_food(
        self,
        outlet_id: int,
        items: list[MenuItem],
        categories: list[str],
    ) -> SyncResult:
        envelope = build_sync_envelope(outlet_id, items, categories)
        latency_ms = await self._simulate_latency()

        if self._should_fail():
            return SyncResult(
                success=False,
                outlet_id=outlet_id,
                error_message="FoodieOS temporarily unavailable",
                error_code="service_unavailable",
                response_time_ms=latency_ms,
            )

        self.synced.append(envelope)
        logger.info(
            f"Mock: Synced {len(items)} items to outlet {outlet_id} "
            f"at {datetime.now():%H:%M:%S}"
        )

        return SyncResult(
            success=True,
            outlet_id=outlet_id,
            synced_items=len(items),
            response_time_ms=latency_ms,
        )

    async def health_check(self) -> bool:
        return True
