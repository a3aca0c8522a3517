"""
FoodieOS HTTP Client

Production implementation talking to the FoodieOS REST API with httpx.
Used when ENV_MODE=production or ENV_MODE=staging.
"""

import logging
from datetime import datetime
from typing import Any, Optional

import httpx

from foodie.core.config import get_settings
from foodie.schemas import MenuItem
from foodie.services.foodieos.base import (
    EMPTY_MENU_MESSAGE,
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


class HttpFoodieService(BaseFoodieService):
    """
    FoodieOS client over HTTPS.

    A fresh AsyncClient is opened per call; pass `transport` to route
    requests elsewhere (tests use httpx.MockTransport).
    """

    def __init__(
        self,
        base_url: Optional[str] = None,
        timeout: Optional[float] = None,
        platform: Optional[str] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        settings = get_settings()
        self._base_url = (base_url or settings.foodieos_base_url).rstrip("/")
        self._timeout = timeout or settings.foodieos_timeout_seconds
        self._platform = platform or settings.foodieos_platform
        self._transport = transport

        logger.info(f"HttpFoodieService initialized ({self._base_url})")

    @property
    def provider_name(self) -> str:
        return "http"

    def _client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(
            base_url=self._base_url,
            timeout=self._timeout,
            headers={"Content-Type": "application/json", "Accept": "application/json"},
            transport=self._transport,
        )

    async def _post(self, path: str, body: dict[str, Any]) -> httpx.Response:
        async with self._client() as client:
            return await client.post(path, json=body)

    async def fetch_outlet_food(
        self,
        outlet_id: int,
        location: OutletLocation,
        food_category: str = "",
    ) -> MenuFetchResult:
        start_time = datetime.now()
        body = build_outlet_food_request(
            outlet_id, location, food_category, platform=self._platform
        )

        logger.debug(f"FoodieOS: getOutletFood outlet={outlet_id} category={food_category!r}")

        try:
            response = await self._post("/getOutletFood", body)
            elapsed_ms = (datetime.now() - start_time).total_seconds() * 1000

            if not response.is_success:
                logger.error(f"FoodieOS: getOutletFood failed with status {response.status_code}")
                return MenuFetchResult(
                    success=False,
                    outlet_id=outlet_id,
                    error_message=FETCH_FAILED_MESSAGE,
                    error_code="bad_status",
                    response_time_ms=elapsed_ms,
                )

            items = parse_outlet_food(response.json())

        except (httpx.HTTPError, ValueError) as e:
            elapsed_ms = (datetime.now() - start_time).total_seconds() * 1000
            logger.error(f"FoodieOS: getOutletFood error - {e}")
            return MenuFetchResult(
                success=False,
                outlet_id=outlet_id,
                error_message=FETCH_FAILED_MESSAGE,
                error_code="network_error",
                response_time_ms=elapsed_ms,
            )

        if items is None:
            logger.warning(f"FoodieOS: Unexpected menu envelope for outlet {outlet_id}")
            return MenuFetchResult(
                success=False,
                outlet_id=outlet_id,
                error_message=EMPTY_MENU_MESSAGE,
                error_code="empty_menu",
                response_time_ms=elapsed_ms,
            )

        logger.info(f"FoodieOS: {len(items)} items for outlet {outlet_id}")

        return MenuFetchResult(
            success=True,
            outlet_id=outlet_id,
            items=items,
            response_time_ms=elapsed_ms,
        )

    async def update_outlet_food(
        self,
        outlet_id: int,
        items: list[MenuItem],
        categories: list[str],
    ) -> SyncResult:
        start_time = datetime.now()
        body = build_sync_envelope(outlet_id, items, categories)

        try:
            response = await self._post("/updateOutletFood", body)
        except httpx.HTTPError as e:
            elapsed_ms = (datetime.now() - start_time).total_seconds() * 1000
            logger.error(f"FoodieOS: updateOutletFood error - {e}")
            return SyncResult(
                success=False,
                outlet_id=outlet_id,
                error_message="Unable to reach FoodieOS",
                error_code="network_error",
                response_time_ms=elapsed_ms,
            )

        elapsed_ms = (datetime.now() - start_time).total_seconds() * 1000

        if not response.is_success:
            logger.error(f"FoodieOS: updateOutletFood failed with status {response.status_code}")
            return SyncResult(
                success=False,
                outlet_id=outlet_id,
                error_message=f"FoodieOS rejected the update (status {response.status_code})",
                error_code="bad_status",
                response_time_ms=elapsed_ms,
            )

        logger.info(f"FoodieOS: Synced {len(items)} items to outlet {outlet_id}")

        return SyncResult(
            success=True,
            outlet_id=outlet_id,
            synced_items=len(items),
            response_time_ms=elapsed_ms,
        )

    async def health_check(self) -> bool:
        try:
            async with self._client() as client:
                response = await client.options("/getOutletFood")
            return response.status_code < 500
        except httpx.HTTPError as e:
            logger.error(f"FoodieOS: Health check failed - {e}")
            return False
