"""
Menu Sync

Pushes every locally edited item to FoodieOS in one request. There is
no retry; the admin sees the outcome as a status line and can press
"Sync Menu" again.
"""

import logging
from typing import Optional

from foodie.core.config import get_settings
from foodie.services.foodieos import BaseFoodieService, SyncResult
from foodie.services.menu.base import BaseMenuRepository

logger = logging.getLogger(__name__)

SYNC_SUCCESS_MESSAGE = "Sync successful!"


async def sync_menu(
    repository: BaseMenuRepository,
    foodie_service: BaseFoodieService,
    outlet_id: Optional[int] = None,
    categories: Optional[list[str]] = None,
) -> SyncResult:
    settings = get_settings()
    outlet_id = outlet_id or settings.default_outlet_id
    categories = categories or settings.menu_categories_list

    items = await repository.list_items()
    logger.info(f"Sync: Pushing {len(items)} items to outlet {outlet_id}")

    result = await foodie_service.update_outlet_food(outlet_id, items, categories)
    if not result.success:
        logger.error(f"Sync: Failed for outlet {outlet_id}: {result.error_message}")
    return result


def sync_status_message(result: SyncResult) -> str:
    """Status line shown next to the Sync button."""
    if result.success:
        return SYNC_SUCCESS_MESSAGE
    return f"Error: {result.error_message or 'Failed to sync'}"
