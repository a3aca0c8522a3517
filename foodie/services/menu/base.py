"""
Menu Repository Abstract Base Class

The admin panel edits a local copy of the outlet's menu which is later
pushed to FoodieOS by the sync. Two stores implement the same contract:

    - InMemoryMenuRepository: development, seeded with demo dishes
    - SqlMenuRepository: staging/production, `menu_items` table

Saving is an upsert keyed by item id. Items saved without an id get one
generated from their category (see generate_item_id).
"""

import asyncio
import logging
import re
from abc import ABC, abstractmethod
from typing import Iterable, Optional

from foodie.schemas import MenuItem, MenuItemCreate

logger = logging.getLogger(__name__)


def generate_item_id(category: str, existing_ids: Iterable[str]) -> str:
    """
    Next id for an item of `category`.

    The id is the category's first letter followed by a 3-digit sequence
    one above the highest sequence already used with that letter:
    the first MAIN COURSE item is M001, the next M002, and so on.
    """
    prefix = (category.strip()[:1] or "X").upper()
    pattern = re.compile(rf"^{re.escape(prefix)}(\d+)$")

    highest = 0
    for item_id in existing_ids:
        match = pattern.match(item_id)
        if match:
            highest = max(highest, int(match.group(1)))

    return f"{prefix}{highest + 1:03d}"


def to_menu_item(payload: MenuItemCreate, item_id: str) -> MenuItem:
    """Admin payload → MenuItem, keeping any extra FoodieOS fields."""
    data = payload.model_dump(by_alias=True, exclude={"id"})
    data["id"] = item_id
    return MenuItem.model_validate(data)


class BaseMenuRepository(ABC):
    """Abstract base class for admin menu stores."""

    def __init__(self):
        self._write_lock = asyncio.Lock()

    @property
    @abstractmethod
    def store_name(self) -> str:
        pass

    @abstractmethod
    async def list_items(self) -> list[MenuItem]:
        """All items in insertion order."""
        pass

    @abstractmethod
    async def get_item(self, item_id: str) -> Optional[MenuItem]:
        pass

    @abstractmethod
    async def upsert_item(self, item: MenuItem) -> bool:
        """
        Replace the item with the same id, or append it.

        Returns:
            bool: True when the item was new
        """
        pass

    @abstractmethod
    async def delete_item(self, item_id: str) -> bool:
        """
        Remove an item. Deleting an unknown id is not an error.

        Returns:
            bool: True when something was removed
        """
        pass

    async def next_item_id(self, category: str) -> str:
        items = await self.list_items()
        return generate_item_id(category, (item.id for item in items))

    async def save_item(self, payload: MenuItemCreate) -> tuple[MenuItem, bool]:
        """
        Create or update an item from an admin payload.

        Returns:
            (saved item, True if it was created)
        """
        async with self._write_lock:
            item_id = payload.id or await self.next_item_id(payload.category)
            item = to_menu_item(payload, item_id)
            is_new = await self.upsert_item(item)

        logger.info(f"Menu: {'Created' if is_new else 'Updated'} {item.id} ({item.name})")
        return item, is_new

    async def health_check(self) -> bool:
        try:
            await self.list_items()
            return True
        except Exception:
            logger.exception(f"Menu store {self.store_name} health check failed")
            return False
