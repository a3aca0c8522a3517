"""
In-Memory Menu Repository

Development store. Contents are lost when the process exits.
"""

import logging
from typing import Optional

from foodie.schemas import MenuItem
from foodie.services.menu.base import BaseMenuRepository

logger = logging.getLogger(__name__)

DEMO_ITEMS = [
    {
        "id": "M001",
        "h": "Butter Chicken",
        "dp": 45000,
        "ct": "MAIN COURSE",
        "veg": False,
        "wt": "500 g",
        "en": "600 kcal",
        "i": "https://source.unsplash.com/400x300/?butter-chicken",
    },
    {
        "id": "D001",
        "h": "Gulab Jamun",
        "dp": 12000,
        "ct": "DESSERTS",
        "veg": True,
        "wt": "2 pcs",
        "en": "250 kcal",
        "i": "https://source.unsplash.com/400x300/?gulab-jamun",
    },
]


class InMemoryMenuRepository(BaseMenuRepository):
    def __init__(self, seed: bool = False):
        super().__init__()
        self._items: list[MenuItem] = []
        if seed:
            self._items = [MenuItem.model_validate(data) for data in DEMO_ITEMS]
        logger.info(f"InMemoryMenuRepository initialized ({len(self._items)} items)")

    @property
    def store_name(self) -> str:
        return "memory"

    async def list_items(self) -> list[MenuItem]:
        return list(self._items)

    async def get_item(self, item_id: str) -> Optional[MenuItem]:
        for item in self._items:
            if item.id == item_id:
                return item
        return None

    async def upsert_item(self, item: MenuItem) -> bool:
        for index, existing in enumerate(self._items):
            if existing.id == item.id:
                self._items[index] = item
                return False
        self._items.append(item)
        return True

    async def delete_item(self, item_id: str) -> bool:
        before = len(self._items)
        self._items = [item for item in self._items if item.id != item_id]
        return len(self._items) < before
