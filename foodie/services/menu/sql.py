"""
SQL Menu Repository

Persistent store on the `menu_items` table (see foodie.models).
Columns hold the fields the admin edits; everything else FoodieOS
sends along is kept in the JSON `extra` column.
"""

import json
import logging
from typing import Optional

from sqlalchemy import delete, func, select
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from foodie.database import get_session_maker
from foodie.models import MenuItemRecord
from foodie.schemas import MenuItem
from foodie.services.menu.base import BaseMenuRepository

logger = logging.getLogger(__name__)


def record_to_item(record: MenuItemRecord) -> MenuItem:
    data = record.extra_dict()
    data.update(
        {
            "id": record.id,
            "h": record.name,
            "dp": record.price,
            "ct": record.category,
            "veg": record.veg,
            "wt": record.weight or "",
            "en": record.energy or "",
            "i": record.image or "",
            "bestSeller": record.best_seller,
            "addOns": record.add_ons_list(),
        }
    )
    return MenuItem.model_validate(data)


def apply_item(record: MenuItemRecord, item: MenuItem) -> None:
    extra = dict(item.model_extra or {})
    if item.combo_items:
        extra["comboItems"] = item.combo_items

    record.name = item.name
    record.price = item.price
    record.category = item.category
    record.veg = item.veg
    record.weight = item.weight
    record.energy = item.energy
    record.image = item.image
    record.best_seller = item.best_seller
    record.add_ons = json.dumps([add_on.model_dump() for add_on in item.add_ons])
    record.extra = json.dumps(extra)


class SqlMenuRepository(BaseMenuRepository):
    def __init__(self, session_maker: Optional[async_sessionmaker[AsyncSession]] = None):
        super().__init__()
        self._session_maker = session_maker or get_session_maker()
        logger.info("SqlMenuRepository initialized")

    @property
    def store_name(self) -> str:
        return "sql"

    async def list_items(self) -> list[MenuItem]:
        async with self._session_maker() as session:
            result = await session.execute(
                select(MenuItemRecord).order_by(MenuItemRecord.position, MenuItemRecord.id)
            )
            return [record_to_item(record) for record in result.scalars().all()]

    async def get_item(self, item_id: str) -> Optional[MenuItem]:
        async with self._session_maker() as session:
            record = await session.get(MenuItemRecord, item_id)
            return record_to_item(record) if record else None

    async def upsert_item(self, item: MenuItem) -> bool:
        async with self._session_maker() as session:
            record = await session.get(MenuItemRecord, item.id)
            is_new = record is None

            if is_new:
                last = await session.scalar(select(func.max(MenuItemRecord.position)))
                record = MenuItemRecord(id=item.id, position=(last or 0) + 1)
                session.add(record)

            apply_item(record, item)
            await session.commit()
            return is_new

    async def delete_item(self, item_id: str) -> bool:
        async with self._session_maker() as session:
            result = await session.execute(
                delete(MenuItemRecord).where(MenuItemRecord.id == item_id)
            )
            await session.commit()
            return result.rowcount > 0
