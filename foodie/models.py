"""
SQLAlchemy Database Models

Persistent copy of the admin's menu. The storefront itself always reads
menus from FoodieOS; this table backs the admin panel and the sync.
"""

import json

from sqlalchemy import Boolean, Column, DateTime, Integer, String, Text
from sqlalchemy.sql import func

from foodie.database import Base


class MenuItemRecord(Base):
    """
    One admin-managed menu item.

    Long-tail FoodieOS fields that have no column of their own are kept
    as JSON in `extra` so they are not lost when the item is synced.
    """
    __tablename__ = "menu_items"

    id = Column(String(32), primary_key=True)

    # =========================================================================
    # DISPLAY
    # =========================================================================
    name = Column(String(120), nullable=False)
    category = Column(String(50), nullable=False, index=True)
    veg = Column(Boolean, default=True, nullable=False)
    weight = Column(String(50), nullable=True)
    energy = Column(String(50), nullable=True)
    image = Column(String(500), nullable=True)
    best_seller = Column(Boolean, default=False, nullable=False)

    # =========================================================================
    # PRICING
    # =========================================================================
    price = Column(Integer, nullable=False)  # paise
    add_ons = Column(Text, nullable=False, default="[]")  # JSON list of add-ons
    extra = Column(Text, nullable=False, default="{}")  # JSON object

    # =========================================================================
    # ORDERING
    # =========================================================================
    position = Column(Integer, nullable=False, default=0)  # admin list order

    # =========================================================================
    # TIMESTAMPS
    # =========================================================================
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), onupdate=func.now())

    def add_ons_list(self) -> list[dict]:
        return json.loads(self.add_ons or "[]")

    def extra_dict(self) -> dict:
        return json.loads(self.extra or "{}")

    def __repr__(self):
        return f"<MenuItem {self.id} - {self.name} - {self.category}>"
