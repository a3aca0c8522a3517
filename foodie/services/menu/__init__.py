"""
Menu Repository Factory

Environment Switching:
    - ENV_MODE=development → InMemoryMenuRepository (seeded demo dishes)
    - ENV_MODE=staging/production → SqlMenuRepository (DATABASE_URL)
"""

import logging
from functools import lru_cache

from foodie.core.config import get_settings
from foodie.services.menu.base import BaseMenuRepository, generate_item_id, to_menu_item
from foodie.services.menu.memory import InMemoryMenuRepository
from foodie.services.menu.sql import SqlMenuRepository
from foodie.services.menu.sync import SYNC_SUCCESS_MESSAGE, sync_menu, sync_status_message

logger = logging.getLogger(__name__)


@lru_cache()
def get_menu_repository() -> BaseMenuRepository:
    settings = get_settings()

    if settings.is_development:
        logger.info("Menu Store: Using InMemoryMenuRepository (development mode)")
        return InMemoryMenuRepository(seed=True)

    logger.info(f"Menu Store: Using SqlMenuRepository ({settings.env_mode.value} mode)")
    return SqlMenuRepository()


def reset_menu_repository() -> None:
    get_menu_repository.cache_clear()
    logger.debug("Menu repository cache cleared")


__all__ = [
    "get_menu_repository",
    "reset_menu_repository",
    "BaseMenuRepository",
    "InMemoryMenuRepository",
    "SqlMenuRepository",
    "SYNC_SUCCESS_MESSAGE",
    "generate_item_id",
    "sync_menu",
    "sync_status_message",
    "to_menu_item",
]
