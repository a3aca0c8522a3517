"""
Database Connection Module
Handles the persistent menu store using the SQLAlchemy async engine.

The engine is created lazily: in development mode the storefront runs on
the in-memory menu store and never opens a database connection.
"""

from functools import lru_cache
from typing import Optional

from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.orm import DeclarativeBase

from foodie.core.config import get_settings


# Base class for all our models
class Base(DeclarativeBase):
    pass


def build_engine(database_url: str, echo: bool = False) -> AsyncEngine:
    """Create an async engine; pool sizing only applies to server databases."""
    if database_url.startswith("sqlite"):
        return create_async_engine(database_url, echo=echo)
    return create_async_engine(
        database_url,
        echo=echo,
        pool_size=5,  # Connection pool size
        max_overflow=10,  # Extra connections when pool is full
    )


@lru_cache()
def get_engine() -> AsyncEngine:
    settings = get_settings()
    return build_engine(settings.database_url, echo=settings.debug)


@lru_cache()
def get_session_maker() -> async_sessionmaker[AsyncSession]:
    return async_sessionmaker(
        bind=get_engine(),
        class_=AsyncSession,
        expire_on_commit=False,  # Objects remain accessible after commit
    )


async def init_db(engine: Optional[AsyncEngine] = None) -> None:
    """
    Create all tables in database.
    Called once at application startup when the SQL menu store is active.
    """
    # Register models on Base.metadata
    from foodie import models  # noqa: F401

    engine = engine or get_engine()
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)


async def dispose_engine() -> None:
    if get_engine.cache_info().currsize:
        await get_engine().dispose()
