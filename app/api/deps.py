from typing import AsyncGenerator

from fastapi import Depends, Request
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from app.cache.backends.base import CacheBackend
from app.core.config import Settings
from app.repositories import (
    CachedProductRepository,
    ProductRepository,
    ProductRepositoryProtocol,
)
from app.logging.setup import get_logger

logger = get_logger(__name__)


def get_app_settings(request: Request) -> Settings:
    return request.app.state.settings


async def get_session(request: Request) -> AsyncGenerator[AsyncSession, None]:
    """
    Get a database session as a dependency.

    Yields:
        AsyncSession: SQLAlchemy async session
    """
    async with request.app.state.session_factory() as session:
        try:
            yield session
        except SQLAlchemyError as e:
            logger.error(f"Session error: {e}")
            await session.rollback()
            raise


def get_cache(request: Request) -> CacheBackend:
    return request.app.state.cache


def get_product_repository(
    session: AsyncSession = Depends(get_session),
    cache: CacheBackend = Depends(get_cache),
    settings: Settings = Depends(get_app_settings),
) -> ProductRepositoryProtocol:
    """Store repository wrapped in the cache-aside decorator."""
    return CachedProductRepository(
        ProductRepository(session),
        cache,
        cache_key=settings.PRODUCTS_CACHE_KEY,
        ttl=settings.PRODUCTS_CACHE_TTL,
    )
