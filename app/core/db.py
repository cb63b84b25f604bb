"""
Core database module for the application.

This module provides the declarative base, engine and session factories, and
the helpers used by the application lifespan.
"""

from sqlalchemy import text
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.orm import declarative_base
from sqlalchemy.pool import StaticPool

from app.core.config import Settings
from app.logging.setup import get_logger

logger = get_logger(__name__)


Base = declarative_base()


def create_engine_from_settings(settings: Settings) -> AsyncEngine:
    """
    Tạo async engine từ cấu hình.

    SQLite in-memory cần StaticPool để mọi session dùng chung một connection,
    nếu không mỗi connection sẽ thấy một database trống.

    Args:
        settings: Application settings

    Returns:
        AsyncEngine
    """
    url = str(settings.DATABASE_URL)

    if url.startswith("sqlite"):
        return create_async_engine(
            url,
            echo=settings.DB_ECHO,
            connect_args={"check_same_thread": False},
            poolclass=StaticPool,
        )

    return create_async_engine(
        url,
        echo=settings.DB_ECHO,
        pool_size=settings.DATABASE_POOL_SIZE,
        max_overflow=settings.DATABASE_MAX_OVERFLOW,
        pool_pre_ping=True,
    )


def create_session_factory(engine: AsyncEngine) -> async_sessionmaker:
    """Create async session factory bound to ``engine``."""
    return async_sessionmaker(
        engine,
        class_=AsyncSession,
        expire_on_commit=False,
        autoflush=False,
    )


async def init_models(engine: AsyncEngine) -> None:
    """Create all tables known to ``Base``."""
    # Import models so they register on Base.metadata
    import app.models  # noqa: F401

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    logger.info("Database tables created")


async def check_database_connection(session_factory: async_sessionmaker) -> bool:
    """
    Check if database connection is working.
    Returns True if connection is successful, False otherwise.
    """
    try:
        async with session_factory() as session:
            await session.execute(text("SELECT 1"))
            return True
    except Exception as e:
        logger.error(f"Database connection check failed: {e}")
        return False
