"""
Test configuration and fixtures for the products catalog tests.
"""
from decimal import Decimal
from typing import AsyncGenerator, Generator, List, Optional

import pytest
import pytest_asyncio
from fastapi.testclient import TestClient
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, create_async_engine
from sqlalchemy.pool import StaticPool

from app.cache.backends.memory import MemoryBackend
from app.core.config import Settings
from app.core.db import Base, create_session_factory
from app.main import create_main_app
from app.models.product import Product  # noqa: F401  registers the table
from app.schemas.product import ProductRead

# Use in-memory SQLite database for testing
TEST_DATABASE_URL = "sqlite+aiosqlite:///:memory:"


class FakeClock:
    """Đồng hồ giả để kiểm tra expiration mà không cần sleep."""

    def __init__(self, start: float = 1_000_000.0):
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


class CountingProductRepository:
    """Repository giả đếm số lần bị gọi."""

    def __init__(
        self,
        products: Optional[List[ProductRead]] = None,
        error: Optional[Exception] = None,
    ):
        self.products = products or []
        self.error = error
        self.calls = 0

    async def get_all(self) -> List[ProductRead]:
        self.calls += 1
        if self.error is not None:
            raise self.error
        return list(self.products)


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def memory_cache(clock: FakeClock) -> MemoryBackend:
    return MemoryBackend(max_size=100, default_ttl=60, clock=clock)


@pytest.fixture
def sample_products() -> List[ProductRead]:
    return [
        ProductRead(id=1, name="Prod 1", price=Decimal("1.2")),
        ProductRead(id=2, name="Prod 2", price=Decimal("2.2")),
        ProductRead(id=3, name="Prod 3", price=Decimal("3.3")),
    ]


@pytest.fixture
def repository_factory():
    return CountingProductRepository


@pytest.fixture
def repository(sample_products: List[ProductRead]) -> CountingProductRepository:
    return CountingProductRepository(sample_products)


@pytest_asyncio.fixture
async def db_engine() -> AsyncGenerator[AsyncEngine, None]:
    """Create a fresh in-memory database for each test."""
    engine = create_async_engine(
        TEST_DATABASE_URL,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield engine

    await engine.dispose()


@pytest_asyncio.fixture
async def db_session(db_engine: AsyncEngine) -> AsyncGenerator[AsyncSession, None]:
    session_factory = create_session_factory(db_engine)
    async with session_factory() as session:
        yield session


@pytest.fixture
def test_settings() -> Settings:
    return Settings(
        APP_ENV="testing",
        DATABASE_URL=TEST_DATABASE_URL,
        SEED_DATABASE=True,
        CACHE_BACKEND="memory",
        LOG_LEVEL="WARNING",
    )


@pytest.fixture
def client(test_settings: Settings) -> Generator[TestClient, None, None]:
    """Create a test client; the lifespan creates tables, seeds and builds the cache."""
    app = create_main_app(test_settings)
    with TestClient(app) as test_client:
        yield test_client
