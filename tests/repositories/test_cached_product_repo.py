import asyncio
import json

import pytest

from app.repositories import (
    CachedProductRepository,
    PRODUCTS_CACHE_KEY,
    PRODUCTS_CACHE_TTL,
    ProductRepositoryProtocol,
)

pytestmark = pytest.mark.asyncio


def as_json(products):
    return [p.model_dump(mode="json") for p in products]


class BrokenCache:
    """Cache backend that fails on read and/or write."""

    def __init__(self, fail_get: bool = True, fail_set: bool = True):
        self.fail_get = fail_get
        self.fail_set = fail_set
        self.set_calls = 0

    async def get(self, key, default=None):
        if self.fail_get:
            raise ConnectionError("cache unavailable")
        return default

    async def set(self, key, value, ttl=None):
        self.set_calls += 1
        if self.fail_set:
            raise ConnectionError("cache unavailable")
        return True

    async def delete(self, key):
        return False

    async def exists(self, key):
        return False

    async def close(self):
        return None


class RejectingCache(BrokenCache):
    """Cache backend whose writes report failure instead of raising."""

    def __init__(self):
        super().__init__(fail_get=False, fail_set=False)

    async def set(self, key, value, ttl=None):
        self.set_calls += 1
        return False


async def test_second_call_within_window_is_served_from_cache(
    repository, memory_cache, sample_products
):
    """Hai lần gọi trong thời hạn cache chỉ truy vấn store một lần."""
    cached_repo = CachedProductRepository(repository, memory_cache)

    first = await cached_repo.get_all()
    second = await cached_repo.get_all()

    assert repository.calls == 1
    assert as_json(first) == as_json(sample_products)
    assert as_json(second) == as_json(sample_products)


async def test_cache_entry_expires_after_thirty_minutes(repository, memory_cache, clock):
    cached_repo = CachedProductRepository(repository, memory_cache)

    await cached_repo.get_all()
    clock.advance(PRODUCTS_CACHE_TTL - 1)
    await cached_repo.get_all()
    assert repository.calls == 1

    clock.advance(1)
    await cached_repo.get_all()
    assert repository.calls == 2


async def test_reads_do_not_extend_expiration(repository, memory_cache, clock):
    cached_repo = CachedProductRepository(repository, memory_cache)

    await cached_repo.get_all()
    for _ in range(3):
        clock.advance(PRODUCTS_CACHE_TTL // 3 - 1)
        await cached_repo.get_all()
    assert repository.calls == 1

    clock.advance(10)
    await cached_repo.get_all()
    assert repository.calls == 2


async def test_populates_cache_with_json_catalog(repository, memory_cache):
    cached_repo = CachedProductRepository(repository, memory_cache)

    await cached_repo.get_all()

    payload = await memory_cache.get(PRODUCTS_CACHE_KEY)
    assert json.loads(payload) == [
        {"id": 1, "name": "Prod 1", "price": 1.2},
        {"id": 2, "name": "Prod 2", "price": 2.2},
        {"id": 3, "name": "Prod 3", "price": 3.3},
    ]


async def test_empty_catalog_is_requeried_every_call(repository_factory, memory_cache):
    """Danh sách rỗng được ghi vào cache nhưng luôn bị coi là miss."""
    repository = repository_factory([])
    cached_repo = CachedProductRepository(repository, memory_cache)

    for _ in range(3):
        assert await cached_repo.get_all() == []

    assert repository.calls == 3
    assert await memory_cache.get(PRODUCTS_CACHE_KEY) == "[]"


async def test_cache_write_failure_does_not_fail_read(repository, sample_products):
    cache = BrokenCache(fail_get=False, fail_set=True)
    cached_repo = CachedProductRepository(repository, cache)

    products = await cached_repo.get_all()

    assert as_json(products) == as_json(sample_products)
    assert cache.set_calls == 1


async def test_rejected_cache_write_still_returns_fresh_data(repository, sample_products):
    cache = RejectingCache()
    cached_repo = CachedProductRepository(repository, cache)

    assert as_json(await cached_repo.get_all()) == as_json(sample_products)
    assert as_json(await cached_repo.get_all()) == as_json(sample_products)
    assert repository.calls == 2


async def test_cache_read_failure_is_treated_as_miss(repository, sample_products):
    cache = BrokenCache(fail_get=True, fail_set=True)
    cached_repo = CachedProductRepository(repository, cache)

    products = await cached_repo.get_all()

    assert as_json(products) == as_json(sample_products)
    assert repository.calls == 1


@pytest.mark.parametrize(
    "payload",
    [
        "{not json",
        '{"id": 1}',
        '[{"id": "abc", "name": "Prod 1", "price": 1.2}]',
        "",
        pytest.param("[" * 200000, id="deeply-nested"),
        pytest.param("[" + "9" * 5000 + "]", id="huge-integer"),
    ],
)
async def test_corrupt_payload_is_treated_as_miss(
    repository, memory_cache, sample_products, payload
):
    await memory_cache.set(PRODUCTS_CACHE_KEY, payload, ttl=PRODUCTS_CACHE_TTL)
    cached_repo = CachedProductRepository(repository, memory_cache)

    products = await cached_repo.get_all()

    assert repository.calls == 1
    assert as_json(products) == as_json(sample_products)
    # The corrupt entry is replaced by a valid one
    assert json.loads(await memory_cache.get(PRODUCTS_CACHE_KEY))[0]["name"] == "Prod 1"


async def test_store_failure_propagates_and_skips_cache_write(
    repository_factory, memory_cache
):
    repository = repository_factory(error=RuntimeError("database is down"))
    cached_repo = CachedProductRepository(repository, memory_cache)

    with pytest.raises(RuntimeError, match="database is down"):
        await cached_repo.get_all()

    assert await memory_cache.exists(PRODUCTS_CACHE_KEY) is False


async def test_uses_configured_key_and_ttl(repository, memory_cache, clock):
    cached_repo = CachedProductRepository(
        repository, memory_cache, cache_key="catalog", ttl=10
    )

    await cached_repo.get_all()
    assert await memory_cache.exists("catalog")
    assert not await memory_cache.exists(PRODUCTS_CACHE_KEY)

    clock.advance(10)
    await cached_repo.get_all()
    assert repository.calls == 2


async def test_concurrent_misses_each_query_the_store(repository_factory, memory_cache, sample_products):
    class SlowRepository(repository_factory):
        async def get_all(self):
            await asyncio.sleep(0)
            return await super().get_all()

    repository = SlowRepository(sample_products)
    cached_repo = CachedProductRepository(repository, memory_cache)

    first, second = await asyncio.gather(cached_repo.get_all(), cached_repo.get_all())

    assert repository.calls == 2
    assert as_json(first) == as_json(second)


async def test_cached_repository_is_interchangeable_with_store_repository(
    repository, memory_cache
):
    cached_repo = CachedProductRepository(repository, memory_cache)

    assert isinstance(repository, ProductRepositoryProtocol)
    assert isinstance(cached_repo, ProductRepositoryProtocol)
