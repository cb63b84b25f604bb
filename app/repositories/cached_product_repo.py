from typing import List, Optional

from pydantic import ValidationError

from app.cache.backends.base import CacheBackend
from app.cache.serializers import serialize_data, deserialize_data
from app.core.exceptions import CacheException
from app.repositories.base import ProductRepositoryProtocol
from app.schemas.product import ProductList, ProductRead
from app.logging.setup import get_logger

logger = get_logger(__name__)

PRODUCTS_CACHE_KEY = "PRODUCTS_CACHE_KEY"
PRODUCTS_CACHE_TTL = 30 * 60


class CachedProductRepository:
    """
    Cache-aside wrapper quanh một product repository.

    Đọc danh sách sản phẩm từ cache theo một key cố định; khi miss thì gọi
    repository bên trong rồi ghi lại vào cache với absolute expiration.

    Cache là best-effort: lỗi khi đọc được coi như miss, lỗi khi ghi bị bỏ
    qua. Lỗi từ repository bên trong được ném ra cho caller.
    """

    def __init__(
        self,
        product_repository: ProductRepositoryProtocol,
        cache: CacheBackend,
        cache_key: str = PRODUCTS_CACHE_KEY,
        ttl: int = PRODUCTS_CACHE_TTL,
    ):
        self._product_repository = product_repository
        self._cache = cache
        self.cache_key = cache_key
        self.ttl = ttl

    async def get_all(self) -> List[ProductRead]:
        products = await self._get_cached_products()
        # An empty cached catalog cannot be told apart from a missing entry,
        # so it is a miss and the store is queried again.
        if products:
            logger.debug(f"Cache hit for key: {self.cache_key}")
            return products

        logger.debug(f"Cache miss for key: {self.cache_key}")
        products = await self._product_repository.get_all()
        await self._set_cache(products)
        return products

    async def _get_cached_products(self) -> Optional[List[ProductRead]]:
        try:
            payload = await self._cache.get(self.cache_key)
        except Exception as e:
            logger.warning(f"Cache read failed for key {self.cache_key}: {e}")
            return None

        if not payload:
            return None

        try:
            return ProductList.validate_python(deserialize_data(payload))
        except (CacheException, ValidationError) as e:
            logger.warning(f"Ignoring corrupt cache entry for key {self.cache_key}: {e}")
            return None

    async def _set_cache(self, products: List[ProductRead]) -> bool:
        try:
            stored = await self._cache.set(
                self.cache_key, serialize_data(products), ttl=self.ttl
            )
        except Exception as e:
            logger.warning(f"Cache write failed for key {self.cache_key}: {e}")
            return False

        if not stored:
            logger.warning(f"Cache backend rejected write for key {self.cache_key}")
        return bool(stored)
