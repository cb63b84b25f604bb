from typing import Optional
from urllib.parse import quote
import redis.asyncio as redis
from redis.exceptions import RedisError
from app.core.config import Settings, get_settings
from app.logging.setup import get_logger

logger = get_logger(__name__)


def build_redis_url(settings: Settings) -> str:
    password = f":{quote(settings.REDIS_PASSWORD, safe='')}@" if settings.REDIS_PASSWORD else ""
    return (
        f"redis://{password}{settings.REDIS_HOST}:{settings.REDIS_PORT}/{settings.REDIS_DB}"
    )


class RedisBackend:
    """
    Redis cache backend cho cache phân tán.

    Lỗi kết nối hoặc lỗi lệnh Redis không được ném ra ngoài: ``get`` trả về
    default (cache miss), các thao tác ghi trả về False.
    """

    def __init__(
        self,
        redis_client: Optional[redis.Redis] = None,
        redis_url: Optional[str] = None,
        key_prefix: str = "cache:",
        default_ttl: int = 3600,
        key_encoding: str = "utf-8",
    ):
        """
        Khởi tạo Redis cache backend.

        Args:
            redis_client: Redis client
            redis_url: Redis URL, dùng khi không truyền redis_client
            key_prefix: Cache key prefix
            default_ttl: Default time to live in seconds
            key_encoding: Encoding used to decode stored values
        """
        self.client = redis_client

        if self.client is None:
            self.client = redis.from_url(redis_url or build_redis_url(get_settings()))

        self.key_prefix = key_prefix
        self.default_ttl = default_ttl
        self.key_encoding = key_encoding

    def _get_full_key(self, key: str) -> str:
        return f"{self.key_prefix}{key}"

    async def get(self, key: str, default: Optional[str] = None) -> Optional[str]:
        """
        Get value from cache.

        Args:
            key: Cache key
            default: Default value if key not found

        Returns:
            Cached value or default
        """
        try:
            cached_value = await self.client.get(self._get_full_key(key))
        except RedisError as e:
            logger.warning(f"Error getting from cache: {e}")
            return default

        if cached_value is None:
            return default

        if isinstance(cached_value, (bytes, bytearray)):
            return cached_value.decode(self.key_encoding, errors="replace")
        return cached_value

    async def set(self, key: str, value: str, ttl: Optional[int] = None) -> bool:
        """
        Set value in cache with an absolute expiration.

        Args:
            key: Cache key
            value: Value to cache
            ttl: Time to live in seconds

        Returns:
            Whether the operation was successful
        """
        try:
            result = await self.client.set(
                self._get_full_key(key), value, ex=ttl or self.default_ttl
            )
            return bool(result)
        except RedisError as e:
            logger.warning(f"Error setting cache: {e}")
            return False

    async def delete(self, key: str) -> bool:
        try:
            return await self.client.delete(self._get_full_key(key)) > 0
        except RedisError as e:
            logger.error(f"Error deleting from cache: {e}")
            return False

    async def exists(self, key: str) -> bool:
        try:
            return await self.client.exists(self._get_full_key(key)) > 0
        except RedisError as e:
            logger.error(f"Error checking cache existence: {e}")
            return False

    async def close(self) -> None:
        """Đóng connection pool của Redis client."""
        await self.client.aclose()
