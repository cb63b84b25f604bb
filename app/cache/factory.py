from typing import Optional
from enum import Enum

from app.core.config import Settings, get_settings
from app.cache.backends.base import CacheBackend
from app.logging.setup import get_logger

logger = get_logger(__name__)


class CacheBackendType(str, Enum):
    """Các loại backend cache."""

    REDIS = "redis"
    MEMORY = "memory"


async def get_cache_backend(
    backend_name: Optional[str] = None,
    settings: Optional[Settings] = None,
    **kwargs,
) -> CacheBackend:
    """
    Tạo cache backend dựa trên tên.

    Args:
        backend_name: Tên backend cache (mặc định settings.CACHE_BACKEND)
        settings: Application settings
        **kwargs: Các tham số bổ sung cho backend

    Returns:
        Cache backend object
    """
    settings = settings or get_settings()
    backend_type = (backend_name or settings.CACHE_BACKEND).lower()

    if backend_type == CacheBackendType.REDIS:
        from app.cache.backends.redis import RedisBackend, build_redis_url

        logger.info(
            f"Using Redis cache backend at {settings.REDIS_HOST}:{settings.REDIS_PORT}"
        )
        return RedisBackend(
            redis_client=kwargs.get("redis_client"),
            redis_url=kwargs.get("redis_url", build_redis_url(settings)),
            key_prefix=kwargs.get("key_prefix", settings.CACHE_KEY_PREFIX),
            default_ttl=kwargs.get("default_ttl", settings.CACHE_DEFAULT_TTL),
        )

    from app.cache.backends.memory import MemoryBackend

    if backend_type != CacheBackendType.MEMORY:
        logger.warning(
            f"Không tìm thấy cache backend '{backend_type}', dùng memory backend"
        )
    else:
        logger.info("Using in-memory cache backend")

    return MemoryBackend(
        max_size=kwargs.get("max_size", settings.MEMORY_CACHE_MAX_SIZE),
        default_ttl=kwargs.get("default_ttl", settings.CACHE_DEFAULT_TTL),
    )
