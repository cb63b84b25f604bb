"""
Hệ thống cache - Cung cấp cache phân tán cho các repository.

Module này bao gồm:
- Backends: Các backend cache (Memory, Redis)
- Factory: Chọn backend theo cấu hình
- Serializers: Serializer/deserializer JSON
"""

from app.cache.backends import CacheBackend, MemoryBackend, RedisBackend
from app.cache.factory import get_cache_backend, CacheBackendType
from app.cache.serializers import serialize_data, deserialize_data

__all__ = [
    "CacheBackend",
    "MemoryBackend",
    "RedisBackend",
    "get_cache_backend",
    "CacheBackendType",
    "serialize_data",
    "deserialize_data",
]
