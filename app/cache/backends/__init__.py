"""
Cache backends - Cung cấp các backend lưu trữ cache cho hệ thống.

Các backend hỗ trợ:
- Memory: Backend lưu trong bộ nhớ, phù hợp cho development và tests
- Redis: Backend phân tán sử dụng Redis
"""

from app.cache.backends.base import CacheBackend
from app.cache.backends.memory import MemoryBackend
from app.cache.backends.redis import RedisBackend

__all__ = ["CacheBackend", "MemoryBackend", "RedisBackend"]
