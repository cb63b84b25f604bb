import time
import threading
from typing import Callable, Dict, Optional, Tuple
from app.logging.setup import get_logger

logger = get_logger(__name__)


class MemoryBackend:
    """
    In-memory cache backend.
    Useful cho development, tests và single-server deployments.

    Entries expire at an absolute time (write time + ttl); reading an entry
    does not extend it.
    """

    def __init__(
        self,
        max_size: int = 1000,
        default_ttl: int = 3600,
        clock: Callable[[], float] = time.time,
    ):
        """
        Khởi tạo memory cache backend.

        Args:
            max_size: Maximum number of items in cache
            default_ttl: Default time to live in seconds
            clock: Time source, returns seconds (injectable for tests)
        """
        # key -> (value, expires_at, written_at)
        self._cache: Dict[str, Tuple[str, float, float]] = {}
        self._max_size = max_size
        self._default_ttl = default_ttl
        self._clock = clock
        self._lock = threading.RLock()

    def _cleanup_expired(self) -> None:
        """Remove expired items from cache."""
        now = self._clock()
        expired_keys = [
            key for key, (_, expiry, _) in self._cache.items() if expiry <= now
        ]
        for key in expired_keys:
            del self._cache[key]

    def _evict_if_full(self) -> None:
        """Evict oldest items if cache is full."""
        self._cleanup_expired()

        if self._cache and len(self._cache) >= self._max_size:
            oldest_key = min(self._cache, key=lambda k: self._cache[k][2])
            logger.debug(f"Memory cache full, evicting key: {oldest_key}")
            del self._cache[oldest_key]

    async def get(self, key: str, default: Optional[str] = None) -> Optional[str]:
        """
        Get value from cache.

        Args:
            key: Cache key
            default: Default value if key not found or expired

        Returns:
            Cached value or default
        """
        with self._lock:
            if key not in self._cache:
                return default

            value, expiry, _ = self._cache[key]

            if expiry <= self._clock():
                del self._cache[key]
                return default

            return value

    async def set(self, key: str, value: str, ttl: Optional[int] = None) -> bool:
        """
        Set value in cache.

        Args:
            key: Cache key
            value: Value to cache
            ttl: Time to live in seconds

        Returns:
            Whether operation was successful
        """
        with self._lock:
            if key not in self._cache:
                self._evict_if_full()

            now = self._clock()
            expires_at = now + (ttl if ttl is not None else self._default_ttl)
            self._cache[key] = (value, expires_at, now)
            return True

    async def delete(self, key: str) -> bool:
        with self._lock:
            if key not in self._cache:
                return False
            del self._cache[key]
            return True

    async def exists(self, key: str) -> bool:
        return await self.get(key) is not None

    async def close(self) -> None:
        with self._lock:
            self._cache.clear()

    def __len__(self) -> int:
        with self._lock:
            self._cleanup_expired()
            return len(self._cache)
